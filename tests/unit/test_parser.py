"""
Unit tests for SKILL.md parsing and serialization.
"""

import pytest

from qaskills.skills.parser import (
    SkillParseError,
    build_skill_md,
    normalize_frontmatter,
    parse_skill_md,
    render_frontmatter,
    serialize_skill_md,
    split_frontmatter,
)


# =============================================================================
# Frontmatter splitting
# =============================================================================


class TestSplitFrontmatter:
    """Tests for split_frontmatter()."""

    def test_basic(self):
        """Test frontmatter and body are separated."""
        data, body = split_frontmatter("---\nname: demo\n---\n\n# Body\n")
        assert data == {"name": "demo"}
        assert body.strip() == "# Body"

    def test_no_frontmatter(self):
        """Test a plain document yields an empty mapping and the full text."""
        data, body = split_frontmatter("# Just markdown\n")
        assert data == {}
        assert body == "# Just markdown\n"

    def test_empty_frontmatter(self):
        """Test an empty block yields an empty mapping."""
        data, body = split_frontmatter("---\n---\nbody")
        assert data == {}
        assert body == "body"

    def test_crlf_and_bom(self):
        """Test Windows line endings and a byte-order mark are tolerated."""
        data, body = split_frontmatter("\ufeff---\r\nname: demo\r\n---\r\nbody\r\n")
        assert data == {"name": "demo"}
        assert body.strip() == "body"

    def test_unclosed_block(self):
        """Test an unterminated block is a parse error."""
        with pytest.raises(SkillParseError):
            split_frontmatter("---\nname: demo\n\n# Body\n")

    def test_invalid_yaml(self):
        """Test malformed YAML is a parse error."""
        with pytest.raises(SkillParseError, match="Invalid YAML"):
            split_frontmatter("---\nname: [unclosed\n---\nbody")

    def test_non_mapping(self):
        """Test a YAML list is rejected."""
        with pytest.raises(SkillParseError, match="mapping"):
            split_frontmatter("---\n- a\n- b\n---\nbody")


# =============================================================================
# Normalization
# =============================================================================


class TestNormalizeFrontmatter:
    """Tests for normalize_frontmatter()."""

    def test_defaults(self):
        """Test missing scalars get defaults."""
        fm = normalize_frontmatter({})
        assert fm["name"] == ""
        assert fm["version"] == "1.0.0"
        assert fm["license"] == "MIT"
        assert fm["testingTypes"] == []

    def test_comma_separated_arrays(self):
        """Test comma-separated strings become lists."""
        fm = normalize_frontmatter({"testingTypes": "e2e, api", "languages": ["python", 3]})
        assert fm["testingTypes"] == ["e2e", "api"]
        assert fm["languages"] == ["python", "3"]

    def test_token_hints_kept_when_numeric(self):
        """Test minTokens/maxTokens survive only as numbers."""
        fm = normalize_frontmatter({"minTokens": 100, "maxTokens": "lots"})
        assert fm["minTokens"] == 100
        assert "maxTokens" not in fm

    def test_unknown_fields_dropped(self):
        """Test fields outside the schema are not carried over."""
        fm = normalize_frontmatter({"name": "x", "secret": "y"})
        assert "secret" not in fm


class TestParseSkillMd:
    """Tests for parse_skill_md()."""

    def test_parse_sample(self, sample_skill_md):
        """Test parsing a complete document."""
        skill = parse_skill_md(sample_skill_md)
        assert skill.frontmatter["name"] == "playwright-e2e"
        assert skill.frontmatter["frameworks"] == ["playwright"]
        assert skill.content.startswith("# Playwright E2E")
        assert skill.raw == sample_skill_md

    def test_body_is_trimmed(self):
        """Test surrounding whitespace is removed from the body."""
        skill = parse_skill_md("---\nname: x\n---\n\n\n  body text  \n\n")
        assert skill.content == "body text"


# =============================================================================
# Serialization
# =============================================================================


class TestSerialize:
    """Tests for frontmatter rendering and SKILL.md reconstruction."""

    def test_whitelist_and_order(self):
        """Test only allow-listed fields are written, in a fixed order."""
        text = render_frontmatter(
            {
                "license": "MIT",
                "name": "demo",
                "githubUrl": "https://github.com/a/b",
                "qualityScore": 90,
                "tags": ["a"],
            }
        )
        lines = text.split("\n")
        assert lines[0].startswith("name:")
        assert lines[1].startswith("license:")
        assert "githubUrl" not in text
        assert "qualityScore" not in text

    def test_empty_values_skipped(self):
        """Test None and empty strings are omitted."""
        text = render_frontmatter({"name": "demo", "author": None, "license": ""})
        assert "author" not in text
        assert "license" not in text

    def test_serialize_layout(self):
        """Test the document layout."""
        doc = serialize_skill_md({"name": "demo"}, "# Demo")
        assert doc == '---\nname: "demo"\n---\n\n# Demo\n'

    def test_reconstruction_round_trip_with_special_characters(self):
        """Test values with quotes, backslashes, colons, commas and newlines survive."""
        metadata = {
            "name": 'say "hi"',
            "description": "key: value, with\\backslash\nand a second line",
            "author": "O'Brien",
            "tags": ["a, b", 'quoted "tag"', "colon: here"],
            "testingTypes": ["e2e"],
            "languages": ["typescript"],
            "fullDescription": "# Heading\n\nBody text.",
        }
        skill = parse_skill_md(build_skill_md(metadata))

        assert skill.frontmatter["name"] == metadata["name"]
        assert skill.frontmatter["description"] == metadata["description"]
        assert skill.frontmatter["author"] == metadata["author"]
        assert skill.frontmatter["tags"] == metadata["tags"]
        assert skill.content == "# Heading\n\nBody text."

    def test_reconstruction_cannot_inject_keys(self):
        """Test a newline in a value does not create a new frontmatter key."""
        metadata = {"name": "x\nlicense: Evil", "license": "MIT"}
        data, _ = split_frontmatter(build_skill_md(metadata))
        assert data["license"] == "MIT"
        assert data["name"] == "x\nlicense: Evil"

    def test_reconstruction_fallback_body(self):
        """Test the body falls back to a heading plus the description."""
        doc = build_skill_md({"name": "demo", "description": "Short description"})
        assert parse_skill_md(doc).content == "# demo\n\nShort description"

    def test_reconstruction_without_name(self):
        """Test a nameless document still gets a heading."""
        assert parse_skill_md(build_skill_md({})).content == "# Skill"
