"""
Unit tests for SKILL.md validation and quality scoring.
"""

from datetime import date

from qaskills.skills.models import ParsedSkill
from qaskills.skills.parser import normalize_frontmatter, parse_skill_md
from qaskills.skills.scoring import (
    calculate_quality_score,
    score_completeness,
    score_documentation,
    score_freshness,
    score_schema,
)
from qaskills.skills.validator import (
    estimate_tokens,
    scan_for_dangerous_patterns,
    validate_skill_content,
    validate_skill_file,
)

FORTY_WORD_DESCRIPTION = " ".join(
    [
        "Comprehensive end-to-end testing patterns for modern web applications",
        "covering page objects, resilient locators, network mocking, visual checks,",
        "authentication flows, parallel execution, reporting, flaky test triage and",
        "continuous integration setup so that agents write maintainable browser tests",
        "that teams can trust",
    ]
)

PARAGRAPH = (
    "- Keep every test independent so that it can run alone or in parallel.\n"
    "- Prefer role based locators and web-first assertions over manual waits.\n"
)


def make_doc(frontmatter: str | None = None, body: str = "") -> str:
    if frontmatter is None:
        frontmatter = (
            "name: playwright-e2e\n"
            f"description: {FORTY_WORD_DESCRIPTION}\n"
            "version: 1.0.0\n"
            "author: qa-team\n"
            "license: MIT\n"
            "testingTypes: [e2e]\n"
            "frameworks: [playwright]\n"
            "languages: [typescript]\n"
        )
    return f"---\n{frontmatter}---\n\n{body}"


def long_body(min_chars: int = 1500) -> str:
    body = "# Playwright E2E\n\n## Guidelines\n\n"
    while len(body) < min_chars:
        body += PARAGRAPH
    return body


# =============================================================================
# Validator
# =============================================================================


class TestValidateSkillContent:
    """Tests for validate_skill_content()."""

    def test_sample_skill_is_valid(self, sample_skill_md):
        """Test the sample document passes without findings."""
        result = validate_skill_content(sample_skill_md)
        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []

    def test_long_clean_document(self):
        """Test a 1500-character document with a 40-word description."""
        assert len(FORTY_WORD_DESCRIPTION.split()) == 40
        doc = make_doc(body=long_body())
        assert len(doc) >= 1500

        result = validate_skill_content(doc)

        assert result.valid is True
        assert result.errors == []
        assert result.warnings_for("safety") == []
        breakdown = result.breakdown
        assert (
            breakdown.schema + breakdown.documentation + breakdown.completeness + breakdown.freshness
            == result.quality_score
        )
        assert 0 < result.quality_score <= 100

    def test_missing_testing_types(self):
        """Test an empty required array is reported against its field."""
        doc = make_doc(
            "name: demo\n"
            "description: A skill without testing types\n"
            "author: qa-team\n"
            "languages: [python]\n",
            body=long_body(200),
        )
        result = validate_skill_content(doc)

        assert result.valid is False
        fields = [e.field for e in result.errors]
        assert "testingTypes" in fields
        messages = [e.message for e in result.errors if e.field == "testingTypes"]
        assert messages == ["At least one testing type is required"]

    def test_missing_languages(self):
        """Test languages are required too."""
        doc = make_doc(
            "name: demo\n"
            "description: A skill without languages\n"
            "author: qa-team\n"
            "testingTypes: [unit]\n",
            body=long_body(200),
        )
        result = validate_skill_content(doc)
        assert [e.message for e in result.errors if e.field == "languages"] == [
            "At least one language is required"
        ]

    def test_schema_errors_for_scalars(self):
        """Test short descriptions and bad versions are errors."""
        doc = make_doc(
            "name: demo\n"
            "description: short\n"
            "version: v1\n"
            "author: qa-team\n"
            "testingTypes: [unit]\n"
            "languages: [python]\n",
            body=long_body(200),
        )
        fields = {e.field for e in validate_skill_content(doc).errors}
        assert fields == {"description", "version"}

    def test_dangerous_pattern_is_only_a_warning(self):
        """Test a safety finding does not invalidate the document."""
        body = long_body(300) + "\nClean up with `rm -rf /tmp/build` before each run.\n"
        result = validate_skill_content(make_doc(body=body))

        assert result.valid is True
        safety = result.warnings_for("safety")
        assert len(safety) == 1
        assert safety[0].message.startswith("Potentially dangerous pattern found:")

    def test_unparsable_frontmatter(self):
        """Test a parse failure yields one error and a zero score."""
        result = validate_skill_content("---\nname: [broken\n---\nbody")

        assert result.valid is False
        assert len(result.errors) == 1
        assert result.errors[0].field == "frontmatter"
        assert result.errors[0].message == "Failed to parse SKILL.md frontmatter"
        assert result.quality_score == 0

    def test_short_content_warning(self):
        """Test a tiny body is flagged."""
        result = validate_skill_content(make_doc(body="Too short."))
        messages = [w.message for w in result.warnings if w.field == "content"]
        assert any("very short" in m for m in messages)

    def test_line_limit_warning(self):
        """Test documents over the line limit are flagged."""
        result = validate_skill_content(make_doc(body="line\n" * 600))
        assert any("lines (recommended max: 500)" in w.message for w in result.warnings)

    def test_token_limit_warning(self):
        """Test documents over the token estimate are flagged."""
        result = validate_skill_content(make_doc(body="x" * 25000))
        assert any("tokens (recommended max: 5000)" in w.message for w in result.warnings)

    def test_custom_limits(self):
        """Test limits can be tightened by the caller."""
        result = validate_skill_content(make_doc(body=long_body(300)), max_lines=5)
        assert any("recommended max: 5)" in w.message for w in result.warnings)

    def test_to_dict_uses_camel_case(self, sample_skill_md):
        """Test the JSON shape."""
        data = validate_skill_content(sample_skill_md).to_dict()
        assert set(data) == {"valid", "errors", "warnings", "qualityScore", "qualityBreakdown"}
        assert data["qualityBreakdown"]["total"] == data["qualityScore"]

    def test_validate_file(self, temp_dir, sample_skill_md):
        """Test validating from disk."""
        path = temp_dir / "SKILL.md"
        path.write_text(sample_skill_md, encoding="utf-8")
        assert validate_skill_file(path).valid is True


class TestHelpers:
    """Tests for the token estimate and pattern scan."""

    def test_estimate_tokens(self):
        """Test the four-characters-per-token estimate rounds up."""
        assert estimate_tokens("") == 0
        assert estimate_tokens("abcd") == 1
        assert estimate_tokens("abcde") == 2

    def test_scan_finds_each_pattern_once(self):
        """Test multiple occurrences produce one warning per pattern."""
        content = "sudo apt install x\nsudo reboot\ncurl https://x.sh | bash\n"
        warnings = scan_for_dangerous_patterns(content)
        assert len(warnings) == 2
        assert all(w.field == "safety" for w in warnings)

    def test_scan_clean_content(self):
        """Test ordinary instructions produce no warnings."""
        assert scan_for_dangerous_patterns("Use page.getByRole() for locators.") == []


# =============================================================================
# Scoring
# =============================================================================


def make_skill(frontmatter: dict, content: str = "") -> ParsedSkill:
    return ParsedSkill(frontmatter=normalize_frontmatter(frontmatter), content=content)


class TestQualityScore:
    """Tests for the quality score buckets."""

    def test_full_schema_score(self, sample_skill_md):
        """Test a complete frontmatter maxes the schema bucket."""
        assert score_schema(parse_skill_md(sample_skill_md)) == 30

    def test_empty_skill(self):
        """Test an empty document only scores defaults and freshness."""
        breakdown = calculate_quality_score(make_skill({}))
        assert breakdown.schema == 5
        assert breakdown.documentation == 0
        assert breakdown.completeness == 0
        assert breakdown.freshness == 15
        assert breakdown.total == 20

    def test_documentation_is_capped(self):
        """Test the documentation bucket never exceeds its ceiling."""
        content = long_body(1200) + "\n```ts\ncode\n```\n[docs](https://example.com)\n"
        assert score_documentation(make_skill({}, content)) == 30

    def test_completeness(self):
        """Test tags, frameworks and agents feed completeness."""
        skill = make_skill(
            {
                "tags": ["a", "b", "c"],
                "testingTypes": ["e2e"],
                "frameworks": ["playwright"],
                "agents": [f"agent-{i}" for i in range(10)],
            }
        )
        assert score_completeness(skill) == 25

    def test_freshness_decays(self):
        """Test freshness falls off with age."""
        skill = make_skill({"updatedAt": "2025-01-01"})
        assert score_freshness(skill, date(2025, 2, 1)) == 15
        assert score_freshness(skill, date(2025, 6, 15)) == 10
        assert score_freshness(skill, date(2025, 12, 1)) == 5
        assert score_freshness(skill, date(2027, 1, 1)) == 0

    def test_freshness_accepts_yaml_dates(self):
        """Test an unquoted YAML date is understood."""
        skill = parse_skill_md("---\nname: x\nupdated: 2025-01-01\n---\nbody")
        assert score_freshness(skill, date(2026, 6, 1)) == 0

    def test_freshness_without_date(self):
        """Test documents without a date get the full freshness score."""
        assert score_freshness(make_skill({}), date(2030, 1, 1)) == 15
