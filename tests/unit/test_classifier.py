"""
Unit tests for skill source classification.
"""

import os

from qaskills.skills.classifier import classify, registry_skill_url
from qaskills.skills.models import SourceKind


class TestClassify:
    """Tests for classify()."""

    def test_registry_name(self):
        """Test a bare name resolves to the registry."""
        source = classify("playwright-e2e", "https://registry.test")
        assert source.kind is SourceKind.REGISTRY
        assert source.name == "playwright-e2e"
        assert source.locator == "https://registry.test/api/skills/playwright-e2e"

    def test_github_shorthand(self):
        """Test owner/repo resolves to GitHub."""
        source = classify("my-org/my-skill")
        assert source.kind is SourceKind.GITHUB
        assert source.name == "my-skill"
        assert source.locator == "https://github.com/my-org/my-skill"

    def test_github_nested_path_uses_last_segment(self):
        """Test the name is the final path segment."""
        source = classify("my-org/skills/api-testing")
        assert source.kind is SourceKind.GITHUB
        assert source.name == "api-testing"

    def test_relative_local_path(self):
        """Test ./path resolves to an absolute local path."""
        source = classify("./skills/my-skill")
        assert source.kind is SourceKind.LOCAL
        assert source.name == "my-skill"
        assert source.locator == os.path.abspath("./skills/my-skill")
        assert os.path.isabs(source.locator)

    def test_absolute_local_path(self):
        """Test /path resolves to a local path."""
        source = classify("/opt/skills/cypress-e2e")
        assert source.kind is SourceKind.LOCAL
        assert source.name == "cypress-e2e"
        assert source.locator == "/opt/skills/cypress-e2e"

    def test_local_takes_priority_over_github(self):
        """Test a leading dot wins even though the identifier has a slash."""
        assert classify("../owner/repo").kind is SourceKind.LOCAL

    def test_url_is_not_github_shorthand(self):
        """Test identifiers with a scheme fall through to the registry."""
        source = classify("https://example.com/skill")
        assert source.kind is SourceKind.REGISTRY

    def test_classification_is_pure(self, temp_dir):
        """Test classification does not care whether the path exists."""
        missing = temp_dir / "does-not-exist"
        source = classify(str(missing))
        assert source.kind is SourceKind.LOCAL
        assert not missing.exists()

    def test_safe_name(self):
        """Test the filesystem-safe name replaces unsafe characters."""
        source = classify("weird name!")
        assert source.safe_name == "weird_name_"


class TestRegistrySkillUrl:
    """Tests for registry_skill_url()."""

    def test_name_is_url_encoded(self):
        """Test special characters are percent-encoded."""
        assert registry_skill_url("a b", "https://registry.test") == "https://registry.test/api/skills/a%20b"

    def test_trailing_slash_on_base(self):
        """Test a trailing slash on the base URL is ignored."""
        assert registry_skill_url("x", "https://registry.test/") == "https://registry.test/api/skills/x"
