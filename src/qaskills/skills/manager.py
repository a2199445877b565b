"""
Skill manager for qaskills.

Provides the main interface for resolving, downloading, validating and
installing skills.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from qaskills.config import Config, get_config
from qaskills.skills.agents import detect_agents, get_agent
from qaskills.skills.classifier import classify
from qaskills.skills.exceptions import InvalidSkillError, SkillError, UntrackedSkillError
from qaskills.skills.fetcher import SkillFetcher
from qaskills.skills.installer import (
    get_install_path,
    install_to_agents,
    list_installed_skills,
    read_install_record,
    uninstall_from_agents,
)
from qaskills.skills.models import (
    AgentTarget,
    InstallOutcome,
    InstallRecord,
    ResolvedSource,
    SourceKind,
    ValidationIssue,
    ValidationResult,
)
from qaskills.skills.parser import SKILL_MD_FILENAME, serialize_skill_md
from qaskills.skills.registry import RegistryClient
from qaskills.skills.telemetry import TelemetryAction, send_telemetry
from qaskills.skills.validator import validate_skill_file
from qaskills.storage.paths import ensure_directory

logger = logging.getLogger(__name__)


# Skill body templates for `qaskills init`
SKILL_TEMPLATES: dict[str, str] = {
    "playwright": """# {title}

You are an expert Playwright test automation engineer.

## Guidelines

- Use the Page Object Model pattern
- Use web-first assertions (expect(locator).toBeVisible())
- Use auto-waiting locators (getByRole, getByText, getByTestId)
- Always use fixtures for test setup
- Group related tests with describe blocks

## Code Examples

```typescript
import {{ test, expect }} from '@playwright/test';

test('example test', async ({{ page }}) => {{
  await page.goto('/');
  await expect(page.getByRole('heading', {{ name: 'Welcome' }})).toBeVisible();
}});
```
""",
    "cypress": """# {title}

You are an expert Cypress test automation engineer.

## Guidelines

- Use custom commands for reusable actions
- Use cy.intercept() for network stubbing
- Use cy.session() for authentication
- Use data-testid attributes for selectors

## Code Examples

```typescript
describe('Feature', () => {{
  it('should work', () => {{
    cy.visit('/');
    cy.get('[data-testid="title"]').should('be.visible');
  }});
}});
```
""",
    "api": """# {title}

You are an expert API test automation engineer.

## Guidelines

- Validate response status codes, headers, and body
- Use JSON Schema validation
- Test error scenarios and edge cases
- Implement proper test data cleanup

## Code Examples

```python
def test_list_users(client):
    response = client.get("/api/users")
    assert response.status_code == 200
    assert "users" in response.json()
```
""",
    "generic": """# {title}

You are a QA testing expert. Follow these guidelines when writing tests.

## Guidelines

- Write clear, descriptive test names
- Follow the Arrange-Act-Assert pattern
- Keep tests independent and idempotent
- Handle async operations properly

## Best Practices

- One assertion concept per test
- Use test fixtures for setup/teardown
- Mock external dependencies
- Test both happy and unhappy paths
""",
}

DEFAULT_AGENT_IDS = ["claude-code", "cursor", "github-copilot", "windsurf", "codex"]


@dataclass
class AddResult:
    """Result of downloading a skill and installing it into agents."""

    source: ResolvedSource
    artifact_dir: Path
    outcomes: list[InstallOutcome] = field(default_factory=list)
    validation: ValidationResult | None = None

    @property
    def succeeded(self) -> list[InstallOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[InstallOutcome]:
        return [o for o in self.outcomes if not o.ok]


class SkillManager:
    """Main interface for working with skills.

    Provides methods to:
    - Resolve and download skills from paths, GitHub or the registry
    - Install skills into (and remove them from) agent directories
    - Validate SKILL.md documents
    - Scaffold new skills
    """

    def __init__(
        self,
        config: Config | None = None,
        project_path: Path | None = None,
        registry: RegistryClient | None = None,
        fetcher: SkillFetcher | None = None,
    ):
        """Initialize the skill manager.

        Args:
            config: Configuration (loaded from disk if omitted).
            project_path: Project root for project-scoped agents.
            registry: Registry client override.
            fetcher: Fetcher override.
        """
        self.config = config or get_config()
        self.project_path = project_path
        self.registry = registry or RegistryClient(
            self.config.registry.url, timeout=self.config.registry.timeout
        )
        self.fetcher = fetcher or SkillFetcher(self.registry, work_root=self.config.install.work_dir)

    def close(self) -> None:
        self.registry.close()

    # -------------------------------------------------------------------------
    # Agents
    # -------------------------------------------------------------------------

    def detect_agents(self) -> list[AgentTarget]:
        """Detect agents configured on this machine / in this project."""
        return detect_agents(self.project_path)

    def select_agents(self, agent: str | None = None) -> list[AgentTarget]:
        """Pick the agents an operation applies to.

        With no agent given, every detected agent is used. A named agent is
        used even if it has not been detected yet.

        Raises:
            ValueError: If the named agent is unknown.
        """
        if agent is None:
            return self.detect_agents()

        target = get_agent(agent)
        if target is None:
            raise ValueError(f'Agent "{agent}" is not a known agent')
        return [target]

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def list_installed(self, agents: list[AgentTarget]) -> dict[str, list[AgentTarget]]:
        """Map each installed skill directory name to the agents holding it."""
        installed: dict[str, list[AgentTarget]] = {}
        for agent in agents:
            for skill_dir in list_installed_skills(agent, self.project_path):
                installed.setdefault(skill_dir.name, []).append(agent)
        return dict(sorted(installed.items()))

    def resolve(self, identifier: str) -> ResolvedSource:
        """Classify a skill identifier against the configured registry."""
        return classify(identifier, self.config.registry.url)

    def download(self, identifier: str) -> tuple[ResolvedSource, Path]:
        """Resolve and download a skill.

        Raises:
            FetchError: If nothing could be downloaded.
        """
        source = self.resolve(identifier)
        return source, self.fetcher.fetch(source)

    def add_skill(
        self,
        identifier: str,
        agents: list[AgentTarget],
        strict: bool | None = None,
        action: TelemetryAction = "install",
    ) -> AddResult:
        """Download a skill and install it into each agent.

        Args:
            identifier: Skill name, owner/repo or local path.
            agents: Target agents, processed in order.
            strict: Refuse to install a skill whose SKILL.md is invalid
                (defaults to install.validate_before_install).
            action: Telemetry action to report.

        Returns:
            AddResult with one outcome per agent.

        Raises:
            FetchError: If the skill could not be downloaded.
            InvalidSkillError: In strict mode, if validation fails.
        """
        source, artifact_dir = self.download(identifier)
        validation = self.validate_artifact(artifact_dir)

        if strict is None:
            strict = self.config.install.validate_before_install
        if strict and validation is not None and not validation.valid:
            raise InvalidSkillError(
                source.name, [f"{e.field}: {e.message}" for e in validation.errors]
            )

        record = InstallRecord(
            identifier=source.locator if source.kind == SourceKind.LOCAL else identifier,
            source=source,
        )
        outcomes = install_to_agents(artifact_dir, source.name, agents, self.project_path, record)
        result = AddResult(
            source=source,
            artifact_dir=artifact_dir,
            outcomes=outcomes,
            validation=validation,
        )

        if result.succeeded:
            self._track(source.name, action, [o.agent.id for o in result.succeeded])
        return result

    def installed_record(self, name: str, agent: AgentTarget) -> InstallRecord | None:
        """Read where an agent's copy of a skill was installed from."""
        return read_install_record(get_install_path(name, agent, self.project_path))

    def update_skill(self, identifier: str, agents: list[AgentTarget]) -> AddResult:
        """Re-download a skill and install it over the existing copies.

        If an installed copy records its source, that source is fetched
        instead of resolving ``identifier`` again.
        """
        for agent in agents:
            record = self.installed_record(identifier, agent)
            if record is not None:
                identifier = record.identifier
                break
        return self.add_skill(identifier, agents, action="update")

    def update_all(self, agents: list[AgentTarget]) -> list[tuple[str, AddResult | SkillError]]:
        """Re-download every skill installed for the given agents.

        Each skill is fetched again from the source recorded at install time
        and reinstalled only into the agents holding that copy. Copies without
        a record are skipped and reported as UntrackedSkillError. A failure
        for one skill is recorded and the rest are still updated.

        Returns:
            (skill name, result or error) pairs in skill name order.
        """
        results: list[tuple[str, AddResult | SkillError]] = []
        for name, holders in self.list_installed(agents).items():
            by_identifier: dict[str, list[AgentTarget]] = {}
            untracked: list[AgentTarget] = []
            for agent in holders:
                record = self.installed_record(name, agent)
                if record is None:
                    untracked.append(agent)
                else:
                    by_identifier.setdefault(record.identifier, []).append(agent)

            if untracked:
                error = UntrackedSkillError(name, [a.id for a in untracked])
                logger.warning(str(error))
                results.append((name, error))

            for identifier, group in by_identifier.items():
                try:
                    results.append((name, self.add_skill(identifier, group, action="update")))
                except SkillError as e:
                    logger.warning(f"Update of '{name}' failed: {e}")
                    results.append((name, e))
        return results

    def remove_skill(self, name: str, agents: list[AgentTarget]) -> list[InstallOutcome]:
        """Remove a skill from each agent. Never fails for missing skills."""
        outcomes = uninstall_from_agents(name, agents, self.project_path)
        self._track(name, "remove", [a.id for a in agents])
        return outcomes

    def _track(self, skill_id: str, action: TelemetryAction, agent_ids: list[str]) -> None:
        send_telemetry(
            self.config.registry.url,
            skill_id,
            action,
            agent_ids,
            enabled=self.config.telemetry.enable,
            timeout=self.config.telemetry.timeout,
        )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _limits(self) -> dict[str, int]:
        limits = self.config.validation
        return {
            "max_lines": limits.max_lines,
            "max_tokens": limits.max_tokens,
            "min_content_chars": limits.min_content_chars,
        }

    def validate_path(self, path: Path) -> ValidationResult:
        """Validate a SKILL.md file, or the SKILL.md inside a directory.

        Raises:
            OSError: If the file cannot be read.
        """
        path = Path(path)
        if path.is_dir():
            path = path / SKILL_MD_FILENAME
        return validate_skill_file(path, **self._limits())

    def validate_artifact(self, artifact_dir: Path) -> ValidationResult | None:
        """Validate a downloaded skill's SKILL.md, if it has one.

        A SKILL.md that cannot be read as UTF-8 text is reported as a
        validation error rather than raised.
        """
        skill_md = artifact_dir / SKILL_MD_FILENAME
        if not skill_md.is_file():
            logger.debug(f"No {SKILL_MD_FILENAME} in {artifact_dir}, skipping validation")
            return None

        try:
            return validate_skill_file(skill_md, **self._limits())
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Cannot read {skill_md}: {e}")
            return ValidationResult(
                errors=[ValidationIssue(field="content", message=f"Cannot read {SKILL_MD_FILENAME}: {e}")]
            )

    # -------------------------------------------------------------------------
    # Registry and scaffolding
    # -------------------------------------------------------------------------

    def get_skill_info(self, name: str) -> dict[str, Any]:
        """Get registry metadata for a skill.

        Raises:
            SkillNotFoundError: If the registry does not know the skill.
        """
        return self.registry.get_skill(name)

    def init_skill(
        self,
        directory: Path,
        name: str,
        description: str,
        testing_type: str,
        language: str,
        author: str,
        framework: str | None = None,
        template: str = "generic",
        force: bool = False,
    ) -> Path:
        """Scaffold a SKILL.md in ``directory``.

        Returns:
            Path to the created SKILL.md.

        Raises:
            FileExistsError: If SKILL.md exists and force is False.
            ValueError: If the template is unknown.
        """
        if template not in SKILL_TEMPLATES:
            raise ValueError(f"Unknown template: {template} (choose from {', '.join(SKILL_TEMPLATES)})")

        output_path = Path(directory) / SKILL_MD_FILENAME
        if output_path.exists() and not force:
            raise FileExistsError(f"{output_path} already exists. Use --force to overwrite.")

        metadata = {
            "name": name,
            "description": description,
            "version": "1.0.0",
            "author": author,
            "license": "MIT",
            "tags": [testing_type],
            "testingTypes": [testing_type],
            "frameworks": [framework] if framework else [],
            "languages": [language],
            "domains": ["web"],
            "agents": DEFAULT_AGENT_IDS,
        }
        title = name.replace("-", " ").replace("_", " ").title()
        body = SKILL_TEMPLATES[template].format(title=title).strip()

        ensure_directory(output_path.parent)
        output_path.write_text(serialize_skill_md(metadata, body), encoding="utf-8")
        return output_path


# Global manager instance
_manager: SkillManager | None = None


def get_skill_manager(project_path: Path | None = None) -> SkillManager:
    """Get the skill manager singleton.

    Args:
        project_path: Optional project path for project-scoped agents.

    Returns:
        SkillManager instance.
    """
    global _manager
    if _manager is None or (project_path and _manager.project_path != project_path):
        _manager = SkillManager(project_path=project_path)
    return _manager
