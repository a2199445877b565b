"""
Skill pipeline exceptions for qaskills.

Defines the errors raised while fetching and installing skills.
"""

from pathlib import Path


class SkillError(Exception):
    """Base exception for skill pipeline errors."""

    pass


class FetchError(SkillError):
    """No strategy produced usable content for a skill."""

    def __init__(self, skill_name: str, reason: str, message: str | None = None):
        self.skill_name = skill_name
        self.reason = reason
        super().__init__(message or f'Failed to fetch skill "{skill_name}": {reason}')


class SkillNotFoundError(FetchError):
    """The registry does not know the requested skill."""

    def __init__(self, skill_name: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(
            skill_name,
            "not found in registry",
            message=f'Skill "{skill_name}" not found in registry',
        )


class CloneError(SkillError):
    """A shallow git clone failed.

    Only raised inside the fetcher; registry fetches treat it as a signal
    to try the next strategy.
    """

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"git clone of {url} failed: {reason}")


class InvalidSkillError(SkillError):
    """A downloaded skill failed validation and strict mode is on."""

    def __init__(self, skill_name: str, errors: list[str]):
        self.skill_name = skill_name
        self.errors = errors
        super().__init__(f'Skill "{skill_name}" failed validation: {"; ".join(errors)}')


class InstallError(SkillError):
    """Copying a skill into an agent's directory failed."""

    def __init__(self, agent_id: str, path: Path, reason: str):
        self.agent_id = agent_id
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to install to {agent_id} at {path}: {reason}")


class UntrackedSkillError(SkillError):
    """An installed skill has no record of where it came from."""

    def __init__(self, skill_name: str, agent_ids: list[str]):
        self.skill_name = skill_name
        self.agent_ids = agent_ids
        super().__init__(
            f'Skipped "{skill_name}" in {", ".join(agent_ids)}: no install record. '
            f"Reinstall it with: qaskills add <source>"
        )
