"""
Agent installer for qaskills.

Copies a downloaded skill directory into an agent's skills directory, or
removes it again.
"""

import logging
import shutil
from pathlib import Path

from pydantic import ValidationError

from qaskills.skills.exceptions import InstallError
from qaskills.skills.models import AgentTarget, InstallOutcome, InstallRecord
from qaskills.storage.files import INSTALL_RECORD, copy_tree
from qaskills.storage.paths import ensure_directory, resolve_agent_path, sanitize_skill_name

logger = logging.getLogger(__name__)


def get_install_path(skill_name: str, target: AgentTarget, project_dir: Path | None = None) -> Path:
    """Resolve where a skill lives for an agent.

    The ``~`` placeholder is resolved now, against the current user.
    """
    return resolve_agent_path(target.skills_dir, project_dir) / sanitize_skill_name(skill_name)


def install_to_agent(
    artifact_dir: Path,
    skill_name: str,
    target: AgentTarget,
    project_dir: Path | None = None,
    record: InstallRecord | None = None,
) -> Path:
    """Install a skill into one agent.

    Not transactional: on failure the target may be partially populated.
    Re-running merges into whatever is already there, so retrying is safe.

    Args:
        artifact_dir: Downloaded skill directory.
        skill_name: Skill name (sanitized for the directory name).
        target: Agent to install into.
        project_dir: Project root for project-scoped agents.
        record: Source record to write next to the installed files.

    Returns:
        The installed skill directory.

    Raises:
        InstallError: If the directory cannot be created or populated.
    """
    target_dir = get_install_path(skill_name, target, project_dir)

    try:
        ensure_directory(target_dir)
        copy_tree(Path(artifact_dir), target_dir)
        if record is not None:
            write_install_record(target_dir, record)
    except OSError as e:
        raise InstallError(target.id, target_dir, str(e)) from e

    logger.info(f"Installed '{skill_name}' to {target.name} at {target_dir}")
    return target_dir


def uninstall_from_agent(skill_name: str, target: AgentTarget, project_dir: Path | None = None) -> None:
    """Remove a skill from one agent.

    Never raises: a missing or unremovable directory counts as removed.
    """
    target_dir = get_install_path(skill_name, target, project_dir)

    if target_dir.is_symlink() or target_dir.is_file():
        try:
            target_dir.unlink()
        except OSError as e:
            logger.debug(f"Ignoring removal failure for {target_dir}: {e}")
        return

    shutil.rmtree(target_dir, ignore_errors=True)
    if target_dir.exists():
        logger.debug(f"Could not fully remove {target_dir}")
    else:
        logger.info(f"Removed '{skill_name}' from {target.name}")


def install_to_agents(
    artifact_dir: Path,
    skill_name: str,
    targets: list[AgentTarget],
    project_dir: Path | None = None,
    record: InstallRecord | None = None,
) -> list[InstallOutcome]:
    """Install a skill into several agents, one after another.

    A failure for one agent is recorded and the next agent is still tried.
    """
    outcomes = []
    for target in targets:
        try:
            path = install_to_agent(artifact_dir, skill_name, target, project_dir, record)
        except InstallError as e:
            logger.warning(str(e))
            outcomes.append(InstallOutcome(agent=target, path=e.path, error=e.reason))
        else:
            outcomes.append(InstallOutcome(agent=target, path=path))
    return outcomes


def uninstall_from_agents(
    skill_name: str,
    targets: list[AgentTarget],
    project_dir: Path | None = None,
) -> list[InstallOutcome]:
    """Remove a skill from several agents."""
    outcomes = []
    for target in targets:
        uninstall_from_agent(skill_name, target, project_dir)
        outcomes.append(
            InstallOutcome(agent=target, path=get_install_path(skill_name, target, project_dir))
        )
    return outcomes


def list_installed_skills(target: AgentTarget, project_dir: Path | None = None) -> list[Path]:
    """List skill directories installed for an agent, sorted by name."""
    skills_dir = resolve_agent_path(target.skills_dir, project_dir)
    if not skills_dir.is_dir():
        return []
    return sorted(p for p in skills_dir.iterdir() if p.is_dir())


def write_install_record(skill_dir: Path, record: InstallRecord) -> None:
    """Write the source record into an installed skill directory.

    Raises:
        OSError: If the record cannot be written.
    """
    (skill_dir / INSTALL_RECORD).write_text(record.model_dump_json(indent=2), encoding="utf-8")


def read_install_record(skill_dir: Path) -> InstallRecord | None:
    """Read the source record of an installed skill.

    Returns:
        The record, or None if it is missing or unreadable.
    """
    path = skill_dir / INSTALL_RECORD
    if not path.is_file():
        return None

    try:
        return InstallRecord.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValidationError) as e:
        logger.debug(f"Ignoring unreadable install record {path}: {e}")
        return None
