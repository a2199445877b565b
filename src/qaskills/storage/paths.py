"""
Path utilities for qaskills.

Provides consistent path resolution for configuration, scratch space and
agent skill directories.
"""

import os
import re
import tempfile
from pathlib import Path

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def get_qaskills_home() -> Path:
    """
    Get the qaskills home directory.

    Resolution order:
    1. QASKILLS_HOME environment variable
    2. Default: ~/.qaskills

    Returns:
        Path to the qaskills home directory.
    """
    env_home = os.environ.get("QASKILLS_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".qaskills"


def get_global_config_path() -> Path:
    """
    Get the path to the global configuration file.

    Returns:
        Path to ~/.qaskills/config.yaml
    """
    return get_qaskills_home() / "config.yaml"


def get_default_work_root() -> Path:
    """
    Get the default root for skill working directories.

    Returns:
        Path to <system temp>/qaskills
    """
    return Path(tempfile.gettempdir()) / "qaskills"


def sanitize_skill_name(name: str) -> str:
    """
    Turn a skill name into a filesystem-safe token.

    Every character outside [A-Za-z0-9_-] is replaced with an underscore,
    so the result can never contain a path separator or be "." / "..".

    Args:
        name: Raw skill name.

    Returns:
        Sanitized name, never empty.
    """
    return _UNSAFE_NAME_CHARS.sub("_", name) or "_"


def expand_home(path: str) -> Path:
    """
    Resolve a leading ``~`` against the current user's home directory.

    The home directory is looked up on every call so that a long-running
    process never holds on to a stale value.

    Args:
        path: Path template, possibly starting with ``~``.

    Returns:
        Path with the home placeholder resolved. Other paths are returned
        unchanged (and may still be relative).
    """
    if path == "~":
        return Path.home()
    if path.startswith("~/"):
        return Path.home() / path[2:]
    return Path(path)


def is_home_scoped(path: str) -> bool:
    """Check whether a path template lives under the home directory."""
    return path == "~" or path.startswith("~/")


def resolve_agent_path(template: str, project_dir: Path | None = None) -> Path:
    """
    Resolve an agent directory template to an absolute path.

    ``~`` templates resolve against the home directory, anything else
    against the project directory (cwd by default).

    Args:
        template: Directory template such as ``~/.claude/skills``.
        project_dir: Project root for relative templates.

    Returns:
        Absolute path.
    """
    path = expand_home(template)
    if path.is_absolute():
        return path
    base = Path(project_dir) if project_dir else Path.cwd()
    return (base / path).resolve()


def ensure_directory(path: Path, mode: int = 0o755) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path.
        mode: Permission mode for created directories.

    Returns:
        The path (for chaining).
    """
    path.mkdir(parents=True, exist_ok=True, mode=mode)
    return path
