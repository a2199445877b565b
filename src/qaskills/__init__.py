"""
qaskills - QA skill installer for AI coding agents

Resolves, downloads, validates and installs SKILL.md packages into the
skills directories of Claude Code, Cursor and other coding agents.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("qaskills")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "__version__",
]
