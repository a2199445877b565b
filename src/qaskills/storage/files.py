"""
Filesystem helpers for qaskills.

Copying and listing skill directories while ignoring version-control
metadata.
"""

import shutil
from pathlib import Path

VCS_METADATA = (".git", ".hg", ".svn")

# Written by the installer next to an installed skill
INSTALL_RECORD = ".qaskills.json"

IGNORED_ENTRIES = (*VCS_METADATA, INSTALL_RECORD)


def reset_directory(path: Path) -> Path:
    """Delete a directory (if present) and recreate it empty.

    Args:
        path: Directory to reset.

    Returns:
        The path (for chaining).
    """
    if path.exists() or path.is_symlink():
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    path.mkdir(parents=True, exist_ok=True)
    return path


def copy_tree(src: Path, dest: Path) -> None:
    """Recursively copy ``src`` into ``dest``, skipping VCS metadata and install records.

    Existing directories under ``dest`` are merged into and existing files
    overwritten. Symlinks are followed and copied by content.

    Raises:
        OSError: If any entry cannot be copied.
    """
    shutil.copytree(
        src,
        dest,
        ignore=shutil.ignore_patterns(*IGNORED_ENTRIES),
        dirs_exist_ok=True,
    )


def list_content_entries(path: Path) -> list[str]:
    """List the top-level entries of a directory, ignoring VCS metadata and install records."""
    if not path.is_dir():
        return []
    return sorted(entry.name for entry in path.iterdir() if entry.name not in IGNORED_ENTRIES)
