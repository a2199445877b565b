"""Storage utilities for qaskills."""

from qaskills.storage.files import (
    INSTALL_RECORD,
    VCS_METADATA,
    copy_tree,
    list_content_entries,
    reset_directory,
)
from qaskills.storage.paths import (
    ensure_directory,
    expand_home,
    get_default_work_root,
    get_global_config_path,
    get_qaskills_home,
    is_home_scoped,
    resolve_agent_path,
    sanitize_skill_name,
)

__all__ = [
    # Files
    "INSTALL_RECORD",
    "VCS_METADATA",
    "copy_tree",
    "list_content_entries",
    "reset_directory",
    # Paths
    "ensure_directory",
    "expand_home",
    "get_default_work_root",
    "get_global_config_path",
    "get_qaskills_home",
    "is_home_scoped",
    "resolve_agent_path",
    "sanitize_skill_name",
]
