"""
qaskills Skills Pipeline.

Skills are SKILL.md instruction documents (plus any supporting files) that
teach AI coding agents how to test software. The pipeline:
- Classifier: turns an identifier into a local, GitHub or registry source
- Fetcher: materializes the skill into a working directory
- Validator: checks the frontmatter schema and scores quality
- Installer: copies the skill into each agent's skills directory

Usage:
    from qaskills.skills import get_skill_manager

    manager = get_skill_manager()
    agents = manager.select_agents()
    result = manager.add_skill("playwright-e2e", agents)
"""

# Models
from qaskills.skills.models import (
    AgentTarget,
    InstallOutcome,
    InstallRecord,
    ParsedSkill,
    QualityBreakdown,
    ResolvedSource,
    SkillMetadata,
    SourceKind,
    ValidationIssue,
    ValidationResult,
)

# Exceptions
from qaskills.skills.exceptions import (
    CloneError,
    FetchError,
    InstallError,
    InvalidSkillError,
    SkillError,
    SkillNotFoundError,
    UntrackedSkillError,
)

# Parser
from qaskills.skills.parser import (
    SkillParseError,
    build_skill_md,
    parse_skill_md,
    serialize_skill_md,
    split_frontmatter,
)

# Pipeline
from qaskills.skills.classifier import classify
from qaskills.skills.fetcher import SkillFetcher
from qaskills.skills.registry import RegistryClient
from qaskills.skills.scoring import calculate_quality_score
from qaskills.skills.validator import validate_skill_content, validate_skill_file

# Agents
from qaskills.skills.agents import detect_agents, get_agent, get_all_agents
from qaskills.skills.installer import (
    install_to_agent,
    install_to_agents,
    read_install_record,
    uninstall_from_agent,
    uninstall_from_agents,
)

# Manager
from qaskills.skills.manager import AddResult, SkillManager, get_skill_manager

__all__ = [
    # Models
    "AgentTarget",
    "InstallOutcome",
    "InstallRecord",
    "ParsedSkill",
    "QualityBreakdown",
    "ResolvedSource",
    "SkillMetadata",
    "SourceKind",
    "ValidationIssue",
    "ValidationResult",
    # Exceptions
    "CloneError",
    "FetchError",
    "InstallError",
    "InvalidSkillError",
    "SkillError",
    "SkillNotFoundError",
    "UntrackedSkillError",
    # Parser
    "SkillParseError",
    "build_skill_md",
    "parse_skill_md",
    "serialize_skill_md",
    "split_frontmatter",
    # Pipeline
    "RegistryClient",
    "SkillFetcher",
    "calculate_quality_score",
    "classify",
    "validate_skill_content",
    "validate_skill_file",
    # Agents
    "detect_agents",
    "get_agent",
    "get_all_agents",
    "install_to_agent",
    "install_to_agents",
    "read_install_record",
    "uninstall_from_agent",
    "uninstall_from_agents",
    # Manager
    "AddResult",
    "SkillManager",
    "get_skill_manager",
]
