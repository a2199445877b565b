"""
Known AI coding agents and detection for qaskills.

Detection only checks the filesystem for each agent's config directory;
it never resolves the skills directory, which happens at install time.
"""

from pathlib import Path

from qaskills.skills.models import AgentTarget
from qaskills.storage.paths import resolve_agent_path

AGENTS: list[AgentTarget] = [
    AgentTarget(
        id="claude-code",
        name="Claude Code",
        config_dir="~/.claude",
        skills_dir="~/.claude/skills",
        install_method="copy",
        description="Anthropic's agentic coding CLI",
        website="https://claude.com/claude-code",
    ),
    AgentTarget(
        id="cursor",
        name="Cursor",
        config_dir=".cursor",
        skills_dir=".cursor/skills",
        install_method="copy",
        description="AI-first code editor",
        website="https://cursor.com",
    ),
    AgentTarget(
        id="windsurf",
        name="Windsurf",
        config_dir=".windsurf",
        skills_dir=".windsurf/skills",
        install_method="copy",
        description="Agentic IDE by Codeium",
        website="https://windsurf.com",
    ),
    AgentTarget(
        id="github-copilot",
        name="GitHub Copilot",
        config_dir=".github",
        skills_dir=".github/skills",
        install_method="copy",
        description="GitHub's AI pair programmer",
        website="https://github.com/features/copilot",
    ),
    AgentTarget(
        id="codex",
        name="Codex",
        config_dir="~/.codex",
        skills_dir="~/.codex/skills",
        install_method="copy",
        description="OpenAI's coding agent CLI",
        website="https://openai.com/codex",
    ),
    AgentTarget(
        id="cline",
        name="Cline",
        config_dir=".clinerules",
        skills_dir=".clinerules/skills",
        install_method="copy",
        description="Autonomous coding agent for VS Code",
        website="https://cline.bot",
    ),
]


def get_all_agents() -> list[AgentTarget]:
    """Return every known agent, detected or not."""
    return list(AGENTS)


def get_agent(id_or_name: str) -> AgentTarget | None:
    """Look up a known agent by id or display name (case-insensitive)."""
    wanted = id_or_name.lower()
    for agent in AGENTS:
        if agent.id == wanted or agent.name.lower() == wanted:
            return agent
    return None


def detect_agents(project_dir: Path | None = None) -> list[AgentTarget]:
    """Detect agents whose config directory exists.

    Args:
        project_dir: Project root for project-scoped agents (default: cwd).

    Returns:
        Detected agents, in catalogue order.
    """
    return [
        agent
        for agent in AGENTS
        if resolve_agent_path(agent.config_dir, project_dir).exists()
    ]
