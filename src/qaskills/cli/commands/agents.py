"""
qaskills agents - Show the AI agents skills can be installed into.

Usage:
    qaskills agents
    qaskills agents --all
"""

from typing import Annotated

import typer

from qaskills.cli.output import console, print_table
from qaskills.skills import get_all_agents, get_skill_manager
from qaskills.storage.paths import is_home_scoped, resolve_agent_path


def agents(
    show_all: Annotated[
        bool,
        typer.Option(
            "--all",
            help="Include agents that were not detected.",
        ),
    ] = False,
) -> None:
    """List detected AI agents and their skills directories."""
    manager = get_skill_manager()
    detected = {a.id for a in manager.detect_agents()}
    listed = get_all_agents() if show_all else [a for a in get_all_agents() if a.id in detected]

    if not listed:
        console.print("[yellow]No AI agents detected.[/yellow]")
        console.print("[dim]Show every supported agent: qaskills agents --all[/dim]")
        return

    rows = [
        [
            agent.id,
            agent.name,
            "yes" if agent.id in detected else "no",
            "home" if is_home_scoped(agent.skills_dir) else "project",
            resolve_agent_path(agent.skills_dir, manager.project_path),
        ]
        for agent in listed
    ]
    print_table(["ID", "Name", "Detected", "Scope", "Skills directory"], rows, title="AI Agents")
