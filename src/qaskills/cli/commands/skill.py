"""
qaskills skill commands.

Usage:
    qaskills add playwright-e2e
    qaskills add my-org/my-skill --agent cursor
    qaskills add ./path/to/skill
    qaskills remove playwright-e2e
    qaskills update [playwright-e2e]
    qaskills list
    qaskills validate ./SKILL.md --json
    qaskills info playwright-e2e
    qaskills init playwright
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from qaskills.cli.output import (
    console,
    print_breakdown,
    print_error,
    print_info,
    print_outcomes,
    print_success,
    print_warning,
)
from qaskills.skills import (
    AgentTarget,
    SkillError,
    SkillManager,
    SkillNotFoundError,
    UntrackedSkillError,
    ValidationResult,
    get_skill_manager,
)
from qaskills.skills.manager import SKILL_TEMPLATES


def _select_agents(manager: SkillManager, agent_names: list[str] | None) -> list[AgentTarget]:
    """Resolve --agent options, falling back to detection."""
    try:
        if agent_names:
            return [a for name in agent_names for a in manager.select_agents(name)]
        agents = manager.select_agents()
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if not agents:
        print_warning("No AI agents detected. Use --agent to pick one (see `qaskills agents --all`).")
        raise typer.Exit(1)
    return agents


def _print_validation(result: ValidationResult) -> None:
    if result.valid:
        print_success("Skill is valid!")
    else:
        print_error("Skill is invalid")

    for error in result.errors:
        console.print(f"  [red]- {error.field}: {error.message}[/red]")
    for warning in result.warnings:
        console.print(f"  [yellow]- {warning.field}: {warning.message}[/yellow]")

    print_breakdown(result.breakdown)


AgentOption = Annotated[
    list[str] | None,
    typer.Option(
        "--agent",
        "-a",
        help="Target agent id (repeatable; default: all detected agents).",
    ),
]


def add(
    skill: Annotated[
        str,
        typer.Argument(
            help="Registry skill name, GitHub owner/repo, or local path.",
        ),
    ],
    agent: AgentOption = None,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Refuse to install a skill that fails validation.",
        ),
    ] = False,
) -> None:
    """Download a skill and install it into your AI agents."""
    manager = get_skill_manager()
    agents = _select_agents(manager, agent)

    try:
        result = manager.add_skill(skill, agents, strict=True if strict else None)
    except SkillError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if result.validation is not None and not result.validation.valid:
        print_warning(f"Skill '{result.source.name}' has validation errors; run `qaskills validate` for details.")

    print_outcomes(result.outcomes, f"Installed '{result.source.name}'")
    if result.failed:
        raise typer.Exit(1)


def remove(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name to remove.",
        ),
    ],
    agent: AgentOption = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation.",
        ),
    ] = False,
) -> None:
    """Remove a skill from your AI agents."""
    manager = get_skill_manager()
    agents = _select_agents(manager, agent)

    if not yes:
        names = ", ".join(a.name for a in agents)
        console.print(f"[yellow]This will remove skill '{name}' from {names}[/yellow]")
        if not typer.confirm("Are you sure?"):
            console.print("[dim]Cancelled.[/dim]")
            return

    outcomes = manager.remove_skill(name, agents)
    print_outcomes(outcomes, f"Removed '{name}'")


def update(
    name: Annotated[
        str | None,
        typer.Argument(
            help="Skill name (updates all installed skills if not specified).",
        ),
    ] = None,
    agent: AgentOption = None,
) -> None:
    """Update skill(s) to the latest version."""
    manager = get_skill_manager()
    agents = _select_agents(manager, agent)

    if name is not None:
        try:
            result = manager.update_skill(name, agents)
        except SkillError as e:
            print_error(str(e))
            raise typer.Exit(1)
        print_outcomes(result.outcomes, f"Updated '{name}'")
        if result.failed:
            raise typer.Exit(1)
        return

    results = manager.update_all(agents)
    if not results:
        print_info("No installed skills found.")
        return

    failed = False
    for skill_name, result in results:
        if isinstance(result, UntrackedSkillError):
            print_warning(str(result))
            continue
        if isinstance(result, SkillError):
            print_error(str(result))
            failed = True
            continue
        print_outcomes(result.outcomes, f"Updated '{skill_name}'")
        failed = failed or bool(result.failed)

    if failed:
        raise typer.Exit(1)


def list_skills(
    agent: AgentOption = None,
) -> None:
    """List installed skills per agent."""
    manager = get_skill_manager()
    agents = _select_agents(manager, agent)

    installed = manager.list_installed(agents)
    if not installed:
        console.print("[yellow]No skills installed.[/yellow]")
        console.print("[dim]Install one: qaskills add <skill>[/dim]")
        return

    for skill_name, holders in installed.items():
        console.print(f"[cyan]{skill_name}[/cyan] [dim]({', '.join(a.name for a in holders)})[/dim]")
    console.print(f"\n[dim]Total: {len(installed)} skill(s)[/dim]")


def validate(
    path: Annotated[
        Path,
        typer.Argument(
            help="Path to a SKILL.md file or a skill directory.",
        ),
    ] = Path("."),
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the result as JSON.",
        ),
    ] = False,
) -> None:
    """Validate a SKILL.md and show its quality score."""
    manager = get_skill_manager()

    try:
        result = manager.validate_path(path)
    except (OSError, UnicodeDecodeError) as e:
        print_error(f"Cannot read {path}: {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_validation(result)

    if not result.valid:
        raise typer.Exit(1)


def info(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name or slug.",
        ),
    ],
) -> None:
    """Show registry details for a skill."""
    manager = get_skill_manager()

    try:
        skill = manager.get_skill_info(name)
    except SkillNotFoundError:
        print_error(f'Skill "{name}" not found.')
        raise typer.Exit(1)
    except SkillError as e:
        print_error(str(e))
        raise typer.Exit(1)

    slug = skill.get("slug") or name
    lines = [
        f"[bold]{skill.get('name', name)}[/bold] [dim]v{skill.get('version') or '1.0.0'}[/dim]",
        f"[dim]by[/dim] {skill.get('author', 'unknown')}",
        "",
        skill.get("description", ""),
        "",
        f"[bold]Quality Score:[/bold] {skill.get('qualityScore', 0)}/100",
        f"[bold]Installs:[/bold] {skill.get('installCount', 0)}",
        f"[bold]Testing Types:[/bold] {', '.join(skill.get('testingTypes') or [])}",
        f"[bold]Frameworks:[/bold] {', '.join(skill.get('frameworks') or []) or 'N/A'}",
        f"[bold]Languages:[/bold] {', '.join(skill.get('languages') or [])}",
        f"[bold]License:[/bold] {skill.get('license', '')}",
    ]
    if skill.get("githubUrl"):
        lines.append(f"[bold]GitHub:[/bold] {skill['githubUrl']}")
    lines.append("")
    lines.append(f"[dim]Install: qaskills add {slug}[/dim]")

    console.print("\n".join(lines))


def init(
    name: Annotated[
        str,
        typer.Option("--name", "-n", prompt="Skill name", help="Skill name."),
    ],
    description: Annotated[
        str,
        typer.Option("--description", "-d", prompt="Description", help="Short description."),
    ],
    author: Annotated[
        str,
        typer.Option("--author", prompt="Author", help="Author (e.g. your GitHub username)."),
    ],
    template: Annotated[
        str,
        typer.Argument(
            help=f"Template name ({', '.join(SKILL_TEMPLATES)}).",
        ),
    ] = "generic",
    testing_type: Annotated[
        str,
        typer.Option("--testing-type", "-t", prompt="Primary testing type", help="Primary testing type."),
    ] = "e2e",
    framework: Annotated[
        str,
        typer.Option("--framework", "-f", prompt="Primary framework (none for generic)", help="Primary framework."),
    ] = "none",
    language: Annotated[
        str,
        typer.Option("--language", "-l", prompt="Primary language", help="Primary language."),
    ] = "typescript",
    directory: Annotated[
        Path,
        typer.Option("--dir", help="Directory to write SKILL.md into."),
    ] = Path("."),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing SKILL.md."),
    ] = False,
) -> None:
    """Scaffold a new SKILL.md for your QA skill."""
    manager = get_skill_manager()

    try:
        output_path = manager.init_skill(
            directory,
            name=name,
            description=description,
            testing_type=testing_type,
            language=language,
            author=author,
            framework=None if framework == "none" else framework,
            template=template,
            force=force,
        )
    except (FileExistsError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Created SKILL.md at {output_path}")
    console.print("\nNext steps:")
    console.print(f"  1. Edit [cyan]{output_path}[/cyan] to add instructions")
    console.print(f"  2. Validate: [cyan]qaskills validate {output_path}[/cyan]")
