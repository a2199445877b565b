"""
Main Typer application for the qaskills CLI.

This module defines the root CLI application and registers all commands.
"""

from typing import Annotated

import typer

from qaskills import __version__
from qaskills.cli.commands import agents, skill
from qaskills.cli.output import print_error, print_info, setup_logging
from qaskills.config import ConfigurationError, get_config

# Create the main Typer app
app = typer.Typer(
    name="qaskills",
    help="Install QA testing skills into your AI coding agents.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print_info(f"qaskills version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging.",
        ),
    ] = False,
) -> None:
    """
    [bold blue]qaskills[/bold blue] - QA skills for AI coding agents

    Fetch skills from the registry, GitHub or a local path, validate them,
    and install them into your AI coding agents.
    """
    try:
        config = get_config()
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1)

    setup_logging("DEBUG" if verbose else config.logging.level)


# Register commands
app.command()(skill.add)
app.command()(skill.remove)
app.command()(skill.update)
app.command("list")(skill.list_skills)
app.command()(skill.validate)
app.command()(skill.info)
app.command()(skill.init)
app.command()(agents.agents)


if __name__ == "__main__":
    app()
