"""CLI command modules."""

from qaskills.cli.commands import agents, skill

__all__ = ["agents", "skill"]
