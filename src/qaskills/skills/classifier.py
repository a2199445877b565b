"""
Skill source classifier for qaskills.

Maps a user-supplied identifier to a local path, a GitHub repository or a
registry entry. Classification is pure: no filesystem or network access.
"""

import os
from urllib.parse import quote

from qaskills.config.schema import DEFAULT_REGISTRY_URL
from qaskills.skills.models import ResolvedSource, SourceKind

GITHUB_BASE_URL = "https://github.com"


def registry_skill_url(name: str, registry_url: str = DEFAULT_REGISTRY_URL) -> str:
    """Build the registry API URL for a skill."""
    return f"{registry_url.rstrip('/')}/api/skills/{quote(name, safe='')}"


def classify(identifier: str, registry_url: str = DEFAULT_REGISTRY_URL) -> ResolvedSource:
    """Classify a skill identifier.

    Rules, in priority order:
    1. Starts with "." or "/": local path
    2. Contains "/" but no "://": GitHub shorthand (owner/repo)
    3. Anything else: registry name

    Args:
        identifier: Skill name, owner/repo shorthand or local path.
        registry_url: Base URL of the skill registry.

    Returns:
        The resolved source.
    """
    if identifier.startswith((".", "/")):
        path = os.path.abspath(identifier)
        return ResolvedSource(
            name=os.path.basename(path),
            kind=SourceKind.LOCAL,
            locator=path,
        )

    if "/" in identifier and "://" not in identifier:
        return ResolvedSource(
            name=identifier.rstrip("/").split("/")[-1],
            kind=SourceKind.GITHUB,
            locator=f"{GITHUB_BASE_URL}/{identifier}",
        )

    return ResolvedSource(
        name=identifier,
        kind=SourceKind.REGISTRY,
        locator=registry_skill_url(identifier, registry_url),
    )
