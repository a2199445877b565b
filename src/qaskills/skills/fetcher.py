"""
Skill content fetcher for qaskills.

Materializes a classified skill source into a name-keyed working directory.
Registry sources go through an ordered chain of strategies:

1. Shallow clone of the upstream repository named in the metadata
2. The registry's full-content endpoint
3. A SKILL.md reconstructed from the metadata itself

The first strategy that succeeds wins.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from qaskills.skills.exceptions import CloneError, FetchError
from qaskills.skills.models import ResolvedSource, SourceKind
from qaskills.skills.parser import SKILL_MD_FILENAME, build_skill_md
from qaskills.skills.registry import RegistryClient
from qaskills.storage.files import copy_tree, list_content_entries, reset_directory
from qaskills.storage.paths import get_default_work_root

logger = logging.getLogger(__name__)


def clone_shallow(url: str, dest: Path) -> None:
    """Clone ``url`` into ``dest`` with depth 1.

    GitPython runs git with an argument vector, never through a shell.

    Raises:
        CloneError: If git is unavailable or the clone fails.
    """
    try:
        from git import GitCommandError, Repo
    except ImportError as e:
        raise CloneError(url, f"git is not available: {e}") from e

    try:
        Repo.clone_from(url, str(dest), depth=1)
    except GitCommandError as e:
        stderr = (e.stderr or "").strip()
        raise CloneError(url, stderr or str(e)) from e


# =============================================================================
# Registry strategies
# =============================================================================


@dataclass
class RegistryFetch:
    """State shared by the registry strategies of one fetch."""

    source: ResolvedSource
    metadata: dict[str, Any]
    work_dir: Path
    registry: RegistryClient


RegistryStrategy = Callable[[RegistryFetch], bool]


def clone_upstream(fetch: RegistryFetch) -> bool:
    """Clone the skill's upstream GitHub repository, if it has one."""
    url = fetch.metadata.get("githubUrl")
    if not isinstance(url, str) or not url:
        return False

    try:
        clone_shallow(url, fetch.work_dir)
    except CloneError as e:
        logger.warning(f"Upstream clone failed, falling back: {e}")
        # Drop any half-written checkout before the next strategy runs
        reset_directory(fetch.work_dir)
        return False

    return True


def download_full_content(fetch: RegistryFetch) -> bool:
    """Write the registry's full SKILL.md content verbatim."""
    body = fetch.registry.get_text(f"{fetch.source.locator}/content")
    if body is None:
        return False

    (fetch.work_dir / SKILL_MD_FILENAME).write_text(body, encoding="utf-8")
    return True


def reconstruct_from_metadata(fetch: RegistryFetch) -> bool:
    """Build SKILL.md from the metadata JSON alone."""
    (fetch.work_dir / SKILL_MD_FILENAME).write_text(
        build_skill_md(fetch.metadata), encoding="utf-8"
    )
    return True


REGISTRY_STRATEGIES: list[RegistryStrategy] = [
    clone_upstream,
    download_full_content,
    reconstruct_from_metadata,
]


# =============================================================================
# Fetcher
# =============================================================================


class SkillFetcher:
    """Downloads skills into single-use working directories.

    The working directory is keyed by the sanitized skill name and is wiped
    before every fetch. Two concurrent fetches of the same name are not
    protected from each other.
    """

    def __init__(
        self,
        registry: RegistryClient | None = None,
        work_root: Path | None = None,
        strategies: list[RegistryStrategy] | None = None,
    ):
        """Initialize the fetcher.

        Args:
            registry: Registry client (a default one is created if omitted).
            work_root: Parent of the working directories.
            strategies: Ordered registry strategies.
        """
        self.registry = registry or RegistryClient()
        self.work_root = Path(work_root) if work_root else get_default_work_root()
        self.strategies = list(strategies) if strategies is not None else list(REGISTRY_STRATEGIES)

    def work_dir_for(self, source: ResolvedSource) -> Path:
        """Get the working directory used for a source."""
        return self.work_root / source.safe_name

    def fetch(self, source: ResolvedSource) -> Path:
        """Materialize a skill on disk.

        Args:
            source: Classified skill source.

        Returns:
            Path to the populated working directory.

        Raises:
            FetchError: If no strategy produced any content.
        """
        try:
            work_dir = reset_directory(self.work_dir_for(source))
            logger.info(f"Fetching {source.kind.value} skill '{source.name}' into {work_dir}")

            if source.kind is SourceKind.LOCAL:
                self._fetch_local(source, work_dir)
            elif source.kind is SourceKind.GITHUB:
                self._fetch_github(source, work_dir)
            else:
                self._fetch_registry(source, work_dir)
        except OSError as e:
            raise FetchError(source.name, f"filesystem error: {e}") from e

        if not list_content_entries(work_dir):
            raise FetchError(source.name, "download produced no files")

        return work_dir

    def _fetch_local(self, source: ResolvedSource, work_dir: Path) -> None:
        src = Path(source.locator)
        if not src.is_dir():
            raise FetchError(source.name, f"local path not found: {src}")

        copy_tree(src, work_dir)

    def _fetch_github(self, source: ResolvedSource, work_dir: Path) -> None:
        try:
            clone_shallow(source.locator, work_dir)
        except CloneError as e:
            raise FetchError(source.name, e.reason) from e

    def _fetch_registry(self, source: ResolvedSource, work_dir: Path) -> None:
        metadata = self.registry.get_json(source.locator, source.name)
        fetch = RegistryFetch(
            source=source,
            metadata=metadata,
            work_dir=work_dir,
            registry=self.registry,
        )

        for strategy in self.strategies:
            if strategy(fetch):
                logger.debug(f"Strategy {strategy.__name__} succeeded for '{source.name}'")
                return

        raise FetchError(source.name, "all download strategies failed")
