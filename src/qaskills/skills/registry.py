"""
HTTP client for the qaskills registry API.

Only the endpoints the install pipeline needs are wrapped here: skill
metadata, full SKILL.md content and install telemetry.
"""

import logging
from typing import Any

import httpx

from qaskills import __version__
from qaskills.config.schema import DEFAULT_REGISTRY_URL
from qaskills.skills.classifier import registry_skill_url
from qaskills.skills.exceptions import FetchError, SkillNotFoundError

logger = logging.getLogger(__name__)


class RegistryClient:
    """Synchronous client for the skill registry.

    Args:
        base_url: Registry base URL (e.g. https://qaskills.sh).
        timeout: Per-request timeout in seconds.
        client: Optional pre-built httpx client (used by tests).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_REGISTRY_URL,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client or httpx.Client(follow_redirects=True)
        self._headers = {"User-Agent": f"qaskills-cli/{__version__}"}

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RegistryClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def skill_url(self, name: str) -> str:
        """URL of a skill's metadata endpoint."""
        return registry_skill_url(name, self.base_url)

    def get_json(self, url: str, skill_name: str) -> dict[str, Any]:
        """Fetch a skill metadata document.

        Raises:
            SkillNotFoundError: On any non-2xx response.
            FetchError: On transport errors or a non-object JSON body.
        """
        try:
            response = self._client.get(url, headers=self._headers, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise FetchError(skill_name, f"registry request failed: {e}") from e

        if not response.is_success:
            logger.debug(f"Registry returned {response.status_code} for {url}")
            raise SkillNotFoundError(skill_name, response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(skill_name, "registry returned invalid JSON") from e

        if not isinstance(data, dict):
            raise FetchError(skill_name, "registry returned an unexpected payload")
        return data

    def get_text(self, url: str) -> str | None:
        """Fetch a text body; None when the request fails or is not 2xx."""
        try:
            response = self._client.get(url, headers=self._headers, timeout=self.timeout)
        except httpx.HTTPError as e:
            logger.debug(f"Request to {url} failed: {e}")
            return None

        if not response.is_success:
            logger.debug(f"{url} returned {response.status_code}")
            return None
        return response.text

    def get_skill(self, name: str) -> dict[str, Any]:
        """Get skill metadata by name or slug."""
        return self.get_json(self.skill_url(name), name)

    def track_install(self, event: dict[str, Any], timeout: float | None = None) -> None:
        """Submit an install/update/remove telemetry event.

        Raises:
            httpx.HTTPError: If delivery fails.
        """
        response = self._client.post(
            f"{self.base_url}/api/telemetry/install",
            json=event,
            headers=self._headers,
            timeout=timeout or self.timeout,
        )
        response.raise_for_status()
