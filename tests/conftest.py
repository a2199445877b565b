"""
Pytest configuration and fixtures for qaskills tests.
"""

import os
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

import qaskills.skills.manager as manager_module
from qaskills.config import clear_config_cache
from qaskills.skills.registry import RegistryClient

REGISTRY_URL = "https://registry.test"

SAMPLE_SKILL_MD = """---
name: playwright-e2e
description: End-to-end testing patterns with Playwright for modern web apps
version: 1.2.0
author: qa-team
license: MIT
tags: [e2e, playwright, browser]
testingTypes: [e2e]
frameworks: [playwright]
languages: [typescript]
domains: [web]
agents: [claude-code, cursor, github-copilot]
---

# Playwright E2E

You are an expert Playwright test automation engineer.

## Guidelines

- Use the Page Object Model pattern
- Prefer web-first assertions over manual waits
- Use role-based locators

```typescript
await expect(page.getByRole('heading')).toBeVisible();
```
"""


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[Path, None, None]:
    """Point HOME and QASKILLS_HOME at a scratch directory and drop env overrides."""
    for key in list(os.environ):
        if key.startswith("QASKILLS_") or key == "DO_NOT_TRACK":
            monkeypatch.delenv(key, raising=False)

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("QASKILLS_HOME", str(home / ".qaskills"))
    monkeypatch.setenv("QASKILLS_TELEMETRY", "0")

    clear_config_cache()
    manager_module._manager = None
    yield home
    clear_config_cache()
    manager_module._manager = None


@pytest.fixture
def fake_home(isolated_environment: Path) -> Path:
    """The scratch home directory used for ``~`` resolution."""
    return isolated_environment


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_skill_md() -> str:
    """Provide a valid SKILL.md document."""
    return SAMPLE_SKILL_MD


@pytest.fixture
def sample_skill_dir(temp_dir: Path, sample_skill_md: str) -> Path:
    """Provide a local skill directory with SKILL.md and a helper file."""
    skill_dir = temp_dir / "playwright-e2e"
    skill_dir.mkdir()
    (skill_dir / "SKILL.md").write_text(sample_skill_md, encoding="utf-8")
    (skill_dir / "examples").mkdir()
    (skill_dir / "examples" / "login.spec.ts").write_text("// example\n", encoding="utf-8")
    return skill_dir


@pytest.fixture
def sample_registry_metadata() -> dict:
    """Provide a registry metadata document."""
    return {
        "name": "playwright-e2e",
        "slug": "playwright-e2e",
        "description": "End-to-end testing patterns with Playwright",
        "version": "1.2.0",
        "author": "qa-team",
        "license": "MIT",
        "tags": ["e2e", "playwright"],
        "testingTypes": ["e2e"],
        "frameworks": ["playwright"],
        "languages": ["typescript"],
        "domains": ["web"],
        "agents": ["claude-code"],
        "qualityScore": 87,
        "installCount": 1200,
    }


@pytest.fixture
def make_registry() -> Generator[Callable[..., RegistryClient], None, None]:
    """Build a RegistryClient whose requests are answered by ``handler``."""
    clients: list[RegistryClient] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> RegistryClient:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        registry = RegistryClient(REGISTRY_URL, timeout=5.0, client=client)
        clients.append(registry)
        return registry

    yield _make

    for registry in clients:
        registry.close()
