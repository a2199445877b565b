"""
Anonymous, non-blocking install telemetry for qaskills.

Respects:
  - QASKILLS_TELEMETRY=0   (project-specific opt-out)
  - DO_NOT_TRACK=1         (cross-tool standard)
  - telemetry.enable: false in config.yaml

Events are posted from daemon threads. Threads still running when the
interpreter exits are joined, each bounded by its telemetry timeout, so a
short-lived CLI process does not drop its events. Delivery failures are
logged at debug level and otherwise ignored.
"""

import atexit
import logging
import os
import threading
import time
from typing import Literal

import httpx

from qaskills import __version__
from qaskills.skills.registry import RegistryClient

logger = logging.getLogger(__name__)

TelemetryAction = Literal["install", "remove", "update"]

# (thread, timeout) pairs not yet joined
_pending: list[tuple[threading.Thread, float]] = []
_pending_lock = threading.Lock()


def is_telemetry_enabled(config_enabled: bool = True) -> bool:
    """Check config and environment opt-outs."""
    if not config_enabled:
        return False
    if os.environ.get("QASKILLS_TELEMETRY") == "0":
        return False
    if os.environ.get("DO_NOT_TRACK") == "1":
        return False
    return True


def _deliver(registry_url: str, event: dict, timeout: float, client: httpx.Client | None) -> None:
    try:
        with RegistryClient(registry_url, timeout=timeout, client=client) as registry:
            registry.track_install(event)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.debug(f"Telemetry delivery failed: {e}")


def send_telemetry(
    registry_url: str,
    skill_id: str,
    action: TelemetryAction,
    agents: list[str],
    enabled: bool = True,
    timeout: float = 3.0,
    client: httpx.Client | None = None,
) -> threading.Thread | None:
    """Send an install event in the background.

    Returns immediately; the event is posted from a daemon thread that
    wait_for_telemetry() joins at interpreter exit.

    Returns:
        The delivery thread, or None if telemetry is disabled.
    """
    if not is_telemetry_enabled(enabled):
        return None

    event = {
        "skillId": skill_id,
        "action": action,
        "agents": agents,
        "cliVersion": __version__,
    }
    thread = threading.Thread(
        target=_deliver,
        args=(registry_url, event, timeout, client),
        name="qaskills-telemetry",
        daemon=True,
    )
    with _pending_lock:
        _pending.append((thread, timeout))
    thread.start()
    return thread


def wait_for_telemetry() -> None:
    """Join pending delivery threads.

    Waits at most the longest pending timeout in total.
    """
    with _pending_lock:
        pending = list(_pending)
        _pending.clear()
    if not pending:
        return

    deadline = time.monotonic() + max(timeout for _, timeout in pending)
    for thread, _ in pending:
        thread.join(max(0.0, deadline - time.monotonic()))
        if thread.is_alive():
            logger.debug("Telemetry delivery still pending at exit, dropping it")


atexit.register(wait_for_telemetry)
