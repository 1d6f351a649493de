"""Constants and tuning parameters for the browser scraping session manager."""

from __future__ import annotations

from typing import Literal

# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

#: Playwright load states accepted by ``page.goto(wait_until=...)``.
WaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]

#: Default per-request deadline in milliseconds (navigation + extraction).
DEFAULT_TIMEOUT_MS: int = 20_000

#: Default load state.  ``"networkidle"`` waits until there have been no
#: network connections for at least 500 ms.
DEFAULT_WAIT_UNTIL: WaitUntil = "networkidle"

# ---------------------------------------------------------------------------
# Retry policy
# ---------------------------------------------------------------------------

#: Retries after the first attempt (2 tries in total).
MAX_RETRIES: int = 1

#: Fixed pause between a failed attempt and the next one (seconds).
RETRY_BACKOFF_SECONDS: float = 0.5

# ---------------------------------------------------------------------------
# Browser
# ---------------------------------------------------------------------------

#: Viewport assigned to every page session.
VIEWPORT: dict[str, int] = {"width": 1280, "height": 720}

#: Chromium flags.  Sandboxing is disabled so the browser runs inside
#: unprivileged containers; ``--single-process`` keeps one renderer.
LAUNCH_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-gpu",
    "--single-process",
)
