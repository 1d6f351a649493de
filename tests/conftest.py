"""Shared pytest fixtures for Page Scraper tests.

Fixture summary
---------------
fake_browser:     ``FakeBrowser`` (see ``tests/fakes.py``) that hands out
                   ``FakePage`` objects and counts page opens and closes.
session_manager:  ``SessionManager`` around ``fake_browser`` with a zero
                   retry backoff.
client:           httpx.AsyncClient against an app built around
                   ``session_manager``.

Chromium is never launched: everything below the ``BrowserProcess`` seam is
faked, and ``tests/scraper/test_browser.py`` patches ``async_playwright``.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ---------------------------------------------------------------------------
# Test environment bootstrap
# ---------------------------------------------------------------------------

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from page_scraper.api.main import create_app  # noqa: E402
from page_scraper.config.settings import get_settings  # noqa: E402
from page_scraper.scraper.session_manager import SessionManager  # noqa: E402
from tests.fakes import FakeBrowser  # noqa: E402

# Clear the lru_cache so Settings() re-reads from the patched environment.
get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def session_manager(fake_browser: FakeBrowser) -> SessionManager:
    return SessionManager(fake_browser, retry_backoff=0)  # type: ignore[arg-type]


@pytest_asyncio.fixture
async def client(session_manager: SessionManager) -> AsyncGenerator[AsyncClient, None]:
    """Yield an ``httpx.AsyncClient`` bound to a freshly built app.

    ``ASGITransport`` does not run startup/shutdown hooks, so the fake
    browser starts lazily on the first scrape, as it would for a real one.
    """
    app = create_app(session_manager=session_manager)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
