"""Lifecycle of the single shared headless Chromium instance.

One :class:`BrowserProcess` owns the Playwright driver and the browser it
launched.  ``start()`` and ``stop()`` are idempotent and serialised by an
``asyncio.Lock`` so that concurrent first requests cannot launch two browsers.

Install Playwright and download the Chromium browser binary::

    pip install playwright>=1.48
    playwright install chromium
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from playwright.async_api import Browser, Page, Playwright, async_playwright

from page_scraper.core.exceptions import ScrapingError
from page_scraper.scraper.config import LAUNCH_ARGS, VIEWPORT

logger = logging.getLogger(__name__)


class BrowserProcess:
    """Managed handle around one Playwright Chromium instance.

    Owned by :class:`~page_scraper.scraper.session_manager.SessionManager`;
    one per application.

    Args:
        headless: Launch Chromium without a window.
        launch_args: Extra Chromium command-line flags.
    """

    def __init__(
        self,
        *,
        headless: bool = True,
        launch_args: Sequence[str] = LAUNCH_ARGS,
    ) -> None:
        self._headless = headless
        self._launch_args = list(launch_args)
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        """``True`` while a connected browser exists."""
        return self._browser is not None and self._browser.is_connected()

    async def start(self) -> None:
        """Launch the browser unless a connected one already exists.

        A browser that has disconnected (crashed or was killed) is discarded
        and replaced.

        Raises:
            Exception: Whatever Playwright raises when the driver or Chromium
                cannot be started.  Nothing is left running in that case.
        """
        async with self._lock:
            if self.is_running:
                return
            if self._browser is not None:
                logger.warning("browser: chromium disconnected; relaunching")
                await self._shutdown_unlocked()

            playwright = await async_playwright().start()
            try:
                browser = await playwright.chromium.launch(
                    headless=self._headless,
                    args=self._launch_args,
                )
            except Exception:
                await playwright.stop()
                raise

            self._playwright = playwright
            self._browser = browser
            logger.info("browser: launched chromium %s", browser.version)

    async def stop(self) -> None:
        """Close the browser and stop the driver.  Safe to call repeatedly."""
        async with self._lock:
            await self._shutdown_unlocked()

    async def _shutdown_unlocked(self) -> None:
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None

        if browser is not None:
            try:
                await browser.close()
                logger.info("browser: chromium closed")
            except Exception as exc:  # noqa: BLE001
                logger.warning("browser: failed to close chromium cleanly: %s", exc)
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as exc:  # noqa: BLE001
                logger.warning("browser: failed to stop playwright driver: %s", exc)

    async def new_page(self, *, viewport: dict[str, int] | None = None) -> Page:
        """Open a page in its own isolated browser context.

        ``Browser.new_page`` creates a context owned by the page, so closing
        the page also disposes of its cookies, storage and cache.

        Raises:
            ScrapingError: If the browser has not been started.
        """
        if self._browser is None:
            raise ScrapingError("Browser is not running")
        return await self._browser.new_page(viewport=viewport or VIEWPORT)
