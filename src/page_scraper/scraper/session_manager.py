"""Scraping session manager: per-request pages over one shared browser.

Flow of :meth:`SessionManager.scrape`:

1. Make sure the shared :class:`~page_scraper.scraper.browser.BrowserProcess`
   is running.
2. For each attempt (``MAX_RETRIES + 1`` in total) open a fresh page with a
   fixed viewport, navigate under the per-request deadline, then extract the
   record under whatever is left of that deadline.
3. Navigation failures are classified; Timeout and Navigation failures are
   retried after a fixed backoff while attempts remain, anything else is
   raised.  Extraction failures are retried on the same terms.
4. The page is closed in a ``finally`` block on every exit path, before any
   backoff sleep.

Only :class:`~page_scraper.core.exceptions.ScraperAppError` subclasses leave
``scrape``.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from playwright.async_api import Page

from page_scraper.core.exceptions import ScrapingError, classify_error
from page_scraper.scraper.browser import BrowserProcess
from page_scraper.scraper.config import MAX_RETRIES, RETRY_BACKOFF_SECONDS, VIEWPORT
from page_scraper.scraper.extractor import extract_page_data
from page_scraper.scraper.models import ScrapedRecord, ScrapeOptions

logger = structlog.get_logger(__name__)


class SessionManager:
    """Owns the browser handle and runs the bounded retry policy.

    Args:
        browser: The shared browser handle.  The manager starts and stops it
            but never closes it from inside ``scrape``.
        default_options: Options used when ``scrape`` is called without any.
        max_retries: Retries after the first attempt.
        retry_backoff: Seconds to wait between attempts.
    """

    def __init__(
        self,
        browser: BrowserProcess,
        *,
        default_options: ScrapeOptions | None = None,
        max_retries: int = MAX_RETRIES,
        retry_backoff: float = RETRY_BACKOFF_SECONDS,
    ) -> None:
        self._browser = browser
        self._default_options = default_options or ScrapeOptions()
        self._max_retries = max_retries
        self._retry_backoff = retry_backoff

    @property
    def is_running(self) -> bool:
        return self._browser.is_running

    async def start(self) -> None:
        """Launch the shared browser if needed.  Idempotent."""
        await self._browser.start()

    async def stop(self) -> None:
        """Shut the shared browser down if it is running.  Idempotent."""
        await self._browser.stop()

    async def scrape(self, url: str, options: ScrapeOptions | None = None) -> ScrapedRecord:
        """Render *url* and extract its title, meta description and first heading.

        Args:
            url: An already validated http(s) URL.
            options: Deadline and load state; defaults to the manager's
                ``default_options``.

        Returns:
            A :class:`ScrapedRecord` with ``status_code`` 200.  Pages without
            the extracted elements still succeed, with ``None`` fields.

        Raises:
            ScrapeTimeoutError: The deadline elapsed on the final attempt.
            NavigationError: The page could not be loaded on the final attempt.
            ScrapingError: The browser could not be started, or any other
                failure.
        """
        options = options or self._default_options

        try:
            await self.start()
        except Exception as exc:
            logger.error("browser_start_failed", url=url, error=str(exc))
            raise ScrapingError("Browser initialization failed") from exc

        started = time.perf_counter()
        for attempt in range(self._max_retries + 1):
            try:
                record = await self._attempt(url, options)
            except Exception as exc:
                error = classify_error(exc)
                if error.retryable and attempt < self._max_retries:
                    logger.warning(
                        "scrape_retry",
                        url=url,
                        attempt=attempt + 1,
                        kind=error.kind.value,
                        error=str(exc),
                    )
                    await asyncio.sleep(self._retry_backoff)
                    continue

                logger.warning(
                    "scrape_failed",
                    url=url,
                    attempts=attempt + 1,
                    kind=error.kind.value,
                    status_code=error.status_code,
                    error=str(exc.__cause__ or exc),
                )
                if error is exc:
                    raise
                raise error from exc

            logger.info(
                "scrape_complete",
                url=url,
                attempts=attempt + 1,
                elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            return record

        raise ScrapingError("Failed to scrape after retries")

    async def _attempt(self, url: str, options: ScrapeOptions) -> ScrapedRecord:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + options.timeout_ms / 1000

        async with self._page_session(options) as page:
            try:
                await page.goto(url, wait_until=options.wait_until, timeout=options.timeout_ms)
            except Exception as exc:
                raise classify_error(exc) from exc

            remaining = max(deadline - loop.time(), 0.0)
            try:
                fields = await asyncio.wait_for(extract_page_data(page), timeout=remaining)
            except Exception as exc:
                raise classify_error(exc, retryable=True) from exc

        return ScrapedRecord(
            title=fields.title,
            meta_description=fields.meta_description,
            heading=fields.heading,
            status_code=200,
        )

    @asynccontextmanager
    async def _page_session(self, options: ScrapeOptions) -> AsyncIterator[Page]:
        page = await self._browser.new_page(viewport=VIEWPORT)
        try:
            page.set_default_timeout(options.timeout_ms)
            page.set_default_navigation_timeout(options.timeout_ms)
            yield page
        finally:
            try:
                await page.close()
            except Exception as exc:  # noqa: BLE001
                logger.warning("page_close_failed", error=str(exc))
