"""Browser-backed page scraping.

Sub-modules:
- ``config``: constants and tuning parameters
- ``models``: ``ScrapeOptions`` and ``ScrapedRecord``
- ``browser``: lifecycle of the shared Playwright Chromium instance
- ``extractor``: title / meta description / first heading extraction
- ``session_manager``: per-request pages, deadline and retry policy
- ``facade``: input validation around ``SessionManager.scrape``
"""

from __future__ import annotations

from page_scraper.scraper.browser import BrowserProcess
from page_scraper.scraper.models import ScrapedRecord, ScrapeOptions
from page_scraper.scraper.session_manager import SessionManager

__all__ = [
    "BrowserProcess",
    "ScrapeOptions",
    "ScrapedRecord",
    "SessionManager",
]
