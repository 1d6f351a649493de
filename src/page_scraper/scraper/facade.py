"""Request facade between the HTTP route and the session manager.

Rejects missing or malformed URLs before the browser is touched, and refuses
to hand a structurally invalid record back to the transport layer.
"""

from __future__ import annotations

from collections.abc import Sequence

from page_scraper.core.exceptions import InvalidURLError, ScrapingError
from page_scraper.core.validation import (
    is_well_formed_http_url,
    sanitize_url,
    validate_scraped_record,
)
from page_scraper.scraper.models import ScrapedRecord, ScrapeOptions
from page_scraper.scraper.session_manager import SessionManager


async def scrape_request(
    manager: SessionManager,
    url_values: Sequence[str],
    options: ScrapeOptions | None = None,
) -> ScrapedRecord:
    """Validate the ``url`` query values and scrape the single target.

    Args:
        manager: The application's session manager.
        url_values: Every value supplied for the ``url`` query parameter.
            Exactly one non-blank value is accepted.
        options: Options forwarded to :meth:`SessionManager.scrape`.

    Returns:
        The validated :class:`ScrapedRecord`.

    Raises:
        InvalidURLError: The parameter is missing, repeated, blank or not a
            well-formed http(s) URL.
        ScrapingError: The record failed structural validation.
    """
    if len(url_values) != 1 or not url_values[0].strip():
        raise InvalidURLError("Missing URL parameter")

    raw_url = url_values[0]
    if not is_well_formed_http_url(raw_url):
        raise InvalidURLError("Invalid URL")

    record = await manager.scrape(sanitize_url(raw_url), options)

    if not validate_scraped_record(record.to_dict()):
        raise ScrapingError("Failed to validate scraped data")
    return record
