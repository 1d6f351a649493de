"""Value types shared by the session manager, the request facade and the API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from page_scraper.scraper.config import DEFAULT_TIMEOUT_MS, DEFAULT_WAIT_UNTIL, WaitUntil


@dataclass(frozen=True)
class ScrapeOptions:
    """Per-call navigation settings.

    Attributes:
        timeout_ms: Deadline in milliseconds for navigation and every
            subsequent page operation of one attempt.
        wait_until: Playwright load state that marks navigation as finished.
    """

    timeout_ms: int = DEFAULT_TIMEOUT_MS
    wait_until: WaitUntil = DEFAULT_WAIT_UNTIL

    def __post_init__(self) -> None:
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")


@dataclass
class ScrapedRecord:
    """Structured result of scraping one page.

    Attributes:
        title: Document title, or ``None`` when the page has none.
        meta_description: ``content`` of ``<meta name="description">``, or ``None``.
        heading: Trimmed text of the first ``<h1>``, or ``None``.
        status_code: HTTP status reported to the client (normally 200).
    """

    title: str | None
    meta_description: str | None
    heading: str | None
    status_code: int = 200

    def to_dict(self) -> dict[str, Any]:
        """Return the record keyed by its wire (camelCase) field names."""
        return {
            "title": self.title,
            "metaDescription": self.meta_description,
            "heading": self.heading,
            "statusCode": self.status_code,
        }
