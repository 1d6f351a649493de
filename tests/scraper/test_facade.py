"""Unit tests for the request facade."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from page_scraper.core.exceptions import InvalidURLError, NavigationError, ScrapingError
from page_scraper.scraper.facade import scrape_request
from page_scraper.scraper.models import ScrapedRecord, ScrapeOptions


def _make_manager(record: ScrapedRecord | None = None, error: Exception | None = None) -> MagicMock:
    manager = MagicMock()
    manager.scrape = AsyncMock(
        return_value=record or ScrapedRecord("Example Domain", None, None, 200),
        side_effect=error,
    )
    return manager


@pytest.mark.asyncio
class TestScrapeRequestInput:
    @pytest.mark.parametrize("values", [[], [""], ["   "], ["https://a.com", "https://b.com"]])
    async def test_missing_url_rejected_without_scraping(self, values: list[str]) -> None:
        manager = _make_manager()

        with pytest.raises(InvalidURLError) as exc_info:
            await scrape_request(manager, values)

        assert exc_info.value.message == "Missing URL parameter"
        assert exc_info.value.status_code == 400
        manager.scrape.assert_not_called()

    @pytest.mark.parametrize(
        "value",
        ["not-a-url", "ftp://example.com/file", "example.com", "http://localhost:3000"],
    )
    async def test_malformed_url_rejected_without_scraping(self, value: str) -> None:
        manager = _make_manager()

        with pytest.raises(InvalidURLError) as exc_info:
            await scrape_request(manager, [value])

        assert exc_info.value.message == "Invalid URL"
        manager.scrape.assert_not_called()

    async def test_url_is_trimmed_and_options_forwarded(self) -> None:
        manager = _make_manager()
        options = ScrapeOptions(timeout_ms=1000)

        await scrape_request(manager, ["  https://example.com/path  "], options)

        manager.scrape.assert_awaited_once_with("https://example.com/path", options)


@pytest.mark.asyncio
class TestScrapeRequestOutput:
    async def test_valid_record_returned(self) -> None:
        record = ScrapedRecord("Example Domain", None, None, 200)
        manager = _make_manager(record=record)

        result = await scrape_request(manager, ["https://example.com"])

        assert result is record

    async def test_malformed_record_rejected(self) -> None:
        manager = _make_manager(record=ScrapedRecord("Example Domain", None, None, 42))

        with pytest.raises(ScrapingError) as exc_info:
            await scrape_request(manager, ["https://example.com"])

        assert exc_info.value.message == "Failed to validate scraped data"
        assert exc_info.value.status_code == 500

    async def test_classified_errors_propagate(self) -> None:
        manager = _make_manager(error=NavigationError())

        with pytest.raises(NavigationError):
            await scrape_request(manager, ["https://example.com"])
