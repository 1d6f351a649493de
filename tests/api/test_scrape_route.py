"""HTTP-level tests for ``GET /api/scrape`` and the error envelope.

The app is built around a ``SessionManager`` whose browser is a
``FakeBrowser``; page behaviour is configured per test through
``fake_browser.pages``.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from page_scraper.scraper.session_manager import SessionManager
from tests.fakes import FakeBrowser, FakePage


@pytest.mark.asyncio
class TestScrapeSuccess:
    async def test_example_domain(self, client: AsyncClient, fake_browser: FakeBrowser) -> None:
        fake_browser.pages = [
            FakePage(data={"title": "Example Domain", "metaDescription": None, "heading": None})
        ]

        response = await client.get("/api/scrape", params={"url": "https://example.com"})

        assert response.status_code == 200
        assert response.json() == {
            "title": "Example Domain",
            "metaDescription": None,
            "heading": None,
            "statusCode": 200,
        }
        assert len(fake_browser.opened) == 1
        assert fake_browser.close_count == 1
        fake_browser.pages[0].goto.assert_awaited_once_with(
            "https://example.com", wait_until="networkidle", timeout=20000
        )

    async def test_all_fields(self, client: AsyncClient, fake_browser: FakeBrowser) -> None:
        fake_browser.pages = [
            FakePage(
                data={
                    "title": "Wikipedia",
                    "metaDescription": "Wikipedia is a free online encyclopedia",
                    "heading": "Wikipedia The Free Encyclopedia",
                }
            )
        ]

        response = await client.get("/api/scrape", params={"url": "https://www.wikipedia.org"})

        assert response.status_code == 200
        assert response.json() == {
            "title": "Wikipedia",
            "metaDescription": "Wikipedia is a free online encyclopedia",
            "heading": "Wikipedia The Free Encyclopedia",
            "statusCode": 200,
        }

    async def test_url_with_encoded_query(
        self, client: AsyncClient, fake_browser: FakeBrowser
    ) -> None:
        response = await client.get(
            "/api/scrape", params={"url": "https://example.com/test?query=hello%20world"}
        )

        assert response.status_code == 200
        fake_browser.pages[0].goto.assert_awaited_once()
        assert fake_browser.pages[0].goto.await_args.args[0] == (
            "https://example.com/test?query=hello%20world"
        )

    async def test_response_carries_request_id(self, client: AsyncClient) -> None:
        response = await client.get("/api/scrape", params={"url": "https://example.com"})

        assert response.headers.get("X-Request-ID")


@pytest.mark.asyncio
class TestScrapeInvalidInput:
    async def test_invalid_url(self, client: AsyncClient, fake_browser: FakeBrowser) -> None:
        response = await client.get("/api/scrape", params={"url": "not-a-url"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid URL"}
        fake_browser.start.assert_not_awaited()
        assert fake_browser.opened == []

    async def test_missing_url(self, client: AsyncClient, fake_browser: FakeBrowser) -> None:
        response = await client.get("/api/scrape")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing URL parameter"}
        assert fake_browser.opened == []

    async def test_blank_url(self, client: AsyncClient) -> None:
        response = await client.get("/api/scrape", params={"url": "   "})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing URL parameter"}

    async def test_repeated_url(self, client: AsyncClient, fake_browser: FakeBrowser) -> None:
        response = await client.get(
            "/api/scrape", params=[("url", "https://a.example.com"), ("url", "https://b.example.com")]
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Missing URL parameter"}
        assert fake_browser.opened == []


@pytest.mark.asyncio
class TestScrapeFailures:
    async def test_unresolvable_host_is_502(
        self, client: AsyncClient, fake_browser: FakeBrowser
    ) -> None:
        error = RuntimeError("net::ERR_NAME_NOT_RESOLVED at https://nonexistent-domain-12345.com/")
        fake_browser.pages = [FakePage(goto_error=error), FakePage(goto_error=error)]

        response = await client.get(
            "/api/scrape", params={"url": "https://nonexistent-domain-12345.com"}
        )

        assert response.status_code == 502
        assert response.json() == {"error": "Failed to load page"}
        assert len(fake_browser.opened) == 2
        assert fake_browser.close_count == 2

    async def test_deadline_exceeded_is_504(
        self, client: AsyncClient, fake_browser: FakeBrowser
    ) -> None:
        error = RuntimeError("Timeout 20000ms exceeded.")
        fake_browser.pages = [FakePage(goto_error=error), FakePage(goto_error=error)]

        response = await client.get("/api/scrape", params={"url": "https://slow.example.com"})

        assert response.status_code == 504
        assert response.json() == {"error": "Request timeout while scraping page"}
        assert fake_browser.close_count == 2

    async def test_extraction_failure_is_500(
        self, client: AsyncClient, fake_browser: FakeBrowser
    ) -> None:
        error = RuntimeError("Execution context was destroyed")
        fake_browser.pages = [FakePage(evaluate_error=error), FakePage(evaluate_error=error)]

        response = await client.get("/api/scrape", params={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to scrape URL: Execution context was destroyed"
        }
        assert fake_browser.close_count == 2

    async def test_browser_launch_failure_is_500(
        self, client: AsyncClient, fake_browser: FakeBrowser
    ) -> None:
        fake_browser.start.side_effect = RuntimeError("Executable doesn't exist")

        response = await client.get("/api/scrape", params={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"error": "Browser initialization failed"}

    async def test_unclassified_failure_is_generic_500(
        self, client: AsyncClient, session_manager: SessionManager
    ) -> None:
        session_manager.scrape = AsyncMock(side_effect=RuntimeError("secret internals"))  # type: ignore[method-assign]

        response = await client.get("/api/scrape", params={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "secret internals" not in response.text
        assert response.headers.get("X-Request-ID")


@pytest.mark.asyncio
class TestUnknownRoutes:
    @pytest.mark.parametrize("path", ["/", "/api", "/api/scrape/extra", "/does-not-exist"])
    async def test_unknown_path_is_404(self, client: AsyncClient, path: str) -> None:
        response = await client.get(path)

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}

    async def test_wrong_method_is_404(self, client: AsyncClient) -> None:
        response = await client.post("/api/scrape", params={"url": "https://example.com"})

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}
