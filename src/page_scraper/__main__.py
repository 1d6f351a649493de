"""Run the scrape API under uvicorn.

Usage::

    python -m page_scraper
    page-scraper            # console script installed with the package

uvicorn turns SIGINT/SIGTERM into an orderly shutdown, which runs the
application's shutdown hook and closes the shared browser.
"""

from __future__ import annotations

import uvicorn

from page_scraper.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "page_scraper.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        # Keep uvicorn from replacing the structlog handlers.
        log_config=None,
    )


if __name__ == "__main__":
    main()
