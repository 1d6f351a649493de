"""Scrape route.

Routes:
    GET /api/scrape?url=<url>: render the page and return its title,
    meta description and first heading.

Errors are raised as :class:`~page_scraper.core.exceptions.ScraperAppError`
subclasses and turned into ``{"error": ...}`` bodies by the exception
handlers registered in ``api/main.py``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from page_scraper.api.dependencies import get_scrape_options, get_session_manager
from page_scraper.api.schemas import ErrorResponse, ScrapeResponse
from page_scraper.scraper.facade import scrape_request
from page_scraper.scraper.models import ScrapeOptions
from page_scraper.scraper.session_manager import SessionManager

router = APIRouter(tags=["scrape"])


@router.get(
    "/api/scrape",
    response_model=ScrapeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid URL"},
        500: {"model": ErrorResponse, "description": "Scraping failed"},
        502: {"model": ErrorResponse, "description": "Page could not be loaded"},
        504: {"model": ErrorResponse, "description": "Page did not load in time"},
    },
)
async def scrape(
    request: Request,
    manager: Annotated[SessionManager, Depends(get_session_manager)],
    options: Annotated[ScrapeOptions, Depends(get_scrape_options)],
) -> JSONResponse:
    """Scrape the page given in the ``url`` query parameter.

    The parameter is read from the raw query string so that a missing or
    repeated ``url`` is reported as ``{"error": "Missing URL parameter"}``
    rather than a FastAPI validation error.

    Returns:
        ``200`` with ``{"title", "metaDescription", "heading", "statusCode"}``.
    """
    record = await scrape_request(
        manager,
        request.query_params.getlist("url"),
        options,
    )
    body = ScrapeResponse.from_record(record).model_dump(by_alias=True)
    return JSONResponse(body, status_code=200)
