"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Request

from page_scraper.scraper.models import ScrapeOptions
from page_scraper.scraper.session_manager import SessionManager


def get_session_manager(request: Request) -> SessionManager:
    """Return the session manager created by ``create_app()``."""
    return request.app.state.session_manager


def get_scrape_options(request: Request) -> ScrapeOptions:
    """Return the configured default scrape options."""
    return request.app.state.scrape_options
