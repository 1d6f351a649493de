"""FastAPI application for the page scraper.

``create_app()`` wires one :class:`SessionManager` into the app state, the
request-ID middleware, the ``{"error": ...}`` exception handlers, the routers
and the browser startup/shutdown hooks.  ``app`` is the instance served by
Uvicorn::

    uvicorn page_scraper.api.main:app --port 3000
    python -m page_scraper
"""

from __future__ import annotations

import time
import uuid
from typing import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from page_scraper import __version__
from page_scraper.api.routes import health as health_routes
from page_scraper.api.routes import scrape as scrape_routes
from page_scraper.config.settings import Settings, get_settings
from page_scraper.core.exceptions import ScraperAppError
from page_scraper.core.logging_config import configure_logging, request_id_var
from page_scraper.scraper.browser import BrowserProcess
from page_scraper.scraper.models import ScrapeOptions
from page_scraper.scraper.session_manager import SessionManager

# Re-applied with the configured level in create_app().
configure_logging("INFO")

logger = structlog.get_logger(__name__)


def create_app(session_manager: SessionManager | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        session_manager: Manager serving ``/api/scrape``.  Tests pass one
            around a fake browser; by default a manager around a headless
            :class:`BrowserProcess` is built from the settings.

    Returns:
        The configured application.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    scrape_options = settings.scrape_options()
    if session_manager is None:
        session_manager = SessionManager(BrowserProcess(), default_options=scrape_options)

    application = FastAPI(
        title=settings.app_name,
        description=(
            "Renders a page in headless Chromium and returns its title, "
            "meta description and first heading."
        ),
        version=__version__,
        debug=settings.debug,
        redirect_slashes=False,
    )
    application.state.session_manager = session_manager
    application.state.scrape_options = scrape_options

    _add_middleware(application, settings)
    _add_exception_handlers(application)
    application.include_router(health_routes.router)
    application.include_router(scrape_routes.router)
    _add_lifecycle_hooks(application, session_manager, settings, scrape_options)

    return application


def _add_middleware(application: FastAPI, settings: Settings) -> None:
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def request_context(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Tag the request with an ID, log its outcome and echo the ID back."""
        request_id = uuid.uuid4().hex
        request_id_var.set(request_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            response = _internal_error_response(exc)

        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            "request_complete",
            status_code=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        response.headers["X-Request-ID"] = request_id
        return response


def _add_exception_handlers(application: FastAPI) -> None:
    @application.exception_handler(ScraperAppError)
    async def scraper_error(request: Request, exc: ScraperAppError) -> JSONResponse:
        logger.warning(
            "scrape_request_failed",
            kind=exc.kind.value,
            status_code=exc.status_code,
            error=exc.message,
        )
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @application.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Unknown paths and unsupported methods both read as a missing route."""
        if exc.status_code in (404, 405):
            return JSONResponse({"error": "Route not found"}, status_code=404)
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)

    @application.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception) -> JSONResponse:
        return _internal_error_response(exc)


def _internal_error_response(exc: Exception) -> JSONResponse:
    """Log an unclassified failure in full and report it generically."""
    logger.error("internal_error", exc_info=exc)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def _add_lifecycle_hooks(
    application: FastAPI,
    session_manager: SessionManager,
    settings: Settings,
    scrape_options: ScrapeOptions,
) -> None:
    @application.on_event("startup")
    async def launch_browser() -> None:
        # A launch failure aborts startup.
        await session_manager.start()
        logger.info(
            "application_startup",
            app_name=settings.app_name,
            app_env=settings.app_env,
            scrape_timeout_ms=scrape_options.timeout_ms,
            wait_until=scrape_options.wait_until,
        )

    @application.on_event("shutdown")
    async def close_browser() -> None:
        await session_manager.stop()
        logger.info("application_shutdown")


app = create_app()
"""ASGI application served by Uvicorn."""
