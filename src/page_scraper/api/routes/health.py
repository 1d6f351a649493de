"""Health check route handlers.

``GET /health``
    Process liveness.  No I/O; always ``{"status": "ok"}``.

``GET /api/health``
    Reports whether the shared browser is connected.  Always returns HTTP 200;
    the ``status`` field distinguishes ``"ok"`` from ``"degraded"``.

These endpoints are diagnostic and must never raise HTTP 5xx errors.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from page_scraper.api.dependencies import get_session_manager
from page_scraper.scraper.session_manager import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/health", include_in_schema=True)
async def health() -> JSONResponse:
    """Return a minimal process-level liveness status."""
    return JSONResponse({"status": "ok"})


@router.get("/api/health", include_in_schema=True)
async def system_health(
    manager: Annotated[SessionManager, Depends(get_session_manager)],
) -> JSONResponse:
    """Return service health including the browser connection.

    Returns:
        JSON with keys ``status`` (``"ok"`` or ``"degraded"``), ``browser``
        (``"running"`` or ``"stopped"``) and ``timestamp``.
    """
    try:
        running = manager.is_running
    except Exception:
        logger.exception("Health check: browser state unavailable")
        running = False

    payload = {
        "status": "ok" if running else "degraded",
        "browser": "running" if running else "stopped",
        "timestamp": datetime.now(UTC).isoformat(),
    }
    logger.info("system_health_check", extra={"health": payload})
    return JSONResponse(payload)
