"""Application settings loaded from environment variables.

Every variable has a default, so the service starts with an empty
environment.  Other modules read configuration through ``get_settings()``
only.

Usage::

    from page_scraper.config.settings import get_settings

    settings = get_settings()
    timeout_ms = settings.scrape_timeout
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from page_scraper.scraper.config import DEFAULT_TIMEOUT_MS, DEFAULT_WAIT_UNTIL, WaitUntil
from page_scraper.scraper.models import ScrapeOptions


class Settings(BaseSettings):
    """Service configuration read from the environment and an optional ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Application behaviour
    # ------------------------------------------------------------------

    app_name: str = "Page Scraper"
    """Human-readable application name shown in the OpenAPI docs."""

    app_env: Literal["development", "production", "test"] = "development"
    """Deployment environment.  Only affects logging defaults and helpers."""

    debug: bool = False
    """Enable FastAPI debug mode.  Never True in production."""

    log_level: str = "INFO"
    """Logging verbosity.  One of: DEBUG, INFO, WARNING, ERROR, CRITICAL."""

    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------

    host: str = "0.0.0.0"
    """Interface uvicorn binds to."""

    port: int = Field(default=3000, ge=1, le=65535)
    """TCP port uvicorn listens on."""

    allowed_origins: list[str] = ["*"]
    """Origins permitted by the CORS middleware."""

    # ------------------------------------------------------------------
    # Scraping
    # ------------------------------------------------------------------

    scrape_timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    """Per-request deadline in milliseconds, covering navigation and extraction."""

    scrape_wait_until: WaitUntil = DEFAULT_WAIT_UNTIL
    """Playwright load state that marks navigation as finished."""

    def is_development(self) -> bool:
        return self.app_env == "development"

    def is_production(self) -> bool:
        return self.app_env == "production"

    def is_test(self) -> bool:
        return self.app_env == "test"

    def scrape_options(self) -> ScrapeOptions:
        """Build the default :class:`ScrapeOptions` applied to every request."""
        return ScrapeOptions(
            timeout_ms=self.scrape_timeout,
            wait_until=self.scrape_wait_until,
        )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read on first call.

    Call ``get_settings.cache_clear()`` after changing the environment.
    """
    return Settings()
