"""Configuration package for Page Scraper.

Re-exports the settings symbols so that callers can write::

    from page_scraper.config import get_settings
"""

from __future__ import annotations

from page_scraper.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
