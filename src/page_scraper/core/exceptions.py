"""Application-wide exception hierarchy and failure classifier for Page Scraper.

All custom exceptions subclass ``ScraperAppError``, which carries the taxonomy
kind, the HTTP status reported to the client and whether the session manager
may retry the failed attempt.

Hierarchy::

    ScraperAppError
    ├── InvalidURLError      (400, invalid_input)
    ├── ScrapeTimeoutError   (504, timeout)
    ├── NavigationError      (502, navigation)
    └── ScrapingError        (500, scraping, status may be overridden)

``classify_error`` is the single place where raw exceptions raised by browser
control code are mapped onto the taxonomy.  Nothing above the session manager
ever inspects exception text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Semantic failure kinds used by every layer of the service."""

    INVALID_INPUT = "invalid_input"
    TIMEOUT = "timeout"
    NAVIGATION = "navigation"
    SCRAPING = "scraping"


class ScraperAppError(Exception):
    """Base class for all Page Scraper exceptions.

    Args:
        message: Human-readable description, returned to the client verbatim.
        status_code: HTTP status to report.  Defaults to the subclass default.
        retryable: Whether the session manager may retry the attempt that
            raised it.  Defaults to the subclass default.
    """

    kind: ErrorKind = ErrorKind.SCRAPING
    default_status_code: int = 500
    default_message: str = "Scraping failed"
    default_retryable: bool = False

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        *,
        retryable: bool | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.status_code = status_code if status_code is not None else self.default_status_code
        self.retryable = self.default_retryable if retryable is None else retryable

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code}, retryable={self.retryable})"
        )


class InvalidURLError(ScraperAppError):
    """Raised when the request carries a missing or malformed URL.

    Detected before any browser interaction.
    """

    kind = ErrorKind.INVALID_INPUT
    default_status_code = 400
    default_message = "Invalid URL"


class ScrapeTimeoutError(ScraperAppError):
    """Raised when navigation or extraction exceeded the per-request deadline."""

    kind = ErrorKind.TIMEOUT
    default_status_code = 504
    default_message = "Request timeout while scraping page"
    default_retryable = True


class NavigationError(ScraperAppError):
    """Raised when the browser could not load the target page."""

    kind = ErrorKind.NAVIGATION
    default_status_code = 502
    default_message = "Failed to load page"
    default_retryable = True


class ScrapingError(ScraperAppError):
    """Catch-all for browser or extraction failures and malformed records."""


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

#: Lower-cased substrings marking a timeout.
_TIMEOUT_MARKERS: tuple[str, ...] = ("timeout", "timed out")

#: Lower-cased substrings marking a page that could not be loaded.
_NAVIGATION_MARKERS: tuple[str, ...] = (
    "net::",
    "navigation",
    "unreachable",
    "failed to load page",
)


def is_timeout_error(exc: BaseException) -> bool:
    """Return ``True`` if *exc* describes an elapsed deadline."""
    if isinstance(exc, TimeoutError):
        return True
    message = str(exc).lower()
    return any(marker in message for marker in _TIMEOUT_MARKERS)


def is_navigation_error(exc: BaseException) -> bool:
    """Return ``True`` if *exc* describes a page that failed to load."""
    message = str(exc).lower()
    return any(marker in message for marker in _NAVIGATION_MARKERS)


def _summary(exc: BaseException) -> str:
    """First non-blank line of *exc*, or its type name.

    Playwright appends a multi-line call log to its messages; only the
    headline is reported to clients.
    """
    for line in str(exc).splitlines():
        if line.strip():
            return line.strip()
    return type(exc).__name__


def classify_error(exc: BaseException, *, retryable: bool | None = None) -> ScraperAppError:
    """Map any exception onto the taxonomy.

    Timeout is checked before Navigation: a navigation timeout such as
    ``"Navigation timeout of 20000 ms exceeded"`` matches both marker sets and
    must surface as 504, not 502.  Everything else becomes a
    :class:`ScrapingError`.

    Args:
        exc: The exception raised by browser control or extraction code.
        retryable: Overrides the retry eligibility of the returned error.

    Returns:
        A :class:`ScraperAppError`.  Exceptions that already belong to the
        taxonomy are returned unchanged apart from the ``retryable`` override.
    """
    if isinstance(exc, ScraperAppError):
        error = exc
    elif is_timeout_error(exc):
        error = ScrapeTimeoutError()
    elif is_navigation_error(exc):
        error = NavigationError()
    else:
        error = ScrapingError(f"Failed to scrape URL: {_summary(exc)}")

    if retryable is not None:
        error.retryable = retryable
    return error
