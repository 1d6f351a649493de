"""Title, meta description and first heading extraction from a rendered page.

The page is read through a single ``page.evaluate`` call against the live
DOM, so content inserted by client-side JavaScript is visible.  Every field is
independently optional; a missing element yields ``None``, never an empty
string and never an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

# Runs in the page.  ``||`` collapses empty strings to null.
_EXTRACT_SCRIPT = """
() => {
  const titleElement = document.querySelector('title');
  const title = document.title || (titleElement && titleElement.textContent) || null;

  const meta = document.querySelector('meta[name="description"]');
  const metaDescription = (meta && meta.getAttribute('content')) || null;

  const h1 = document.querySelector('h1');
  const heading = (h1 && h1.textContent && h1.textContent.trim()) || null;

  return { title, metaDescription, heading };
}
"""


class EvaluatingPage(Protocol):
    """The part of ``playwright.async_api.Page`` the extractor needs."""

    async def evaluate(self, expression: str, arg: Any = None) -> Any: ...


@dataclass
class ExtractedFields:
    """Fields read from the DOM.

    Attributes:
        title: Document title, or ``None``.
        meta_description: ``content`` of ``<meta name="description">``, or ``None``.
        heading: Trimmed text of the first ``<h1>``, or ``None``.
    """

    title: str | None
    meta_description: str | None
    heading: str | None


def _text_or_none(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


async def extract_page_data(page: EvaluatingPage) -> ExtractedFields:
    """Read the structured fields from an already-navigated page.

    Args:
        page: A rendered Playwright page (or anything with a compatible
            ``evaluate`` coroutine).

    Returns:
        An :class:`ExtractedFields` instance.  Values of the wrong type coming
        back from the page are treated as absent.
    """
    raw = await page.evaluate(_EXTRACT_SCRIPT)
    if not isinstance(raw, dict):
        raw = {}

    return ExtractedFields(
        title=_text_or_none(raw.get("title")),
        meta_description=_text_or_none(raw.get("metaDescription")),
        heading=_text_or_none(raw.get("heading")),
    )
