"""Pydantic response schemas for the scrape API.

Used for response serialisation and OpenAPI documentation generation.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from page_scraper.scraper.models import ScrapedRecord


class ScrapeResponse(BaseModel):
    """Successful scrape result as sent on the wire.

    Attributes:
        title: Document title, or ``null``.
        meta_description: Meta description (``metaDescription``), or ``null``.
        heading: Text of the first ``<h1>``, or ``null``.
        status_code: Status of the scrape (``statusCode``), normally 200.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str | None
    meta_description: str | None = Field(alias="metaDescription")
    heading: str | None
    status_code: int = Field(alias="statusCode", ge=100, le=599)

    @classmethod
    def from_record(cls, record: ScrapedRecord) -> ScrapeResponse:
        return cls(
            title=record.title,
            meta_description=record.meta_description,
            heading=record.heading,
            status_code=record.status_code,
        )


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str
