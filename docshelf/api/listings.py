"""Listing API endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from docshelf.api.deps import get_site_index
from docshelf.filesystem.frontmatter import Page
from docshelf.schemas.listing import (
    ListingResponse,
    MonthGroupResponse,
    PageSummary,
    RecentUpdatesResponse,
)
from docshelf.services.datetime_service import format_iso, now_utc, parse_datetime
from docshelf.services.index_service import SiteIndex, books_view, pages_view, recent_view

router = APIRouter(prefix="/api/listings", tags=["listings"])

NowQuery = Annotated[
    str | None,
    Query(max_length=64, description="Reference time for undated pages (default: now)"),
]


def resolve_now(now: str | None, default_tz: str = "UTC") -> datetime:
    """Parse the optional ``now`` query parameter."""
    if now is None or not now.strip():
        return now_utc()
    return parse_datetime(now, default_tz=default_tz)


def page_summary(page: Page) -> PageSummary:
    return PageSummary(
        title=page.title,
        url=page.url,
        date=format_iso(page.date) if page.date is not None else None,
        description=page.description,
        is_index=page.is_index,
    )


@router.get("/books", response_model=ListingResponse)
async def list_books(
    index: Annotated[SiteIndex, Depends(get_site_index)],
) -> ListingResponse:
    """Books A-Z."""
    return ListingResponse(view="books", pages=[page_summary(p) for p in books_view(index)])


@router.get("/pages", response_model=ListingResponse)
async def list_pages(
    index: Annotated[SiteIndex, Depends(get_site_index)],
) -> ListingResponse:
    """All titled content pages A-Z."""
    return ListingResponse(view="pages", pages=[page_summary(p) for p in pages_view(index)])


@router.get("/recent", response_model=RecentUpdatesResponse)
async def list_recent(
    index: Annotated[SiteIndex, Depends(get_site_index)],
    now: NowQuery = None,
) -> RecentUpdatesResponse:
    """Books grouped by month of last update, most recent first."""
    reference = resolve_now(now, index.site_config.timezone)
    groups = recent_view(index, reference)
    return RecentUpdatesResponse(
        generated_at=format_iso(reference),
        groups=[
            MonthGroupResponse(
                label=g.label,
                year=g.year,
                month=g.month,
                pages=[page_summary(p) for p in g.pages],
            )
            for g in groups
        ],
    )
