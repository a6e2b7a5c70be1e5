"""Listing-related schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PageSummary(BaseModel):
    """A page entry in a listing."""

    title: str | None
    url: str
    date: str | None = None
    description: str | None = None
    is_index: bool = False


class ListingResponse(BaseModel):
    """A flat, ordered listing view."""

    view: str
    pages: list[PageSummary] = Field(default_factory=list)


class MonthGroupResponse(BaseModel):
    """One month bucket of the recent-updates view."""

    label: str
    year: int
    month: int
    pages: list[PageSummary] = Field(default_factory=list)


class RecentUpdatesResponse(BaseModel):
    """The recent-updates view."""

    generated_at: str
    groups: list[MonthGroupResponse] = Field(default_factory=list)


class SiteConfigResponse(BaseModel):
    """Site configuration response."""

    title: str
    description: str
    baseurl: str
    page_count: int


class ReloadResponse(BaseModel):
    """Result of rescanning the content directory."""

    page_count: int
    warnings: list[str] = Field(default_factory=list)
