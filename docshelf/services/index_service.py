"""Site index: the loaded page collection plus the listing views built on it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from docshelf.services.listing_service import (
    books_index,
    excluded_url_set,
    pages_index,
    recent_updates,
)
from docshelf.services.render_service import render_month_groups, render_page_list

if TYPE_CHECKING:
    from datetime import datetime

    from docshelf.filesystem.content_manager import ContentManager, PageCollection
    from docshelf.filesystem.frontmatter import Page
    from docshelf.filesystem.site_config import SiteConfig
    from docshelf.services.listing_service import MonthGroup

logger = logging.getLogger(__name__)

VIEWS: tuple[str, ...] = ("books", "pages", "recent")


@dataclass
class SiteIndex:
    """Snapshot of the content directory used to answer listing queries."""

    site_config: SiteConfig
    pages: PageCollection
    warnings: list[str] = field(default_factory=list)

    @property
    def excluded_urls(self) -> frozenset[str]:
        return excluded_url_set(self.site_config.listing.exclude)


def build_site_index(content_manager: ContentManager) -> SiteIndex:
    """Reload configuration and rescan all pages."""
    content_manager.reload_config()
    pages, warnings = content_manager.scan_pages()
    for warning in warnings:
        logger.warning("Index build: %s", warning)
    return SiteIndex(site_config=content_manager.site_config, pages=pages, warnings=warnings)


def books_view(index: SiteIndex) -> list[Page]:
    return books_index(index.pages, index.excluded_urls)


def pages_view(index: SiteIndex) -> list[Page]:
    return pages_index(index.pages, index.excluded_urls)


def recent_view(index: SiteIndex, now: datetime) -> list[MonthGroup]:
    listing = index.site_config.listing
    return recent_updates(
        index.pages,
        now,
        limit=listing.recent_groups,
        tz=index.site_config.timezone,
        excluded_urls=index.excluded_urls,
        undated=listing.undated,
    )


def render_view(index: SiteIndex, view: str, now: datetime) -> str:
    """Render one of VIEWS as an HTML fragment.

    Raises ValueError for an unknown view name.
    """
    baseurl = index.site_config.baseurl
    length = index.site_config.listing.description_length
    if view == "books":
        return render_page_list(books_view(index), baseurl, length)
    if view == "pages":
        return render_page_list(pages_view(index), baseurl, length)
    if view == "recent":
        return render_month_groups(recent_view(index, now), baseurl, length)
    raise ValueError(f"Unknown view: {view}")
