"""Listing service: filter, sort and group pages for the index views.

Every function here is pure. The reference time ``now`` is passed in
explicitly so that a render is reproducible for a fixed ``now``.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from docshelf.filesystem.site_config import UNDATED_POLICIES
from docshelf.services.datetime_service import ensure_aware, month_key, month_label

if TYPE_CHECKING:
    from datetime import datetime

    from docshelf.filesystem.frontmatter import Page

logger = logging.getLogger(__name__)

EXCLUDED_URLS: frozenset[str] = frozenset({"/", "/feed.xml", "/sitemap.xml"})

DEFAULT_RECENT_GROUPS = 6


@dataclass
class MonthGroup:
    """Pages last updated in one calendar month."""

    year: int
    month: int
    pages: list[Page] = field(default_factory=list)

    @property
    def key(self) -> tuple[int, int]:
        return self.year, self.month

    @property
    def label(self) -> str:
        return month_label(self.year, self.month)


def _check_undated(undated: str) -> None:
    if undated not in UNDATED_POLICIES:
        allowed = ", ".join(sorted(UNDATED_POLICIES))
        raise ValueError(f"Unknown undated policy {undated!r}; expected one of: {allowed}")


def excluded_url_set(extra: Iterable[str] = ()) -> frozenset[str]:
    """Return the built-in excluded URLs plus any configured extras."""
    return EXCLUDED_URLS | frozenset(extra)


def filter_pages(
    pages: Iterable[Page], excluded_urls: Collection[str] = EXCLUDED_URLS
) -> list[Page]:
    """Drop non-content URLs and pages without a title."""
    return [p for p in pages if p.url not in excluded_urls and p.title is not None]


def filter_books(
    pages: Iterable[Page], excluded_urls: Collection[str] = EXCLUDED_URLS
) -> list[Page]:
    """Keep titled content pages flagged ``is_index`` (one per book)."""
    return [p for p in filter_pages(pages, excluded_urls) if p.is_index]


def sort_by_title(pages: Iterable[Page]) -> list[Page]:
    """Sort ascending by title, case-sensitive. Equal titles keep input order."""
    return sorted(pages, key=lambda p: p.title or "")


def effective_date(page: Page, now: datetime) -> datetime:
    """The page date, or ``now`` when the page has none."""
    return page.date if page.date is not None else now


def sort_by_date(pages: Iterable[Page], now: datetime, undated: str = "now") -> list[Page]:
    """Sort descending by date.

    With ``undated="now"`` a missing date counts as ``now``; with
    ``undated="last"`` undated pages follow every dated page. Equal keys keep
    input order.
    """
    _check_undated(undated)
    now = ensure_aware(now)
    page_list = list(pages)
    if undated == "now":
        return sorted(page_list, key=lambda p: effective_date(p, now), reverse=True)
    dated = [p for p in page_list if p.date is not None]
    undated_pages = [p for p in page_list if p.date is None]
    return sorted(dated, key=lambda p: effective_date(p, now), reverse=True) + undated_pages


def group_by_month(
    pages: Iterable[Page],
    now: datetime,
    limit: int = DEFAULT_RECENT_GROUPS,
    tz: str = "UTC",
    undated: str = "now",
) -> list[MonthGroup]:
    """Bucket pages by the month of their date, most recent month first.

    Months are ordered by their numeric ``(year, month)`` value, not by the
    formatted label. Only the first *limit* months are returned; pages keep
    their input order within a month.
    """
    _check_undated(undated)
    now = ensure_aware(now)
    if limit < 1:
        return []
    groups: dict[tuple[int, int], MonthGroup] = {}
    for page in pages:
        if page.date is None and undated == "last":
            continue
        key = month_key(effective_date(page, now), tz)
        group = groups.get(key)
        if group is None:
            group = groups[key] = MonthGroup(year=key[0], month=key[1])
        group.pages.append(page)
    ordered = sorted(groups.values(), key=lambda g: g.key, reverse=True)
    return ordered[:limit]


def books_index(
    pages: Iterable[Page], excluded_urls: Collection[str] = EXCLUDED_URLS
) -> list[Page]:
    """The "Books A-Z" view."""
    return sort_by_title(filter_books(pages, excluded_urls))


def pages_index(
    pages: Iterable[Page], excluded_urls: Collection[str] = EXCLUDED_URLS
) -> list[Page]:
    """Every titled content page, A-Z."""
    return sort_by_title(filter_pages(pages, excluded_urls))


def recent_updates(
    pages: Iterable[Page],
    now: datetime,
    limit: int = DEFAULT_RECENT_GROUPS,
    tz: str = "UTC",
    excluded_urls: Collection[str] = EXCLUDED_URLS,
    undated: str = "now",
) -> list[MonthGroup]:
    """The "Recent updates" view: books by month of last update."""
    ordered = sort_by_date(filter_books(pages, excluded_urls), now, undated=undated)
    groups = group_by_month(ordered, now, limit=limit, tz=tz, undated=undated)
    logger.debug(
        "Recent updates: %d books in %d month groups", sum(len(g.pages) for g in groups), len(groups)
    )
    return groups
