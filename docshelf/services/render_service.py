"""HTML rendering of page listings."""

from __future__ import annotations

import html
from collections.abc import Iterable
from typing import TYPE_CHECKING

import grapheme

if TYPE_CHECKING:
    from docshelf.filesystem.frontmatter import Page
    from docshelf.services.listing_service import MonthGroup

DEFAULT_DESCRIPTION_LENGTH = 80
ELLIPSIS = "..."


def truncate(text: str, length: int = DEFAULT_DESCRIPTION_LENGTH, ellipsis: str = ELLIPSIS) -> str:
    """Cut *text* to at most *length* characters, ellipsis included.

    Mirrors Liquid's ``truncate`` filter: text that fits is returned unchanged,
    otherwise the first ``length - len(ellipsis)`` characters are kept and the
    ellipsis appended. Word boundaries are ignored. Characters are counted as
    grapheme clusters so combining sequences and emoji are never split.
    """
    if grapheme.length(text) <= length:
        return text
    keep = max(length - grapheme.length(ellipsis), 0)
    return grapheme.slice(text, 0, keep) + ellipsis


def relative_url(url: str, baseurl: str = "") -> str:
    """Prefix a root-relative page URL with the site's base URL."""
    base = baseurl.rstrip("/")
    if not url.startswith("/"):
        url = "/" + url
    return f"{base}{url}"


def render_page_item(
    page: Page, baseurl: str = "", description_length: int = DEFAULT_DESCRIPTION_LENGTH
) -> str:
    """Render one ``<li>`` entry for a page."""
    href = html.escape(relative_url(page.url, baseurl))
    title = html.escape(page.title or "")
    item = f'<li><a href="{href}">{title}</a>'
    if page.description:
        description = html.escape(truncate(page.description, description_length))
        item += f' <span class="description">{description}</span>'
    return item + "</li>"


def render_page_list(
    pages: Iterable[Page],
    baseurl: str = "",
    description_length: int = DEFAULT_DESCRIPTION_LENGTH,
) -> str:
    """Render pages as an unordered list of links; no pages gives ``<ul></ul>``."""
    items = [render_page_item(p, baseurl, description_length) for p in pages]
    if not items:
        return "<ul></ul>"
    return "<ul>\n" + "\n".join(f"  {item}" for item in items) + "\n</ul>"


def render_month_groups(
    groups: Iterable[MonthGroup],
    baseurl: str = "",
    description_length: int = DEFAULT_DESCRIPTION_LENGTH,
) -> str:
    """Render the recent-updates view: a heading and a list per month."""
    sections = [
        f'<h2 class="month">{html.escape(group.label)}</h2>\n'
        + render_page_list(group.pages, baseurl, description_length)
        for group in groups
    ]
    if not sections:
        return "<ul></ul>"
    return "\n".join(sections)
