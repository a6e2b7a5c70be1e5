"""YAML front matter parser for documentation pages."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from datetime import date, datetime

import frontmatter

from docshelf.services.datetime_service import parse_datetime

RECOGNIZED_FIELDS: frozenset[str] = frozenset(
    {
        "title",
        "permalink",
        "date",
        "last_modified_at",
        "description",
        "is_index",
        "published",
    }
)

MARKDOWN_SUFFIXES: tuple[str, ...] = (".md", ".markdown")

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})


@dataclass(frozen=True)
class Page:
    """A documentation page as seen by the listing views."""

    url: str
    title: str | None = None
    date: datetime | None = None
    description: str | None = None
    is_index: bool = False
    file_path: str = ""


def derive_url(file_path: str) -> str:
    """Derive the output URL of a page from its path relative to the site root.

    ``index.md`` maps to ``/``, ``guide/index.md`` to ``/guide/`` and
    ``guide/install.md`` to ``/guide/install.html``.
    """
    rel = file_path.replace("\\", "/").lstrip("/")
    directory, name = posixpath.split(rel)
    stem = name
    for suffix in MARKDOWN_SUFFIXES:
        if stem.endswith(suffix):
            stem = stem.removesuffix(suffix)
            break
    if stem == "index":
        return f"/{directory}/" if directory else "/"
    if directory:
        return f"/{directory}/{stem}.html"
    return f"/{stem}.html"


def normalize_permalink(permalink: str) -> str:
    """Normalize a front matter permalink to a root-relative URL."""
    url = permalink.strip()
    if not url.startswith("/"):
        url = "/" + url
    return url


def parse_flag(value: object) -> bool:
    """Interpret a front matter boolean flag.

    YAML booleans are used as-is; strings such as ``"true"`` or ``"yes"``
    count as true. Anything else is false.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    if isinstance(value, int):
        return value != 0
    return False


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    # Non-string values (e.g. title: 42) are coerced to string.
    text = value if isinstance(value, str) else str(value)
    text = text.strip()
    return text or None


def _parse_page_date(value: object, default_tz: str) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return parse_datetime(value, default_tz=default_tz)
    text = str(value).strip()
    if not text:
        return None
    return parse_datetime(text, default_tz=default_tz)


def parse_page(raw_content: str, file_path: str = "", default_tz: str = "UTC") -> Page | None:
    """Parse a markdown file with YAML front matter into a Page.

    Returns None for pages marked ``published: false``.
    Raises ``ValueError`` for front matter that cannot be interpreted
    (for example an unparseable date).
    """
    post = frontmatter.loads(raw_content)

    if "published" in post.metadata and not parse_flag(post.get("published")):
        return None

    raw_permalink = post.get("permalink")
    if isinstance(raw_permalink, str) and raw_permalink.strip():
        url = normalize_permalink(raw_permalink)
    else:
        url = derive_url(file_path)

    # last_modified_at wins over the original publication date
    raw_date = post.get("last_modified_at")
    if raw_date is None:
        raw_date = post.get("date")
    page_date = _parse_page_date(raw_date, default_tz)

    return Page(
        url=url,
        title=_optional_text(post.get("title")),
        date=page_date,
        description=_optional_text(post.get("description")),
        is_index=parse_flag(post.get("is_index", False)),
        file_path=file_path,
    )
