"""Content directory scanner and page collection."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, overload

import yaml

from docshelf.filesystem.frontmatter import MARKDOWN_SUFFIXES, Page, parse_page
from docshelf.filesystem.site_config import SiteConfig, parse_site_config

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class PageCollection(Sequence[Page]):
    """Read-only, ordered collection of pages keyed by URL.

    Order is discovery order. URLs are unique; ``add`` rejects duplicates.
    """

    def __init__(self, pages: Sequence[Page] = ()) -> None:
        self._pages: list[Page] = []
        self._by_url: dict[str, Page] = {}
        for page in pages:
            self.add(page)

    def add(self, page: Page) -> None:
        """Append a page; raises ValueError if its URL is already present."""
        if page.url in self._by_url:
            existing = self._by_url[page.url]
            raise ValueError(
                f"Duplicate page URL {page.url!r}: {existing.file_path} and {page.file_path}"
            )
        self._by_url[page.url] = page
        self._pages.append(page)

    @overload
    def __getitem__(self, index: int) -> Page: ...

    @overload
    def __getitem__(self, index: slice) -> list[Page]: ...

    def __getitem__(self, index: int | slice) -> Page | list[Page]:
        return self._pages[index]

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self._pages)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item in self._by_url
        return item in self._pages

    def get(self, url: str) -> Page | None:
        """Look up a page by URL."""
        return self._by_url.get(url)

    def __repr__(self) -> str:
        return f"PageCollection({len(self._pages)} pages)"


def discover_pages(content_dir: Path) -> list[Path]:
    """Recursively discover markdown pages under the content directory.

    Paths with any component starting with ``_`` or ``.`` are skipped
    (build output, includes, layouts, hidden directories).
    """
    if not content_dir.is_dir():
        return []
    found: list[Path] = []
    for path in content_dir.rglob("*"):
        if not path.is_file() or path.suffix not in MARKDOWN_SUFFIXES:
            continue
        rel_parts = path.relative_to(content_dir).parts
        if any(part.startswith(("_", ".")) for part in rel_parts):
            continue
        found.append(path)
    return sorted(found, key=lambda p: p.relative_to(content_dir).as_posix())


@dataclass
class ContentManager:
    """Reads documentation pages and site configuration from disk."""

    content_dir: Path
    _site_config: SiteConfig | None = field(default=None, repr=False)

    @property
    def site_config(self) -> SiteConfig:
        """Get site configuration, loading if needed."""
        if self._site_config is None:
            self._site_config = parse_site_config(self.content_dir)
        return self._site_config

    def reload_config(self) -> None:
        """Reload site configuration from disk."""
        self._site_config = parse_site_config(self.content_dir)

    def read_page(self, rel_path: str) -> Page | None:
        """Read a single page by relative path."""
        full_path = self._validate_path(rel_path)
        if not full_path.exists() or not full_path.is_file():
            return None
        raw_content = full_path.read_text(encoding="utf-8")
        return parse_page(raw_content, file_path=rel_path, default_tz=self.site_config.timezone)

    def _validate_path(self, rel_path: str) -> Path:
        """Validate that a relative path stays within the content directory.

        Raises ValueError if the resolved path escapes content_dir.
        """
        full_path = (self.content_dir / rel_path).resolve()
        if not full_path.is_relative_to(self.content_dir.resolve()):
            raise ValueError(f"Path traversal detected: {rel_path}")
        return full_path

    def scan_pages(self) -> tuple[PageCollection, list[str]]:
        """Scan all pages from the content directory.

        Returns the collection and a list of human-readable warnings for
        files that were skipped.
        """
        collection = PageCollection()
        warnings: list[str] = []
        for page_path in discover_pages(self.content_dir):
            rel_path = page_path.relative_to(self.content_dir).as_posix()
            try:
                page = self.read_page(rel_path)
            except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError) as exc:
                logger.warning("Skipping page %s due to parse error: %s", rel_path, exc)
                warnings.append(f"{rel_path}: {exc}")
                continue
            if page is None:
                logger.debug("Skipping unpublished page %s", rel_path)
                continue
            if page.url in collection:
                existing = collection.get(page.url)
                assert existing is not None
                msg = (
                    f"{rel_path}: URL {page.url} already used by {existing.file_path}, skipped"
                )
                logger.warning("Duplicate page URL: %s", msg)
                warnings.append(msg)
                continue
            collection.add(page)
        logger.info("Scanned %d pages from %s", len(collection), self.content_dir)
        return collection, warnings
