"""CLI for building Docshelf listing fragments from a content directory."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from docshelf.filesystem.content_manager import ContentManager
from docshelf.services.datetime_service import format_iso, now_utc, parse_datetime
from docshelf.services.index_service import (
    VIEWS,
    books_view,
    build_site_index,
    pages_view,
    recent_view,
    render_view,
)

if TYPE_CHECKING:
    from datetime import datetime

    from docshelf.filesystem.frontmatter import Page
    from docshelf.services.index_service import SiteIndex

logger = logging.getLogger(__name__)


def _resolve_now(value: str | None, default_tz: str) -> datetime:
    if value is None:
        return now_utc()
    return parse_datetime(value, default_tz=default_tz)


def build_fragments(index: SiteIndex, out_dir: Path, now: datetime) -> list[Path]:
    """Write one ``<view>.html`` fragment per listing view into *out_dir*."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for view in VIEWS:
        target = out_dir / f"{view}.html"
        target.write_text(render_view(index, view, now) + "\n", encoding="utf-8")
        written.append(target)
    return written


def _format_page(page: Page) -> str:
    date = format_iso(page.date) if page.date is not None else "-"
    return f"  {page.title}  {page.url}  ({date})"


def print_view(index: SiteIndex, view: str, now: datetime) -> None:
    """Print a listing view as plain text."""
    if view == "books":
        for page in books_view(index):
            print(_format_page(page))
    elif view == "pages":
        for page in pages_view(index):
            print(_format_page(page))
    elif view == "recent":
        for group in recent_view(index, now):
            print(f"{group.label}:")
            for page in group.pages:
                print(_format_page(page))
    else:
        raise ValueError(f"Unknown view: {view}")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="docshelf-build",
        description="Build page listings for a markdown documentation site",
    )
    parser.add_argument("--dir", "-d", default=".", help="Content directory (default: current)")
    parser.add_argument(
        "--now",
        help="Reference time for undated pages, e.g. 2025-03-01 (default: current time)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log skipped pages")
    sub = parser.add_subparsers(dest="command")

    build_parser = sub.add_parser("build", help="Write HTML fragments for every view")
    build_parser.add_argument(
        "--out", "-o", default="_listings", help="Output directory (default: _listings)"
    )

    list_parser = sub.add_parser("list", help="Print a listing view")
    list_parser.add_argument("view", choices=VIEWS, help="View to print")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    content_dir = Path(args.dir).resolve()
    if not content_dir.is_dir():
        print(f"Error: content directory not found: {content_dir}")
        sys.exit(1)

    try:
        index = build_site_index(ContentManager(content_dir=content_dir))
        now = _resolve_now(args.now, index.site_config.timezone)
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    if args.command == "build":
        out_dir = Path(args.out)
        if not out_dir.is_absolute():
            out_dir = content_dir / out_dir
        written = build_fragments(index, out_dir, now)
        for path in written:
            print(f"  Wrote: {path}")
        print(f"Build complete. {len(index.pages)} page(s), {len(index.warnings)} warning(s).")
    elif args.command == "list":
        print_view(index, args.view, now)


if __name__ == "__main__":
    main()
