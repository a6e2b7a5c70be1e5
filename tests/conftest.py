"""Shared test fixtures for Docshelf."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from docshelf.config import Settings
from docshelf.filesystem.frontmatter import Page
from docshelf.main import create_app, init_app_state

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable
    from pathlib import Path

FROZEN_NOW = datetime(2025, 3, 15, 12, 0, 0, tzinfo=UTC)


def make_page(
    url: str,
    title: str | None = "Untitled",
    date: datetime | None = None,
    description: str | None = None,
    is_index: bool = True,
) -> Page:
    """Build a Page for listing tests."""
    return Page(
        url=url,
        title=title,
        date=date,
        description=description,
        is_index=is_index,
        file_path=url.strip("/") or "index.md",
    )


def page_source(**fields: object) -> str:
    """Render a markdown file with the given front matter fields."""
    lines = ["---"]
    for key, value in fields.items():
        if isinstance(value, bool):
            lines.append(f"{key}: {'true' if value else 'false'}")
        else:
            lines.append(f"{key}: {value}")
    lines.append("---")
    lines.append("")
    lines.append("Body text.")
    return "\n".join(lines) + "\n"


@asynccontextmanager
async def create_test_client(settings: Settings) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP test client with a fully initialized app.

    Performs the work of the application lifespan (content scaffold, first
    index build) because ASGITransport does not trigger it.
    """
    app = create_app(settings)
    init_app_state(app, settings)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def tmp_content_dir(tmp_path: Path) -> Path:
    """Create a temporary content directory with a minimal site.toml."""
    content = tmp_path / "content"
    content.mkdir()
    (content / "site.toml").write_text(
        '[site]\ntitle = "Test Docs"\ntimezone = "UTC"\n',
        encoding="utf-8",
    )
    return content


@pytest.fixture
def write_page(tmp_content_dir: Path) -> Callable[..., Path]:
    """Return a helper that writes a markdown page into the content directory."""

    def _write(rel_path: str, **fields: object) -> Path:
        path = tmp_content_dir / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(page_source(**fields), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def test_settings(tmp_content_dir: Path) -> Settings:
    """Create test settings pointing at the temporary content directory."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        content_dir=tmp_content_dir,
    )
