"""Tests for the docshelf-build CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cli.build_listings import build_fragments, main
from docshelf.filesystem.content_manager import ContentManager
from docshelf.services.index_service import build_site_index
from tests.conftest import FROZEN_NOW

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture
def site(tmp_content_dir: Path, write_page: Callable[..., Path]) -> Path:
    write_page("index.md", title="Home", is_index=True)
    write_page("kotlin/index.md", title="Kotlin", is_index=True, date="2025-02-01")
    write_page("gradle/index.md", title="Gradle", is_index=True, date="2024-12-24")
    write_page("kotlin/intro.md", title="Intro")
    return tmp_content_dir


class TestBuildFragments:
    def test_writes_every_view(self, site: Path, tmp_path: Path) -> None:
        index = build_site_index(ContentManager(content_dir=site))
        written = build_fragments(index, tmp_path / "out", FROZEN_NOW)
        assert sorted(p.name for p in written) == ["books.html", "pages.html", "recent.html"]
        books = (tmp_path / "out" / "books.html").read_text()
        assert books.index('href="/gradle/"') < books.index('href="/kotlin/"')
        recent = (tmp_path / "out" / "recent.html").read_text()
        assert recent.index("February 2025") < recent.index("December 2024")


class TestMain:
    def test_build_default_out_dir(self, site: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["--dir", str(site), "--now", "2025-03-01", "build"])
        out = capsys.readouterr().out
        assert "Build complete. 4 page(s), 0 warning(s)." in out
        assert (site / "_listings" / "pages.html").is_file()

    def test_build_output_not_indexed_on_rebuild(self, site: Path) -> None:
        main(["--dir", str(site), "build"])
        index = build_site_index(ContentManager(content_dir=site))
        assert len(index.pages) == 4

    def test_list_recent(self, site: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["--dir", str(site), "--now", "2025-03-01", "list", "recent"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "February 2025:"
        assert "/kotlin/" in lines[1]
        assert lines[2] == "December 2024:"

    def test_list_books_skips_excluded_urls(
        self, site: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["--dir", str(site), "list", "books"])
        out = capsys.readouterr().out
        assert "Home" not in out
        assert out.index("Gradle") < out.index("Kotlin")

    def test_missing_dir_exits(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--dir", str(tmp_path / "missing"), "list", "books"])
        assert exc_info.value.code == 1
        assert "Error: content directory not found" in capsys.readouterr().out

    def test_invalid_now_exits(self, site: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--dir", str(site), "--now", "not-a-date", "list", "books"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            main([])
        assert "usage" in capsys.readouterr().out
