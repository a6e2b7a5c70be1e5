"""Tests for application configuration and app startup helpers."""

from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from docshelf.config import Settings
from docshelf.main import ensure_content_dir

if TYPE_CHECKING:
    from pathlib import Path


class TestSettings:
    def test_default_settings(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.debug is False
        assert s.port == 8000
        assert s.cors_origins == []

    def test_custom_settings(self, tmp_path: Path) -> None:
        s = Settings(debug=True, content_dir=tmp_path / "content", port=9000)
        assert s.debug is True
        assert s.content_dir == tmp_path / "content"
        assert s.port == 9000

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("DOCSHELF_CONTENT_DIR", str(tmp_path))
        monkeypatch.setenv("DOCSHELF_DEBUG", "true")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.content_dir == tmp_path
        assert s.debug is True

    def test_port_validated(self) -> None:
        with pytest.raises(ValueError):
            Settings(_env_file=None, port=0)  # type: ignore[call-arg]

    def test_settings_from_fixture(self, test_settings: Settings) -> None:
        assert test_settings.debug is True
        assert test_settings.content_dir.exists()


class TestEnsureContentDir:
    def test_creates_default_structure(self, tmp_path: Path) -> None:
        content_dir = tmp_path / "content"
        ensure_content_dir(content_dir)
        assert content_dir.is_dir()
        config = tomllib.loads((content_dir / "site.toml").read_text())
        assert config["site"]["timezone"] == "UTC"
        assert config["listing"]["recent_groups"] == 6

    def test_does_not_overwrite(self, tmp_content_dir: Path) -> None:
        ensure_content_dir(tmp_content_dir)
        assert "Test Docs" in (tmp_content_dir / "site.toml").read_text()

    def test_file_in_the_way(self, tmp_path: Path) -> None:
        blocker = tmp_path / "content"
        blocker.write_text("not a directory")
        with pytest.raises(NotADirectoryError):
            ensure_content_dir(blocker)


class TestCliEntry:
    def test_cli_entry_uses_app_settings(self) -> None:
        """cli_entry() should use the global app's settings, not create a new Settings()."""
        from docshelf.main import app, cli_entry

        original_settings = getattr(app.state, "settings", None)
        app.state.settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            host="127.0.0.1",
            port=9999,
            debug=True,
        )

        try:
            with patch("uvicorn.run") as mock_run:
                cli_entry()

            mock_run.assert_called_once_with(
                "docshelf.main:app",
                host="127.0.0.1",
                port=9999,
                reload=True,
            )
        finally:
            app.state.settings = original_settings
