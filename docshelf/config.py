"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Docshelf application settings.

    Per-site listing options (base URL, exclusions, group cap) are read from
    the content directory's ``site.toml`` instead.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCSHELF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    debug: bool = False
    expose_docs: bool = False

    # Paths
    content_dir: Path = Path("./content")

    # Server
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)

    # CORS
    cors_origins: list[str] = Field(default_factory=list)
