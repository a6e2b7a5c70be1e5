"""Shared API dependencies: settings, content manager, site index."""

from __future__ import annotations

from fastapi import Request

from docshelf.config import Settings
from docshelf.exceptions import InternalServerError
from docshelf.filesystem.content_manager import ContentManager
from docshelf.services.index_service import SiteIndex


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


def get_content_manager(request: Request) -> ContentManager:
    """Get content manager from app state."""
    cm: ContentManager = request.app.state.content_manager
    return cm


def get_site_index(request: Request) -> SiteIndex:
    """Get the current site index from app state."""
    index: SiteIndex | None = getattr(request.app.state, "site_index", None)
    if index is None:
        raise InternalServerError("Site index requested before it was built")
    return index
