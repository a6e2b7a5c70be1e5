"""Site configuration and reload endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from docshelf.api.deps import get_content_manager, get_site_index
from docshelf.filesystem.content_manager import ContentManager
from docshelf.schemas.listing import ReloadResponse, SiteConfigResponse
from docshelf.services.index_service import SiteIndex, build_site_index

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["site"])


@router.get("/site", response_model=SiteConfigResponse)
async def site_config(
    index: Annotated[SiteIndex, Depends(get_site_index)],
) -> SiteConfigResponse:
    """Get site configuration."""
    cfg = index.site_config
    return SiteConfigResponse(
        title=cfg.title,
        description=cfg.description,
        baseurl=cfg.baseurl,
        page_count=len(index.pages),
    )


@router.post("/reload", response_model=ReloadResponse)
async def reload_index(
    request: Request,
    content_manager: Annotated[ContentManager, Depends(get_content_manager)],
) -> ReloadResponse:
    """Rescan the content directory and swap in the new index."""
    index = build_site_index(content_manager)
    request.app.state.site_index = index
    logger.info("Reloaded site index: %d pages", len(index.pages))
    return ReloadResponse(page_count=len(index.pages), warnings=index.warnings)
