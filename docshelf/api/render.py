"""Render API endpoints: listing views as HTML fragments."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from docshelf.api.deps import get_site_index
from docshelf.api.listings import NowQuery, resolve_now
from docshelf.services.index_service import VIEWS, SiteIndex, render_view

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/render", tags=["render"])


@router.get("/{view}", response_class=HTMLResponse)
async def render_listing(
    view: str,
    index: Annotated[SiteIndex, Depends(get_site_index)],
    now: NowQuery = None,
) -> HTMLResponse:
    """Render a listing view (books, pages or recent) as an HTML fragment."""
    if view not in VIEWS:
        raise HTTPException(status_code=404, detail="View not found")
    reference = resolve_now(now, index.site_config.timezone)
    fragment = render_view(index, view, reference)
    logger.debug("Rendered %s view (%d bytes)", view, len(fragment))
    return HTMLResponse(content=fragment)
