"""
sharecount/routers/links.py
Endpoints:
  GET /links?id=42&services=facebook,twitter&style=bubble  → link descriptors
  GET /links/html?id=42&location=after_content             → button markup

services/style default to SHARECOUNT_SERVICES / SHARECOUNT_STYLE.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from sharecount.core.config import STYLES, parse_services
from sharecount.core.identity import parse_identity
from sharecount.core.links import UnknownContent, build_links, render_html
from sharecount.core.share_cache import ShareCountCache
from sharecount.routers.counts import get_share_cache

router = APIRouter(prefix="/links", tags=["links"])


async def _links(
    cache: ShareCountCache,
    id: str,
    services: Optional[str],
    style: Optional[str],
    round: Optional[int],
) -> list[dict]:
    if style and style not in STYLES:
        raise HTTPException(422, detail=f"Unknown style '{style}'")
    try:
        return await build_links(
            cache,
            parse_identity(id),
            parse_services(services) if services else None,
            style,
            round,
        )
    except UnknownContent:
        raise HTTPException(404, detail=f"Content item '{id}' not found")


@router.get("")
async def get_links(
    id: str = Query("site"),
    services: Optional[str] = Query(None),
    style: Optional[str] = Query(None),
    round: Optional[int] = Query(None, ge=0, le=6),
    cache: ShareCountCache = Depends(get_share_cache),
):
    return await _links(cache, id, services, style, round)


@router.get("/html", response_class=HTMLResponse)
async def get_links_html(
    id: str = Query("site"),
    services: Optional[str] = Query(None),
    style: Optional[str] = Query(None),
    round: Optional[int] = Query(None, ge=0, le=6),
    location: str = Query(""),
    cache: ShareCountCache = Depends(get_share_cache),
):
    links = await _links(cache, id, services, style, round)
    return HTMLResponse(render_html(links, location, cache.hooks))
