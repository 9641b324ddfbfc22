"""
sharecount/routers/counts.py
Endpoints:
  GET /counts?id=site                     → full payload + total for the site
  GET /counts?id=https://…                → any external URL
  GET /counts?id=42                       → a registered content item
  GET /counts/{service}?id=42&round=2     → one service, formatted ("1.2k")

Stale or missing counts are refreshed inline; API failures fall back to the
last stored counts (or zeros). These endpoints never error on API trouble.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from sharecount.core.aggregate import total_count
from sharecount.core.identity import parse_identity
from sharecount.core.share_cache import ShareCountCache

router = APIRouter(prefix="/counts", tags=["counts"])


def get_share_cache(request: Request) -> ShareCountCache:
    return request.app.state.share_cache


@router.get("")
async def get_counts(
    id: str = Query("site"),
    cache: ShareCountCache = Depends(get_share_cache),
):
    identity = parse_identity(id)
    counts   = await cache.get_counts(identity)
    entry    = cache.entry(identity)
    return {
        "id":           str(identity),
        "counts":       counts,
        "total":        total_count(counts, cache.hooks.total),
        "last_fetched": entry.last_fetched if entry else None,
    }


@router.get("/{service}")
async def get_single(
    service: str,
    id: str = Query("site"),
    round: Optional[int] = Query(None, ge=0, le=6),
    cache: ShareCountCache = Depends(get_share_cache),
):
    identity = parse_identity(id)
    return {
        "id":      str(identity),
        "service": service,
        "count":   await cache.get_single_count(identity, service, round),
    }
