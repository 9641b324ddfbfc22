"""
sharecount/routers/content.py
Endpoints:
  GET /content              → registered content items with stored totals
  GET /content?sort=total   → most shared first

Reads stored entries only. Zero external calls.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query

from sharecount.core.identity import ContentItem
from sharecount.core.share_cache import ShareCountCache
from sharecount.routers.counts import get_share_cache

router = APIRouter(prefix="/content", tags=["content"])


def _iso(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@router.get("")
async def list_content(
    sort: str = Query("published", pattern="^(published|total)$"),
    limit: int = Query(50, ge=1, le=500),
    cache: ShareCountCache = Depends(get_share_cache),
):
    out = []
    for record in cache.content:
        entry = cache.entry(ContentItem(record.id))
        out.append({
            "id":           record.id,
            "url":          record.url,
            "title":        record.title,
            "published":    _iso(record.published),
            "total":        entry.total if entry else None,
            "last_fetched": entry.last_fetched if entry else None,
        })
    if sort == "total":
        out.sort(key=lambda r: r["total"] or 0, reverse=True)
    return out[:limit]
