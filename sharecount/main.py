"""
sharecount/main.py  — Share Count API v1
Startup: builds settings/store/client once, launches the prime scheduler.
Count reads refresh inline when stale; everything else is store-read-only.
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sharecount.core.config import Settings, load_settings
from sharecount.core.content import ContentRegistry
from sharecount.core.hooks import Hooks
from sharecount.core.http_client import close_all
from sharecount.core.scheduler import run_scheduler
from sharecount.core.share_cache import Fetcher, ShareCountCache
from sharecount.core.store import Store, make_store
from sharecount.routers import content, counts, links
from sharecount.scrapers.sharedcount import SharedCountClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("main")

VERSION = "1.1.0"


def _load_content(settings: Settings) -> ContentRegistry:
    if not settings.content_file:
        return ContentRegistry()
    try:
        return ContentRegistry.from_file(settings.content_file, settings.timezone)
    except (OSError, ValueError) as ex:
        log.error(f"Could not load content file {settings.content_file}: {ex}")
        return ContentRegistry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info(f"Share Count API v{VERSION} starting...")
    cache: ShareCountCache = app.state.share_cache
    task = None
    if app.state.start_scheduler and len(cache.content) and cache.settings.api_ready:
        task = asyncio.create_task(run_scheduler(cache))
    yield
    log.info("Shutting down...")
    if task:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
    await close_all()


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[Store] = None,
    fetcher: Optional[Fetcher] = None,
    content_registry: Optional[ContentRegistry] = None,
    hooks: Optional[Hooks] = None,
    start_scheduler: bool = True,
) -> FastAPI:
    settings = settings or load_settings()
    hooks    = hooks or Hooks()

    app = FastAPI(
        title="Share Count API",
        description=(
            "Cache-first social share counts from SharedCount.com. "
            "Fresh content refreshes every 30 min, content under 5 days old "
            "every 6 h, everything else every 2 days."
        ),
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.share_cache = ShareCountCache(
        settings = settings,
        store    = store if store is not None else make_store(settings.store_dir),
        fetcher  = fetcher or SharedCountClient(settings, hooks),
        content  = content_registry if content_registry is not None else _load_content(settings),
        hooks    = hooks,
    )
    app.state.start_scheduler = start_scheduler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # ── Routers ──────────────────────────────────────────────────────────────
    app.include_router(counts.router)
    app.include_router(links.router)
    app.include_router(content.router)

    @app.get("/", tags=["meta"])
    async def root():
        return {
            "status":  "online",
            "version": VERSION,
            "endpoints": {
                "counts":  "/counts?id={site|url|content_id}",
                "single":  "/counts/{service}?id=...&round=2",
                "links":   "/links?id=...&services=facebook,twitter&style=bubble",
                "html":    "/links/html?id=...",
                "content": "/content?sort=total",
                "health":  "/health",
                "docs":    "/docs",
            },
            "services": [
                "facebook", "facebook_likes", "facebook_shares", "facebook_comments",
                "twitter", "pinterest", "linkedin", "google", "stumbleupon", "total",
            ],
        }

    @app.get("/health", tags=["meta"])
    async def health():
        """Lightweight health check."""
        cache: ShareCountCache = app.state.share_cache
        summary = cache.store.summary()
        return {
            "status":        "healthy" if cache.settings.api_ready else "degraded",
            "api_ready":     cache.settings.api_ready,
            "api_domain":    cache.settings.api_domain,
            "content_items": len(cache.content),
            "cached_keys":   len(summary),
        }

    return app


app = create_app()
