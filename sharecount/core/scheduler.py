"""
sharecount/core/scheduler.py
═══════════════════════════════════════════════════════════════════════════════
Background "prime the pump" loop.

Makes sure at least SHARECOUNT_PRIME_COUNT content items have share counts
stored, fetching at most SHARECOUNT_PRIME_BATCH missing items per cycle so
the SharedCount quota is spent gradually. Newest content is primed first.

  1. ONE scheduler instance ever (guarded by _running flag)
  2. ONE prime pass at a time (asyncio.Lock — overlapping passes skipped)
  3. Failed fetches write nothing → the item is retried next cycle
  4. Reads never wait on this loop; stale counts are refreshed inline by
     ShareCountCache, this only fills items nobody has asked for yet
═══════════════════════════════════════════════════════════════════════════════
"""

import asyncio
import logging
import time

from sharecount.core.identity import ContentItem
from sharecount.core.share_cache import ShareCountCache

log = logging.getLogger("scheduler")

# ── State ─────────────────────────────────────────────────────────────────────
_prime_lock = asyncio.Lock()
_running    = False


async def prime(cache: ShareCountCache, count: int = 100, batch: int = 20) -> list[str]:
    """
    Fetch counts for up to `batch` content items lacking them, until `count`
    items have data. Returns the ids that now have stored counts.
    """
    have, missing = 0, []
    for record in cache.content:
        if cache.has_entry(ContentItem(record.id)):
            have += 1
        else:
            missing.append(record.id)

    log.info(f"Currently {have} content items with share counts")
    if have >= count:
        return []

    primed = []
    for item_id in missing[: min(batch, count - have)]:
        identity = ContentItem(item_id)
        await cache.get_counts(identity)
        if cache.has_entry(identity):
            primed.append(item_id)

    log.info(f"Updated {len(primed)} content items with share counts")
    cache.hooks.primed(primed)
    return primed


async def _run_cycle(cache: ShareCountCache) -> None:
    if _prime_lock.locked():
        log.warning("Previous prime still running — skipping cycle")
        return

    async with _prime_lock:
        t0 = time.time()
        settings = cache.settings
        await prime(cache, settings.prime_count, settings.prime_batch)
        log.info(f"Prime cycle complete in {time.time() - t0:.1f}s")


async def run_scheduler(cache: ShareCountCache) -> None:
    """
    Called once at startup. Runs until cancelled.
    Never starts a second instance — guarded by _running flag.
    """
    global _running
    if _running:
        log.warning("Scheduler already running — ignoring duplicate start")
        return
    _running = True
    log.info("Scheduler started")

    try:
        while True:
            try:
                await _run_cycle(cache)
            except Exception as ex:
                log.error(f"Prime cycle error (continuing): {ex}")
            await asyncio.sleep(cache.settings.prime_interval_s)
    finally:
        _running = False
