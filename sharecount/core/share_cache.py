"""
sharecount/core/share_cache.py
═══════════════════════════════════════════════════════════════════════════════
Cache-first share counts with conditional refresh.

  1. Identity → storage key, URL to query, content timestamp
  2. Stored entry missing or stale (see staleness.py) → fetch from SharedCount
  3. Fetch OK     → persist {payload, last_fetched, total} as one document
  4. Fetch failed → serve the previous payload (even if stale), or {}

Reads never raise on API trouble: the worst case is "0".
Two concurrent requests may both refresh the same key; last write wins.
═══════════════════════════════════════════════════════════════════════════════
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from sharecount.core.aggregate import to_int, total_count
from sharecount.core.config import Settings
from sharecount.core.content import ContentRegistry
from sharecount.core.errors import ShareCountError
from sharecount.core.formatting import round_count
from sharecount.core.hooks import Hooks
from sharecount.core.identity import ContentItem, ExternalURL, Identity, Site
from sharecount.core.services import Service, extract
from sharecount.core.staleness import needs_refresh
from sharecount.core.store import Store

log = logging.getLogger("share_cache")


class Fetcher(Protocol):
    async def fetch(self, url: Optional[str]) -> dict: ...


@dataclass(frozen=True)
class CacheEntry:
    payload:      dict
    last_fetched: float
    total:        int

    def encode(self) -> bytes:
        return json.dumps({
            "payload":      self.payload,
            "last_fetched": self.last_fetched,
            "total":        self.total,
        }).encode("utf-8")

    @classmethod
    def decode(cls, raw: Optional[bytes]) -> Optional["CacheEntry"]:
        if not raw:
            return None
        try:
            doc = json.loads(raw)
            payload, last_fetched = doc["payload"], float(doc["last_fetched"])
        except (ValueError, TypeError, KeyError):
            return None
        if not isinstance(payload, dict):
            return None
        return cls(payload, last_fetched, to_int(doc.get("total")))


class ShareCountCache:
    def __init__(
        self,
        settings: Settings,
        store: Store,
        fetcher: Fetcher,
        content: Optional[ContentRegistry] = None,
        hooks: Optional[Hooks] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.settings = settings
        self.store    = store
        self.fetcher  = fetcher
        self.content  = content if content is not None else ContentRegistry()
        self.hooks    = hooks or Hooks()
        self.clock    = clock

    # ── Identity resolution ──────────────────────────────────────────────────

    def site_url(self) -> str:
        return self.hooks.site_url(self.settings.site_url)

    def resolve(self, identity: Identity) -> tuple[Optional[str], float]:
        """(url to query, content timestamp) for an identity."""
        if isinstance(identity, Site):
            return self.site_url() or None, 0.0
        if isinstance(identity, ExternalURL):
            return identity.url, 0.0
        if isinstance(identity, ContentItem):
            record = self.content.get(identity.id)
            if record is None:
                log.debug(f"Content item {identity.id} not in registry")
                return None, 0.0
            return record.url, record.published
        raise TypeError(f"not an identity: {identity!r}")

    # ── Stored entries ───────────────────────────────────────────────────────

    def entry(self, identity: Identity) -> Optional[CacheEntry]:
        key = identity.storage_key()
        raw = self.store.get(key)
        entry = CacheEntry.decode(raw)
        if raw and entry is None:
            log.warning(f"Unreadable cache entry at {key} — treating as missing")
        return entry

    def has_entry(self, identity: Identity) -> bool:
        return self.entry(identity) is not None

    def _persist(self, identity: Identity, entry: CacheEntry) -> None:
        key = identity.storage_key()
        if not self.store.set(key, entry.encode()):
            log.error(f"Could not persist counts for {identity}")

    # ── Reads ────────────────────────────────────────────────────────────────

    async def get_counts(self, identity: Identity) -> dict:
        """Per-service payload for an identity, refreshed first if stale."""
        url, content_ts = self.resolve(identity)
        entry = self.entry(identity)
        now   = self.clock()
        tiers = self.hooks.tiers(self.settings.tiers)

        if entry is not None and not needs_refresh(entry.last_fetched, content_ts, tiers, now):
            return entry.payload

        try:
            payload = await self.fetcher.fetch(url)
        except ShareCountError as ex:
            log.warning(f"Refresh failed for {identity}: {ex}")
            return entry.payload if entry is not None else {}

        total = total_count(payload, self.hooks.total)
        self._persist(identity, CacheEntry(payload, now, total))
        log.info(f"Refreshed {identity}: total={total}")
        return payload

    async def get_total(self, identity: Identity) -> int:
        return total_count(await self.get_counts(identity), self.hooks.total)

    async def get_single_count(
        self,
        identity: Identity,
        service: str = "facebook",
        round_to: Optional[int] = None,
    ) -> str:
        """
        One service's count as display text. round_to=None uses the configured
        significant digits; 0 returns the plain integer.
        """
        round_to = self.settings.sig_digits if round_to is None else round_to
        counts = await self.get_counts(identity)
        svc = Service.parse(service)

        if not counts:
            value = "0"
        elif svc is Service.TOTAL:
            value = total_count(counts, self.hooks.total)
        elif svc is Service.UNKNOWN:
            value = self.hooks.single(service, counts)
        else:
            value = extract(counts, svc)

        num = to_int(value) if value else 0
        if round_to > 0:
            return round_count(num, round_to)
        return str(num)
