"""
sharecount/core/staleness.py
═══════════════════════════════════════════════════════════════════════════════
Decides whether stored share counts are due for a refresh.

Tier table (evaluated top to bottom, first match wins):

  content published within the last 1 day   → refresh every 30 minutes
  content published within the last 5 days  → refresh every 6 hours
  anything older (catch-all)                → refresh every 2 days

The site and external URLs have content timestamp 0, so they always land
in the catch-all tier.
═══════════════════════════════════════════════════════════════════════════════
"""

import logging
import time
from typing import NamedTuple, Optional, Sequence

log = logging.getLogger("staleness")

MINUTE_S = 60
HOUR_S   = 60 * MINUTE_S
DAY_S    = 24 * HOUR_S


class Tier(NamedTuple):
    max_age_s:  Optional[int]   # None → catch-all
    interval_s: int


DEFAULT_TIERS: tuple[Tier, ...] = (
    Tier(1 * DAY_S, 30 * MINUTE_S),
    Tier(5 * DAY_S, 6 * HOUR_S),
    Tier(None,      2 * DAY_S),
)


def select_tier(
    content_ts: float,
    tiers: Sequence[Tier] = DEFAULT_TIERS,
    now: Optional[float] = None,
) -> Optional[Tier]:
    """First tier whose age bracket contains content_ts, or None."""
    now = time.time() if now is None else now
    for tier in tiers:
        if tier.max_age_s is None or content_ts > now - tier.max_age_s:
            return tier
    return None


def needs_refresh(
    last_fetched: Optional[float],
    content_ts: float,
    tiers: Sequence[Tier] = DEFAULT_TIERS,
    now: Optional[float] = None,
) -> bool:
    """True when counts were never fetched or the selected tier's interval has elapsed."""
    if not last_fetched:
        return True

    now  = time.time() if now is None else now
    tier = select_tier(content_ts, tiers, now)
    if tier is None:
        log.warning(f"No staleness tier matches content timestamp {content_ts} — not refreshing")
        return False

    stale = last_fetched < now - tier.interval_s
    log.debug(f"tier={tier} age_s={now - last_fetched:.0f} stale={stale}")
    return stale
