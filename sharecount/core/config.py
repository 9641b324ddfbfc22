"""
sharecount/core/config.py  ── Share Count service
═══════════════════════════════════════════════════════════════════════════════
All settings come from environment variables and are collected into one
immutable Settings object by load_settings(). Nothing here is a mutable
module-level singleton: main.py builds Settings once and hands it to the
objects that need it.

  SHAREDCOUNT_API_KEY       → API key (fetches are skipped when empty)
  SHAREDCOUNT_API_DOMAIN    → one of API_DOMAINS
  SHARECOUNT_SIG_DIGITS     → significant digits for abbreviated counts
  SHARECOUNT_TIERS          → JSON staleness tiers [[max_age_s|null, interval_s], ...]
  SHARECOUNT_SITE_URL       → URL counted for the "site" identity
  SHARECOUNT_TZ             → zone for naive publish dates in the content file
═══════════════════════════════════════════════════════════════════════════════
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

import pytz

from sharecount.core.staleness import DEFAULT_TIERS, Tier

log = logging.getLogger("config")

# ── SharedCount ───────────────────────────────────────────────────────────────
API_DOMAINS = (
    "https://free.sharedcount.com",
    "https://plus.sharedcount.com",
    "https://business.sharedcount.com",
)
DEFAULT_API_DOMAIN = API_DOMAINS[0]

# ── Display ───────────────────────────────────────────────────────────────────
STYLES = ("generic", "bubble", "fancy", "gss")
DEFAULT_SERVICES = "facebook, twitter, pinterest, google"
DEFAULT_SIG_DIGITS = 2

# ── Prime the pump ────────────────────────────────────────────────────────────
DEFAULT_PRIME_COUNT      = 100
DEFAULT_PRIME_BATCH      = 20
DEFAULT_PRIME_INTERVAL_S = 60 * 60


@dataclass(frozen=True)
class Settings:
    api_key:          str              = ""
    api_domain:       str              = DEFAULT_API_DOMAIN
    sig_digits:       int              = DEFAULT_SIG_DIGITS
    tiers:            tuple[Tier, ...] = DEFAULT_TIERS
    site_url:         str              = ""
    site_name:        str              = ""
    tz:               str              = "UTC"
    style:            str              = "generic"
    services:         tuple[str, ...]  = field(default_factory=lambda: parse_services(DEFAULT_SERVICES))
    default_image:    str              = ""
    store_dir:        Optional[str]    = None
    content_file:     Optional[str]    = None
    prime_count:      int              = DEFAULT_PRIME_COUNT
    prime_batch:      int              = DEFAULT_PRIME_BATCH
    prime_interval_s: int              = DEFAULT_PRIME_INTERVAL_S

    @property
    def timezone(self):
        return pytz.timezone(self.tz)

    @property
    def api_ready(self) -> bool:
        return bool(self.api_key and self.api_domain)


# ── Parsers ───────────────────────────────────────────────────────────────────

def parse_services(raw: str) -> tuple[str, ...]:
    """'facebook, twitter' → ('facebook', 'twitter')"""
    return tuple(s.strip().lower() for s in raw.split(",") if s.strip())


def parse_tiers(raw: str) -> tuple[Tier, ...]:
    """
    '[[86400, 1800], [null, 172800]]' → (Tier(86400, 1800), Tier(None, 172800))
    Raises ValueError on anything that is not a list of pairs.
    """
    data = json.loads(raw)
    if not isinstance(data, list) or not data:
        raise ValueError("staleness tiers must be a non-empty JSON list")
    tiers = []
    for row in data:
        if not isinstance(row, (list, tuple)) or len(row) != 2:
            raise ValueError(f"bad staleness tier {row!r}")
        max_age, interval = row
        try:
            tiers.append(Tier(None if max_age is None else int(max_age), int(interval)))
        except TypeError as ex:
            raise ValueError(f"bad staleness tier {row!r}") from ex
    return tuple(tiers)


def _validate_domain(domain: str) -> str:
    domain = domain.strip().rstrip("/")
    if domain not in API_DOMAINS:
        log.warning(f"Unknown SharedCount domain '{domain}' — using {DEFAULT_API_DOMAIN}")
        return DEFAULT_API_DOMAIN
    return domain


def _validate_style(style: str) -> str:
    style = style.strip().lower()
    return style if style in STYLES else "generic"


def _validate_tz(tz: str) -> str:
    try:
        pytz.timezone(tz)
    except pytz.UnknownTimeZoneError:
        log.warning(f"Unknown timezone '{tz}' — using UTC")
        return "UTC"
    return tz


def _int_env(env: dict, name: str, default: int) -> int:
    raw = env.get(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning(f"{name}={raw!r} is not an integer — using {default}")
        return default


def load_settings(env: Optional[dict] = None) -> Settings:
    """Build Settings from the environment (or from the given mapping)."""
    env = dict(os.environ if env is None else env)

    # SECURITY: the key must come from the environment, never from source.
    api_key = env.get("SHAREDCOUNT_API_KEY", "")
    if not api_key:
        log.warning(
            "SHAREDCOUNT_API_KEY env var not set — share counts will only be served from cache"
        )

    tiers = DEFAULT_TIERS
    if env.get("SHARECOUNT_TIERS"):
        try:
            tiers = parse_tiers(env["SHARECOUNT_TIERS"])
        except ValueError as ex:
            log.warning(f"Ignoring SHARECOUNT_TIERS: {ex}")

    return Settings(
        api_key          = api_key,
        api_domain       = _validate_domain(env.get("SHAREDCOUNT_API_DOMAIN", DEFAULT_API_DOMAIN)),
        sig_digits       = max(0, _int_env(env, "SHARECOUNT_SIG_DIGITS", DEFAULT_SIG_DIGITS)),
        tiers            = tiers,
        site_url         = env.get("SHARECOUNT_SITE_URL", ""),
        site_name        = env.get("SHARECOUNT_SITE_NAME", ""),
        tz               = _validate_tz(env.get("SHARECOUNT_TZ", "UTC")),
        style            = _validate_style(env.get("SHARECOUNT_STYLE", "generic")),
        services         = parse_services(env.get("SHARECOUNT_SERVICES", DEFAULT_SERVICES)),
        default_image    = env.get("SHARECOUNT_DEFAULT_IMAGE", ""),
        store_dir        = env.get("SHARECOUNT_STORE_DIR") or None,
        content_file     = env.get("SHARECOUNT_CONTENT_FILE") or None,
        prime_count      = _int_env(env, "SHARECOUNT_PRIME_COUNT", DEFAULT_PRIME_COUNT),
        prime_batch      = _int_env(env, "SHARECOUNT_PRIME_BATCH", DEFAULT_PRIME_BATCH),
        prime_interval_s = _int_env(env, "SHARECOUNT_PRIME_INTERVAL_S", DEFAULT_PRIME_INTERVAL_S),
    )
