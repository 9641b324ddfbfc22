"""
sharecount/core/hooks.py
Extension points. Each hook is a plain callable; the defaults leave
behaviour unchanged.

  total(total, payload)        → int              final aggregated total
  tiers(tiers)                 → sequence[Tier]   effective staleness table
  single(service, payload)     → str              count for an unknown service
  api_params(params)           → dict             SharedCount query params
  link(link)                   → dict             share link descriptor
  display(markup, location)    → str              rendered button markup
  image(img, identity)         → str              image offered to share targets
  site_url(url)                → str              URL counted for the whole site
  primed(ids)                  → None             called after each prime pass
"""

from dataclasses import dataclass
from typing import Callable, Sequence

from sharecount.core.staleness import Tier


def _total(total: int, payload: dict) -> int:
    return total


def _tiers(tiers: Sequence[Tier]) -> Sequence[Tier]:
    return tiers


def _single(service: str, payload: dict) -> str:
    return "0"


def _identity(value: dict) -> dict:
    return value


def _display(markup: str, location: str) -> str:
    return markup


def _image(img: str, identity) -> str:
    return img


def _site_url(url: str) -> str:
    return url


def _primed(ids: list) -> None:
    return None


@dataclass(frozen=True)
class Hooks:
    total:      Callable[[int, dict], int]                   = _total
    tiers:      Callable[[Sequence[Tier]], Sequence[Tier]]   = _tiers
    single:     Callable[[str, dict], str]                   = _single
    api_params: Callable[[dict], dict]                       = _identity
    link:       Callable[[dict], dict]                       = _identity
    display:    Callable[[str, str], str]                    = _display
    image:      Callable[[str, object], str]                 = _image
    site_url:   Callable[[str], str]                         = _site_url
    primed:     Callable[[list], None]                       = _primed
