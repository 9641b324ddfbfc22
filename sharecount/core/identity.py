"""
sharecount/core/identity.py
═══════════════════════════════════════════════════════════════════════════════
What a share count belongs to, and where it is stored.

  Site()             → key "share_count:site"
  ExternalURL(url)   → key "share_count:url:<md5(url)>"
  ContentItem(id)    → key "share_count:content:<id>"

parse_identity() maps the string form used by the HTTP API:
  "site" → Site,  "http…" → ExternalURL,  anything else → ContentItem
═══════════════════════════════════════════════════════════════════════════════
"""

import hashlib
from dataclasses import dataclass
from typing import Union

KEY_PREFIX = "share_count"


@dataclass(frozen=True)
class Site:
    def storage_key(self) -> str:
        return f"{KEY_PREFIX}:site"

    def __str__(self) -> str:
        return "site"


@dataclass(frozen=True)
class ExternalURL:
    url: str

    def storage_key(self) -> str:
        digest = hashlib.md5(self.url.encode("utf-8")).hexdigest()
        return f"{KEY_PREFIX}:url:{digest}"

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class ContentItem:
    id: str

    def storage_key(self) -> str:
        return f"{KEY_PREFIX}:content:{self.id}"

    def __str__(self) -> str:
        return self.id


Identity = Union[Site, ExternalURL, ContentItem]


def parse_identity(raw) -> Identity:
    raw = str(raw).strip()
    if raw == "site":
        return Site()
    if raw.startswith("http"):
        return ExternalURL(raw)
    return ContentItem(raw)
