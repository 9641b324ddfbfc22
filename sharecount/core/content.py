"""
sharecount/core/content.py
═══════════════════════════════════════════════════════════════════════════════
Content registry — the pages/posts whose share counts are tracked by id.

Loaded from SHARECOUNT_CONTENT_FILE, a JSON list:

  [{"id": "42", "url": "https://example.com/hello/", "title": "Hello",
    "published": "2024-03-16T20:30:00", "image": "https://…/hello.jpg"}]

"published" may be epoch seconds or ISO-8601. Naive ISO dates are read in
the configured site timezone (SHARECOUNT_TZ) via pytz.
═══════════════════════════════════════════════════════════════════════════════
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

import pytz

log = logging.getLogger("content")


@dataclass(frozen=True)
class ContentRecord:
    id:        str
    url:       str
    published: float
    title:     str = ""
    image:     str = ""


def parse_published(value, tz=pytz.utc) -> float:
    """Epoch seconds for an epoch number or ISO-8601 string."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str) and value:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if dt.tzinfo is None:
            dt = tz.localize(dt)
        return dt.timestamp()
    raise ValueError(f"unusable publish date {value!r}")


class ContentRegistry:
    def __init__(self, records=()) -> None:
        self._items: dict[str, ContentRecord] = {}
        for r in records:
            self.add(r)

    def add(self, record: ContentRecord) -> None:
        self._items[record.id] = record

    def get(self, item_id) -> Optional[ContentRecord]:
        return self._items.get(str(item_id))

    def __iter__(self) -> Iterator[ContentRecord]:
        # newest first, the order prime() walks them in
        return iter(sorted(self._items.values(), key=lambda r: r.published, reverse=True))

    def __len__(self) -> int:
        return len(self._items)

    @classmethod
    def from_file(cls, path, tz=pytz.utc) -> "ContentRegistry":
        rows = json.loads(Path(path).read_text(encoding="utf-8"))
        registry = cls()
        for row in rows:
            try:
                registry.add(ContentRecord(
                    id        = str(row["id"]),
                    url       = row["url"],
                    published = parse_published(row.get("published"), tz),
                    title     = row.get("title", ""),
                    image     = row.get("image", ""),
                ))
            except (KeyError, TypeError, ValueError) as ex:
                log.warning(f"Skipping content row {row!r}: {ex}")
        log.info(f"Loaded {len(registry)} content items from {path}")
        return registry
