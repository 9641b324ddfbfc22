"""
sharecount/core/aggregate.py
Sums a SharedCount payload into one total across all services.

  {"Twitter": 5, "Facebook": {"total_count": 10, "like_count": 7}}  → 15
"""

import json
from typing import Any, Callable, Optional

TotalHook = Callable[[int, dict], int]


def decode_payload(raw: Any) -> Optional[dict]:
    """Accept a dict or its JSON text/bytes; anything else → None."""
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str) and raw:
        try:
            data = json.loads(raw)
        except ValueError:
            return None
        return data if isinstance(data, dict) else None
    return None


def to_int(value: Any) -> int:
    """Lenient integer coercion: 12, 12.7, "12" → 12; anything unusable → 0."""
    if isinstance(value, bool) or value is None:
        return int(bool(value))
    if isinstance(value, int):
        return value
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _service_count(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, dict) and value.get("total_count") is not None:
        return to_int(value["total_count"])
    return 0


def total_count(payload: Any, hook: Optional[TotalHook] = None) -> int:
    data = decode_payload(payload)
    if not data:
        return 0

    total = sum(_service_count(v) for v in data.values())
    if hook is not None:
        total = hook(total, data)
    return total
