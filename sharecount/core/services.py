"""
sharecount/core/services.py
═══════════════════════════════════════════════════════════════════════════════
Service names accepted by the single-count and link endpoints, and where
each one lives inside a SharedCount payload.

  facebook          → payload["Facebook"]["total_count"]
  facebook_likes    → payload["Facebook"]["like_count"]
  facebook_shares   → payload["Facebook"]["share_count"]
  facebook_comments → payload["Facebook"]["comment_count"]
  twitter           → payload["Twitter"]
  pinterest         → payload["Pinterest"]
  linkedin          → payload["LinkedIn"]
  google            → payload["GooglePlusOne"]
  stumbleupon       → payload["StumbleUpon"]
  total             → sum over all services
═══════════════════════════════════════════════════════════════════════════════
"""

from enum import Enum
from typing import Any, Optional


class Service(str, Enum):
    FACEBOOK          = "facebook"
    FACEBOOK_LIKES    = "facebook_likes"
    FACEBOOK_SHARES   = "facebook_shares"
    FACEBOOK_COMMENTS = "facebook_comments"
    TWITTER           = "twitter"
    PINTEREST         = "pinterest"
    LINKEDIN          = "linkedin"
    GOOGLE            = "google"
    STUMBLEUPON       = "stumbleupon"
    TOTAL             = "total"
    UNKNOWN           = "unknown"

    @classmethod
    def parse(cls, name: str) -> "Service":
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            return cls.UNKNOWN


# service → (payload field, sub-field or None for plain integers)
PAYLOAD_FIELDS: dict[Service, tuple[str, Optional[str]]] = {
    Service.FACEBOOK:          ("Facebook", "total_count"),
    Service.FACEBOOK_LIKES:    ("Facebook", "like_count"),
    Service.FACEBOOK_SHARES:   ("Facebook", "share_count"),
    Service.FACEBOOK_COMMENTS: ("Facebook", "comment_count"),
    Service.TWITTER:           ("Twitter",       None),
    Service.PINTEREST:         ("Pinterest",     None),
    Service.LINKEDIN:          ("LinkedIn",      None),
    Service.GOOGLE:            ("GooglePlusOne", None),
    Service.STUMBLEUPON:       ("StumbleUpon",   None),
}


def extract(payload: dict, service: Service) -> Any:
    """Raw value for a table-mapped service, or None when absent."""
    field = PAYLOAD_FIELDS.get(service)
    if field is None:
        return None
    name, sub = field
    value = payload.get(name)
    if sub is None:
        return value
    return value.get(sub) if isinstance(value, dict) else None
