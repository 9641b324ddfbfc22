import pytest

from sharecount.core.config import Settings
from sharecount.core.content import ContentRecord, ContentRegistry
from sharecount.core.errors import ShareCountError, TransportFailure
from sharecount.core.share_cache import ShareCountCache
from sharecount.core.store import MemoryStore

NOW = 1_700_000_000.0
HOUR = 3600
DAY = 24 * HOUR

PAYLOAD = {
    "Facebook": {"total_count": 1200, "like_count": 300, "share_count": 800, "comment_count": 100},
    "Twitter": 45,
    "Pinterest": 5,
    "LinkedIn": 0,
    "GooglePlusOne": 2,
    "StumbleUpon": 0,
}


class FakeFetcher:
    """Records requested URLs; returns `payload` or raises `error`."""

    def __init__(self, payload=None, error: ShareCountError | None = None):
        self.payload = PAYLOAD if payload is None else payload
        self.error = error
        self.calls: list = []

    async def fetch(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return dict(self.payload)


class Clock:
    def __init__(self, now: float = NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="k", site_url="https://example.com", site_name="Example")


@pytest.fixture
def registry() -> ContentRegistry:
    return ContentRegistry([
        ContentRecord("1", "https://example.com/fresh/", NOW - 2 * HOUR, "Fresh", "https://example.com/a.jpg"),
        ContentRecord("2", "https://example.com/week/", NOW - 3 * DAY, "Midweek"),
        ContentRecord("3", "https://example.com/old/", NOW - 10 * DAY, "Old & Gold"),
    ])


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def cache(settings, registry, fetcher, clock) -> ShareCountCache:
    return ShareCountCache(settings, MemoryStore(), fetcher, registry, clock=clock)


@pytest.fixture
def failing_fetcher() -> FakeFetcher:
    return FakeFetcher(error=TransportFailure("HTTP 503", 503))
