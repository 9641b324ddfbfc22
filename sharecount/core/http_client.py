"""
sharecount/core/http_client.py
Shared async httpx client for the SharedCount API.
  • sc_client()  → pooled client, recreated if it was closed
  • close_all()  → called once on shutdown
"""

import httpx

_sc_client: httpx.AsyncClient | None = None

_LIMITS  = httpx.Limits(max_connections=10, max_keepalive_connections=5)
_TIMEOUT = httpx.Timeout(15.0, connect=5.0)

USER_AGENT = "sharecount/1.1 (+https://www.sharedcount.com)"


def sc_client() -> httpx.AsyncClient:
    global _sc_client
    if _sc_client is None or _sc_client.is_closed:
        _sc_client = httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=_TIMEOUT,
            follow_redirects=True,
            limits=_LIMITS,
        )
    return _sc_client


async def close_all() -> None:
    if _sc_client and not _sc_client.is_closed:
        await _sc_client.aclose()
