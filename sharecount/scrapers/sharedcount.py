"""
sharecount/scrapers/sharedcount.py
═══════════════════════════════════════════════════════════════════════════════
SharedCount.com API — one request per URL:

  GET {api_domain}/url?url={page_url}&apikey={key}

Response (200):
  {"Facebook": {"total_count": 12, "like_count": 3, "share_count": 7,
                "comment_count": 2},
   "Twitter": 4, "Pinterest": 0, "LinkedIn": 1, "GooglePlusOne": 0,
   "StumbleUpon": 0}

Anything else is raised as a ShareCountError subclass. This module never
decides what to serve on failure; ShareCountCache does.
═══════════════════════════════════════════════════════════════════════════════
"""

import logging
from typing import Optional

import httpx

from sharecount.core.config import Settings
from sharecount.core.errors import ConfigurationMissing, MalformedPayload, TransportFailure
from sharecount.core.hooks import Hooks
from sharecount.core.http_client import sc_client

log = logging.getLogger("sharedcount")


class SharedCountClient:
    def __init__(
        self,
        settings: Settings,
        hooks: Optional[Hooks] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.settings = settings
        self.hooks    = hooks or Hooks()
        self._client  = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or sc_client()

    def _params(self, url: str) -> dict:
        return self.hooks.api_params({"url": url, "apikey": self.settings.api_key})

    async def fetch(self, url: Optional[str]) -> dict:
        """Current counts for `url`. Raises ShareCountError on any failure."""
        if not url:
            raise ConfigurationMissing("no URL to query")
        if not self.settings.api_ready:
            raise ConfigurationMissing("SharedCount API key/domain not configured")

        endpoint = f"{self.settings.api_domain}/url"
        try:
            resp = await self.client.get(endpoint, params=self._params(url))
        except httpx.HTTPError as ex:
            raise TransportFailure(f"request failed for {url}: {ex}") from ex

        if resp.status_code != 200:
            raise TransportFailure(f"HTTP {resp.status_code} for {url}", resp.status_code)

        try:
            data = resp.json()
        except ValueError as ex:
            raise MalformedPayload(f"non-JSON body for {url}") from ex

        if not isinstance(data, dict):
            raise MalformedPayload(f"expected JSON object for {url}, got {type(data).__name__}")
        if "Error" in data:
            raise TransportFailure(f"API error for {url}: {data['Error']}", resp.status_code)

        log.debug(f"Fetched {len(data)} services for {url}")
        return data
