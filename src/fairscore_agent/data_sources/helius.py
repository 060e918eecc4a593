"""
Helius enhanced-transactions indexer client.

``GET /v0/addresses/{address}/transactions`` returns already-decoded
transactions, newest first, 100 per page::

    {
      "signature": "...", "timestamp": 1700000000, "feePayer": "...",
      "type": "CREATE", "source": "PUMP_FUN",
      "nativeTransfers": [{"fromUserAccount", "toUserAccount", "amount"}],
      "tokenTransfers": [{"mint", "fromUserAccount", "toUserAccount", "tokenAmount"}]
    }

Older pages are reached with ``before=<last signature>``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ._http import async_http_get

logger = logging.getLogger(__name__)


class HeliusClient:
    """Async client for one Helius API base URL + key."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.helius.xyz",
        timeout: int = 15,
        page_size: int = 100,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._page_size = page_size
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return self._base_url

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def get_transactions_page(
        self,
        address: str,
        *,
        limit: Optional[int] = None,
        before: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """Fetch one page of enriched transactions for *address*."""
        params: dict[str, Any] = {
            "api-key": self._api_key,
            "limit": min(limit or self._page_size, self._page_size),
        }
        if before:
            params["before"] = before
        client = await self._get_client()
        data = await async_http_get(
            client,
            f"{self._base_url}/v0/addresses/{address}/transactions",
            params=params,
            label="Helius",
        )
        if not isinstance(data, list):
            return []
        return [tx for tx in data if isinstance(tx, dict)]

    async def get_transactions(self, address: str, *, limit: int) -> list[dict[str, Any]]:
        """Page backward until *limit* transactions or a short page.

        A failure on any page aborts the whole call so the gateway can try
        the next indexer; partial histories would skew the "oldest" answer.
        """
        collected: list[dict[str, Any]] = []
        before: Optional[str] = None
        while len(collected) < limit:
            want = min(self._page_size, limit - len(collected))
            page = await self.get_transactions_page(address, limit=want, before=before)
            if not page:
                break
            collected.extend(page)
            before = page[-1].get("signature")
            if len(page) < want or not before:
                break
        return collected[:limit]
