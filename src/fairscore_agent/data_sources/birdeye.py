"""
Birdeye wallet API client.

Two calls make up a ``WalletSnapshot``:

- ``/v1/wallet/token_list?wallet=`` → portfolio items with ``valueUsd``;
  their sum is the net worth, the native SOL item gives the SOL balance.
- ``/v1/wallet/tx_list?wallet=&limit=1`` → ``total`` transaction count and
  the most recent ``blockTime``.

Both require an ``X-API-KEY`` header; without a key the snapshot is empty.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx

from ..constants import WSOL_MINT
from ..models import WalletSnapshot
from ..utils import parse_datetime
from ._http import async_http_get
from .errors import DataSourceUnavailable

logger = logging.getLogger(__name__)


class BirdeyeClient:
    """Async wrapper around the Birdeye wallet endpoints."""

    def __init__(self, base_url: str, api_key: str = "", timeout: int = 15) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"X-API-KEY": self._api_key, "x-chain": "solana"},
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    async def get_wallet_snapshot(self, wallet: str) -> WalletSnapshot:
        """Net worth and activity for *wallet*; missing pieces stay ``None``."""
        if not self.configured:
            logger.debug("Birdeye API key not configured – empty wallet snapshot")
            return WalletSnapshot()
        portfolio, activity = await asyncio.gather(
            self._get("/v1/wallet/token_list", {"wallet": wallet}),
            self._get("/v1/wallet/tx_list", {"wallet": wallet, "limit": 1}),
        )
        return WalletSnapshot(**self.parse_portfolio(portfolio), **self.parse_activity(activity))

    async def _get(self, path: str, params: dict[str, Any]) -> Optional[dict[str, Any]]:
        client = await self._get_client()
        try:
            data = await async_http_get(
                client, f"{self._base_url}{path}", params=params, label="Birdeye"
            )
        except DataSourceUnavailable as exc:
            logger.warning("Birdeye %s unavailable: %s", path, exc)
            return None
        if not isinstance(data, dict) or not data.get("success"):
            return None
        payload = data.get("data")
        return payload if isinstance(payload, dict) else None

    # ------------------------------------------------------------------
    # Conversion helpers (sync – pure data transforms)
    # ------------------------------------------------------------------

    @staticmethod
    def parse_portfolio(payload: Optional[dict[str, Any]]) -> dict[str, Any]:
        if payload is None:
            return {}
        items = [i for i in payload.get("items") or [] if isinstance(i, dict)]
        total = 0.0
        sol_balance: Optional[float] = None
        for item in items:
            value = item.get("valueUsd")
            if isinstance(value, (int, float)):
                total += value
            if item.get("address") == WSOL_MINT or item.get("symbol") == "SOL":
                sol_balance = item.get("uiAmount") or None
        return {
            "net_worth_usd": total if total > 0 else None,
            "sol_balance": sol_balance,
            "token_count": len(items),
        }

    @staticmethod
    def parse_activity(payload: Optional[dict[str, Any]]) -> dict[str, Any]:
        if payload is None:
            return {}
        items = payload.get("items") or []
        first = items[0] if items and isinstance(items[0], dict) else {}
        return {
            "tx_count": payload.get("total") or None,
            "last_active_time": parse_datetime(first.get("blockTime")),
        }
