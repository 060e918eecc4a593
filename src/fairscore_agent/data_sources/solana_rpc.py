"""
Solana JSON-RPC client for a single endpoint.

Uses the standard JSON-RPC interface.  The public
``api.mainnet-beta.solana.com`` endpoint works but is rate-limited, so the
gateway usually holds several of these, one per configured endpoint.
Every call is a single attempt; failures raise ``DataSourceUnavailable``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ._http import async_http_post_json

logger = logging.getLogger(__name__)


def _redact(endpoint: str) -> str:
    """Hide query-string API keys when an endpoint is logged."""
    return endpoint.split("?", 1)[0]


class SolanaRpcClient:
    """Async Solana JSON-RPC client."""

    def __init__(self, endpoint: str, timeout: int = 15) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None
        self._id_counter = 0

    @property
    def name(self) -> str:
        return _redact(self._endpoint)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_signatures_for_address(
        self,
        address: str,
        *,
        limit: int = 1000,
        before: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """Return one page of signature records, newest first."""
        options: dict[str, Any] = {"limit": limit, "commitment": "finalized"}
        if before:
            options["before"] = before
        result = await self._call("getSignaturesForAddress", [address, options])
        if not isinstance(result, list):
            return []
        return [r for r in result if isinstance(r, dict)]

    async def get_transaction(self, signature: str) -> Optional[dict[str, Any]]:
        """Fetch a parsed transaction, or ``None`` when the node does not have it."""
        result = await self._call(
            "getTransaction",
            [
                signature,
                {
                    "encoding": "jsonParsed",
                    "maxSupportedTransactionVersion": 0,
                    "commitment": "finalized",
                },
            ],
        )
        return result if isinstance(result, dict) else None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _call(self, method: str, params: list[Any] | dict) -> Any:
        """One JSON-RPC round trip against this endpoint."""
        self._id_counter += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._id_counter,
            "method": method,
            "params": params,
        }
        client = await self._get_client()
        return await async_http_post_json(
            client,
            self._endpoint,
            json_payload=payload,
            label=f"Solana RPC {self.name} ({method})",
        )
