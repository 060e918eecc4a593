"""
RugCheck API client.

Reference: https://api.rugcheck.xyz/swagger/index.html

``GET /tokens/{mint}/report`` is public and returns the provider's view of
a token: reported creator, the creator's other tokens, price and supply,
top holders and risk flags.  The report is normalised into ``TokenReport``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..models import CreatedToken, TokenReport
from ..utils import parse_datetime
from ._http import async_http_get
from .errors import DataSourceUnavailable

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: Any) -> Optional[int]:
    number = _to_float(value)
    return int(number) if number is not None else None


class RugCheckClient:
    """Async wrapper around the RugCheck REST API."""

    def __init__(self, base_url: str, timeout: int = 15) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    async def get_token_report(self, mint: str) -> Optional[TokenReport]:
        """Return the normalised report for *mint*, or ``None`` if unavailable."""
        client = await self._get_client()
        try:
            data = await async_http_get(
                client, f"{self._base_url}/tokens/{mint}/report", label="RugCheck"
            )
        except DataSourceUnavailable as exc:
            logger.warning("RugCheck report for %s unavailable: %s", mint, exc)
            return None
        if not isinstance(data, dict):
            return None
        return self.parse_report(mint, data)

    # ------------------------------------------------------------------
    # Conversion helpers (sync – pure data transforms)
    # ------------------------------------------------------------------

    @staticmethod
    def parse_report(mint: str, data: dict[str, Any]) -> TokenReport:
        token = data.get("token") or {}
        meta = data.get("tokenMeta") or {}
        ext_meta = (data.get("token_extensions") or {}).get("tokenMetadata") or {}

        creator_tokens: list[CreatedToken] = []
        for entry in data.get("creatorTokens") or []:
            if not isinstance(entry, dict) or not entry.get("mint"):
                continue
            creator_tokens.append(
                CreatedToken(
                    mint=entry["mint"],
                    created_at=parse_datetime(entry.get("createdAt")),
                    market_cap=_to_float(entry.get("marketCap")),
                )
            )

        return TokenReport(
            mint=data.get("mint") or mint,
            creator=data.get("creator") or "",
            creator_tokens=creator_tokens,
            price=_to_float(data.get("price")),
            supply=_to_float(token.get("supply")),
            decimals=_to_int(token.get("decimals")),
            top_holders=[h for h in data.get("topHolders") or [] if isinstance(h, dict)],
            total_holders=_to_int(data.get("totalHolders")),
            risks=[r for r in data.get("risks") or [] if isinstance(r, dict)],
            rugged=bool(data.get("rugged")),
            score_normalised=_to_float(data.get("score_normalised")),
            detected_at=parse_datetime(data.get("detectedAt")),
            name=meta.get("name") or ext_meta.get("name") or None,
            symbol=meta.get("symbol") or ext_meta.get("symbol") or None,
        )
