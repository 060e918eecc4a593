"""
FairScale reputation API client.

``GET /score?wallet=<address>[&twitter=<handle>]`` with a ``fairkey``
header returns a 0-100 ``fairscore`` plus badges and feature breakdowns.
The provider's own tier labels are ignored; tiers come from ``scoring``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..models import FairScore
from ..scoring import rescale_base_score, tier_from_score
from ._http import async_http_get
from .errors import DataSourceUnavailable

logger = logging.getLogger(__name__)


class FairScaleClient:
    """Async wrapper around the FairScale score endpoint."""

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
                headers={"fairkey": self._api_key},
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def get_score(
        self, wallet: str, twitter_handle: Optional[str] = None
    ) -> Optional[FairScore]:
        """Return the wallet's score on the 0-1000 scale, or ``None``."""
        if not self.configured:
            logger.debug("FairScale API key not configured – skipping score")
            return None

        params: dict[str, Any] = {"wallet": wallet}
        if twitter_handle:
            params["twitter"] = twitter_handle
        client = await self._get_client()
        try:
            data = await async_http_get(
                client, f"{self._base_url}/score", params=params, label="FairScale"
            )
        except DataSourceUnavailable as exc:
            logger.warning("FairScale score for %s unavailable: %s", wallet, exc)
            return None
        if not isinstance(data, dict):
            return None

        score = rescale_base_score(data.get("fairscore"))
        return FairScore(
            score=score,
            tier=tier_from_score(score),
            fairscore_base=data.get("fairscore_base"),
            social_score=data.get("social_score"),
            badges=data.get("badges") or [],
            actions=data.get("actions") or [],
            features=data.get("features") or {},
            timestamp=str(data["timestamp"]) if data.get("timestamp") is not None else None,
        )
