"""
Chain data gateway: one access point for raw on-chain history.

Wraps an ordered list of Solana RPC endpoints and an optional ordered list
of indexers.  Each logical call walks its list once, front to back, and
returns the first successful answer.  A failed endpoint is never retried
within the same call, nothing is cached and there is no backoff.  When
every endpoint fails the gateway raises ``GatewayUnavailable``; callers in
the core treat that as "move to the next strategy".
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional, Sequence, TypeVar

from .errors import DataSourceUnavailable, GatewayUnavailable
from .helius import HeliusClient
from .solana_rpc import SolanaRpcClient

logger = logging.getLogger(__name__)

T = TypeVar("T")
C = TypeVar("C")


class ChainDataGateway:
    """Ordered-endpoint facade over RPC nodes and enriched indexers."""

    def __init__(
        self,
        rpc_clients: Sequence[SolanaRpcClient],
        indexer_clients: Sequence[HeliusClient] = (),
    ) -> None:
        self._rpc_clients = list(rpc_clients)
        self._indexer_clients = list(indexer_clients)
        self.calls = 0

    @property
    def has_indexer(self) -> bool:
        return bool(self._indexer_clients)

    @property
    def rpc_endpoint_count(self) -> int:
        return len(self._rpc_clients)

    @property
    def indexer_count(self) -> int:
        return len(self._indexer_clients)

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
        """One page of ``{signature, blockTime, ...}`` records, newest first."""
        return await self._first_success(
            "getSignaturesForAddress",
            self._rpc_clients,
            lambda c: c.get_signatures_for_address(address, limit=limit, before=before),
        )

    async def get_transaction(self, signature: str) -> Optional[dict[str, Any]]:
        """Full parsed transaction, or ``None`` if no endpoint knows it."""
        return await self._first_success(
            "getTransaction",
            self._rpc_clients,
            lambda c: c.get_transaction(signature),
        )

    async def get_transactions_for_address(
        self, address: str, *, limit: int
    ) -> list[dict[str, Any]]:
        """Up to *limit* enriched transactions, newest first.

        Raises ``GatewayUnavailable`` immediately when no indexer is
        configured.
        """
        return await self._first_success(
            "getTransactionsForAddress",
            self._indexer_clients,
            lambda c: c.get_transactions(address, limit=limit),
        )

    async def close(self) -> None:
        for client in (*self._rpc_clients, *self._indexer_clients):
            await client.close()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _first_success(
        self,
        call: str,
        clients: Sequence[C],
        fn: Callable[[C], Awaitable[T]],
    ) -> T:
        self.calls += 1
        attempted = 0
        for client in clients:
            attempted += 1
            try:
                return await fn(client)
            except DataSourceUnavailable as exc:
                logger.debug(
                    "%s failed on %s: %s – trying next endpoint",
                    call, getattr(client, "name", "?"), exc,
                )
        if attempted:
            logger.warning("%s: all %d endpoint(s) failed", call, attempted)
        raise GatewayUnavailable(call, attempted)
