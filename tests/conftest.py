"""Shared test fixtures for the FairScore deployer check test suite."""

from __future__ import annotations

import sys
import os

# Ensure src/ is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from datetime import datetime, timezone
from typing import Any, Optional

import pytest

from fairscore_agent.data_sources.errors import GatewayUnavailable

# Addresses used across tests (base58-shaped, not real accounts)
HUMAN = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
FUNDER = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"
OTHER = "5Q544fKrFoe6tsEbD7S8EmxGTJYAKtTVhAW5Q5pge4j1"
PUMP_MINT = "2eXamy7t3kvKhfV6aJ6Uwe3eh8cuREFcTKs1mFKZpump"
PLAIN_MINT = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"
PUMP_AUTHORITY = "TSLvdd1pWpHVjahSpsvCXUbgwsL3JAcvokwaKt1eokM"
SYSTEM = "11111111111111111111111111111111"


class StubGateway:
    """Scripted stand-in for ``ChainDataGateway`` that records every call.

    ``indexer=None`` behaves like a gateway with no indexer configured.
    ``signatures`` maps an address to its full history, newest first, and
    is served page by page honouring ``limit`` / ``before``.
    """

    def __init__(
        self,
        *,
        indexer: Optional[dict[str, list[dict[str, Any]]]] = None,
        signatures: Optional[dict[str, list[dict[str, Any]]]] = None,
        transactions: Optional[dict[str, dict[str, Any]]] = None,
        rpc_down: bool = False,
    ) -> None:
        self.indexer = indexer
        self.signatures = signatures or {}
        self.transactions = transactions or {}
        self.rpc_down = rpc_down
        self.calls: list[tuple] = []

    @property
    def has_indexer(self) -> bool:
        return self.indexer is not None

    def count(self, method: str) -> int:
        return sum(1 for c in self.calls if c[0] == method)

    async def get_transactions_for_address(self, address: str, *, limit: int):
        self.calls.append(("getTransactionsForAddress", address, limit))
        if self.indexer is None:
            raise GatewayUnavailable("getTransactionsForAddress", 0)
        return list(self.indexer.get(address, []))[:limit]

    async def get_signatures_for_address(self, address: str, *, limit: int = 1000, before=None):
        self.calls.append(("getSignaturesForAddress", address, before))
        if self.rpc_down:
            raise GatewayUnavailable("getSignaturesForAddress", 2)
        history = self.signatures.get(address, [])
        start = 0
        if before is not None:
            start = next(
                (i + 1 for i, s in enumerate(history) if s["signature"] == before),
                len(history),
            )
        return history[start:start + limit]

    async def get_transaction(self, signature: str):
        self.calls.append(("getTransaction", signature))
        if self.rpc_down:
            raise GatewayUnavailable("getTransaction", 2)
        return self.transactions.get(signature)


def sig(signature: str, block_time: Optional[int] = None) -> dict[str, Any]:
    return {"signature": signature, "blockTime": block_time}


def parsed_tx(
    keys: list[tuple[str, bool]],
    *,
    instructions: Optional[list[dict]] = None,
    inner: Optional[list[dict]] = None,
    logs: Optional[list[str]] = None,
    pre: Optional[list[int]] = None,
    post: Optional[list[int]] = None,
) -> dict[str, Any]:
    """Build a minimal ``jsonParsed`` getTransaction result."""
    meta: dict[str, Any] = {
        "innerInstructions": [{"index": 0, "instructions": inner or []}],
        "logMessages": logs or [],
    }
    if pre is not None:
        meta["preBalances"] = pre
        meta["postBalances"] = post
    return {
        "transaction": {
            "message": {
                "accountKeys": [
                    {"pubkey": k, "signer": s, "writable": True} for k, s in keys
                ],
                "instructions": instructions or [],
            }
        },
        "meta": meta,
    }


def system_transfer(source: str, destination: str, lamports: int) -> dict[str, Any]:
    return {
        "program": "system",
        "programId": SYSTEM,
        "parsed": {
            "type": "transfer",
            "info": {"source": source, "destination": destination, "lamports": lamports},
        },
    }


@pytest.fixture
def make_gateway():
    return StubGateway


@pytest.fixture
def fixed_now():
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
