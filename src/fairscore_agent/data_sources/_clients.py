"""
Singleton client management for the FairScore deployer check.

Provides lazy-initialised clients for the chain data gateway (Solana RPC
endpoints + Helius indexer), RugCheck, FairScale and Birdeye, plus the
recent-checks feed backend.

``init_clients`` / ``close_clients`` should be called at app startup/shutdown.
"""

from __future__ import annotations

import logging
from typing import Optional

from config import (
    BIRDEYE_API_KEY,
    BIRDEYE_BASE_URL,
    FAIRSCALE_API_KEY,
    FAIRSCALE_BASE_URL,
    HELIUS_API_BASE_URL,
    HELIUS_API_KEY,
    INDEXER_PAGE_SIZE,
    RECENT_CHECKS_BACKEND,
    RECENT_CHECKS_MAX,
    RECENT_CHECKS_SQLITE_PATH,
    REQUEST_TIMEOUT,
    RUGCHECK_BASE_URL,
    SOLANA_RPC_ENDPOINTS,
)
from ..recent_checks import RecentChecksStore, SQLiteRecentChecksStore
from .birdeye import BirdeyeClient
from .fairscale import FairScaleClient
from .gateway import ChainDataGateway
from .helius import HeliusClient
from .rugcheck import RugCheckClient
from .solana_rpc import SolanaRpcClient

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Module-level singletons (created once, reused)
# ---------------------------------------------------------------------------
_gateway: Optional[ChainDataGateway] = None
_rugcheck_client: Optional[RugCheckClient] = None
_fairscale_client: Optional[FairScaleClient] = None
_birdeye_client: Optional[BirdeyeClient] = None
_recent_checks: Optional[RecentChecksStore] = None


def get_gateway() -> ChainDataGateway:
    global _gateway
    if _gateway is None:
        rpc_clients = [
            SolanaRpcClient(endpoint=url, timeout=REQUEST_TIMEOUT)
            for url in SOLANA_RPC_ENDPOINTS
        ]
        indexer_clients = []
        if HELIUS_API_KEY:
            indexer_clients.append(
                HeliusClient(
                    api_key=HELIUS_API_KEY,
                    base_url=HELIUS_API_BASE_URL,
                    timeout=REQUEST_TIMEOUT,
                    page_size=INDEXER_PAGE_SIZE,
                )
            )
        else:
            logger.info("HELIUS_API_KEY not set – indexer path disabled, RPC only")
        _gateway = ChainDataGateway(rpc_clients, indexer_clients)
    return _gateway


def get_rugcheck_client() -> RugCheckClient:
    global _rugcheck_client
    if _rugcheck_client is None:
        _rugcheck_client = RugCheckClient(base_url=RUGCHECK_BASE_URL, timeout=REQUEST_TIMEOUT)
    return _rugcheck_client


def get_fairscale_client() -> FairScaleClient:
    global _fairscale_client
    if _fairscale_client is None:
        _fairscale_client = FairScaleClient(
            base_url=FAIRSCALE_BASE_URL, api_key=FAIRSCALE_API_KEY, timeout=REQUEST_TIMEOUT
        )
    return _fairscale_client


def get_birdeye_client() -> BirdeyeClient:
    global _birdeye_client
    if _birdeye_client is None:
        _birdeye_client = BirdeyeClient(
            base_url=BIRDEYE_BASE_URL, api_key=BIRDEYE_API_KEY, timeout=REQUEST_TIMEOUT
        )
    return _birdeye_client


def get_recent_checks() -> RecentChecksStore:
    global _recent_checks
    if _recent_checks is None:
        if RECENT_CHECKS_BACKEND == "sqlite":
            _recent_checks = SQLiteRecentChecksStore(
                db_path=RECENT_CHECKS_SQLITE_PATH, max_entries=RECENT_CHECKS_MAX
            )
        else:
            _recent_checks = RecentChecksStore(max_entries=RECENT_CHECKS_MAX)
    return _recent_checks


async def init_clients() -> None:
    """Eagerly create the singleton clients (called at startup)."""
    get_gateway()
    get_rugcheck_client()
    get_fairscale_client()
    get_birdeye_client()
    get_recent_checks()


async def close_clients() -> None:
    """Close singleton clients gracefully (called at shutdown)."""
    global _gateway, _rugcheck_client, _fairscale_client, _birdeye_client, _recent_checks
    if _gateway is not None:
        await _gateway.close()
        _gateway = None
    if _rugcheck_client is not None:
        await _rugcheck_client.close()
        _rugcheck_client = None
    if _fairscale_client is not None:
        await _fairscale_client.close()
        _fairscale_client = None
    if _birdeye_client is not None:
        await _birdeye_client.close()
        _birdeye_client = None
    if _recent_checks is not None:
        await _recent_checks.close()
        _recent_checks = None
