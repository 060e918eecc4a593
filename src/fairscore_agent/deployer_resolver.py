"""
Real-deployer resolution.

Token report providers name a "creator" for every mint, but launch
platforms such as pump.fun create tokens through a shared mint authority,
so the reported creator is often the platform and not the person who
launched the token.  This module recovers the human wallet with a layered
fallback, strongest evidence first:

  1. ``direct-report``          – the reported creator already looks human
                                   and the mint is not platform-issued.
  2. ``indexer-feepayer``       – fee payer of the mint's oldest enriched tx.
  3. ``rpc-signer``             – first human signer of the oldest raw tx.
  4. ``rpc-inner-instruction``  – source of a CPI system transfer in it.
  5. ``rpc-log-parse``          – ``creator: <addr>`` in its program logs.
  6. ``fallback-to-reported``   – nothing better found.

Resolution never raises.  Gateway failures, empty histories and malformed
payloads all fall through to the next strategy and finally to the
reported creator.  Strategies run one after another: later ones are only
worth their round-trips when earlier ones came back empty.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from config import DEPLOYER_INDEXER_TX_LIMIT
from .address_classifier import AddressClassifier, get_default_classifier
from .data_sources._clients import get_gateway
from .data_sources.errors import DataSourceUnavailable
from .models import ResolvedDeployer
from .signatures import find_oldest_signature
from .tx_parsing import account_keys, inner_transfers, log_creators

logger = logging.getLogger(__name__)


async def resolve_deployer(
    token_mint: str,
    reported_creator: Optional[str],
    *,
    gateway: Any = None,
    classifier: Optional[AddressClassifier] = None,
) -> str:
    """Return the best-guess human deployer address for *token_mint*."""
    resolved = await resolve_deployer_detailed(
        token_mint, reported_creator, gateway=gateway, classifier=classifier
    )
    return resolved.address


async def resolve_deployer_detailed(
    token_mint: str,
    reported_creator: Optional[str],
    *,
    gateway: Any = None,
    classifier: Optional[AddressClassifier] = None,
) -> ResolvedDeployer:
    """Like ``resolve_deployer`` but also reports which strategy won."""
    classifier = classifier or get_default_classifier()
    reported = reported_creator or ""

    # Fast path: no network at all
    if not classifier.is_known_non_user(reported) and not classifier.is_platform_mint(token_mint):
        return ResolvedDeployer(address=reported, source="direct-report")

    gateway = gateway if gateway is not None else get_gateway()

    found: Optional[ResolvedDeployer] = None
    for strategy in (_from_indexer, _from_rpc):
        try:
            found = await strategy(gateway, token_mint, classifier)
        except Exception:
            logger.exception(
                "Deployer strategy %s crashed for %s", strategy.__name__, token_mint
            )
            found = None
        if found is not None:
            break

    if found is not None:
        logger.info(
            "Deployer for %s resolved to %s via %s", token_mint, found.address, found.source
        )
        return found

    logger.info(
        "Deployer for %s not resolved on-chain – keeping reported creator %s",
        token_mint, reported or "<none>",
    )
    return ResolvedDeployer(address=reported, source="fallback-to-reported")


async def _from_indexer(
    gateway: Any, token_mint: str, classifier: AddressClassifier
) -> Optional[ResolvedDeployer]:
    try:
        txs = await gateway.get_transactions_for_address(
            token_mint, limit=DEPLOYER_INDEXER_TX_LIMIT
        )
    except DataSourceUnavailable as exc:
        logger.debug("Indexer lookup for %s unavailable: %s", token_mint, exc)
        return None
    if not txs:
        return None
    if len(txs) >= DEPLOYER_INDEXER_TX_LIMIT:
        # A full page is only the newest slice; creation lies further back
        logger.debug(
            "Indexer history for %s truncated at %d txs", token_mint, len(txs)
        )
        return None

    dated = [
        tx for tx in txs
        if isinstance(tx, dict) and _is_timestamp(tx.get("timestamp"))
    ]
    if not dated:
        return None
    # Indexers return newest first; do not rely on it
    oldest = min(dated, key=lambda tx: tx["timestamp"])
    payer = oldest.get("feePayer")
    if not isinstance(payer, str):
        return None
    if classifier.is_known_non_user(payer):
        logger.debug("Oldest indexed tx of %s paid by non-user %s", token_mint, payer)
        return None
    return ResolvedDeployer(address=payer, source="indexer-feepayer")


async def _from_rpc(
    gateway: Any, token_mint: str, classifier: AddressClassifier
) -> Optional[ResolvedDeployer]:
    try:
        oldest = await find_oldest_signature(gateway, token_mint)
        if oldest is None or not oldest.get("signature"):
            return None
        tx = await gateway.get_transaction(oldest["signature"])
    except DataSourceUnavailable as exc:
        logger.debug("RPC lookup for %s unavailable: %s", token_mint, exc)
        return None
    if not tx:
        return None

    for key in account_keys(tx):
        if key.signer and not classifier.is_known_non_user(key.pubkey):
            return ResolvedDeployer(address=key.pubkey, source="rpc-signer")

    for transfer in inner_transfers(tx):
        if not classifier.is_known_non_user(transfer.source):
            return ResolvedDeployer(address=transfer.source, source="rpc-inner-instruction")

    for creator in log_creators(tx):
        if not classifier.is_known_non_user(creator):
            return ResolvedDeployer(address=creator, source="rpc-log-parse")

    return None


def _is_timestamp(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
