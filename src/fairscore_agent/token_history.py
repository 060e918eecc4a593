"""
Other tokens launched by a deployer.

Scans the deployer's recent enriched transactions for token-creation
events that the deployer paid for.  Only used when the token report
provider did not already list the creator's tokens.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from config import TOKEN_HISTORY_TX_LIMIT
from .address_classifier import is_known_non_user_address
from .constants import CREATE_TX_TYPES
from .data_sources._clients import get_gateway
from .models import CreatedToken
from .utils import parse_datetime

logger = logging.getLogger(__name__)


async def list_other_tokens(
    deployer_address: str,
    exclude_mint: Optional[str],
    *,
    gateway: Any = None,
    limit: int = TOKEN_HISTORY_TX_LIMIT,
) -> list[CreatedToken]:
    """Return tokens created by *deployer_address*, excluding *exclude_mint*.

    Order follows discovery (newest transaction first).  Any failure yields
    an empty list.
    """
    if not deployer_address:
        return []
    gateway = gateway if gateway is not None else get_gateway()

    try:
        txs = await gateway.get_transactions_for_address(deployer_address, limit=limit)
    except Exception as exc:
        logger.debug("Token history for %s unavailable: %s", deployer_address, exc)
        return []

    found: list[CreatedToken] = []
    for tx in txs if isinstance(txs, list) else []:
        found.extend(_created_tokens(tx, deployer_address))

    tokens = merge_created_tokens(found)
    if exclude_mint:
        excluded = exclude_mint.lower()
        tokens = [t for t in tokens if t.mint.lower() != excluded]
    logger.debug("Deployer %s: %d other token(s) found", deployer_address, len(tokens))
    return tokens


def _created_tokens(tx: Any, deployer_address: str) -> list[CreatedToken]:
    """Mints *deployer_address* launched in one enriched tx; malformed parts are skipped."""
    if not isinstance(tx, dict):
        return []
    tx_type = tx.get("type")
    if not isinstance(tx_type, str) or tx_type not in CREATE_TX_TYPES:
        return []
    if tx.get("feePayer") != deployer_address:
        return []
    transfers = tx.get("tokenTransfers")
    if not isinstance(transfers, list):
        return []

    created_at = parse_datetime(tx.get("timestamp"))
    tokens = []
    for transfer in transfers:
        mint = transfer.get("mint") if isinstance(transfer, dict) else None
        # wrapped SOL from an initial buy is not a launch
        if isinstance(mint, str) and mint and not is_known_non_user_address(mint):
            tokens.append(CreatedToken(mint=mint, created_at=created_at))
    return tokens


def merge_created_tokens(*lists: Iterable[CreatedToken]) -> list[CreatedToken]:
    """Concatenate token lists, keeping the first occurrence of each mint.

    Mint comparison is case-insensitive; order of first appearance is kept.
    """
    seen: set[str] = set()
    merged: list[CreatedToken] = []
    for tokens in lists:
        for token in tokens:
            key = token.mint.lower()
            if key in seen:
                continue
            seen.add(key)
            merged.append(token)
    return merged
