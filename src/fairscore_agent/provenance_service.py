"""
Wallet provenance: how old is a wallet, and who first funded it?

Both answers come from the wallet's oldest reachable activity.  The
enriched indexer is preferred because it returns decoded native transfers
for many transactions in one round-trip; raw RPC is the fallback, where
only the single oldest transaction is inspected and the funder is
reconstructed from its instructions or, failing that, its balance deltas.

Every failure degrades to ``None`` fields; ``get_provenance`` never raises.
"""

from __future__ import annotations

import logging
import math
import time
from datetime import datetime
from typing import Any, Optional, Union

from config import DUST_THRESHOLD_LAMPORTS, FEE_TOLERANCE_LAMPORTS, PROVENANCE_TX_LIMIT
from .constants import SECONDS_PER_DAY
from .data_sources._clients import get_gateway
from .data_sources.errors import DataSourceUnavailable
from .models import ProvenanceRecord
from .signatures import find_oldest_signature
from .tx_parsing import balance_deltas, fee_payer, inner_transfers, top_level_transfers

logger = logging.getLogger(__name__)

Clock = Union[datetime, float, int, None]


def _now_epoch(now: Clock) -> float:
    if now is None:
        return time.time()
    if isinstance(now, datetime):
        return now.timestamp()
    return float(now)


def _age_days(now_ts: float, first_ts: Optional[float]) -> Optional[int]:
    """Whole days between *first_ts* and *now_ts*, never negative."""
    if first_ts is None:
        return None
    return max(0, math.floor((now_ts - first_ts) / SECONDS_PER_DAY))


async def get_provenance(
    wallet_address: str,
    *,
    gateway: Any = None,
    now: Clock = None,
) -> ProvenanceRecord:
    """Return age and funding source for *wallet_address*.

    *now* (datetime or epoch seconds) pins the clock for age computation;
    it defaults to the wall-clock time at call.
    """
    empty = ProvenanceRecord(wallet_address=wallet_address or "")
    if not wallet_address:
        return empty

    now_ts = _now_epoch(now)
    gateway = gateway if gateway is not None else get_gateway()

    for strategy in (_from_indexer, _from_rpc):
        try:
            record = await strategy(gateway, wallet_address, now_ts)
        except Exception:
            logger.exception(
                "Provenance strategy %s crashed for %s", strategy.__name__, wallet_address
            )
            record = None
        if record is not None:
            return record
    return empty


# ---------------------------------------------------------------------------
# Indexer path
# ---------------------------------------------------------------------------

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _funding_transfer(transfer: Any, wallet: str) -> Optional[str]:
    """Sender of *transfer* when it funds *wallet* above dust, else None."""
    if not isinstance(transfer, dict):
        return None
    source = transfer.get("fromUserAccount")
    amount = transfer.get("amount")
    if (
        transfer.get("toUserAccount") == wallet
        and isinstance(source, str)
        and source
        and source != wallet
        and _is_number(amount)
        and amount > DUST_THRESHOLD_LAMPORTS
    ):
        return source
    return None


async def _from_indexer(
    gateway: Any, wallet: str, now_ts: float
) -> Optional[ProvenanceRecord]:
    try:
        txs = await gateway.get_transactions_for_address(wallet, limit=PROVENANCE_TX_LIMIT)
    except DataSourceUnavailable as exc:
        logger.debug("Indexer provenance for %s unavailable: %s", wallet, exc)
        return None
    txs = [
        tx for tx in txs or []
        if isinstance(tx, dict) and _is_number(tx.get("timestamp"))
    ]
    if not txs:
        return None

    txs.sort(key=lambda tx: tx["timestamp"])
    oldest = txs[0]
    age = _age_days(now_ts, oldest["timestamp"])

    for tx in txs:
        transfers = tx.get("nativeTransfers")
        if not isinstance(transfers, list):
            continue
        for transfer in transfers:
            source = _funding_transfer(transfer, wallet)
            if source:
                return ProvenanceRecord(
                    wallet_address=wallet,
                    age_in_days=age,
                    funded_by=source,
                    funding_tx=tx.get("signature"),
                )

    payer = oldest.get("feePayer")
    if isinstance(payer, str) and payer and payer != wallet:
        return ProvenanceRecord(
            wallet_address=wallet,
            age_in_days=age,
            funded_by=payer,
            funding_tx=oldest.get("signature"),
        )
    return ProvenanceRecord(wallet_address=wallet, age_in_days=age)


# ---------------------------------------------------------------------------
# RPC path
# ---------------------------------------------------------------------------

async def _from_rpc(
    gateway: Any, wallet: str, now_ts: float
) -> Optional[ProvenanceRecord]:
    try:
        oldest = await find_oldest_signature(gateway, wallet)
    except DataSourceUnavailable as exc:
        logger.debug("RPC provenance for %s unavailable: %s", wallet, exc)
        return None
    if oldest is None:
        return None

    signature = oldest.get("signature")
    block_time = oldest.get("blockTime")
    age = _age_days(now_ts, block_time) if _is_number(block_time) else None

    tx: Optional[dict[str, Any]] = None
    if signature:
        try:
            tx = await gateway.get_transaction(signature)
        except DataSourceUnavailable as exc:
            logger.debug("Oldest tx %s of %s unavailable: %s", signature, wallet, exc)

    funder = find_funder_in_transaction(tx, wallet) if tx else None
    return ProvenanceRecord(
        wallet_address=wallet,
        age_in_days=age,
        funded_by=funder,
        funding_tx=signature if funder else None,
    )


def find_funder_in_transaction(tx: dict[str, Any], wallet: str) -> Optional[str]:
    """Reconstruct who sent lamports to *wallet* in one parsed transaction.

    Order: top-level system transfers, CPI transfers, balance deltas, then
    the fee payer.  The balance-delta step picks the first account, in
    account-key order, whose loss matches the wallet's gain within
    ``FEE_TOLERANCE_LAMPORTS``; with several plausible senders that choice
    is a heuristic, not proof.
    """
    for transfers in (top_level_transfers(tx), inner_transfers(tx)):
        for transfer in transfers:
            if (
                transfer.destination == wallet
                and transfer.source
                and transfer.source != wallet
                and transfer.lamports > DUST_THRESHOLD_LAMPORTS
            ):
                return transfer.source

    deltas = balance_deltas(tx)
    gained = next((d for addr, d in deltas if addr == wallet), 0)
    if gained > 0:
        for addr, delta in deltas:
            if addr and addr != wallet and delta < 0 and abs(-delta - gained) <= FEE_TOLERANCE_LAMPORTS:
                return addr

    payer = fee_payer(tx)
    if payer and payer != wallet:
        return payer
    return None
