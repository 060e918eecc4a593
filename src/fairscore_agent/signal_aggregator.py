"""
Deployer check orchestrator.

``check_token`` turns a token mint into a ``CheckResult``:

1. Fetch the token report (creator, creator's tokens, price, holders).
2. Resolve the human deployer behind the reported creator.
3. Concurrently gather wallet provenance, wallet value and the reputation
   score for that deployer.
4. Collect the deployer's other tokens (from the report, or on-chain for
   the deployer and its funder).
5. Derive market-cap / holder / age metrics, the tier and the roast line.

Provider failures degrade to empty fields.  Only a missing report or a
report without a creator is an error for the caller.
"""

from __future__ import annotations

import asyncio
import logging
import math
from datetime import datetime, timezone
from typing import Any, Optional

from .constants import SECONDS_PER_DAY
from .data_sources._clients import (
    get_birdeye_client,
    get_fairscale_client,
    get_rugcheck_client,
)
from .deployer_resolver import resolve_deployer_detailed
from .logging_config import bind_check
from .models import CheckResult, CreatedToken, FairScore, TokenReport, WalletSnapshot
from .provenance_service import get_provenance
from .roast_service import generate_roast
from .scoring import DEFAULT_SCORE, tier_from_score
from .token_history import list_other_tokens, merge_created_tokens

logger = logging.getLogger(__name__)

_DEFAULT_DECIMALS = 6


class TokenNotFoundError(LookupError):
    """The token report provider has no report for the mint."""


class CreatorNotFoundError(LookupError):
    """The token report exists but names no creator."""


# ---------------------------------------------------------------------------
# Derived metrics (pure)
# ---------------------------------------------------------------------------

def current_market_cap(report: TokenReport) -> Optional[float]:
    """price × supply / 10^decimals; decimals default to 6."""
    if report.price is None or report.supply is None:
        return None
    decimals = report.decimals or _DEFAULT_DECIMALS
    return report.price * (report.supply / 10 ** decimals)


def top_market_cap(tokens: list[CreatedToken]) -> Optional[float]:
    """Largest known market cap; None when no token carries one."""
    caps = [t.market_cap for t in tokens if t.market_cap is not None]
    return max(caps) if caps else None


def top10_held_pct(report: TokenReport) -> Optional[float]:
    if not report.top_holders:
        return None
    total = 0.0
    for holder in report.top_holders[:10]:
        try:
            total += float(holder.get("pct") or 0)
        except (TypeError, ValueError):
            continue
    return total


def token_based_age(
    report: TokenReport, tokens: list[CreatedToken], now: datetime
) -> Optional[int]:
    """Days since the oldest launch known to the report provider."""
    dates = [d for d in (report.detected_at, *(t.created_at for t in tokens)) if d is not None]
    if not dates:
        return None
    oldest = min(dates)
    return max(0, math.floor((now - oldest).total_seconds() / SECONDS_PER_DAY))


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

async def _safe_snapshot(wallet: str) -> WalletSnapshot:
    try:
        return await get_birdeye_client().get_wallet_snapshot(wallet)
    except Exception as exc:
        logger.warning("Wallet snapshot failed for %s: %s", wallet, exc)
        return WalletSnapshot()


async def _safe_score(wallet: str, twitter_handle: Optional[str]) -> Optional[FairScore]:
    try:
        return await get_fairscale_client().get_score(wallet, twitter_handle)
    except Exception as exc:
        logger.warning("FairScale score failed for %s: %s", wallet, exc)
        return None


async def _creator_tokens(
    report: TokenReport, deployer: str, funder: Optional[str]
) -> list[CreatedToken]:
    if report.creator_tokens:
        return merge_created_tokens(report.creator_tokens)
    lookups = [list_other_tokens(deployer, report.mint)]
    if funder and funder != deployer:
        lookups.append(list_other_tokens(funder, report.mint))
    results = await asyncio.gather(*lookups)
    return merge_created_tokens(*results)


async def check_token(token_mint: str, twitter_handle: Optional[str] = None) -> CheckResult:
    """Run a full deployer check for *token_mint*.

    Raises ``TokenNotFoundError`` / ``CreatorNotFoundError``; every other
    failure is absorbed into empty fields.
    """
    with bind_check(token_mint):
        return await _check(token_mint, twitter_handle)


async def _check(token_mint: str, twitter_handle: Optional[str]) -> CheckResult:
    report = await get_rugcheck_client().get_token_report(token_mint)
    if report is None:
        raise TokenNotFoundError(token_mint)
    if not report.creator:
        raise CreatorNotFoundError(token_mint)

    resolved = await resolve_deployer_detailed(token_mint, report.creator)
    deployer = resolved.address

    provenance, snapshot, fair = await asyncio.gather(
        get_provenance(deployer),
        _safe_snapshot(deployer),
        _safe_score(deployer, twitter_handle),
    )

    tokens = await _creator_tokens(report, deployer, provenance.funded_by)

    now = datetime.now(timezone.utc)
    age = token_based_age(report, tokens, now)
    if age is None:
        age = provenance.age_in_days

    score = fair.score if fair is not None else DEFAULT_SCORE
    tier = fair.tier if fair is not None else tier_from_score(score)

    metrics: dict[str, Any] = {
        "token_address": token_mint,
        "deployer_wallet": deployer,
        "deployer_age": age,
        "tokens_launched": len(tokens) + 1,
        "current_market_cap": current_market_cap(report),
        "total_holders": report.total_holders,
        "top10_held_pct": top10_held_pct(report),
        "risks": report.risks,
    }
    roast = await generate_roast(score, tier, metrics)

    result = CheckResult(
        reported_creator=report.creator,
        deployer_source=resolved.source,
        twitter_handle=twitter_handle,
        fair_score=score,
        tier=tier,
        roast=roast,
        funded_by=provenance.funded_by,
        funding_tx=provenance.funding_tx,
        top_market_cap=top_market_cap(tokens),
        token_name=report.name,
        token_symbol=report.symbol,
        creator_tokens=tokens,
        rugged=report.rugged,
        deployer_net_worth=snapshot.net_worth_usd,
        deployer_sol_balance=snapshot.sol_balance,
        deployer_token_count=snapshot.token_count,
        checked_at=now,
        **metrics,
    )
    logger.info(
        "Checked %s: deployer=%s (%s) score=%d tier=%s",
        token_mint, deployer, resolved.source, score, tier,
    )
    return result
