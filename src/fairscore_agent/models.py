"""
Pydantic models used throughout the FairScore deployer check.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# How the deployer address was obtained, strongest first
DeployerSource = Literal[
    "direct-report",
    "indexer-feepayer",
    "rpc-signer",
    "rpc-inner-instruction",
    "rpc-log-parse",
    "fallback-to-reported",
]


# ---------------------------------------------------------------------------
# Core results
# ---------------------------------------------------------------------------
class ResolvedDeployer(BaseModel):
    """Best-guess human deployer for a token mint."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="Deployer wallet (may be the reported creator)")
    source: DeployerSource = Field(..., description="Strategy that produced the address")


class ProvenanceRecord(BaseModel):
    """Age and funding source of a wallet, derived from its oldest activity."""

    model_config = ConfigDict(frozen=True)

    wallet_address: str
    age_in_days: Optional[int] = Field(None, ge=0, description="Whole days since first activity")
    funded_by: Optional[str] = Field(None, description="Address that first funded the wallet")
    funding_tx: Optional[str] = Field(None, description="Signature of the funding transaction")


class CreatedToken(BaseModel):
    """A token minted by a deployer wallet."""

    model_config = ConfigDict(frozen=True)

    mint: str
    created_at: Optional[datetime] = None
    market_cap: Optional[float] = None


# ---------------------------------------------------------------------------
# Provider views
# ---------------------------------------------------------------------------
class TokenReport(BaseModel):
    """Normalised token report from the risk provider."""

    mint: str
    creator: str = ""
    creator_tokens: list[CreatedToken] = Field(default_factory=list)
    price: Optional[float] = None
    supply: Optional[float] = None
    decimals: Optional[int] = None
    top_holders: list[dict[str, Any]] = Field(default_factory=list)
    total_holders: Optional[int] = None
    risks: list[dict[str, Any]] = Field(default_factory=list)
    rugged: bool = False
    score_normalised: Optional[float] = None
    detected_at: Optional[datetime] = None
    name: Optional[str] = None
    symbol: Optional[str] = None


class FairScore(BaseModel):
    """Reputation score for a wallet on the 0-1000 display scale."""

    score: int = Field(..., ge=0, le=1000)
    tier: str
    fairscore_base: Optional[float] = None
    social_score: Optional[float] = None
    badges: list[Any] = Field(default_factory=list)
    actions: list[Any] = Field(default_factory=list)
    features: dict[str, Any] = Field(default_factory=dict)
    timestamp: Optional[str] = None


class WalletSnapshot(BaseModel):
    """Portfolio value and activity for a wallet."""

    net_worth_usd: Optional[float] = None
    sol_balance: Optional[float] = None
    token_count: Optional[int] = None
    tx_count: Optional[int] = None
    last_active_time: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Check result  (the main output)
# ---------------------------------------------------------------------------
class CheckResult(BaseModel):
    """Full result of one deployer check, assembled by ``check_token``."""

    model_config = ConfigDict(frozen=True)

    token_address: str = Field(..., description="The checked mint address")
    reported_creator: str = Field("", description="Creator as reported by the token provider")
    deployer_wallet: str = Field(..., description="Resolved deployer wallet")
    deployer_source: DeployerSource = "fallback-to-reported"
    twitter_handle: Optional[str] = None
    fair_score: int = Field(..., ge=0, le=1000)
    tier: str
    roast: str = ""
    tokens_launched: int = Field(1, ge=1)
    deployer_age: Optional[int] = Field(None, ge=0)
    funded_by: Optional[str] = None
    funding_tx: Optional[str] = None
    top_market_cap: Optional[float] = None
    current_market_cap: Optional[float] = None
    top10_held_pct: Optional[float] = None
    total_holders: Optional[int] = None
    token_name: Optional[str] = None
    token_symbol: Optional[str] = None
    creator_tokens: list[CreatedToken] = Field(default_factory=list)
    risks: list[dict[str, Any]] = Field(default_factory=list)
    rugged: bool = False
    deployer_net_worth: Optional[float] = None
    deployer_sol_balance: Optional[float] = None
    deployer_token_count: Optional[int] = None
    checked_at: datetime


# ---------------------------------------------------------------------------
# Recent checks feed
# ---------------------------------------------------------------------------
class RecentCheck(BaseModel):
    """One entry in the shared recent-checks feed.

    Field names follow the camelCase used by the web front-end, which posts
    and reads these entries as-is.
    """

    model_config = ConfigDict(extra="allow")

    tokenAddress: str
    id: str = ""
    deployerWallet: Optional[str] = None
    tokenName: Optional[str] = None
    fairScore: Optional[int] = None
    tier: Optional[str] = None
    twitterHandle: Optional[str] = None
    topMarketCap: Optional[float] = None
    currentMarketCap: Optional[float] = None
    top10HeldPct: Optional[float] = None
    totalHolders: Optional[int] = None
    tokensLaunched: Optional[int] = None
    checkedAt: Optional[int] = None
    serverCheckedAt: Optional[int] = None

    @classmethod
    def from_result(cls, result: CheckResult) -> "RecentCheck":
        return cls(
            tokenAddress=result.token_address,
            id=result.token_address,
            deployerWallet=result.deployer_wallet,
            tokenName=result.token_name,
            fairScore=result.fair_score,
            tier=result.tier,
            twitterHandle=result.twitter_handle,
            topMarketCap=result.top_market_cap,
            currentMarketCap=result.current_market_cap,
            top10HeldPct=result.top10_held_pct,
            totalHolders=result.total_holders,
            tokensLaunched=result.tokens_launched,
            checkedAt=int(result.checked_at.timestamp() * 1000),
        )
