"""
Settings for the FairScore deployer check, read once from the environment.

Every value has a working default except the provider API keys; without
those the matching provider is skipped (Helius, FairScale, Birdeye,
Anthropic) and the check degrades to the remaining sources.  Numeric
settings are validated and clamped at import so a typo in a deployment
never reaches the resolver as a nonsense page cap.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def _parse_float(name: str, default: str, *, low: float = 0.0, high: float = 1.0) -> float:
    """Parse an env var as a float and validate it within [low, high]."""
    raw = os.getenv(name, default)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.error("Invalid value for %s: %r – using default %s", name, raw, default)
        value = float(default)
    if not (low <= value <= high):
        logger.warning("%s=%.4f is outside [%.1f, %.1f] – clamped", name, value, low, high)
        value = max(low, min(value, high))
    return value


def _parse_int(name: str, default: str, *, minimum: int = 1) -> int:
    """Parse an env var as an int and enforce a minimum."""
    raw = os.getenv(name, default)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.error("Invalid value for %s: %r – using default %s", name, raw, default)
        value = int(default)
    if value < minimum:
        logger.warning("%s=%d is below minimum %d – clamped", name, value, minimum)
        value = minimum
    return value


def _parse_list(name: str, default: str) -> list[str]:
    """Parse a comma-separated env var, dropping blanks and duplicates."""
    raw = os.getenv(name, default)
    items: list[str] = []
    for part in raw.split(","):
        part = part.strip()
        if part and part not in items:
            items.append(part)
    if not items:
        logger.error("%s is empty – using default %s", name, default)
        items = [p.strip() for p in default.split(",") if p.strip()]
    return items


# ---------------------------------------------------------------------------
# Solana RPC  (ordered – first endpoint is tried first)
# ---------------------------------------------------------------------------
SOLANA_RPC_ENDPOINTS: list[str] = _parse_list(
    "SOLANA_RPC_ENDPOINTS",
    "https://api.mainnet-beta.solana.com",
)

# ---------------------------------------------------------------------------
# Helius enhanced-transactions indexer (optional – enables the indexer path)
# ---------------------------------------------------------------------------
HELIUS_API_KEY: str = os.getenv("HELIUS_API_KEY", "")
HELIUS_API_BASE_URL: str = os.getenv("HELIUS_API_BASE_URL", "https://api.helius.xyz")

# When a Helius key is present its RPC endpoint is preferred over the public one
if HELIUS_API_KEY and os.getenv("HELIUS_RPC_PREFERRED", "1") == "1":
    SOLANA_RPC_ENDPOINTS.insert(
        0, f"https://mainnet.helius-rpc.com/?api-key={HELIUS_API_KEY}"
    )

# ---------------------------------------------------------------------------
# Third-party signal providers
# ---------------------------------------------------------------------------
RUGCHECK_BASE_URL: str = os.getenv("RUGCHECK_BASE_URL", "https://api.rugcheck.xyz/v1")

FAIRSCALE_BASE_URL: str = os.getenv("FAIRSCALE_BASE_URL", "https://api.fairscale.xyz")
FAIRSCALE_API_KEY: str = os.getenv("FAIRSCALE_API_KEY", "")

BIRDEYE_BASE_URL: str = os.getenv("BIRDEYE_BASE_URL", "https://public-api.birdeye.so")
BIRDEYE_API_KEY: str = os.getenv("BIRDEYE_API_KEY", "")

# ---------------------------------------------------------------------------
# Roast line (language model)
# ---------------------------------------------------------------------------
ANTHROPIC_API_KEY: str = os.getenv("ANTHROPIC_API_KEY", "")
ROAST_MODEL: str = os.getenv("ROAST_MODEL", "claude-haiku-4-5-20251001")
ROAST_TIMEOUT_SECONDS: float = _parse_float(
    "ROAST_TIMEOUT_SECONDS", "15", low=1.0, high=120.0
)

# ---------------------------------------------------------------------------
# Pagination caps
# ---------------------------------------------------------------------------
SIGNATURE_PAGE_SIZE: int = _parse_int("SIGNATURE_PAGE_SIZE", "1000", minimum=1)
SIGNATURE_PAGE_CAP: int = _parse_int("SIGNATURE_PAGE_CAP", "20", minimum=1)
INDEXER_PAGE_SIZE: int = _parse_int("INDEXER_PAGE_SIZE", "100", minimum=1)
DEPLOYER_INDEXER_TX_LIMIT: int = _parse_int("DEPLOYER_INDEXER_TX_LIMIT", "100", minimum=1)
PROVENANCE_TX_LIMIT: int = _parse_int("PROVENANCE_TX_LIMIT", "1000", minimum=1)
TOKEN_HISTORY_TX_LIMIT: int = _parse_int("TOKEN_HISTORY_TX_LIMIT", "100", minimum=1)

# ---------------------------------------------------------------------------
# Funding heuristics (lamports)
# ---------------------------------------------------------------------------
DUST_THRESHOLD_LAMPORTS: int = _parse_int(
    "DUST_THRESHOLD_LAMPORTS", "10000000", minimum=0
)  # 0.01 SOL
FEE_TOLERANCE_LAMPORTS: int = _parse_int(
    "FEE_TOLERANCE_LAMPORTS", "100000", minimum=0
)

# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------
REQUEST_TIMEOUT: int = _parse_int("REQUEST_TIMEOUT", "15", minimum=1)
ANALYSIS_TIMEOUT_SECONDS: int = _parse_int("ANALYSIS_TIMEOUT_SECONDS", "60", minimum=5)

# ---------------------------------------------------------------------------
# Recent checks feed
# ---------------------------------------------------------------------------
RECENT_CHECKS_MAX: int = _parse_int("RECENT_CHECKS_MAX", "100", minimum=1)
RECENT_CHECKS_BACKEND: str = os.getenv("RECENT_CHECKS_BACKEND", "memory")  # "memory" or "sqlite"
RECENT_CHECKS_SQLITE_PATH: str = os.getenv("RECENT_CHECKS_SQLITE_PATH", "data/recent_checks.db")

# ---------------------------------------------------------------------------
# Rate limiting (slowapi format, e.g. "10/minute")
# ---------------------------------------------------------------------------
RATE_LIMIT_CHECK: str = os.getenv("RATE_LIMIT_CHECK", "10/minute")
RATE_LIMIT_LOOKUP: str = os.getenv("RATE_LIMIT_LOOKUP", "30/minute")

# ---------------------------------------------------------------------------
# Sentry (error tracking)
# ---------------------------------------------------------------------------
SENTRY_DSN: str = os.getenv("SENTRY_DSN", "")
SENTRY_ENVIRONMENT: str = os.getenv("SENTRY_ENVIRONMENT", "production")
SENTRY_TRACES_SAMPLE_RATE: float = _parse_float(
    "SENTRY_TRACES_SAMPLE_RATE", "0.1", low=0.0, high=1.0
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = os.getenv("LOG_FORMAT", "text")  # "text" or "json"

# ---------------------------------------------------------------------------
# API server
# ---------------------------------------------------------------------------
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = _parse_int("API_PORT", "8000", minimum=1)
CORS_ORIGINS: list[str] = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if o.strip()
]
