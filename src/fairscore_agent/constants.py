"""
Centralized constants for the FairScore deployer check.

This file contains:
- Solana program addresses (immutable protocol constants)
- Launch-platform authorities that stand in for the real deployer
- Shared thresholds that MUST stay synchronized across modules

Import from this module rather than duplicating values across services.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Solana Program Addresses (immutable, part of the Solana protocol)
# ---------------------------------------------------------------------------

# Core system programs
SYSTEM_PROGRAM = "11111111111111111111111111111111"
TOKEN_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"
ATA_PROGRAM = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
BPF_LOADER = "BPFLoaderUpgradeab1e11111111111111111111111"
COMPUTE_BUDGET = "ComputeBudget111111111111111111111111111111"
MEMO_PROGRAM = "MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr"

# Sysvars
SYSVAR_CLOCK = "SysvarC1ock11111111111111111111111111111111"
SYSVAR_RENT = "SysvarRent111111111111111111111111111111111"
SYSVAR_INSTRUCTIONS = "Sysvar1nstructions1111111111111111111111111"
SYSVAR_RECENT_BLOCKHASHES = "SysvarRecentB1ockHashes11111111111111111111"

# Wrapped SOL mint
WSOL_MINT = "So11111111111111111111111111111111111111112"

# Metaplex
METAPLEX_METADATA = "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"

# ---------------------------------------------------------------------------
# Launch platforms
# ---------------------------------------------------------------------------

PUMPFUN_PROGRAM = "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBymtzbm"
PUMPFUN_MINT_AUTHORITY = "TSLvdd1pWpHVjahSpsvCXUbgwsL3JAcvokwaKt1eokM"
PUMPFUN_FEE_ACCOUNT = "CebN5WGQ4jvEPvsVU4EoHEpgzq1VV7AbicfhtW4xC9iM"
MOONSHOT_PROGRAM = "MoonCVVNZFSYkqNXP6bxHLPL6QQJiMEfzPWlVMMf9Ly"
MOONSHOT_AUTHORITY = "Ce6TQqeHC9p8KetsN6JsjHK7UTZk7nasjjnr7XxXp9F1"
LETSBONK_PROGRAM = "4wTV81rvZBKW8vFJX9PMwn5n46sYr6HfkWMqJjpPbZ6M"
BELIEVE_LAUNCHPAD = "DEXYosS6oEGvk8uCDayvwEZz4qEyDJRf9nFgYCaqPMTm"

# Suffix pump.fun vanity-grinds onto every mint it creates
PLATFORM_MINT_SUFFIXES: tuple[str, ...] = ("pump",)

# Enhanced-transaction ``type`` tags that mark a token creation
CREATE_TX_TYPES: frozenset[str] = frozenset({"CREATE"})

# ---------------------------------------------------------------------------
# SOL conversion
# ---------------------------------------------------------------------------
LAMPORTS_PER_SOL: int = 1_000_000_000
SECONDS_PER_DAY: int = 86_400
