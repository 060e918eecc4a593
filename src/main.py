"""
Command line interface for the FairScore deployer check.

Usage::

    python src/main.py --mint <TOKEN_MINT> [--twitter <HANDLE>] [--json]
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import os

# Ensure ``src/`` is on the import path
sys.path.insert(0, os.path.dirname(__file__))

from fairscore_agent.address_classifier import label_or_short
from fairscore_agent.data_sources._clients import close_clients
from fairscore_agent.logging_config import setup_logging
from fairscore_agent.signal_aggregator import (
    CreatorNotFoundError,
    TokenNotFoundError,
    check_token,
)
from fairscore_agent.utils import clean_twitter_handle, is_valid_solana_address


def _fmt_usd(value: float | None) -> str:
    if value is None:
        return "-"
    if value >= 1_000_000:
        return f"${value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"${value / 1_000:.1f}K"
    return f"${value:,.0f}"


async def _run(mint: str, twitter: str | None, as_json: bool) -> int:
    """Async entry point; returns the process exit code."""
    try:
        result = await check_token(mint, twitter)
    except TokenNotFoundError:
        print(f"Token not found: {mint}", file=sys.stderr)
        return 1
    except CreatorNotFoundError:
        print(f"No creator reported for {mint}", file=sys.stderr)
        return 1
    finally:
        await close_clients()

    if as_json:
        print(result.model_dump_json(indent=2))
        return 0

    # Pretty print
    print("=" * 60)
    print("  FairScore Deployer Check")
    print("=" * 60)
    print(f"  Token        : {result.token_name or '?'} ({result.token_symbol or '?'})")
    print(f"  Mint         : {result.token_address}")
    print(f"  Reported by  : {label_or_short(result.reported_creator) if result.reported_creator else '-'}")
    print(f"  Deployer     : {result.deployer_wallet}  [{result.deployer_source}]")
    print(f"  FairScore    : {result.fair_score}/1000  {result.tier}")
    print("-" * 60)
    age = f"{result.deployer_age} days" if result.deployer_age is not None else "-"
    print(f"  Wallet age   : {age}")
    print(f"  Funded by    : {label_or_short(result.funded_by) if result.funded_by else '-'}")
    print(f"  Launched     : {result.tokens_launched} token(s)")
    print(f"  Top mcap     : {_fmt_usd(result.top_market_cap)}")
    print(f"  Current mcap : {_fmt_usd(result.current_market_cap)}")
    if result.top10_held_pct is not None:
        print(f"  Top 10 hold  : {result.top10_held_pct:.1f}%")
    print("-" * 60)
    print(f"  \"{result.roast}\"")
    print("=" * 60)
    return 0


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Find the real deployer of a Solana token and score them"
    )
    parser.add_argument(
        "--mint",
        required=True,
        help="Mint address of the token to check",
    )
    parser.add_argument(
        "--twitter",
        default=None,
        help="Developer Twitter/X handle or profile URL",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Output result as raw JSON",
    )
    args = parser.parse_args()

    if not is_valid_solana_address(args.mint):
        parser.exit(2, f"Invalid mint address: {args.mint}\n")

    setup_logging(stream=sys.stderr)
    code = asyncio.run(_run(args.mint, clean_twitter_handle(args.twitter), args.as_json))
    sys.exit(code)


if __name__ == "__main__":
    main()
