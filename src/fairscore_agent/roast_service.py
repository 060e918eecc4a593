"""
One-line "roast" of a deployer, written by Claude.

A single short completion per check.  When no API key is configured, or
the call fails for any reason, a canned line for the tier is used instead
so a check never fails because of the roast.
"""

from __future__ import annotations

import logging
import zlib
from typing import Any, Optional

import anthropic

from config import ANTHROPIC_API_KEY, ROAST_MODEL, ROAST_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

_MAX_TOKENS = 60

FALLBACK_ROASTS: dict[str, tuple[str, ...]] = {
    "UNICORN": (
        "Cleaner than your browser history. Somehow.",
        "Returns the shopping cart every time. Suspiciously wholesome.",
        "Either genuinely legit or playing 4D chess. Respect either way.",
        "Your mom would approve, which is either great or worrying.",
    ),
    "KINDA OK": (
        "Surprisingly not a disaster. Low bar, but cleared.",
        "The Honda Civic of deployers. Boring, probably won't explode.",
        "Passed the vibe check with about one point to spare.",
        "Reliable like a supermarket rotisserie chicken.",
    ),
    "MEH": (
        "Same energy as gas station sushi.",
        "Aggressively, unapologetically mid.",
        "The human equivalent of beige wallpaper.",
        "About as exciting as watching beige paint dry.",
    ),
    "RISKY": (
        "Gives off strong 'trust me bro' energy.",
        "Red flags visible from low orbit.",
        "Would not leave this wallet alone with your drink.",
        "The crypto version of a carnival goldfish.",
    ),
    "DANGER": (
        "Run. Don't walk. Actually, drive.",
        "If this wallet were a restaurant it would have a C health rating.",
        "Makes a lottery scam email look like a blue chip.",
        "Risk profile: 'hold my beer', personified.",
    ),
}

_SYSTEM_PROMPT = """\
Roast this token deployer in ONE funny sentence of at most 15 words.
Use everyday comparisons, at most one crypto term, no slang stacking.
Tone follows the tier: backhanded compliment for UNICORN, light mockery
for KINDA OK and MEH, a savage warning with a joke for RISKY and DANGER.
Reply with the sentence only.\
"""

_client: Optional[anthropic.AsyncAnthropic] = None


def _get_client() -> anthropic.AsyncAnthropic:
    global _client
    if _client is not None:
        return _client
    if not ANTHROPIC_API_KEY:
        raise RuntimeError("ANTHROPIC_API_KEY environment variable not set")
    _client = anthropic.AsyncAnthropic(api_key=ANTHROPIC_API_KEY, timeout=ROAST_TIMEOUT_SECONDS)
    return _client


def fallback_roast(tier: str, seed: str = "") -> str:
    """Pick a canned line for *tier*; the same seed always gets the same line."""
    lines = FALLBACK_ROASTS.get(tier) or FALLBACK_ROASTS["MEH"]
    return lines[zlib.crc32(seed.encode()) % len(lines)]


def _format_usd(value: float) -> str:
    if value >= 1_000_000:
        return f"${value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"${value / 1_000:.1f}K"
    return f"${value:.0f}"


def build_roast_prompt(score: int, tier: str, signals: dict[str, Any]) -> str:
    """Compact factual summary of the check for the model."""
    lines = [f"- FairScore: {score}/1000 ({tier})"]
    age = signals.get("deployer_age")
    if age is not None:
        note = " (fresh burner)" if age < 7 else " (young wallet)" if age < 30 else ""
        lines.append(f"- Wallet age: {age} days{note}")
    launched = signals.get("tokens_launched") or 0
    if launched:
        lines.append(f"- Tokens launched: {launched}{' (serial deployer)' if launched > 5 else ''}")
    mcap = signals.get("current_market_cap")
    if mcap is not None:
        lines.append(f"- Current market cap: {_format_usd(mcap)}")
    holders = signals.get("total_holders")
    if holders is not None:
        lines.append(f"- Holders: {holders:,}")
    top10 = signals.get("top10_held_pct")
    if top10 is not None:
        lines.append(f"- Top 10 wallets hold: {top10:.1f}%")
    risks = [r.get("name") or r.get("description") for r in signals.get("risks") or []]
    risks = [r for r in risks if r][:3]
    if risks:
        lines.append(f"- Red flags: {', '.join(risks)}")
    return "DEPLOYER DATA:\n" + "\n".join(lines)


async def generate_roast(score: int, tier: str, signals: Optional[dict[str, Any]] = None) -> str:
    """Return a one-line roast; never raises."""
    signals = signals or {}
    seed = str(signals.get("deployer_wallet") or signals.get("token_address") or score)
    if not ANTHROPIC_API_KEY:
        logger.debug("No ANTHROPIC_API_KEY – using fallback roast")
        return fallback_roast(tier, seed)

    try:
        client = _get_client()
        message = await client.messages.create(
            model=ROAST_MODEL,
            max_tokens=_MAX_TOKENS,
            system=_SYSTEM_PROMPT,
            messages=[{"role": "user", "content": build_roast_prompt(score, tier, signals)}],
        )
        text = message.content[0].text.strip().strip("\"'").strip()
    except Exception as exc:
        logger.warning("Roast generation failed: %s", exc)
        return fallback_roast(tier, seed)

    return text or fallback_roast(tier, seed)
