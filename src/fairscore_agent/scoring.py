"""
Score scale and tier table.

The reputation provider returns a 0-100 base score; it is shown on a
0-1000 scale and bucketed into a fixed set of tiers.
"""

from __future__ import annotations

from typing import Optional

DEFAULT_BASE_SCORE = 50.0  # neutral 500 when the provider has no answer
MAX_SCORE = 1000

# (minimum score, tier), highest first
TIER_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (700, "UNICORN"),
    (400, "KINDA OK"),
    (350, "MEH"),
    (200, "RISKY"),
)
LOWEST_TIER = "DANGER"


def rescale_base_score(base: Optional[float]) -> int:
    """Map a 0-100 provider score onto 0-1000, clamped."""
    if base is None:
        base = DEFAULT_BASE_SCORE
    try:
        scaled = round(float(base) * 10)
    except (TypeError, ValueError, OverflowError):
        scaled = round(DEFAULT_BASE_SCORE * 10)
    return max(0, min(MAX_SCORE, scaled))


def tier_from_score(score: int) -> str:
    for minimum, tier in TIER_THRESHOLDS:
        if score >= minimum:
            return tier
    return LOWEST_TIER


DEFAULT_SCORE = rescale_base_score(DEFAULT_BASE_SCORE)
