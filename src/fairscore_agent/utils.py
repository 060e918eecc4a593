"""
Shared utilities for the FairScore deployer check.

- ``parse_datetime`` — unified datetime parsing for provider payloads
- ``is_valid_solana_address`` / ``clean_twitter_handle`` — input validation
  applied at the edges (API, CLI) before anything reaches the core
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

# Solana addresses are 32-44 base58 chars (no 0, O, I, l)
BASE58_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")

_TWITTER_URL_RE = re.compile(
    r"(?:https?://)?(?:www\.)?(?:twitter\.com|x\.com)/(@?\w+)", re.IGNORECASE
)
_TWITTER_HANDLE_RE = re.compile(r"^[a-zA-Z0-9_]{1,15}$")


# ---------------------------------------------------------------------------
# Unified datetime parser
# ---------------------------------------------------------------------------

def parse_datetime(value: object) -> Optional[datetime]:
    """Convert a value to a timezone-aware ``datetime`` (UTC).

    Accepted inputs:

    - ``None`` → ``None``
    - ``datetime`` → pass-through, with ``tzinfo`` set to UTC if naïve
    - ``str`` → ISO-format (handles both ``"Z"`` and ``"+00:00"`` suffixes)
    - ``int`` / ``float`` → Unix epoch timestamp in seconds, or milliseconds
      when the value is too large to be seconds
    - Anything else → ``None``
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    if isinstance(value, str):
        try:
            cleaned = value.replace("Z", "+00:00") if value.endswith("Z") else value
            dt = datetime.fromisoformat(cleaned)
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return dt
        except (ValueError, TypeError):
            return None

    if isinstance(value, (int, float)):
        try:
            seconds = float(value)
            if seconds > 1e11:  # epoch milliseconds
                seconds /= 1000
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (ValueError, OSError, OverflowError):
            return None

    return None


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------

def is_valid_solana_address(address: object) -> bool:
    """Return True if *address* looks like a base58 Solana address."""
    return isinstance(address, str) and bool(BASE58_RE.match(address))


def clean_twitter_handle(handle: Optional[str]) -> Optional[str]:
    """Normalise a Twitter/X handle or profile URL to a bare username.

    Strips a leading ``@`` and extracts the username from
    ``twitter.com/<name>`` or ``x.com/<name>`` links.  Returns ``None`` when
    the result is not a valid handle (1-15 word characters).
    """
    if not handle:
        return None
    cleaned = handle.strip()

    match = _TWITTER_URL_RE.search(cleaned)
    if match:
        cleaned = match.group(1)

    cleaned = cleaned.lstrip("@")
    if not _TWITTER_HANDLE_RE.match(cleaned):
        return None
    return cleaned


def short_address(address: str) -> str:
    """Return ``first4…last4`` for display."""
    if len(address) <= 12:
        return address
    return f"{address[:4]}…{address[-4:]}"
