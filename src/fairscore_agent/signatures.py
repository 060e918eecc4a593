"""
Backward pagination over an address's signature history.

Shared by the deployer resolver (oldest tx of a mint) and the provenance
analyzer (oldest tx of a wallet).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from config import SIGNATURE_PAGE_CAP, SIGNATURE_PAGE_SIZE

logger = logging.getLogger(__name__)


async def find_oldest_signature(
    gateway: Any,
    address: str,
    *,
    max_pages: int = SIGNATURE_PAGE_CAP,
    page_size: int = SIGNATURE_PAGE_SIZE,
) -> Optional[dict[str, Any]]:
    """Return the oldest ``{signature, blockTime}`` record reachable for *address*.

    Walks pages newest to oldest using ``before=<last signature>``, keeping
    only the most recent non-empty batch.  Stops on an empty or short page,
    or after *max_pages* full pages; in the latter case the result is the
    oldest signature *seen*, not necessarily the address's first.

    Gateway errors propagate so callers can fall through to their next
    strategy.
    """
    before: Optional[str] = None
    last_batch: list[dict[str, Any]] = []

    for _ in range(max_pages):
        batch = await gateway.get_signatures_for_address(
            address, limit=page_size, before=before
        )
        if not batch:
            break
        last_batch = batch
        before = batch[-1].get("signature")
        if len(batch) < page_size or not before:
            break
    else:
        logger.debug(
            "Signature scan for %s hit the %d-page cap", address, max_pages
        )

    return last_batch[-1] if last_batch else None
