"""
Helpers for reading ``jsonParsed`` Solana transactions.

The RPC returns account keys either as ``{pubkey, signer, writable}`` dicts
(jsonParsed) or as bare strings (legacy encodings).  Instruction lists live
at ``transaction.message.instructions`` (top level) and
``meta.innerInstructions[].instructions`` (CPI).  These helpers flatten
both shapes so the resolver and provenance analyzer stay readable.
"""

from __future__ import annotations

import re
from typing import Any, Iterator, NamedTuple, Optional

from .constants import SYSTEM_PROGRAM

# Lamport-moving system instructions; createAccount funds the new account
_SYSTEM_TRANSFER_TYPES = frozenset({"transfer", "transferWithSeed", "createAccount"})

# Launch platforms log the human creator during the create instruction
CREATOR_LOG_RE = re.compile(r"creator:\s*([1-9A-HJ-NP-Za-km-z]{32,44})", re.IGNORECASE)


class AccountKey(NamedTuple):
    pubkey: str
    signer: bool


class SystemTransfer(NamedTuple):
    source: str
    destination: str
    lamports: int


def _message(tx: dict[str, Any]) -> dict[str, Any]:
    transaction = tx.get("transaction")
    message = transaction.get("message") if isinstance(transaction, dict) else None
    return message if isinstance(message, dict) else {}


def _meta(tx: dict[str, Any]) -> dict[str, Any]:
    meta = tx.get("meta")
    return meta if isinstance(meta, dict) else {}


def account_keys(tx: dict[str, Any]) -> list[AccountKey]:
    """Return the message's account keys in order.

    Bare-string keys carry no signer flag; only the header count tells us
    which are signers, so for that shape the first
    ``header.numRequiredSignatures`` keys are marked (at least the first).
    """
    message = _message(tx)
    raw = message.get("accountKeys") or []
    header = message.get("header") or {}
    n_signers = header.get("numRequiredSignatures") or 1
    keys: list[AccountKey] = []
    for i, key in enumerate(raw):
        if isinstance(key, dict):
            keys.append(AccountKey(key.get("pubkey") or "", bool(key.get("signer"))))
        elif isinstance(key, str):
            keys.append(AccountKey(key, i < n_signers))
    return keys


def fee_payer(tx: dict[str, Any]) -> Optional[str]:
    keys = account_keys(tx)
    return keys[0].pubkey or None if keys else None


def _system_transfer(ix: Any) -> Optional[SystemTransfer]:
    if not isinstance(ix, dict):
        return None
    program_id = ix.get("programId") or ""
    if program_id != SYSTEM_PROGRAM and ix.get("program") != "system":
        return None
    parsed = ix.get("parsed")
    if not isinstance(parsed, dict) or parsed.get("type") not in _SYSTEM_TRANSFER_TYPES:
        return None
    info = parsed.get("info") or {}
    try:
        lamports = int(info.get("lamports") or 0)
    except (TypeError, ValueError):
        lamports = 0
    return SystemTransfer(
        source=info.get("source") or "",
        destination=info.get("destination") or info.get("newAccount") or "",
        lamports=lamports,
    )


def top_level_transfers(tx: dict[str, Any]) -> Iterator[SystemTransfer]:
    """System-program transfers in the message's own instruction list."""
    for ix in _message(tx).get("instructions") or []:
        transfer = _system_transfer(ix)
        if transfer is not None:
            yield transfer


def inner_transfers(tx: dict[str, Any]) -> Iterator[SystemTransfer]:
    """System-program transfers made through CPI, in execution order."""
    for group in _meta(tx).get("innerInstructions") or []:
        if not isinstance(group, dict):
            continue
        for ix in group.get("instructions") or []:
            transfer = _system_transfer(ix)
            if transfer is not None:
                yield transfer


def log_creators(tx: dict[str, Any]) -> Iterator[str]:
    """Addresses captured by ``creator: <address>`` lines in the program logs."""
    for line in _meta(tx).get("logMessages") or []:
        if not isinstance(line, str):
            continue
        for match in CREATOR_LOG_RE.finditer(line):
            yield match.group(1)


def balance_deltas(tx: dict[str, Any]) -> list[tuple[str, int]]:
    """``(address, post - pre)`` per account key; empty if the arrays disagree."""
    meta = _meta(tx)
    pre = meta.get("preBalances") or []
    post = meta.get("postBalances") or []
    keys = account_keys(tx)
    if not keys or len(pre) != len(keys) or len(post) != len(keys):
        return []
    try:
        return [(k.pubkey, int(b) - int(a)) for k, a, b in zip(keys, pre, post)]
    except (TypeError, ValueError):
        return []
