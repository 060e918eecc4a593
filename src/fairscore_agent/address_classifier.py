"""
Known non-user address classification.

Answers one question for the deployer resolver and provenance analyzer:
*could this address be a human wallet?*  An address is treated as
non-user when:

  1. It is an exact entry in the classifier table (system programs, sysvars,
     launch-platform programs and mint authorities, …).
  2. It matches the structural pattern of system-derived addresses: a long
     trailing run of the base58 zero digit ``"1"`` (``11111111…``,
     ``ComputeBudget1111…``, ``SysvarRent1111…``).
  3. It is ``None`` or empty, so downstream filters stay total.

The table is data: new platform authorities are added to
``DEFAULT_DENYLIST`` (or passed in a custom ``ClassifierTable``) without
touching any call site.

Entity types (``entity_type`` field):
  "system"      – Solana system / runtime program or sysvar
  "launchpad"   – Token launchpad program or shared authority
  "contract"    – Other on-chain program
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .constants import (
    ATA_PROGRAM,
    BELIEVE_LAUNCHPAD,
    BPF_LOADER,
    COMPUTE_BUDGET,
    LETSBONK_PROGRAM,
    MEMO_PROGRAM,
    METAPLEX_METADATA,
    MOONSHOT_AUTHORITY,
    MOONSHOT_PROGRAM,
    PLATFORM_MINT_SUFFIXES,
    PUMPFUN_FEE_ACCOUNT,
    PUMPFUN_MINT_AUTHORITY,
    PUMPFUN_PROGRAM,
    SYSTEM_PROGRAM,
    SYSVAR_CLOCK,
    SYSVAR_INSTRUCTIONS,
    SYSVAR_RECENT_BLOCKHASHES,
    SYSVAR_RENT,
    TOKEN_2022_PROGRAM,
    TOKEN_PROGRAM,
    WSOL_MINT,
)
from .utils import short_address

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Default denylist
# Format: address → (display_label, entity_type)
# ---------------------------------------------------------------------------

DEFAULT_DENYLIST: dict[str, tuple[str, str]] = {
    # ── Solana System Programs ────────────────────────────────────────────
    SYSTEM_PROGRAM:             ("System Program",          "system"),
    TOKEN_PROGRAM:              ("SPL Token Program",       "system"),
    TOKEN_2022_PROGRAM:         ("Token-2022 Program",      "system"),
    ATA_PROGRAM:                ("Associated Token Program", "system"),
    COMPUTE_BUDGET:             ("Compute Budget",          "system"),
    MEMO_PROGRAM:               ("Memo Program",            "system"),
    BPF_LOADER:                 ("BPF Loader",              "system"),
    METAPLEX_METADATA:          ("Metaplex Metadata",       "system"),
    WSOL_MINT:                  ("Wrapped SOL Mint",        "system"),

    # ── Sysvars ───────────────────────────────────────────────────────────
    SYSVAR_CLOCK:               ("Sysvar Clock",            "system"),
    SYSVAR_RENT:                ("Sysvar Rent",             "system"),
    SYSVAR_INSTRUCTIONS:        ("Sysvar Instructions",     "system"),
    SYSVAR_RECENT_BLOCKHASHES:  ("Sysvar Recent Blockhashes", "system"),

    # ── Launchpads ────────────────────────────────────────────────────────
    # pump.fun reports its shared mint authority as the "creator" of every
    # token it launches; that is the main reason this resolver exists.
    PUMPFUN_PROGRAM:            ("PumpFun Program",         "launchpad"),
    PUMPFUN_MINT_AUTHORITY:     ("PumpFun Mint Authority",  "launchpad"),
    PUMPFUN_FEE_ACCOUNT:        ("PumpFun Fee",             "launchpad"),
    MOONSHOT_PROGRAM:           ("Moonshot Program",        "launchpad"),
    MOONSHOT_AUTHORITY:         ("Moonshot Authority",      "launchpad"),
    LETSBONK_PROGRAM:           ("LetsBonk Program",        "launchpad"),
    BELIEVE_LAUNCHPAD:          ("Believe / Degen",         "launchpad"),
}


@dataclass(frozen=True)
class ClassifierTable:
    """Configuration-like data the classifier is built from."""

    denylist: Mapping[str, tuple[str, str]] = field(
        default_factory=lambda: dict(DEFAULT_DENYLIST)
    )
    padding_char: str = "1"
    # Shortest trailing run that counts as a system-derived address.
    # Real wallets end in a few 1s at most; sysvars carry 20+.
    padding_run: int = 20
    platform_mint_suffixes: tuple[str, ...] = PLATFORM_MINT_SUFFIXES


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class WalletInfo:
    """Resolved identity for a Solana wallet / program address."""

    __slots__ = ("address", "label", "entity_type", "is_known")

    def __init__(
        self,
        address: str,
        label: Optional[str],
        entity_type: Optional[str],
    ) -> None:
        self.address = address
        self.label = label
        self.entity_type = entity_type
        self.is_known = label is not None

    def short(self) -> str:
        """Return label if known, else truncated address."""
        if self.label:
            return self.label
        return short_address(self.address)

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "entity_type": self.entity_type,
        }


class AddressClassifier:
    """Pure, I/O-free predicate over a ``ClassifierTable``."""

    def __init__(self, table: ClassifierTable | None = None) -> None:
        self.table = table or ClassifierTable()
        self._padding_suffix = self.table.padding_char * self.table.padding_run

    def is_known_non_user(self, address: Optional[str]) -> bool:
        """Return True if *address* can never be a human deployer/funder."""
        if not address:
            return True
        if address in self.table.denylist:
            return True
        return address.endswith(self._padding_suffix)

    def is_platform_mint(self, mint: Optional[str]) -> bool:
        """Return True if *mint* carries a launch platform's reserved suffix."""
        if not mint:
            return False
        return any(mint.endswith(s) for s in self.table.platform_mint_suffixes)

    def classify(self, address: str) -> WalletInfo:
        """Resolve *address* to a label, or an unknown ``WalletInfo``."""
        entry = self.table.denylist.get(address)
        if entry:
            return WalletInfo(address, label=entry[0], entity_type=entry[1])
        if address and address.endswith(self._padding_suffix):
            return WalletInfo(address, label="System Account", entity_type="system")
        return WalletInfo(address, label=None, entity_type=None)


_default_classifier = AddressClassifier()


def get_default_classifier() -> AddressClassifier:
    return _default_classifier


def is_known_non_user_address(address: Optional[str]) -> bool:
    """Module-level shortcut over the default table."""
    return _default_classifier.is_known_non_user(address)


def is_platform_mint(mint: Optional[str]) -> bool:
    return _default_classifier.is_platform_mint(mint)


def classify_address(address: str) -> WalletInfo:
    return _default_classifier.classify(address)


def label_or_short(address: str) -> str:
    """Convenience: return label if known, else first4…last4."""
    return classify_address(address).short()
