"""Tests for the known non-user address classifier."""

from __future__ import annotations

import pytest

from fairscore_agent.address_classifier import (
    DEFAULT_DENYLIST,
    AddressClassifier,
    ClassifierTable,
    classify_address,
    is_known_non_user_address,
    is_platform_mint,
    label_or_short,
)
from fairscore_agent.constants import (
    COMPUTE_BUDGET,
    PUMPFUN_MINT_AUTHORITY,
    SYSTEM_PROGRAM,
    SYSVAR_RENT,
    TOKEN_PROGRAM,
)

from conftest import HUMAN, PLAIN_MINT, PUMP_MINT


class TestIsKnownNonUser:

    @pytest.mark.parametrize("address", list(DEFAULT_DENYLIST))
    def test_every_denylist_entry_is_rejected(self, address):
        assert is_known_non_user_address(address) is True

    @pytest.mark.parametrize("address", [SYSTEM_PROGRAM, COMPUTE_BUDGET, SYSVAR_RENT])
    def test_padded_system_addresses(self, address):
        assert is_known_non_user_address(address) is True

    def test_unlisted_padded_address_matches_structurally(self):
        addr = "NewSysvar" + "1" * 24
        assert addr not in DEFAULT_DENYLIST
        assert is_known_non_user_address(addr) is True

    @pytest.mark.parametrize("address", [None, ""])
    def test_empty_is_non_user(self, address):
        assert is_known_non_user_address(address) is True

    def test_human_wallet_passes(self):
        assert is_known_non_user_address(HUMAN) is False

    def test_wallet_with_short_trailing_ones_passes(self):
        addr = HUMAN[:-3] + "111"
        assert is_known_non_user_address(addr) is False

    def test_pump_authority_rejected(self):
        assert is_known_non_user_address(PUMPFUN_MINT_AUTHORITY) is True


class TestCustomTable:

    def test_extending_the_table(self):
        table = ClassifierTable(denylist={**DEFAULT_DENYLIST, HUMAN: ("Relayer", "contract")})
        clf = AddressClassifier(table)
        assert clf.is_known_non_user(HUMAN) is True
        # default classifier is unaffected
        assert is_known_non_user_address(HUMAN) is False

    def test_padding_run_is_configurable(self):
        clf = AddressClassifier(ClassifierTable(padding_run=3))
        assert clf.is_known_non_user(HUMAN[:-3] + "111") is True

    def test_custom_platform_suffixes(self):
        clf = AddressClassifier(ClassifierTable(platform_mint_suffixes=("bonk",)))
        assert clf.is_platform_mint("abcbonk") is True
        assert clf.is_platform_mint(PUMP_MINT) is False


class TestPlatformMint:

    def test_pump_suffix(self):
        assert is_platform_mint(PUMP_MINT) is True

    def test_plain_mint(self):
        assert is_platform_mint(PLAIN_MINT) is False

    def test_empty(self):
        assert is_platform_mint("") is False
        assert is_platform_mint(None) is False


class TestClassify:

    def test_known_label(self):
        info = classify_address(TOKEN_PROGRAM)
        assert info.is_known
        assert info.label == "SPL Token Program"
        assert info.entity_type == "system"

    def test_structural_label(self):
        info = classify_address("Unknown" + "1" * 25)
        assert info.label == "System Account"

    def test_unknown(self):
        info = classify_address(HUMAN)
        assert not info.is_known
        assert info.to_dict() == {"label": None, "entity_type": None}

    def test_label_or_short(self):
        assert label_or_short(PUMPFUN_MINT_AUTHORITY) == "PumpFun Mint Authority"
        assert label_or_short(HUMAN) == f"{HUMAN[:4]}…{HUMAN[-4:]}"
