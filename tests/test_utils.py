"""Unit tests for fairscore_agent.utils — parsing and input validation."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from fairscore_agent.utils import (
    clean_twitter_handle,
    is_valid_solana_address,
    parse_datetime,
    short_address,
)

from conftest import HUMAN, PUMP_MINT


class TestParseDatetime:

    def test_none_and_bool(self):
        assert parse_datetime(None) is None
        assert parse_datetime(True) is None

    def test_aware_passthrough(self):
        dt = datetime(2024, 1, 15, 12, tzinfo=timezone(timedelta(hours=2)))
        assert parse_datetime(dt) is dt

    def test_naive_becomes_utc(self):
        assert parse_datetime(datetime(2024, 1, 15)).tzinfo == timezone.utc

    @pytest.mark.parametrize(
        "raw",
        ["2024-06-01T10:30:00Z", "2024-06-01T10:30:00+00:00", "2024-06-01T10:30:00"],
    )
    def test_iso_strings(self, raw):
        assert parse_datetime(raw) == datetime(2024, 6, 1, 10, 30, tzinfo=timezone.utc)

    def test_bad_string(self):
        assert parse_datetime("yesterday-ish") is None

    def test_epoch_seconds_and_millis(self):
        expected = datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)
        assert parse_datetime(1_700_000_000) == expected
        assert parse_datetime(1_700_000_000_000) == expected
        assert parse_datetime(1_700_000_000.0) == expected

    def test_unsupported_type(self):
        assert parse_datetime([2024, 6, 1]) is None


class TestSolanaAddress:

    @pytest.mark.parametrize("addr", [HUMAN, PUMP_MINT, "11111111111111111111111111111111"])
    def test_valid(self, addr):
        assert is_valid_solana_address(addr)

    @pytest.mark.parametrize(
        "addr",
        [
            "",
            "short",
            "0" * 44,  # 0 is not base58
            "O" + HUMAN[1:],
            HUMAN + "x",  # 45 chars
            None,
            12345,
        ],
    )
    def test_invalid(self, addr):
        assert not is_valid_solana_address(addr)


class TestTwitterHandle:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("@roast_me", "roast_me"),
            ("roast_me", "roast_me"),
            ("  @dev123  ", "dev123"),
            ("https://x.com/dev123", "dev123"),
            ("https://twitter.com/@dev123/status/1", "dev123"),
            ("www.x.com/Dev_Guy?s=20", "Dev_Guy"),
        ],
    )
    def test_cleaned(self, raw, expected):
        assert clean_twitter_handle(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "@", "has space", "way_too_long_handle_x", "bad-dash"])
    def test_rejected(self, raw):
        assert clean_twitter_handle(raw) is None


def test_short_address():
    assert short_address(HUMAN) == f"{HUMAN[:4]}…{HUMAN[-4:]}"
    assert short_address("abc") == "abc"
