"""Unit tests for Pydantic models."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from fairscore_agent.models import (
    CheckResult,
    CreatedToken,
    ProvenanceRecord,
    RecentCheck,
    ResolvedDeployer,
    TokenReport,
)

from conftest import FUNDER, HUMAN, PUMP_MINT


def _result(**overrides) -> CheckResult:
    fields = dict(
        token_address=PUMP_MINT,
        reported_creator=HUMAN,
        deployer_wallet=HUMAN,
        deployer_source="direct-report",
        fair_score=420,
        tier="KINDA OK",
        tokens_launched=3,
        deployer_age=12,
        funded_by=FUNDER,
        token_name="Roast",
        checked_at=datetime(2025, 6, 1, 12, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return CheckResult(**fields)


class TestResolvedDeployer:
    def test_source_is_constrained(self):
        assert ResolvedDeployer(address=HUMAN, source="rpc-signer").source == "rpc-signer"
        with pytest.raises(ValidationError):
            ResolvedDeployer(address=HUMAN, source="guesswork")

    def test_frozen(self):
        resolved = ResolvedDeployer(address=HUMAN, source="direct-report")
        with pytest.raises(ValidationError):
            resolved.address = FUNDER


class TestProvenanceRecord:
    def test_defaults_are_unknown(self):
        record = ProvenanceRecord(wallet_address=HUMAN)
        assert record.age_in_days is None
        assert record.funded_by is None
        assert record.funding_tx is None

    def test_age_not_negative(self):
        with pytest.raises(ValidationError):
            ProvenanceRecord(wallet_address=HUMAN, age_in_days=-1)


class TestCheckResult:
    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            _result(fair_score=1001)
        with pytest.raises(ValidationError):
            _result(fair_score=-1)

    def test_tokens_launched_counts_current(self):
        with pytest.raises(ValidationError):
            _result(tokens_launched=0)

    def test_json_round_trip(self):
        result = _result(creator_tokens=[CreatedToken(mint="m1", market_cap=1.5)])
        assert CheckResult.model_validate_json(result.model_dump_json()) == result


class TestRecentCheck:
    def test_from_result(self):
        entry = RecentCheck.from_result(_result())
        assert entry.tokenAddress == PUMP_MINT
        assert entry.id == PUMP_MINT
        assert entry.deployerWallet == HUMAN
        assert entry.fairScore == 420
        assert entry.tokensLaunched == 3
        assert entry.checkedAt == 1_748_779_200_000

    def test_extra_fields_kept(self):
        entry = RecentCheck.model_validate({"tokenAddress": "m", "avatar": "x.png"})
        assert entry.model_dump()["avatar"] == "x.png"

    def test_token_address_required(self):
        with pytest.raises(ValidationError):
            RecentCheck.model_validate({"tokenName": "no mint"})


def test_token_report_defaults():
    report = TokenReport(mint="m")
    assert report.creator == ""
    assert report.creator_tokens == []
    assert report.rugged is False
