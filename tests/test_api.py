"""Integration tests for the FastAPI REST API.

External services are mocked at the module seams of ``fairscore_agent.api``
so these tests need no network access.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from fairscore_agent import api as api_module
from fairscore_agent.api import app
from fairscore_agent.models import (
    CheckResult,
    CreatedToken,
    ProvenanceRecord,
    ResolvedDeployer,
    TokenReport,
)
from fairscore_agent.recent_checks import RecentChecksStore
from fairscore_agent.signal_aggregator import CreatorNotFoundError, TokenNotFoundError

from conftest import FUNDER, HUMAN, PUMP_AUTHORITY, PUMP_MINT


def _result() -> CheckResult:
    return CheckResult(
        token_address=PUMP_MINT,
        reported_creator=HUMAN,
        deployer_wallet=HUMAN,
        deployer_source="direct-report",
        fair_score=720,
        tier="UNICORN",
        roast="Suspiciously wholesome.",
        tokens_launched=2,
        token_name="Roast",
        checked_at=datetime(2025, 6, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def feed():
    store = RecentChecksStore(max_entries=5)
    with patch.object(api_module, "get_recent_checks", return_value=store):
        yield store


@pytest.fixture
async def client(feed):
    transport = ASGITransport(app=app)
    with patch.object(api_module.limiter, "enabled", False):
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


# ------------------------------------------------------------------
# System endpoints
# ------------------------------------------------------------------


@pytest.mark.anyio
async def test_health(client):
    gateway = MagicMock(rpc_endpoint_count=2, indexer_count=1, calls=17)
    with patch.object(api_module, "get_gateway", return_value=gateway):
        resp = await client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["rpc_endpoints"] == 2
    assert body["indexers"] == 1
    assert body["gateway_calls"] == 17
    assert "uptime_seconds" in body
    assert len(resp.headers["X-Request-ID"]) == 12


@pytest.mark.anyio
async def test_request_id_echoed_when_well_formed(client):
    resp = await client.get("/", headers={"X-Request-ID": "browser-session-0042"}, follow_redirects=False)
    assert resp.headers["X-Request-ID"] == "browser-session-0042"
    resp = await client.get("/", headers={"X-Request-ID": "bad id!"}, follow_redirects=False)
    assert resp.headers["X-Request-ID"] != "bad id!"


@pytest.mark.anyio
async def test_root_redirects(client):
    resp = await client.get("/", follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"].endswith("/docs")


# ------------------------------------------------------------------
# /check
# ------------------------------------------------------------------


@pytest.mark.anyio
async def test_check_success_records_feed(client, feed):
    with patch.object(api_module, "check_token", AsyncMock(return_value=_result())) as mock:
        resp = await client.get("/check", params={"mint": PUMP_MINT, "twitter": "https://x.com/dev123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["deployer_wallet"] == HUMAN
    assert body["fair_score"] == 720
    assert body["tier"] == "UNICORN"
    mock.assert_awaited_once_with(PUMP_MINT, "dev123")
    entries = await feed.list()
    assert [e.tokenAddress for e in entries] == [PUMP_MINT]
    assert entries[0].fairScore == 720


@pytest.mark.anyio
async def test_check_invalid_twitter_is_dropped(client):
    with patch.object(api_module, "check_token", AsyncMock(return_value=_result())) as mock:
        resp = await client.get("/check", params={"mint": PUMP_MINT, "twitter": "not a handle!"})
    assert resp.status_code == 200
    mock.assert_awaited_once_with(PUMP_MINT, None)


@pytest.mark.anyio
@pytest.mark.parametrize("mint", ["short", "0" * 44, PUMP_MINT + "extra"])
async def test_check_invalid_mint(client, mint):
    with patch.object(api_module, "check_token", AsyncMock()) as mock:
        resp = await client.get("/check", params={"mint": mint})
    assert resp.status_code == 400
    mock.assert_not_awaited()


@pytest.mark.anyio
async def test_check_missing_mint(client):
    resp = await client.get("/check")
    assert resp.status_code == 422


@pytest.mark.anyio
@pytest.mark.parametrize(
    "exc, status",
    [
        (TokenNotFoundError(PUMP_MINT), 404),
        (CreatorNotFoundError(PUMP_MINT), 404),
        (asyncio.TimeoutError(), 504),
        (RuntimeError("secret internals"), 500),
    ],
)
async def test_check_errors(client, feed, exc, status):
    with patch.object(api_module, "check_token", AsyncMock(side_effect=exc)):
        resp = await client.get("/check", params={"mint": PUMP_MINT})
    assert resp.status_code == status
    assert "secret internals" not in resp.text
    assert await feed.list() == []


@pytest.mark.anyio
async def test_check_feed_failure_still_returns_result(client):
    broken = MagicMock()
    broken.add = AsyncMock(side_effect=RuntimeError("disk full"))
    with patch.object(api_module, "check_token", AsyncMock(return_value=_result())), \
            patch.object(api_module, "get_recent_checks", return_value=broken):
        resp = await client.get("/check", params={"mint": PUMP_MINT})
    assert resp.status_code == 200


# ------------------------------------------------------------------
# Lookup endpoints
# ------------------------------------------------------------------


@pytest.mark.anyio
async def test_deployer_lookup(client):
    resolved = ResolvedDeployer(address=HUMAN, source="rpc-signer")
    with patch.object(api_module, "resolve_deployer_detailed", AsyncMock(return_value=resolved)) as mock:
        resp = await client.get(f"/deployer/{PUMP_MINT}", params={"creator": FUNDER})
    assert resp.status_code == 200
    assert resp.json() == {"address": HUMAN, "source": "rpc-signer"}
    mock.assert_awaited_once_with(PUMP_MINT, FUNDER)


@pytest.mark.anyio
async def test_deployer_lookup_defaults_to_reported_creator(client):
    rugcheck = MagicMock()
    rugcheck.get_token_report = AsyncMock(return_value=TokenReport(mint=PUMP_MINT, creator=PUMP_AUTHORITY))
    resolved = ResolvedDeployer(address=HUMAN, source="indexer-feepayer")
    with patch.object(api_module, "get_rugcheck_client", return_value=rugcheck), \
            patch.object(api_module, "resolve_deployer_detailed", AsyncMock(return_value=resolved)) as mock:
        resp = await client.get(f"/deployer/{PUMP_MINT}")
    assert resp.status_code == 200
    assert resp.json() == {"address": HUMAN, "source": "indexer-feepayer"}
    rugcheck.get_token_report.assert_awaited_once_with(PUMP_MINT)
    mock.assert_awaited_once_with(PUMP_MINT, PUMP_AUTHORITY)


@pytest.mark.anyio
async def test_deployer_lookup_without_report_uses_chain_only(client):
    rugcheck = MagicMock()
    rugcheck.get_token_report = AsyncMock(return_value=None)
    resolved = ResolvedDeployer(address=HUMAN, source="rpc-signer")
    with patch.object(api_module, "get_rugcheck_client", return_value=rugcheck), \
            patch.object(api_module, "resolve_deployer_detailed", AsyncMock(return_value=resolved)) as mock:
        resp = await client.get(f"/deployer/{PUMP_MINT}")
    assert resp.status_code == 200
    mock.assert_awaited_once_with(PUMP_MINT, None)


@pytest.mark.anyio
async def test_deployer_lookup_with_creator_skips_report(client):
    with patch.object(api_module, "get_rugcheck_client") as factory, \
            patch.object(api_module, "resolve_deployer_detailed",
                         AsyncMock(return_value=ResolvedDeployer(address=FUNDER, source="direct-report"))):
        resp = await client.get(f"/deployer/{PUMP_MINT}", params={"creator": FUNDER})
    assert resp.status_code == 200
    factory.assert_not_called()


@pytest.mark.anyio
async def test_deployer_lookup_bad_creator(client):
    resp = await client.get(f"/deployer/{PUMP_MINT}", params={"creator": "nope"})
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_wallet_provenance(client):
    record = ProvenanceRecord(wallet_address=HUMAN, age_in_days=100, funded_by=FUNDER, funding_tx="sig")
    with patch.object(api_module, "get_provenance", AsyncMock(return_value=record)):
        resp = await client.get(f"/wallet/{HUMAN}/provenance")
    assert resp.status_code == 200
    assert resp.json()["age_in_days"] == 100
    assert resp.json()["funded_by"] == FUNDER


@pytest.mark.anyio
async def test_wallet_tokens(client):
    tokens = [CreatedToken(mint="T1", market_cap=10.0)]
    with patch.object(api_module, "list_other_tokens", AsyncMock(return_value=tokens)) as mock:
        resp = await client.get(f"/wallet/{HUMAN}/tokens", params={"exclude": PUMP_MINT})
    assert resp.status_code == 200
    assert [t["mint"] for t in resp.json()] == ["T1"]
    mock.assert_awaited_once_with(HUMAN, PUMP_MINT)


@pytest.mark.anyio
async def test_wallet_invalid_address(client):
    resp = await client.get("/wallet/bad/provenance")
    assert resp.status_code == 400


# ------------------------------------------------------------------
# /recent-checks
# ------------------------------------------------------------------


@pytest.mark.anyio
async def test_recent_checks_post_then_get(client):
    resp = await client.post("/recent-checks", json={"tokenAddress": "mintA", "tokenName": "A"})
    assert resp.status_code == 200
    assert resp.json()["id"] == "mintA"
    await client.post("/recent-checks", json={"tokenAddress": "mintB"})
    await client.post("/recent-checks", json={"tokenAddress": "mintA", "fairScore": 100})

    resp = await client.get("/recent-checks")
    assert resp.status_code == 200
    body = resp.json()
    assert [e["tokenAddress"] for e in body] == ["mintA", "mintB"]
    assert body[0]["fairScore"] == 100


@pytest.mark.anyio
@pytest.mark.parametrize("payload", [{}, {"tokenName": "x"}, {"tokenAddress": ""}])
async def test_recent_checks_post_invalid(client, payload):
    resp = await client.post("/recent-checks", json=payload)
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_recent_checks_post_no_body(client):
    resp = await client.post("/recent-checks")
    assert resp.status_code == 400
