"""
REST API for the FairScore deployer check using FastAPI.

Endpoints
---------
GET  /health                          - Liveness plus data-source counts
GET  /check?mint=<MINT>&twitter=<H>   - Full deployer check for a token
GET  /deployer/{mint}?creator=<ADDR>  - Real-deployer resolution only (creator
                                        defaults to the reported one)
GET  /wallet/{address}/provenance     - Wallet age and first funder
GET  /wallet/{address}/tokens         - Other tokens launched by a wallet
GET  /recent-checks                   - Shared recent-checks feed
POST /recent-checks                   - Add an entry to the feed

Every address parameter is base58-checked before any lookup runs, and
lookup endpoints are rate-limited per client IP.  Error responses carry a
fixed message; details go to the log (and Sentry when configured).
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from contextlib import asynccontextmanager
from typing import Any, Optional

import sentry_sdk
from fastapi import Body, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from config import (
    ANALYSIS_TIMEOUT_SECONDS,
    API_HOST,
    API_PORT,
    CORS_ORIGINS,
    RATE_LIMIT_CHECK,
    RATE_LIMIT_LOOKUP,
    SENTRY_DSN,
    SENTRY_ENVIRONMENT,
    SENTRY_TRACES_SAMPLE_RATE,
    SOLANA_RPC_ENDPOINTS,
)
from .data_sources._clients import (
    close_clients,
    get_gateway,
    get_recent_checks,
    get_rugcheck_client,
    init_clients,
)
from .deployer_resolver import resolve_deployer_detailed
from .logging_config import generate_request_id, request_id_ctx, setup_logging
from .models import CheckResult, CreatedToken, ProvenanceRecord, RecentCheck, ResolvedDeployer
from .provenance_service import get_provenance
from .signal_aggregator import CreatorNotFoundError, TokenNotFoundError, check_token
from .token_history import list_other_tokens
from .utils import clean_twitter_handle, is_valid_solana_address

setup_logging()
logger = logging.getLogger(__name__)


def _drop_client_errors(event: dict, hint: dict) -> Optional[dict]:
    """Sentry hook: 4xx responses are expected traffic, not incidents."""
    exc = (hint.get("exc_info") or (None, None, None))[1]
    if isinstance(exc, HTTPException) and (exc.status_code or 500) < 500:
        return None
    return event


if SENTRY_DSN:
    sentry_sdk.init(
        dsn=SENTRY_DSN,
        environment=SENTRY_ENVIRONMENT,
        traces_sample_rate=SENTRY_TRACES_SAMPLE_RATE,
        send_default_pii=False,
        before_send=_drop_client_errors,
    )
    logger.info("Sentry enabled for %s", SENTRY_ENVIRONMENT)
else:
    logger.info("Sentry disabled (no SENTRY_DSN)")

_start_time = time.monotonic()

_INVALID_ADDRESS = "Invalid Solana address. Expected 32-44 base58 characters."
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9_-]{8,64}$")

# Per-client-IP limits; /check is the expensive one
limiter = Limiter(key_func=get_remote_address)


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Open the shared data-source clients for the app's lifetime."""
    bad = [url for url in SOLANA_RPC_ENDPOINTS if not url.startswith("http")]
    if bad:
        logger.error("SOLANA_RPC_ENDPOINTS contains invalid URLs: %s", bad)
        raise RuntimeError("Invalid SOLANA_RPC_ENDPOINTS – every entry must be an HTTP(S) URL")

    await init_clients()
    logger.info(
        "Clients ready: %d RPC endpoint(s), indexer %s",
        len(SOLANA_RPC_ENDPOINTS), "on" if get_gateway().has_indexer else "off",
    )
    try:
        yield
    finally:
        await close_clients()
        logger.info("Clients closed")


app = FastAPI(
    title="FairScore Deployer Check API",
    description="Find the real deployer behind a Solana token and score how much to trust them.",
    version="1.0.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Accept", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request ID for log correlation and echo it back.

    A well-formed ``X-Request-ID`` sent by the front-end is reused so a
    browser session can be followed through the server logs.
    """

    async def dispatch(self, request: Request, call_next):
        incoming = request.headers.get("x-request-id", "")
        rid = incoming if _REQUEST_ID_RE.match(incoming) else generate_request_id()
        reset = request_id_ctx.set(rid)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(reset)
        response.headers["X-Request-ID"] = rid
        logger.info(
            "%s %s %d in %.0f ms [%s]",
            request.method, request.url.path, response.status_code,
            (time.perf_counter() - started) * 1000, rid,
        )
        return response


app.add_middleware(RequestIdMiddleware)


def _require_address(value: Optional[str]) -> str:
    if not is_valid_solana_address(value):
        raise HTTPException(status_code=400, detail=_INVALID_ADDRESS)
    return value  # type: ignore[return-value]


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------


@app.get("/", tags=["system"], include_in_schema=False)
async def root():
    """Redirect to Swagger UI."""
    return RedirectResponse(url="/docs")


@app.get("/health", tags=["system"])
async def health() -> dict:
    """Health check including uptime and configured data sources."""
    gateway = get_gateway()
    return {
        "status": "ok",
        "uptime_seconds": round(time.monotonic() - _start_time, 1),
        "rpc_endpoints": gateway.rpc_endpoint_count,
        "indexers": gateway.indexer_count,
        "gateway_calls": gateway.calls,
    }


@app.get("/check", response_model=CheckResult, tags=["check"])
@limiter.limit(RATE_LIMIT_CHECK)
async def get_check(
    request: Request,
    mint: str = Query(..., description="Solana mint address of the token"),
    twitter: Optional[str] = Query(None, description="Developer Twitter/X handle or profile URL"),
) -> CheckResult:
    """Run the full deployer check and record it in the recent-checks feed."""
    _require_address(mint)
    handle = clean_twitter_handle(twitter)
    try:
        result = await asyncio.wait_for(
            check_token(mint, handle), timeout=ANALYSIS_TIMEOUT_SECONDS
        )
    except TokenNotFoundError:
        raise HTTPException(status_code=404, detail="Token not found")
    except CreatorNotFoundError:
        raise HTTPException(status_code=404, detail="Token creator not found")
    except asyncio.TimeoutError:
        raise HTTPException(
            status_code=504,
            detail=f"Check timed out after {ANALYSIS_TIMEOUT_SECONDS}s. Try again.",
        )
    except Exception as exc:
        logger.exception("Deployer check failed for %s", mint)
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    try:
        await get_recent_checks().add(RecentCheck.from_result(result))
    except Exception:
        logger.exception("Could not record %s in recent checks", mint)
    return result


@app.get("/deployer/{mint}", response_model=ResolvedDeployer, tags=["deployer"])
@limiter.limit(RATE_LIMIT_LOOKUP)
async def get_deployer(
    request: Request,
    mint: str,
    creator: Optional[str] = Query(None, description="Creator reported by the token provider"),
) -> ResolvedDeployer:
    """Resolve the human deployer behind *mint*.

    Without *creator* the token provider's reported creator is used; when
    the provider has no report, resolution runs on chain data alone.
    """
    _require_address(mint)
    if creator is not None:
        _require_address(creator)
    else:
        report = await get_rugcheck_client().get_token_report(mint)
        if report is not None:
            creator = report.creator
    return await resolve_deployer_detailed(mint, creator)


@app.get("/wallet/{address}/provenance", response_model=ProvenanceRecord, tags=["wallet"])
@limiter.limit(RATE_LIMIT_LOOKUP)
async def get_wallet_provenance(request: Request, address: str) -> ProvenanceRecord:
    """Wallet age and first funder."""
    _require_address(address)
    return await get_provenance(address)


@app.get("/wallet/{address}/tokens", response_model=list[CreatedToken], tags=["wallet"])
@limiter.limit(RATE_LIMIT_LOOKUP)
async def get_wallet_tokens(
    request: Request,
    address: str,
    exclude: Optional[str] = Query(None, description="Mint to leave out of the list"),
) -> list[CreatedToken]:
    """Tokens launched by *address*."""
    _require_address(address)
    return await list_other_tokens(address, exclude)


@app.get("/recent-checks", response_model=list[RecentCheck], tags=["feed"])
async def get_recent_checks_feed() -> list[RecentCheck]:
    """The shared feed, newest first."""
    try:
        return await get_recent_checks().list()
    except Exception as exc:
        logger.exception("Reading recent checks failed")
        raise HTTPException(status_code=500, detail="Internal server error") from exc


@app.post("/recent-checks", response_model=RecentCheck, tags=["feed"])
@limiter.limit(RATE_LIMIT_LOOKUP)
async def post_recent_check(
    request: Request,
    entry: Optional[dict[str, Any]] = Body(None),
) -> RecentCheck:
    """Add (or move to the front) an entry in the shared feed."""
    if not entry or not entry.get("tokenAddress"):
        raise HTTPException(status_code=400, detail="Invalid entry")
    try:
        return await get_recent_checks().add(entry)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid entry")
    except Exception as exc:
        logger.exception("Writing recent check failed")
        raise HTTPException(status_code=500, detail="Internal server error") from exc


# ------------------------------------------------------------------
# Run with: python -m fairscore_agent.api
# ------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fairscore_agent.api:app",
        host=API_HOST,
        port=API_PORT,
    )
