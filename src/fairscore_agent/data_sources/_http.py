"""
Shared single-attempt HTTP helpers.

Used by all data-source clients (Solana RPC, Helius, RugCheck, FairScale,
Birdeye).  There is no retry or backoff here: the interactive
check has roughly a one-minute budget, so a failed call is reported at once
and the caller moves to its next endpoint or strategy.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .errors import DataSourceUnavailable

logger = logging.getLogger(__name__)


def _check_status(resp: httpx.Response, label: str, url: str) -> None:
    url = url.split("?", 1)[0]
    if resp.status_code == 429:
        logger.warning(
            "%s rate-limited (retry-after=%s)", label, resp.headers.get("retry-after", "?")
        )
        raise DataSourceUnavailable(label, "HTTP 429")
    if resp.status_code == 403:
        logger.warning("%s 403 for %s – endpoint may block this request", label, url)
        raise DataSourceUnavailable(label, "HTTP 403")
    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.warning("%s HTTP %s for %s", label, exc.response.status_code, url)
        raise DataSourceUnavailable(label, f"HTTP {exc.response.status_code}") from exc


async def async_http_get(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: Optional[dict[str, Any]] = None,
    headers: Optional[dict[str, str]] = None,
    label: str = "HTTP",
) -> Any:
    """GET *url* once and return the parsed JSON body.

    Raises ``DataSourceUnavailable`` on network errors, non-2xx statuses and
    undecodable bodies.
    """
    try:
        resp = await client.get(url, params=params, headers=headers)
    except httpx.RequestError as exc:
        logger.warning("%s request failed: %s – %s", label, url, exc)
        raise DataSourceUnavailable(label, str(exc)) from exc
    _check_status(resp, label, url)
    try:
        return resp.json()
    except ValueError as exc:
        logger.warning("%s returned a non-JSON body for %s", label, url)
        raise DataSourceUnavailable(label, "invalid JSON") from exc


async def async_http_post_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    json_payload: Any,
    label: str = "RPC",
) -> Any:
    """POST a JSON-RPC *payload* once and return its ``result`` member.

    An RPC-level ``error`` member is a failure like any other: it raises
    ``DataSourceUnavailable`` so the gateway can try the next endpoint.
    """
    try:
        resp = await client.post(url, json=json_payload)
    except httpx.RequestError as exc:
        logger.warning("%s request failed: %s", label, exc)
        raise DataSourceUnavailable(label, str(exc)) from exc
    _check_status(resp, label, url)
    try:
        body = resp.json()
    except ValueError as exc:
        logger.warning("%s returned a non-JSON body", label)
        raise DataSourceUnavailable(label, "invalid JSON") from exc
    if not isinstance(body, dict):
        raise DataSourceUnavailable(label, "unexpected response shape")
    if body.get("error") is not None:
        logger.warning("%s error: %s", label, body["error"])
        raise DataSourceUnavailable(label, f"RPC error {body['error']}")
    return body.get("result")
