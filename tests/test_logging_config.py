"""Tests for the structured logging configuration."""

from __future__ import annotations

import io
import json
import logging
import sys

from fairscore_agent.logging_config import (
    JSONFormatter,
    _ContextFilter,
    bind_check,
    generate_request_id,
    request_id_ctx,
    setup_logging,
    token_ctx,
)

from conftest import PUMP_MINT


def _record(msg: str = "hi", level: int = logging.INFO, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="fairscore_agent.test", level=level, pathname="", lineno=0,
        msg=msg, args=(), exc_info=exc_info,
    )


def test_request_ids_are_short_unique_hex():
    ids = {generate_request_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(len(i) == 12 and int(i, 16) >= 0 for i in ids)


def test_filter_stamps_context_values():
    rid = request_id_ctx.set("req-1")
    tok = token_ctx.set(PUMP_MINT)
    try:
        record = _record()
        assert _ContextFilter().filter(record) is True
    finally:
        token_ctx.reset(tok)
        request_id_ctx.reset(rid)
    assert record.request_id == "req-1"  # type: ignore[attr-defined]
    assert record.token == PUMP_MINT  # type: ignore[attr-defined]


def test_bind_check_outside_request():
    with bind_check(PUMP_MINT) as rid:
        assert token_ctx.get() == PUMP_MINT
        assert len(rid) == 12
        assert request_id_ctx.get() == rid
    assert token_ctx.get() == "-"
    assert request_id_ctx.get() == "-"


def test_bind_check_keeps_request_id():
    reset = request_id_ctx.set("from-middleware")
    try:
        with bind_check(PUMP_MINT) as rid:
            assert rid == "from-middleware"
        assert request_id_ctx.get() == "from-middleware"
    finally:
        request_id_ctx.reset(reset)


def test_json_formatter_line():
    record = _record("resolved", logging.WARNING)
    record.request_id = "abc"  # type: ignore[attr-defined]
    record.token = PUMP_MINT  # type: ignore[attr-defined]
    data = json.loads(JSONFormatter().format(record))
    assert data["level"] == "WARNING"
    assert data["logger"] == "fairscore_agent.test"
    assert data["msg"] == "resolved"
    assert data["request_id"] == "abc"
    assert data["token"] == PUMP_MINT


def test_json_formatter_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record("fail", logging.ERROR, exc_info=sys.exc_info())
    data = json.loads(JSONFormatter().format(record))
    assert "ValueError" in data["exception"]


def test_setup_logging_writes_context_to_stream():
    stream = io.StringIO()
    setup_logging("debug", fmt="json", stream=stream)
    setup_logging("debug", fmt="json", stream=stream)
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING

    with bind_check(PUMP_MINT):
        logging.getLogger("fairscore_agent.test").info("checking")
    line = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert line["msg"] == "checking"
    assert line["token"] == PUMP_MINT
