"""
Logging configuration for the FairScore deployer check.

Supports two formats:
- ``text`` (default): human-readable log lines
- ``json``: one JSON object per line

Settings via env vars:
- ``LOG_LEVEL``: DEBUG / INFO / WARNING / ERROR (default: INFO)
- ``LOG_FORMAT``: text / json (default: text)

Concurrent checks interleave their resolver and provenance traces, so each
record is stamped with two context values: the request ID set by the API
middleware and the mint of the check that is running (``bind_check``).
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import IO, Iterator, Optional

from config import LOG_FORMAT, LOG_LEVEL

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="-")
token_ctx: ContextVar[str] = ContextVar("token", default="-")

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(request_id)s %(token)s) %(message)s"

# Chatty third-party loggers that drown out the resolver trace at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "anthropic")


class _ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()  # type: ignore[attr-defined]
        record.token = token_ctx.get()  # type: ignore[attr-defined]
        return True


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "request_id": getattr(record, "request_id", request_id_ctx.get()),
            "token": getattr(record, "token", token_ctx.get()),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(
    level: Optional[str] = None,
    fmt: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """(Re)configure the root logger with a single context-aware handler.

    *level* and *fmt* override ``LOG_LEVEL`` / ``LOG_FORMAT``.  The CLI
    passes ``sys.stderr`` as *stream* so ``--json`` output stays clean.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    if (fmt or LOG_FORMAT) == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    handler.addFilter(_ContextFilter())
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def generate_request_id() -> str:
    """Create a short unique request ID."""
    return uuid.uuid4().hex[:12]


@contextmanager
def bind_check(token_mint: str) -> Iterator[str]:
    """Stamp every record logged inside the block with *token_mint*.

    Outside an API request (CLI, tests) a fresh request ID is bound too.
    Yields the request ID in effect.
    """
    token_reset = token_ctx.set(token_mint)
    rid_reset = None
    if request_id_ctx.get() == "-":
        rid_reset = request_id_ctx.set(generate_request_id())
    try:
        yield request_id_ctx.get()
    finally:
        if rid_reset is not None:
            request_id_ctx.reset(rid_reset)
        token_ctx.reset(token_reset)
