"""
Bounded "recent checks" feed shared by all users.

Two backends:
1. **In-memory** – default, single process, lost on restart.
2. **SQLite** (optional) – the whole feed as one JSON row, survives
   restarts.  Enable with ``RECENT_CHECKS_BACKEND=sqlite``.

Adding a token that is already in the feed moves it to the front; the
feed never holds more than ``max_entries`` items.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import time
from typing import Any, Union

import aiosqlite

from config import RECENT_CHECKS_MAX
from .models import RecentCheck

logger = logging.getLogger(__name__)

EntryLike = Union[RecentCheck, dict[str, Any]]


class RecentChecksStore:
    """In-memory feed, newest first."""

    def __init__(self, max_entries: int = RECENT_CHECKS_MAX) -> None:
        self._max_entries = max_entries
        self._entries: list[RecentCheck] = []
        self._lock = asyncio.Lock()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    async def list(self) -> list[RecentCheck]:
        async with self._lock:
            return list(await self._load())

    async def add(self, entry: EntryLike) -> RecentCheck:
        """Insert *entry* at the front, replacing any entry for the same token.

        Raises ``pydantic.ValidationError`` when a dict entry has no
        ``tokenAddress``.
        """
        check = entry if isinstance(entry, RecentCheck) else RecentCheck.model_validate(entry)
        check = check.model_copy(
            update={
                "id": check.tokenAddress,
                "serverCheckedAt": int(time.time() * 1000),
            }
        )
        async with self._lock:
            current = await self._load()
            kept = [e for e in current if e.tokenAddress != check.tokenAddress]
            updated = [check, *kept][: self._max_entries]
            await self._save(updated)
        return check

    async def close(self) -> None:
        return None

    # Storage hooks -------------------------------------------------------

    async def _load(self) -> list[RecentCheck]:
        return self._entries

    async def _save(self, entries: list[RecentCheck]) -> None:
        self._entries = entries


class SQLiteRecentChecksStore(RecentChecksStore):
    """Feed persisted as a single JSON document in SQLite."""

    _KEY = "recent_checks"

    def __init__(
        self,
        db_path: str = "data/recent_checks.db",
        max_entries: int = RECENT_CHECKS_MAX,
    ) -> None:
        super().__init__(max_entries=max_entries)
        self._db_path = db_path
        self._conn: aiosqlite.Connection | None = None

    async def _get_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            os.makedirs(os.path.dirname(self._db_path) or ".", exist_ok=True)
            self._conn = await aiosqlite.connect(self._db_path)
            await self._conn.execute("PRAGMA journal_mode=WAL")
            await self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS feed (
                    key   TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            await self._conn.commit()
        return self._conn

    async def _load(self) -> list[RecentCheck]:
        db = await self._get_conn()
        cursor = await db.execute("SELECT value FROM feed WHERE key = ?", (self._KEY,))
        row = await cursor.fetchone()
        if row is None:
            return []
        try:
            raw = json.loads(row[0])
        except ValueError:
            logger.warning("Recent checks row is corrupt – starting empty")
            return []
        entries: list[RecentCheck] = []
        for item in raw if isinstance(raw, list) else []:
            if isinstance(item, dict) and item.get("tokenAddress"):
                entries.append(RecentCheck.model_validate(item))
        return entries

    async def _save(self, entries: list[RecentCheck]) -> None:
        db = await self._get_conn()
        payload = json.dumps([e.model_dump(mode="json") for e in entries], default=str)
        await db.execute(
            "INSERT OR REPLACE INTO feed (key, value) VALUES (?, ?)",
            (self._KEY, payload),
        )
        await db.commit()

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
