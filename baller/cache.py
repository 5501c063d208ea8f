# baller/cache.py
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS cache_entries (
    cache_key   VARCHAR(255) PRIMARY KEY,
    payload     TEXT NOT NULL,
    created_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

INSERT_SQL = "INSERT INTO cache_entries (cache_key, payload) VALUES (:key, :payload)"
UPDATE_SQL = "UPDATE cache_entries SET payload = :payload WHERE cache_key = :key"

# Both accept the same single-statement upsert.
ON_CONFLICT_DIALECTS = ("postgresql", "sqlite")
UPSERT_SQL = (
    INSERT_SQL + " ON CONFLICT (cache_key) DO UPDATE SET payload = excluded.payload"
)


class CacheStore(ABC):
    """Key/value store whose entries never expire."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def forget(self, key: str) -> None:
        ...

    @abstractmethod
    def keys(self) -> List[str]:
        """Return every stored key, sorted."""

    def get_or_compute(self, key: str, compute: Callable[[], Any]) -> Any:
        """Return the cached value, computing and storing it on first use."""
        value = self.get(key)
        if value is None:
            value = compute()
            self.set(key, value)
        return value


class MemoryCache(CacheStore):
    def __init__(self) -> None:
        self._data: Dict[str, Any] = {}

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def forget(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._data)


class SqlCache(CacheStore):
    """
    Cache entries stored as JSON in a `cache_entries` table.

    Works against any SQLAlchemy URL; the table is created if missing.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.create_schema()

    @classmethod
    def from_url(cls, url: str) -> "SqlCache":
        return cls(create_engine(url, future=True))

    def create_schema(self) -> None:
        with self.engine.begin() as conn:
            conn.exec_driver_sql(SCHEMA_SQL)

    def get(self, key: str) -> Any:
        with self.engine.connect() as conn:
            payload = conn.execute(
                text("SELECT payload FROM cache_entries WHERE cache_key = :key"),
                {"key": key},
            ).scalar()
        if payload is None:
            return None
        return json.loads(payload)

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        params = {"key": key, "payload": payload}
        if self.engine.dialect.name in ON_CONFLICT_DIALECTS:
            with self.engine.begin() as conn:
                conn.execute(text(UPSERT_SQL), params)
            return

        try:
            with self.engine.begin() as conn:
                if not self._update(conn, params):
                    conn.execute(text(INSERT_SQL), params)
        except IntegrityError:
            # Another writer inserted the key after our UPDATE; overwrite it.
            with self.engine.begin() as conn:
                self._update(conn, params)

    def _update(self, conn, params: Dict[str, Any]) -> int:
        return conn.execute(text(UPDATE_SQL), params).rowcount

    def forget(self, key: str) -> None:
        with self.engine.begin() as conn:
            conn.execute(text("DELETE FROM cache_entries WHERE cache_key = :key"), {"key": key})

    def keys(self) -> List[str]:
        with self.engine.connect() as conn:
            rows = conn.execute(
                text("SELECT cache_key FROM cache_entries ORDER BY cache_key")
            ).fetchall()
        return [r[0] for r in rows]
