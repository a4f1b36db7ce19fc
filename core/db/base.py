"""
Low-level database helpers.

DATABASE_URL selects the driver:
- postgres:// or postgresql:// -> psycopg (production)
- sqlite:///path/to/file.db     -> sqlite3 (local dev and tests)
"""
from __future__ import annotations

import os
import sqlite3
from datetime import datetime, timezone
from typing import Iterable

import psycopg
from psycopg.rows import dict_row


def resolve_database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL must be set (postgresql://... or sqlite:///...)")
    if url.startswith("postgres://") or url.startswith("postgresql://"):
        return url
    if url.startswith("sqlite:///"):
        return url
    raise RuntimeError("DATABASE_URL must start with postgres://, postgresql:// or sqlite:///")


def dialect_for(url: str) -> str:
    return "sqlite" if url.startswith("sqlite:///") else "postgres"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value) -> datetime | None:
    """Parse a stored ISO timestamp; naive values are treated as UTC."""
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _convert_qmarks(sql: str) -> str:
    if "?" not in sql:
        return sql
    return sql.replace("?", "%s")


class _CursorWrapper:
    def __init__(self, cursor, dialect: str):
        self._cursor = cursor
        self._dialect = dialect

    def execute(self, sql: str, params: Iterable | None = None):
        if self._dialect == "postgres":
            sql = _convert_qmarks(sql)
        if params is None:
            return self._cursor.execute(sql)
        return self._cursor.execute(sql, params)

    def fetchone(self):
        row = self._cursor.fetchone()
        return dict(row) if row is not None else None

    def fetchall(self):
        return [dict(row) for row in self._cursor.fetchall()]

    @property
    def rowcount(self):
        return getattr(self._cursor, "rowcount", 0)

    @property
    def description(self):
        return self._cursor.description


class _ConnWrapper:
    def __init__(self, conn, dialect: str):
        self._conn = conn
        self.dialect = dialect

    def cursor(self):
        return _CursorWrapper(self._conn.cursor(), self.dialect)

    def commit(self):
        return self._conn.commit()

    def rollback(self):
        return self._conn.rollback()

    def close(self):
        return self._conn.close()


def get_conn():
    """
    Return a DB connection for DATABASE_URL.
    Rows come back as dicts for both dialects.
    """
    url = resolve_database_url()
    if dialect_for(url) == "sqlite":
        conn = sqlite3.connect(url[len("sqlite:///"):], timeout=10)
        conn.row_factory = sqlite3.Row
        return _ConnWrapper(conn, "sqlite")
    conn = psycopg.connect(url, row_factory=dict_row)
    return _ConnWrapper(conn, "postgres")


def is_unique_violation(exc: Exception) -> bool:
    if isinstance(exc, sqlite3.IntegrityError):
        return "UNIQUE" in str(exc).upper()
    return isinstance(exc, psycopg.errors.UniqueViolation)


__all__ = [
    "resolve_database_url",
    "dialect_for",
    "utcnow",
    "parse_timestamp",
    "get_conn",
    "is_unique_violation",
]
