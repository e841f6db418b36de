"""SQLite connection helpers for backend persistence."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager


class StoreError(RuntimeError):
    """Raised when the storage layer underneath the game fails."""


def create_sqlite_connection(path: str) -> sqlite3.Connection:
    """Create a SQLite connection with foreign key enforcement enabled."""
    conn = sqlite3.connect(path)
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


@contextmanager
def sqlite_transaction(path: str) -> Iterator[sqlite3.Connection]:
    """Run one write transaction, wrapping driver failures in StoreError."""
    try:
        conn = create_sqlite_connection(path)
    except sqlite3.Error as exc:
        raise StoreError(f"cannot open sqlite database at {path}") from exc
    try:
        conn.execute("BEGIN IMMEDIATE")
        yield conn
        conn.commit()
    except sqlite3.Error as exc:
        conn.rollback()
        raise StoreError(str(exc)) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def sqlite_connection(path: str) -> Iterator[sqlite3.Connection]:
    """Open a short-lived connection, wrapping driver failures in StoreError."""
    try:
        conn = create_sqlite_connection(path)
    except sqlite3.Error as exc:
        raise StoreError(f"cannot open sqlite database at {path}") from exc
    try:
        yield conn
    except sqlite3.Error as exc:
        raise StoreError(str(exc)) from exc
    finally:
        conn.close()
