"""Key-value stores for score entries keyed by (channel, participant)."""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Protocol

from trivia.core.db import sqlite_connection
from trivia.core.db import sqlite_transaction
from trivia.scores.models import ScoreEntry


class ScoreStore(Protocol):
    def find(self, channel_id: str, participant_id: str) -> ScoreEntry | None: ...

    def save(self, entry: ScoreEntry) -> None: ...

    def list_channel(self, channel_id: str) -> list[ScoreEntry]: ...

    def delete_channel(self, channel_id: str) -> None: ...

    def close(self) -> None: ...


class InMemoryScoreStore:
    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], ScoreEntry] = {}
        self._guard = threading.Lock()

    def find(self, channel_id: str, participant_id: str) -> ScoreEntry | None:
        with self._guard:
            entry = self._entries.get((channel_id, participant_id))
            return replace(entry) if entry is not None else None

    def save(self, entry: ScoreEntry) -> None:
        with self._guard:
            self._entries[(entry.channel_id, entry.participant_id)] = replace(entry)

    def list_channel(self, channel_id: str) -> list[ScoreEntry]:
        with self._guard:
            return [replace(entry) for key, entry in self._entries.items() if key[0] == channel_id]

    def delete_channel(self, channel_id: str) -> None:
        with self._guard:
            for key in [key for key in self._entries if key[0] == channel_id]:
                del self._entries[key]

    def close(self) -> None:
        with self._guard:
            self._entries.clear()


class SqliteScoreStore:
    def __init__(self, path: str) -> None:
        self._path = path

    def find(self, channel_id: str, participant_id: str) -> ScoreEntry | None:
        with sqlite_connection(self._path) as conn:
            row = conn.execute(
                """
                SELECT channel_id, participant_id, display_name, score
                FROM scores
                WHERE channel_id = ? AND participant_id = ?
                """,
                (channel_id, participant_id),
            ).fetchone()
        if row is None:
            return None
        cid, pid, display_name, score = row
        return ScoreEntry(channel_id=str(cid), participant_id=str(pid), display_name=str(display_name), score=int(score))

    def save(self, entry: ScoreEntry) -> None:
        with sqlite_transaction(self._path) as conn:
            conn.execute(
                """
                INSERT INTO scores (channel_id, participant_id, display_name, score)
                VALUES (?, ?, ?, ?)
                ON CONFLICT (channel_id, participant_id) DO UPDATE SET
                    display_name = excluded.display_name,
                    score = excluded.score
                """,
                (entry.channel_id, entry.participant_id, entry.display_name, entry.score),
            )

    def list_channel(self, channel_id: str) -> list[ScoreEntry]:
        with sqlite_connection(self._path) as conn:
            rows = conn.execute(
                """
                SELECT channel_id, participant_id, display_name, score
                FROM scores
                WHERE channel_id = ?
                """,
                (channel_id,),
            ).fetchall()
        return [
            ScoreEntry(channel_id=str(cid), participant_id=str(pid), display_name=str(display_name), score=int(score))
            for cid, pid, display_name, score in rows
        ]

    def delete_channel(self, channel_id: str) -> None:
        with sqlite_transaction(self._path) as conn:
            conn.execute("DELETE FROM scores WHERE channel_id = ?", (channel_id,))

    def close(self) -> None:
        return None
