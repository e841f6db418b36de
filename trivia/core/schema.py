"""Schema bootstrap for workflow and score tables."""

from __future__ import annotations

from trivia.core.db import sqlite_connection


CREATE_TRIVIA_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS workflows (
    channel_id TEXT PRIMARY KEY,
    stage TEXT NOT NULL,
    host_id TEXT NOT NULL,
    topic TEXT NULL,
    question TEXT NULL
);

CREATE TABLE IF NOT EXISTS workflow_answers (
    id INTEGER PRIMARY KEY,
    channel_id TEXT NOT NULL,
    participant_id TEXT NOT NULL,
    display_name TEXT NOT NULL,
    text TEXT NOT NULL,
    submitted_at TEXT NOT NULL,
    FOREIGN KEY (channel_id) REFERENCES workflows(channel_id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS scores (
    channel_id TEXT NOT NULL,
    participant_id TEXT NOT NULL,
    display_name TEXT NOT NULL,
    score INTEGER NOT NULL DEFAULT 0 CHECK (score >= 0),
    PRIMARY KEY (channel_id, participant_id)
);

CREATE INDEX IF NOT EXISTS idx_workflow_answers_channel_id ON workflow_answers(channel_id);
"""


def init_trivia_schema(path: str) -> None:
    """Ensure workflow/score tables exist."""
    with sqlite_connection(path) as conn:
        conn.executescript(CREATE_TRIVIA_SCHEMA_SQL)
        conn.commit()
