"""Key-value stores for channel workflow records."""

from __future__ import annotations

import threading
from datetime import datetime
from datetime import timezone
from typing import Protocol

from trivia.core.db import sqlite_connection
from trivia.core.db import sqlite_transaction
from trivia.workflow.models import Answer
from trivia.workflow.models import ChannelWorkflow
from trivia.workflow.models import WorkflowStage


def to_utc_iso(value: datetime) -> str:
    return value.astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def from_utc_iso(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class WorkflowStore(Protocol):
    """find/save/delete by channel; callers serialize writers per channel."""

    def find(self, channel_id: str) -> ChannelWorkflow | None: ...

    def save(self, workflow: ChannelWorkflow) -> None: ...

    def delete(self, channel_id: str) -> None: ...

    def close(self) -> None: ...


class InMemoryWorkflowStore:
    """Dict-backed store; hands out copies so callers never alias stored records."""

    def __init__(self) -> None:
        self._records: dict[str, ChannelWorkflow] = {}
        self._guard = threading.Lock()

    def find(self, channel_id: str) -> ChannelWorkflow | None:
        with self._guard:
            record = self._records.get(channel_id)
            return record.copy() if record is not None else None

    def save(self, workflow: ChannelWorkflow) -> None:
        with self._guard:
            self._records[workflow.channel_id] = workflow.copy()

    def delete(self, channel_id: str) -> None:
        with self._guard:
            self._records.pop(channel_id, None)

    def close(self) -> None:
        with self._guard:
            self._records.clear()


class SqliteWorkflowStore:
    """SQLite-backed store; one short-lived connection per call."""

    def __init__(self, path: str) -> None:
        self._path = path

    def find(self, channel_id: str) -> ChannelWorkflow | None:
        with sqlite_connection(self._path) as conn:
            # one read snapshot for the record and its answers
            conn.execute("BEGIN")
            row = conn.execute(
                """
                SELECT channel_id, stage, host_id, topic, question
                FROM workflows
                WHERE channel_id = ?
                """,
                (channel_id,),
            ).fetchone()
            if row is None:
                return None
            answer_rows = conn.execute(
                """
                SELECT participant_id, display_name, text, submitted_at
                FROM workflow_answers
                WHERE channel_id = ?
                ORDER BY id
                """,
                (channel_id,),
            ).fetchall()

        cid, stage, host_id, topic, question = row
        return ChannelWorkflow(
            channel_id=str(cid),
            stage=WorkflowStage(stage),
            host_id=str(host_id),
            topic=topic,
            question=question,
            answers=[
                Answer(
                    participant_id=str(participant_id),
                    display_name=str(display_name),
                    text=str(text),
                    submitted_at=from_utc_iso(str(submitted_at)),
                )
                for participant_id, display_name, text, submitted_at in answer_rows
            ],
        )

    def save(self, workflow: ChannelWorkflow) -> None:
        with sqlite_transaction(self._path) as conn:
            conn.execute(
                """
                INSERT INTO workflows (channel_id, stage, host_id, topic, question)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT (channel_id) DO UPDATE SET
                    stage = excluded.stage,
                    host_id = excluded.host_id,
                    topic = excluded.topic,
                    question = excluded.question
                """,
                (
                    workflow.channel_id,
                    workflow.stage.value,
                    workflow.host_id,
                    workflow.topic,
                    workflow.question,
                ),
            )
            conn.execute("DELETE FROM workflow_answers WHERE channel_id = ?", (workflow.channel_id,))
            conn.executemany(
                """
                INSERT INTO workflow_answers (channel_id, participant_id, display_name, text, submitted_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                [
                    (
                        workflow.channel_id,
                        answer.participant_id,
                        answer.display_name,
                        answer.text,
                        to_utc_iso(answer.submitted_at),
                    )
                    for answer in workflow.answers
                ],
            )

    def delete(self, channel_id: str) -> None:
        with sqlite_transaction(self._path) as conn:
            conn.execute("DELETE FROM workflows WHERE channel_id = ?", (channel_id,))

    def close(self) -> None:
        return None
