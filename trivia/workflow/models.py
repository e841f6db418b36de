"""In-memory workflow domain models."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace
from datetime import datetime
from enum import Enum


class WorkflowStage(str, Enum):
    """Stored stages of an active game; a missing record means no game."""

    STARTED = "STARTED"
    QUESTION_ASKED = "QUESTION_ASKED"


@dataclass(frozen=True, slots=True)
class Answer:
    """One submitted answer to the pending question."""

    participant_id: str
    display_name: str
    text: str
    submitted_at: datetime


@dataclass(slots=True)
class ChannelWorkflow:
    """Turn-taking state for one channel."""

    channel_id: str
    stage: WorkflowStage
    host_id: str
    topic: str | None = None
    question: str | None = None
    answers: list[Answer] = field(default_factory=list)

    def copy(self) -> "ChannelWorkflow":
        return replace(self, answers=list(self.answers))


@dataclass(frozen=True, slots=True)
class GameState:
    """Read-only snapshot returned to callers outside the state machine."""

    channel_id: str
    stage: WorkflowStage
    host_id: str
    topic: str | None = None
    question: str | None = None
    answers: tuple[Answer, ...] = ()

    @classmethod
    def from_workflow(cls, workflow: ChannelWorkflow) -> "GameState":
        return cls(
            channel_id=workflow.channel_id,
            stage=workflow.stage,
            host_id=workflow.host_id,
            topic=workflow.topic,
            question=workflow.question,
            answers=tuple(workflow.answers),
        )
