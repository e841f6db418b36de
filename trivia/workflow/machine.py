"""Per-channel turn state machine.

Every mutating operation reads the channel record, validates the action
against it and writes the result while holding the channel lock, so two
concurrent callers can never both pass validation for the same transition.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from datetime import timezone

from trivia.core.identity import mention
from trivia.core.locks import KeyedLocks
from trivia.workflow.errors import AlreadyAskedError
from trivia.workflow.errors import AlreadyHostingError
from trivia.workflow.errors import GameNotStartedError
from trivia.workflow.errors import HostedByOtherError
from trivia.workflow.errors import NoQuestionYetError
from trivia.workflow.errors import NotYourTurnError
from trivia.workflow.errors import SelfAnswerError
from trivia.workflow.models import Answer
from trivia.workflow.models import ChannelWorkflow
from trivia.workflow.models import GameState
from trivia.workflow.models import WorkflowStage
from trivia.workflow.store import WorkflowStore

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WorkflowStateMachine:
    """Validates and applies turn/stage transitions for every channel."""

    def __init__(
        self,
        store: WorkflowStore,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._locks = KeyedLocks()
        self._clock = clock

    @contextmanager
    def lock_channel(self, channel_id: str) -> Iterator[None]:
        """Acquire one channel write lock; re-entrant for the holding thread."""
        with self._locks.hold(channel_id):
            yield

    def _require(self, channel_id: str) -> ChannelWorkflow:
        workflow = self._store.find(channel_id)
        if workflow is None:
            raise GameNotStartedError(channel_id=channel_id)
        return workflow

    def on_game_started(self, channel_id: str, user_id: str, topic: str | None = None) -> GameState:
        """Create the channel record with ``user_id`` as host."""
        with self.lock_channel(channel_id):
            existing = self._store.find(channel_id)
            if existing is not None:
                if existing.host_id == user_id:
                    raise AlreadyHostingError(channel_id=channel_id)
                raise HostedByOtherError(existing.host_id, channel_id=channel_id)

            workflow = ChannelWorkflow(
                channel_id=channel_id,
                stage=WorkflowStage.STARTED,
                host_id=user_id,
                topic=topic,
            )
            self._store.save(workflow)
            logger.info("game started channel=%s host=%s", channel_id, user_id)
            return GameState.from_workflow(workflow)

    def on_game_stopped(self, channel_id: str, user_id: str) -> None:
        """Delete the channel record; only the host may stop the game."""
        with self.lock_channel(channel_id):
            workflow = self._require(channel_id)
            if workflow.host_id != user_id:
                raise HostedByOtherError(workflow.host_id, channel_id=channel_id)

            self._store.delete(channel_id)
            logger.info("game stopped channel=%s host=%s", channel_id, user_id)

    def on_question_submitted(
        self,
        channel_id: str,
        user_id: str,
        question: str | None = None,
    ) -> GameState:
        """Move STARTED -> QUESTION_ASKED for the host."""
        with self.lock_channel(channel_id):
            workflow = self._require(channel_id)
            is_host = workflow.host_id == user_id
            if workflow.stage == WorkflowStage.QUESTION_ASKED:
                raise AlreadyAskedError(workflow.host_id, by_host=is_host, channel_id=channel_id)
            if not is_host:
                raise NotYourTurnError(
                    f"It's {mention(workflow.host_id)}'s turn to ask a question.",
                    workflow.host_id,
                    channel_id=channel_id,
                )

            workflow.stage = WorkflowStage.QUESTION_ASKED
            workflow.question = question
            workflow.answers = []
            self._store.save(workflow)
            logger.info("question submitted channel=%s host=%s", channel_id, user_id)
            return GameState.from_workflow(workflow)

    def _check_answer_allowed(self, workflow: ChannelWorkflow, user_id: str) -> None:
        if workflow.host_id == user_id:
            raise SelfAnswerError(channel_id=workflow.channel_id)
        if workflow.stage != WorkflowStage.QUESTION_ASKED:
            raise NoQuestionYetError(
                "A question has not yet been submitted. "
                f"Please wait for {mention(workflow.host_id)} to ask a question.",
                channel_id=workflow.channel_id,
            )

    def on_answer_submitted(self, channel_id: str, user_id: str) -> None:
        """Validate that ``user_id`` may answer the pending question."""
        with self.lock_channel(channel_id):
            self._check_answer_allowed(self._require(channel_id), user_id)

    def record_answer(
        self,
        channel_id: str,
        user_id: str,
        display_name: str,
        text: str,
    ) -> Answer:
        """Append an answer to the pending question's log after the same gate.

        A repeated submission of the same text by the same participant is a
        retry and returns the answer already logged.
        """
        with self.lock_channel(channel_id):
            workflow = self._require(channel_id)
            self._check_answer_allowed(workflow, user_id)
            for logged in workflow.answers:
                if logged.participant_id == user_id and logged.text == text:
                    return logged

            answer = Answer(
                participant_id=user_id,
                display_name=display_name,
                text=text,
                submitted_at=self._clock(),
            )
            workflow.answers.append(answer)
            self._store.save(workflow)
            return answer

    def on_correct_answer_selected(self, channel_id: str, user_id: str) -> None:
        """Validate that ``user_id`` hosts a pending question it may resolve."""
        with self.lock_channel(channel_id):
            workflow = self._require(channel_id)
            if workflow.host_id != user_id:
                raise NotYourTurnError(
                    f"It's {mention(workflow.host_id)}'s turn; only they can mark an answer correct.",
                    workflow.host_id,
                    channel_id=channel_id,
                )
            if workflow.stage != WorkflowStage.QUESTION_ASKED:
                raise NoQuestionYetError(
                    "A question has not yet been submitted. "
                    "Please ask a question before marking an answer correct.",
                    channel_id=channel_id,
                )

    def on_turn_changed(self, channel_id: str, user_id: str, new_host_id: str) -> GameState:
        """Hand the turn from the host to ``new_host_id`` and reset to STARTED."""
        with self.lock_channel(channel_id):
            workflow = self._require(channel_id)
            if workflow.host_id != user_id:
                raise NotYourTurnError(
                    f"It's {mention(workflow.host_id)}'s turn; only they can cede their turn.",
                    workflow.host_id,
                    channel_id=channel_id,
                )

            workflow.host_id = new_host_id
            workflow.stage = WorkflowStage.STARTED
            workflow.question = None
            workflow.answers = []
            self._store.save(workflow)
            logger.info("turn changed channel=%s from=%s to=%s", channel_id, user_id, new_host_id)
            return GameState.from_workflow(workflow)

    def cede_to_self(self, channel_id: str, user_id: str) -> GameState:
        """Reset a pending question back to STARTED, keeping the same host."""
        return self.on_turn_changed(channel_id, user_id, user_id)

    def get_current_state(self, channel_id: str) -> GameState | None:
        """Return a snapshot of the channel, or None when no game is active.

        Reads take no channel lock: stores hand back whole committed records,
        and polling unknown channels must not allocate locks.
        """
        workflow = self._store.find(channel_id)
        if workflow is None:
            return None
        return GameState.from_workflow(workflow)


__all__ = ["WorkflowStateMachine", "utc_now"]
