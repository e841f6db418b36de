"""Game action surface.

The orchestrator is stateless: it sequences calls into the workflow state
machine and the score ledger, and converts their errors into ``Failure``
outcomes. Composite actions hold the channel lock across every sub-step so
a retried request cannot slip between the score update and the turn
hand-off.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import timezone
from datetime import tzinfo

from trivia.core.db import StoreError
from trivia.core.identity import ParticipantResolutionError
from trivia.core.identity import normalize_display_name
from trivia.core.identity import resolve_participant_id
from trivia.game import messages
from trivia.game.outcome import Failure
from trivia.game.outcome import FailureReason
from trivia.game.outcome import Outcome
from trivia.game.outcome import Success
from trivia.scores.ledger import ScoreLedger
from trivia.scores.ledger import UnknownParticipantError
from trivia.scores.models import Participant
from trivia.workflow.errors import GameNotStartedError
from trivia.workflow.errors import WorkflowError
from trivia.workflow.machine import WorkflowStateMachine

logger = logging.getLogger(__name__)

NO_CORRECT_ANSWER_TARGET = "none"


class GameIntegrityError(RuntimeError):
    """Raised when a score was awarded but the turn could not be handed off."""

    def __init__(self, channel_id: str, winner_id: str) -> None:
        super().__init__(
            f"score for participant_id={winner_id} was incremented in channel_id={channel_id} "
            "but the turn hand-off failed"
        )
        self.channel_id = channel_id
        self.winner_id = winner_id


class GameOrchestrator:
    """Public action surface used by command dispatch and delivery layers."""

    def __init__(
        self,
        workflow: WorkflowStateMachine,
        ledger: ScoreLedger,
        *,
        command_name: str = "/trivia",
        resolve_participant: Callable[[str], str] = resolve_participant_id,
        display_timezone: tzinfo = timezone.utc,
    ) -> None:
        self._workflow = workflow
        self._ledger = ledger
        self._command = command_name
        self._resolve_participant = resolve_participant
        self._display_timezone = display_timezone

    def _guarded(self, action: str, channel_id: str, user_id: str, body: Callable[[], Outcome]) -> Outcome:
        try:
            return body()
        except GameNotStartedError:
            logger.info("%s rejected channel=%s user=%s reason=not_started", action, channel_id, user_id)
            return Failure(
                reason=FailureReason.NOT_STARTED,
                message=messages.game_not_started(self._command),
            )
        except WorkflowError as exc:
            logger.info(
                "%s rejected channel=%s user=%s reason=%s",
                action,
                channel_id,
                user_id,
                type(exc).__name__,
            )
            return Failure(reason=FailureReason.WORKFLOW, message=exc.message)
        except StoreError:
            logger.exception("%s failed in storage channel=%s user=%s", action, channel_id, user_id)
            return Failure(reason=FailureReason.INTERNAL, message=messages.internal_failure())

    def _unknown_participant(self, target: str) -> Failure:
        return Failure(
            reason=FailureReason.UNKNOWN_PARTICIPANT,
            message=messages.unknown_participant(target),
            hint=messages.correct_usage(self._command),
        )

    def _scores_block(self, channel_id: str) -> str:
        return messages.scores_text(self._ledger.all_scores(channel_id))

    def start(self, channel_id: str, user_id: str, topic: str | None = None) -> Outcome:
        def _body() -> Outcome:
            state = self._workflow.on_game_started(channel_id, user_id, topic=topic or None)
            return Success(
                message=messages.game_started(user_id),
                in_channel=True,
                payload={"host_id": state.host_id, "stage": state.stage.value, "topic": state.topic},
            )

        return self._guarded("start", channel_id, user_id, _body)

    def stop(self, channel_id: str, user_id: str) -> Outcome:
        def _body() -> Outcome:
            self._workflow.on_game_stopped(channel_id, user_id)
            return Success(message=messages.game_stopped(self._command), in_channel=True)

        return self._guarded("stop", channel_id, user_id, _body)

    def submit_question(self, channel_id: str, user_id: str, question: str) -> Outcome:
        def _body() -> Outcome:
            state = self._workflow.on_question_submitted(channel_id, user_id, question=question)
            return Success(
                message="Question posted.",
                announcement=messages.question_asked(user_id, question),
                payload={"host_id": state.host_id, "stage": state.stage.value},
            )

        return self._guarded("submit_question", channel_id, user_id, _body)

    def submit_answer(
        self,
        channel_id: str,
        user_id: str,
        answer: str,
        username: str | None = None,
    ) -> Outcome:
        display_name = normalize_display_name(username, fallback=user_id)

        def _body() -> Outcome:
            with self._workflow.lock_channel(channel_id):
                self._workflow.on_answer_submitted(channel_id, user_id)
                self._ledger.create_participant_if_absent(
                    channel_id,
                    Participant(participant_id=user_id, display_name=display_name),
                )
                self._workflow.record_answer(channel_id, user_id, display_name, answer)
            return Success(
                message="Answer submitted.",
                announcement=messages.answer_given(user_id, answer),
            )

        return self._guarded("submit_answer", channel_id, user_id, _body)

    def mark_correct(
        self,
        channel_id: str,
        user_id: str,
        target: str,
        answer: str | None = None,
    ) -> Outcome:
        """Resolve the pending question and hand the turn to the winner.

        ``target`` is either a participant mention or ``none`` when nobody
        answered correctly; the latter keeps the turn with the asker.
        """

        def _nobody() -> Outcome:
            self._workflow.on_correct_answer_selected(channel_id, user_id)
            self._workflow.cede_to_self(channel_id, user_id)
            return Success(
                message="Score updated.",
                announcement=messages.nobody_correct(user_id, self._scores_block(channel_id)),
                payload={"host_id": user_id, "winner_id": None},
            )

        def _winner() -> Outcome:
            try:
                winner_id = self._resolve_participant(target)
            except ParticipantResolutionError:
                return self._unknown_participant(target)

            self._workflow.on_correct_answer_selected(channel_id, user_id)
            try:
                new_score = self._ledger.increment_score(channel_id, winner_id)
            except UnknownParticipantError:
                return self._unknown_participant(target)

            try:
                self._workflow.on_turn_changed(channel_id, user_id, winner_id)
            except (WorkflowError, StoreError) as exc:
                logger.critical(
                    "turn hand-off failed after score increment channel=%s host=%s winner=%s",
                    channel_id,
                    user_id,
                    winner_id,
                )
                raise GameIntegrityError(channel_id, winner_id) from exc

            return Success(
                message="Score updated.",
                announcement=messages.correct_answer(winner_id, answer, self._scores_block(channel_id)),
                payload={"host_id": winner_id, "winner_id": winner_id, "score": new_score},
            )

        def _body() -> Outcome:
            with self._workflow.lock_channel(channel_id):
                if target.strip().lower() == NO_CORRECT_ANSWER_TARGET:
                    return _nobody()
                return _winner()

        return self._guarded("mark_correct", channel_id, user_id, _body)

    def get_status(self, channel_id: str, user_id: str) -> Outcome:
        def _body() -> Outcome:
            state = self._workflow.get_current_state(channel_id)
            if state is None:
                return Success(message=messages.game_not_started(self._command), payload={"stage": None})
            return Success(
                message=messages.status_text(state, user_id, self._display_timezone),
                payload={
                    "stage": state.stage.value,
                    "host_id": state.host_id,
                    "topic": state.topic,
                    "question": state.question,
                    "answer_count": len(state.answers),
                },
            )

        return self._guarded("get_status", channel_id, user_id, _body)

    def get_scores(self, channel_id: str, user_id: str) -> Outcome:
        def _body() -> Outcome:
            scores = self._ledger.all_scores(channel_id)
            return Success(
                message=messages.scores_text(scores),
                payload={
                    "scores": [
                        {
                            "participant_id": participant.participant_id,
                            "display_name": participant.display_name,
                            "score": score,
                        }
                        for participant, score in messages.sorted_scores(scores)
                    ]
                },
            )

        return self._guarded("get_scores", channel_id, user_id, _body)

    def reset_scores(self, channel_id: str, user_id: str) -> Outcome:
        def _body() -> Outcome:
            self._ledger.reset_all(channel_id)
            return Success(
                message="Scores have been reset!",
                in_channel=True,
                announcement=self._scores_block(channel_id),
            )

        return self._guarded("reset_scores", channel_id, user_id, _body)


__all__ = ["GameIntegrityError", "GameOrchestrator", "NO_CORRECT_ANSWER_TARGET"]
