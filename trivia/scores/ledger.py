"""Per-channel score ledger."""

from __future__ import annotations

import logging

from trivia.core.locks import KeyedLocks
from trivia.scores.models import Participant
from trivia.scores.models import ScoreEntry
from trivia.scores.store import ScoreStore

logger = logging.getLogger(__name__)


class ScoreError(Exception):
    """Base class for score-ledger errors."""


class UnknownParticipantError(ScoreError):
    """Raised when incrementing a participant with no entry in the channel."""

    def __init__(self, channel_id: str, participant_id: str) -> None:
        super().__init__(f"participant_id={participant_id} not found in channel_id={channel_id}")
        self.channel_id = channel_id
        self.participant_id = participant_id


class ScoreLedger:
    """Counter store; writers on one channel are serialized, channels are independent."""

    def __init__(self, store: ScoreStore) -> None:
        self._store = store
        self._locks = KeyedLocks()

    def create_participant_if_absent(self, channel_id: str, participant: Participant) -> ScoreEntry:
        """Insert a zero-score entry unless one already exists."""
        with self._locks.hold(channel_id):
            entry = self._store.find(channel_id, participant.participant_id)
            if entry is not None:
                return entry

            entry = ScoreEntry(
                channel_id=channel_id,
                participant_id=participant.participant_id,
                display_name=participant.display_name,
            )
            self._store.save(entry)
            logger.info(
                "participant created channel=%s participant=%s",
                channel_id,
                participant.participant_id,
            )
            return entry

    def increment_score(self, channel_id: str, participant_id: str) -> int:
        """Add one point and return the new score."""
        with self._locks.hold(channel_id):
            entry = self._store.find(channel_id, participant_id)
            if entry is None:
                raise UnknownParticipantError(channel_id, participant_id)

            entry.score += 1
            self._store.save(entry)
            logger.info(
                "score incremented channel=%s participant=%s score=%d",
                channel_id,
                participant_id,
                entry.score,
            )
            return entry.score

    def all_scores(self, channel_id: str) -> dict[Participant, int]:
        """Return an unordered participant -> score snapshot without taking the channel lock."""
        entries = self._store.list_channel(channel_id)
        return {entry.participant: entry.score for entry in entries}

    def reset_all(self, channel_id: str) -> None:
        """Delete every entry of the channel."""
        with self._locks.hold(channel_id):
            self._store.delete_channel(channel_id)
        logger.info("scores reset channel=%s", channel_id)


__all__ = ["ScoreError", "ScoreLedger", "UnknownParticipantError"]
