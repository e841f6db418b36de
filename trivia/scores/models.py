"""Score ledger domain models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Participant:
    """A channel participant as shown on the scoreboard."""

    participant_id: str
    display_name: str


@dataclass(slots=True)
class ScoreEntry:
    """Running score of one participant in one channel."""

    channel_id: str
    participant_id: str
    display_name: str
    score: int = 0

    @property
    def participant(self) -> Participant:
        return Participant(participant_id=self.participant_id, display_name=self.display_name)
