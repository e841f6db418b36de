"""Score domain package: per-channel running scores."""

from trivia.scores.ledger import ScoreError
from trivia.scores.ledger import ScoreLedger
from trivia.scores.ledger import UnknownParticipantError
from trivia.scores.models import Participant
from trivia.scores.models import ScoreEntry
from trivia.scores.store import InMemoryScoreStore
from trivia.scores.store import ScoreStore
from trivia.scores.store import SqliteScoreStore

__all__ = [
    "InMemoryScoreStore",
    "Participant",
    "ScoreEntry",
    "ScoreError",
    "ScoreLedger",
    "ScoreStore",
    "SqliteScoreStore",
    "UnknownParticipantError",
]
