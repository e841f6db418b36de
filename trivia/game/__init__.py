"""Game orchestration package."""

from trivia.game.orchestrator import GameIntegrityError
from trivia.game.orchestrator import GameOrchestrator
from trivia.game.outcome import Failure
from trivia.game.outcome import FailureReason
from trivia.game.outcome import Outcome
from trivia.game.outcome import Success

__all__ = [
    "Failure",
    "FailureReason",
    "GameIntegrityError",
    "GameOrchestrator",
    "Outcome",
    "Success",
]
