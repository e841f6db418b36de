"""Workflow-domain errors raised by the turn state machine.

Every error carries a user-facing message; the orchestrator passes it
through verbatim except for ``GameNotStartedError``, which gets its own
guidance text.
"""

from __future__ import annotations

from trivia.core.identity import mention


class WorkflowError(Exception):
    """Base class for turn/stage violations."""

    def __init__(self, message: str, *, channel_id: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.channel_id = channel_id


class GameNotStartedError(WorkflowError):
    """Raised when the channel has no active game."""

    def __init__(self, *, channel_id: str | None = None) -> None:
        super().__init__("A game has not yet been started.", channel_id=channel_id)


class TurnViolationError(WorkflowError):
    """Raised when the acting user is the wrong participant for the action."""


class StageViolationError(WorkflowError):
    """Raised when the action is illegal in the current stage."""


class AlreadyHostingError(TurnViolationError):
    def __init__(self, *, channel_id: str | None = None) -> None:
        super().__init__("You are already hosting!", channel_id=channel_id)


class HostedByOtherError(TurnViolationError):
    def __init__(self, host_id: str, *, channel_id: str | None = None) -> None:
        super().__init__(f"{mention(host_id)} is currently hosting.", channel_id=channel_id)
        self.host_id = host_id


class NotYourTurnError(TurnViolationError):
    def __init__(self, message: str, host_id: str, *, channel_id: str | None = None) -> None:
        super().__init__(message, channel_id=channel_id)
        self.host_id = host_id


class SelfAnswerError(TurnViolationError):
    def __init__(self, *, channel_id: str | None = None) -> None:
        super().__init__("You can't answer your own question!", channel_id=channel_id)


class AlreadyAskedError(StageViolationError):
    def __init__(self, host_id: str, *, by_host: bool, channel_id: str | None = None) -> None:
        who = "You have" if by_host else f"{mention(host_id)} has"
        super().__init__(f"{who} already asked a question.", channel_id=channel_id)
        self.host_id = host_id


class NoQuestionYetError(StageViolationError):
    pass


__all__ = [
    "AlreadyAskedError",
    "AlreadyHostingError",
    "GameNotStartedError",
    "HostedByOtherError",
    "NoQuestionYetError",
    "NotYourTurnError",
    "SelfAnswerError",
    "StageViolationError",
    "TurnViolationError",
    "WorkflowError",
]
