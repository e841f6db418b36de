"""Uniform result type returned by every game action."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any
from typing import Union


class FailureReason(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    WORKFLOW = "WORKFLOW"
    UNKNOWN_PARTICIPANT = "UNKNOWN_PARTICIPANT"
    INTERNAL = "INTERNAL"


@dataclass(frozen=True, slots=True)
class Success:
    """Accepted action.

    ``message`` answers the acting user; ``announcement``, when present, is
    meant for everyone in the channel and is handed to the delivery layer.
    """

    message: str
    in_channel: bool = False
    announcement: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    """Rejected action with user-facing guidance."""

    reason: FailureReason
    message: str
    hint: str | None = None

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Success, Failure]


__all__ = ["Failure", "FailureReason", "Outcome", "Success"]
