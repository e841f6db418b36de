"""Outcome -> HTTP response mapping."""

from __future__ import annotations

from typing import Any

from trivia.api.http import raise_api_error
from trivia.game.outcome import FailureReason
from trivia.game.outcome import Outcome
from trivia.game.outcome import Success

FAILURE_STATUS = {
    FailureReason.NOT_STARTED: 404,
    FailureReason.WORKFLOW: 409,
    FailureReason.UNKNOWN_PARTICIPANT: 422,
    FailureReason.INTERNAL: 500,
}


def outcome_response(outcome: Outcome, *, channel_id: str) -> dict[str, Any]:
    """Return the success body, or raise the unified API error for failures."""
    if isinstance(outcome, Success):
        return {
            "ok": True,
            "message": outcome.message,
            "in_channel": outcome.in_channel,
            "announcement": outcome.announcement,
            "payload": outcome.payload,
        }

    raise_api_error(
        status_code=FAILURE_STATUS[outcome.reason],
        code=outcome.reason.value,
        message=outcome.message,
        detail={"channel_id": channel_id, "hint": outcome.hint},
    )
