"""Channel game REST routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi import Depends

from trivia.api.deps import Actor
from trivia.api.deps import orchestrator
from trivia.api.deps import require_actor
from trivia.api.models import AnswerRequest
from trivia.api.models import CorrectRequest
from trivia.api.models import QuestionRequest
from trivia.api.models import StartRequest
from trivia.api.views import outcome_response
from trivia.game.orchestrator import GameOrchestrator

router = APIRouter(prefix="/api/channels/{channel_id}")


@router.post("/start")
def start_game(
    channel_id: str,
    payload: StartRequest | None = None,
    actor: Actor = Depends(require_actor),
    game: GameOrchestrator = Depends(orchestrator),
) -> dict[str, Any]:
    """Start a game hosted by the acting user."""
    topic = payload.topic if payload is not None else None
    return outcome_response(game.start(channel_id, actor.user_id, topic=topic), channel_id=channel_id)


@router.post("/stop")
def stop_game(
    channel_id: str,
    actor: Actor = Depends(require_actor),
    game: GameOrchestrator = Depends(orchestrator),
) -> dict[str, Any]:
    """Stop the channel game; scores are kept."""
    return outcome_response(game.stop(channel_id, actor.user_id), channel_id=channel_id)


@router.post("/question")
def submit_question(
    channel_id: str,
    payload: QuestionRequest,
    actor: Actor = Depends(require_actor),
    game: GameOrchestrator = Depends(orchestrator),
) -> dict[str, Any]:
    """Post the host's question."""
    return outcome_response(
        game.submit_question(channel_id, actor.user_id, payload.question),
        channel_id=channel_id,
    )


@router.post("/answer")
def submit_answer(
    channel_id: str,
    payload: AnswerRequest,
    actor: Actor = Depends(require_actor),
    game: GameOrchestrator = Depends(orchestrator),
) -> dict[str, Any]:
    """Answer the pending question."""
    return outcome_response(
        game.submit_answer(
            channel_id,
            actor.user_id,
            payload.answer,
            username=payload.username or actor.username,
        ),
        channel_id=channel_id,
    )


@router.post("/correct")
def mark_correct(
    channel_id: str,
    payload: CorrectRequest,
    actor: Actor = Depends(require_actor),
    game: GameOrchestrator = Depends(orchestrator),
) -> dict[str, Any]:
    """Mark a participant's answer correct, or `none` when nobody got it."""
    return outcome_response(
        game.mark_correct(channel_id, actor.user_id, payload.target, answer=payload.answer),
        channel_id=channel_id,
    )


@router.get("/status")
def get_status(
    channel_id: str,
    actor: Actor = Depends(require_actor),
    game: GameOrchestrator = Depends(orchestrator),
) -> dict[str, Any]:
    return outcome_response(game.get_status(channel_id, actor.user_id), channel_id=channel_id)


@router.get("/scores")
def get_scores(
    channel_id: str,
    actor: Actor = Depends(require_actor),
    game: GameOrchestrator = Depends(orchestrator),
) -> dict[str, Any]:
    return outcome_response(game.get_scores(channel_id, actor.user_id), channel_id=channel_id)


@router.delete("/scores")
def reset_scores(
    channel_id: str,
    actor: Actor = Depends(require_actor),
    game: GameOrchestrator = Depends(orchestrator),
) -> dict[str, Any]:
    return outcome_response(game.reset_scores(channel_id, actor.user_id), channel_id=channel_id)
