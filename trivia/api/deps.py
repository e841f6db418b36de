"""Dependency helpers shared by API routers."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Header

import trivia.runtime as runtime
from trivia.api.http import raise_api_error
from trivia.game.orchestrator import GameOrchestrator


@dataclass(frozen=True, slots=True)
class Actor:
    user_id: str
    username: str | None


def _decode_header_text(value: str) -> str:
    # Starlette decodes header bytes as latin-1; gateways send UTF-8.
    try:
        return value.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return value


def require_actor(
    user_id: str | None = Header(default=None, alias="X-Trivia-User"),
    username: str | None = Header(default=None, alias="X-Trivia-Username"),
) -> Actor:
    """Read the acting participant resolved by the upstream chat gateway."""
    if user_id is None or not user_id.strip():
        raise_api_error(
            status_code=401,
            code="ACTOR_MISSING",
            message="X-Trivia-User header is required",
            detail={},
        )
    return Actor(
        user_id=user_id.strip(),
        username=None if username is None else _decode_header_text(username),
    )


def orchestrator() -> GameOrchestrator:
    return runtime.get_orchestrator()
