"""Pydantic models for channel game APIs."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import Field


class StartRequest(BaseModel):
    """POST /api/channels/{channel_id}/start request body."""

    topic: str | None = None


class QuestionRequest(BaseModel):
    """POST /api/channels/{channel_id}/question request body."""

    question: str = Field(min_length=1)


class AnswerRequest(BaseModel):
    """POST /api/channels/{channel_id}/answer request body."""

    answer: str = Field(min_length=1)
    username: str | None = None


class CorrectRequest(BaseModel):
    """POST /api/channels/{channel_id}/correct request body."""

    target: str = Field(min_length=1)
    answer: str | None = None
