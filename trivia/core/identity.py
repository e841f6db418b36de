"""Participant identity helpers: mention resolution and display names."""

from __future__ import annotations

import unicodedata

import regex

_GRAPHEME_PATTERN = regex.compile(r"\X")
# <@U123>, <@U123|jsmith>, @U123 or a bare U123
_MENTION_PATTERN = regex.compile(r"^(?:<@(?P<wrapped>[A-Za-z0-9_.-]+)(?:\|[^>]*)?>|@?(?P<bare>[A-Za-z0-9_.-]+))$")


class ParticipantResolutionError(ValueError):
    """Raised when a mention or target string names no participant."""


def resolve_participant_id(raw_target: str) -> str:
    """Map a raw mention/target string to a canonical participant id."""
    candidate = unicodedata.normalize("NFC", raw_target.strip())
    match = _MENTION_PATTERN.match(candidate)
    if match is None:
        raise ParticipantResolutionError(f"cannot resolve participant from {raw_target!r}")
    return match.group("wrapped") or match.group("bare")


def mention(participant_id: str) -> str:
    return f"<@{participant_id}>"


def normalize_display_name(raw_name: str | None, fallback: str) -> str:
    """Trim and normalize a display name to NFC form, falling back to the id."""
    if raw_name is None:
        return fallback
    normalized = unicodedata.normalize("NFC", raw_name.strip())
    return normalized or fallback


def count_graphemes(value: str) -> int:
    """Count user-visible characters using grapheme clusters."""
    return len(_GRAPHEME_PATTERN.findall(value))


def pad_right(value: str, width: int) -> str:
    """Left-justify by grapheme count so composed names align in tables."""
    return value + " " * max(0, width - count_graphemes(value))
