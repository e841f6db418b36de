"""Participant mention resolution and display-name helpers."""

from __future__ import annotations

import pytest

from trivia.core.identity import ParticipantResolutionError
from trivia.core.identity import count_graphemes
from trivia.core.identity import normalize_display_name
from trivia.core.identity import pad_right
from trivia.core.identity import resolve_participant_id


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("<@U123>", "U123"),
        ("<@U123|jsmith>", "U123"),
        ("@U123", "U123"),
        ("  U123 ", "U123"),
    ],
)
def test_identity_01_mentions_resolve_to_canonical_id(raw: str, expected: str) -> None:
    assert resolve_participant_id(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "<@>", "two words", "<@U1"])
def test_identity_02_malformed_targets_are_rejected(raw: str) -> None:
    with pytest.raises(ParticipantResolutionError):
        resolve_participant_id(raw)


def test_identity_03_display_name_trim_nfc_and_fallback() -> None:
    assert normalize_display_name(" é ", fallback="U1") == "é"
    assert normalize_display_name("   ", fallback="U1") == "U1"
    assert normalize_display_name(None, fallback="U1") == "U1"


def test_identity_04_padding_counts_graphemes() -> None:
    assert count_graphemes("éa") == 2
    assert pad_right("é", 3) == "é  "
    assert pad_right("abcd", 2) == "abcd"
