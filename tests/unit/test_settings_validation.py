"""Configuration guard contracts."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from trivia.core.config import Settings
from trivia.core.config import load_settings


def test_settings_01_defaults() -> None:
    settings = Settings()

    assert settings.trivia_store_backend == "memory"
    assert settings.trivia_command_name == "/trivia"


def test_settings_02_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRIVIA_STORE_BACKEND", "sqlite")
    monkeypatch.setenv("TRIVIA_COMMAND_NAME", "/quiz")

    settings = load_settings()

    assert settings.trivia_store_backend == "sqlite"
    assert settings.trivia_command_name == "/quiz"


@pytest.mark.parametrize(
    "overrides",
    [
        {"trivia_store_backend": "redis"},
        {"trivia_command_name": "trivia"},
        {"trivia_command_name": "/ "},
        {"trivia_sqlite_path": ":memory:"},
        {"trivia_sqlite_path": "file::memory:?cache=shared"},
        {"trivia_display_timezone": "Mars/Olympus_Mons"},
    ],
)
def test_settings_03_invalid_values_are_rejected(overrides: dict[str, str]) -> None:
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_settings_04_display_timezone_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRIVIA_DISPLAY_TIMEZONE", "America/Chicago")

    settings = load_settings()

    assert settings.display_timezone.key == "America/Chicago"
    assert Settings().display_timezone.key == "America/Chicago"
    monkeypatch.delenv("TRIVIA_DISPLAY_TIMEZONE")
    assert Settings().display_timezone.key == "UTC"
