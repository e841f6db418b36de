"""Application settings for backend runtime and tests."""

from __future__ import annotations

from zoneinfo import ZoneInfo
from zoneinfo import ZoneInfoNotFoundError

from pydantic import Field
from pydantic import model_validator
from pydantic_settings import BaseSettings

STORE_BACKENDS = ("memory", "sqlite")


def _is_private_memory_db(path: str) -> bool:
    # each sqlite3 connection to these opens its own empty database
    return path == ":memory:" or path == "" or path.startswith("file::memory:")


class Settings(BaseSettings):
    """Typed settings loaded from environment variables or explicit kwargs."""

    trivia_app_env: str = "dev"
    trivia_app_host: str = "127.0.0.1"
    trivia_app_port: int = Field(default=8000, ge=1)

    trivia_command_name: str = Field(default="/trivia", min_length=2)
    trivia_store_backend: str = "memory"
    trivia_sqlite_path: str = "trivia.db"
    trivia_display_timezone: str = "UTC"
    trivia_log_level: str = "INFO"

    @model_validator(mode="after")
    def validate_store_and_command(self) -> "Settings":
        """Reject unknown store backends, per-connection sqlite paths and commands without a leading slash."""
        if self.trivia_store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"TRIVIA_STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}"
            )
        if _is_private_memory_db(self.trivia_sqlite_path.strip()):
            raise ValueError("TRIVIA_SQLITE_PATH must name a database file, not an in-memory database")
        if not self.trivia_command_name.startswith("/") or not self.trivia_command_name.strip("/ "):
            raise ValueError("TRIVIA_COMMAND_NAME must look like /command")
        try:
            ZoneInfo(self.trivia_display_timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(
                f"TRIVIA_DISPLAY_TIMEZONE is not a known time zone: {self.trivia_display_timezone!r}"
            ) from exc
        return self

    @property
    def display_timezone(self) -> ZoneInfo:
        return ZoneInfo(self.trivia_display_timezone)


def load_settings() -> Settings:
    """Load settings from process environment."""
    return Settings()
