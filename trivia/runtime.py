"""Process-wide runtime wiring shared by HTTP handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from trivia.core.config import Settings
from trivia.core.config import load_settings
from trivia.core.logging import configure_logging
from trivia.core.schema import init_trivia_schema
from trivia.game.orchestrator import GameOrchestrator
from trivia.scores.ledger import ScoreLedger
from trivia.scores.store import InMemoryScoreStore
from trivia.scores.store import ScoreStore
from trivia.scores.store import SqliteScoreStore
from trivia.workflow.machine import WorkflowStateMachine
from trivia.workflow.store import InMemoryWorkflowStore
from trivia.workflow.store import SqliteWorkflowStore
from trivia.workflow.store import WorkflowStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GameRuntime:
    """Explicitly owned store instances plus the orchestrator built on them."""

    settings: Settings
    workflow_store: WorkflowStore
    score_store: ScoreStore
    orchestrator: GameOrchestrator

    def close(self) -> None:
        self.workflow_store.close()
        self.score_store.close()


def build_runtime(settings: Settings) -> GameRuntime:
    """Create stores for the configured backend and wire the orchestrator."""
    workflow_store: WorkflowStore
    score_store: ScoreStore
    if settings.trivia_store_backend == "sqlite":
        init_trivia_schema(settings.trivia_sqlite_path)
        workflow_store = SqliteWorkflowStore(settings.trivia_sqlite_path)
        score_store = SqliteScoreStore(settings.trivia_sqlite_path)
    else:
        workflow_store = InMemoryWorkflowStore()
        score_store = InMemoryScoreStore()

    orchestrator = GameOrchestrator(
        WorkflowStateMachine(workflow_store),
        ScoreLedger(score_store),
        command_name=settings.trivia_command_name,
        display_timezone=settings.display_timezone,
    )
    return GameRuntime(
        settings=settings,
        workflow_store=workflow_store,
        score_store=score_store,
        orchestrator=orchestrator,
    )


runtime: GameRuntime | None = None


def startup() -> GameRuntime:
    """Load settings, configure logging and (re)build the runtime."""
    global runtime
    settings = load_settings()
    configure_logging(settings.trivia_log_level)
    if runtime is not None:
        runtime.close()
    runtime = build_runtime(settings)
    logger.info(
        "runtime started env=%s backend=%s command=%s",
        settings.trivia_app_env,
        settings.trivia_store_backend,
        settings.trivia_command_name,
    )
    return runtime


def shutdown() -> None:
    global runtime
    if runtime is None:
        return
    runtime.close()
    runtime = None
    logger.info("runtime stopped")


def get_orchestrator() -> GameOrchestrator:
    """Return the live orchestrator; fails loudly before startup."""
    if runtime is None:
        raise RuntimeError("runtime is not started")
    return runtime.orchestrator


__all__ = [
    "GameRuntime",
    "build_runtime",
    "get_orchestrator",
    "runtime",
    "shutdown",
    "startup",
]
