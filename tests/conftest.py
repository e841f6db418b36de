"""Shared fixtures for workflow, ledger and orchestrator tests."""

from __future__ import annotations

from datetime import datetime
from datetime import timezone
from pathlib import Path

import pytest

from trivia.core.schema import init_trivia_schema
from trivia.game.orchestrator import GameOrchestrator
from trivia.scores.ledger import ScoreLedger
from trivia.scores.store import InMemoryScoreStore
from trivia.workflow.machine import WorkflowStateMachine
from trivia.workflow.store import InMemoryWorkflowStore

FIXED_NOW = datetime(2018, 10, 9, 16, 30, 33, tzinfo=timezone.utc)


@pytest.fixture
def workflow_store() -> InMemoryWorkflowStore:
    return InMemoryWorkflowStore()


@pytest.fixture
def score_store() -> InMemoryScoreStore:
    return InMemoryScoreStore()


@pytest.fixture
def machine(workflow_store: InMemoryWorkflowStore) -> WorkflowStateMachine:
    return WorkflowStateMachine(workflow_store, clock=lambda: FIXED_NOW)


@pytest.fixture
def ledger(score_store: InMemoryScoreStore) -> ScoreLedger:
    return ScoreLedger(score_store)


@pytest.fixture
def game(machine: WorkflowStateMachine, ledger: ScoreLedger) -> GameOrchestrator:
    return GameOrchestrator(machine, ledger, command_name="/trivia")


@pytest.fixture
def sqlite_path(tmp_path: Path) -> str:
    """Fresh SQLite database with the trivia schema applied."""
    path = str(tmp_path / "trivia.sqlite3")
    init_trivia_schema(path)
    return path
