"""Per-channel serialization under concurrent requests."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from trivia.game.orchestrator import GameOrchestrator
from trivia.game.outcome import FailureReason
from trivia.scores.ledger import ScoreLedger
from trivia.scores.models import Participant
from trivia.scores.store import InMemoryScoreStore
from trivia.workflow.machine import WorkflowStateMachine
from trivia.workflow.models import WorkflowStage
from trivia.workflow.store import InMemoryWorkflowStore


def _slow_store_reads(monkeypatch: pytest.MonkeyPatch, store, delay: float = 0.02) -> None:
    """Expand the race window so concurrent callers read the same record."""
    original_find = store.find

    def _slow_find(*args, **kwargs):
        result = original_find(*args, **kwargs)
        time.sleep(delay)
        return result

    monkeypatch.setattr(store, "find", _slow_find)


def _count_saves(monkeypatch: pytest.MonkeyPatch, store) -> list[object]:
    saved: list[object] = []
    original_save = store.save

    def _recording_save(record):
        saved.append(record)
        return original_save(record)

    monkeypatch.setattr(store, "save", _recording_save)
    return saved


def test_cc_01_concurrent_questions_from_host_yield_one_transition(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """N concurrent question submissions: one success, N-1 stage violations."""
    store = InMemoryWorkflowStore()
    game = GameOrchestrator(WorkflowStateMachine(store), ScoreLedger(InMemoryScoreStore()))
    game.start("C1", "U1")
    _slow_store_reads(monkeypatch, store)
    saved = _count_saves(monkeypatch, store)

    workers = 8
    start_barrier = threading.Barrier(workers)

    def _ask(idx: int):
        start_barrier.wait()
        return game.submit_question("C1", "U1", f"question {idx}?")

    with ThreadPoolExecutor(max_workers=workers) as executor:
        outcomes = list(executor.map(_ask, range(workers)))

    successes = [outcome for outcome in outcomes if outcome.ok]
    failures = [outcome for outcome in outcomes if not outcome.ok]
    assert len(successes) == 1
    assert len(failures) == workers - 1
    assert all(failure.message == "You have already asked a question." for failure in failures)
    assert len(saved) == 1
    assert store.find("C1").stage == WorkflowStage.QUESTION_ASKED


def test_cc_02_concurrent_starts_create_one_game(monkeypatch: pytest.MonkeyPatch) -> None:
    store = InMemoryWorkflowStore()
    machine = WorkflowStateMachine(store)
    game = GameOrchestrator(machine, ScoreLedger(InMemoryScoreStore()))
    _slow_store_reads(monkeypatch, store)

    users = [f"U{idx}" for idx in range(6)]
    start_barrier = threading.Barrier(len(users))

    def _start(user_id: str):
        start_barrier.wait()
        return user_id, game.start("C1", user_id)

    with ThreadPoolExecutor(max_workers=len(users)) as executor:
        results = list(executor.map(_start, users))

    winners = [user_id for user_id, outcome in results if outcome.ok]
    assert len(winners) == 1
    assert machine.get_current_state("C1").host_id == winners[0]
    assert all(
        outcome.message == f"<@{winners[0]}> is currently hosting."
        for _, outcome in results
        if not outcome.ok
    )


def test_cc_03_retried_mark_correct_scores_once(monkeypatch: pytest.MonkeyPatch) -> None:
    """Racing retries of one mark-correct must not double-increment or double hand off."""
    workflow_store = InMemoryWorkflowStore()
    score_store = InMemoryScoreStore()
    machine = WorkflowStateMachine(workflow_store)
    ledger = ScoreLedger(score_store)
    game = GameOrchestrator(machine, ledger)
    game.start("C1", "U1")
    game.submit_question("C1", "U1", "2+2?")
    game.submit_answer("C1", "U2", "4", username="joe")
    _slow_store_reads(monkeypatch, workflow_store)
    _slow_store_reads(monkeypatch, score_store)

    retries = 5
    start_barrier = threading.Barrier(retries)

    def _mark(_: int):
        start_barrier.wait()
        return game.mark_correct("C1", "U1", "<@U2>")

    with ThreadPoolExecutor(max_workers=retries) as executor:
        outcomes = list(executor.map(_mark, range(retries)))

    assert sum(1 for outcome in outcomes if outcome.ok) == 1
    assert all(outcome.reason == FailureReason.WORKFLOW for outcome in outcomes if not outcome.ok)
    assert ledger.all_scores("C1") == {Participant("U2", "joe"): 1}
    assert machine.get_current_state("C1").host_id == "U2"


def test_cc_04_concurrent_increments_are_exact(monkeypatch: pytest.MonkeyPatch) -> None:
    store = InMemoryScoreStore()
    ledger = ScoreLedger(store)
    ledger.create_participant_if_absent("C1", Participant("U2", "joe"))
    _slow_store_reads(monkeypatch, store, delay=0.001)

    increments = 40
    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(lambda _: ledger.increment_score("C1", "U2"), range(increments)))

    assert ledger.all_scores("C1") == {Participant("U2", "joe"): increments}


def test_cc_05_channels_do_not_contend(monkeypatch: pytest.MonkeyPatch) -> None:
    """A writer stalled on one channel must not block another channel."""
    store = InMemoryWorkflowStore()
    machine = WorkflowStateMachine(store)
    stalled = threading.Event()
    release = threading.Event()
    original_find = store.find

    def _blocking_find(channel_id: str):
        if channel_id == "SLOW":
            stalled.set()
            release.wait(timeout=2)
        return original_find(channel_id)

    monkeypatch.setattr(store, "find", _blocking_find)

    with ThreadPoolExecutor(max_workers=1) as executor:
        pending = executor.submit(machine.on_game_started, "SLOW", "U1")
        assert stalled.wait(timeout=2)

        started_at = time.monotonic()
        machine.on_game_started("FAST", "U2")
        elapsed = time.monotonic() - started_at

        release.set()
        pending.result(timeout=2)

    assert elapsed < 1
    assert machine.get_current_state("FAST").host_id == "U2"
