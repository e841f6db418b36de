"""Scoreboard and status text formatting."""

from __future__ import annotations

from datetime import datetime
from datetime import timezone
from zoneinfo import ZoneInfo

from trivia.game import messages
from trivia.scores.models import Participant
from trivia.workflow.models import Answer
from trivia.workflow.models import GameState
from trivia.workflow.models import WorkflowStage


def _participant(name: str) -> Participant:
    return Participant(participant_id=f"id-{name}", display_name=name)


def test_messages_01_scores_sorted_by_score_then_name() -> None:
    scores = {
        _participant("test1"): 1,
        _participant("longertest2"): 103,
        _participant("unmanageablylongertest3"): 12,
        _participant("test4"): 1,
    }

    assert messages.scores_text(scores) == (
        "```Scores:\n\n"
        "@longertest2:             103\n"
        "@unmanageablylongertest3:  12\n"
        "@test1:                     1\n"
        "@test4:                     1```"
    )


def test_messages_02_empty_scores() -> None:
    assert messages.scores_text({}) == "```Scores:\n\nNo scores yet...```"


def test_messages_03_status_without_question() -> None:
    state = GameState(channel_id="C1", stage=WorkflowStage.STARTED, host_id="U6789", topic="some topic")

    assert messages.status_text(state, "U12345") == "*Topic:* some topic\n*Turn:* <@U6789>\n*Question:* Waiting..."
    assert messages.status_text(state, "U6789") == "*Topic:* some topic\n*Turn:* Yours\n*Question:* Waiting..."


def test_messages_04_status_with_question_and_no_answers() -> None:
    state = GameState(
        channel_id="C1",
        stage=WorkflowStage.QUESTION_ASKED,
        host_id="U12345",
        question="some question?",
    )

    assert messages.status_text(state, "U12345") == (
        "*Topic:* None\n*Turn:* Yours\n*Question:*\n\nsome question?\n\n*Answers:* Waiting..."
    )


def test_messages_05_status_lists_answers_in_aligned_table() -> None:
    answers = (
        Answer("U1111", "jimbob", "answer 1", datetime(2018, 10, 9, 16, 30, 33, tzinfo=timezone.utc)),
        Answer("U2222", "joe", "answer 2", datetime(2018, 10, 9, 16, 32, 21, tzinfo=timezone.utc)),
        Answer("U3333", "muchlongerusername", "answer 3", datetime(2018, 10, 9, 16, 34, 25, tzinfo=timezone.utc)),
    )
    state = GameState(
        channel_id="C1",
        stage=WorkflowStage.QUESTION_ASKED,
        host_id="U12345",
        topic="some topic",
        question="some question?",
        answers=answers,
    )

    assert messages.status_text(state, "U12345", ZoneInfo("America/Chicago")) == (
        "*Topic:* some topic\n*Turn:* Yours\n*Question:*\n\nsome question?\n\n*Answers:*\n\n"
        "```10/09/2018 11:30:33 AM   @jimbob                answer 1\n"
        "10/09/2018 11:32:21 AM   @joe                   answer 2\n"
        "10/09/2018 11:34:25 AM   @muchlongerusername    answer 3```"
    )


def test_messages_06_correct_answer_text_includes_remark_only_when_given() -> None:
    block = messages.scores_text({})

    assert messages.correct_answer("U2", None, block).startswith("<@U2> is correct!\n\n")
    assert messages.correct_answer("U2", "four", block).startswith('<@U2> is correct with "four"!')
    assert messages.correct_answer("U2", None, block).endswith("OK, <@U2>, you're up!")


def test_messages_07_answer_times_default_to_utc() -> None:
    state = GameState(
        channel_id="C1",
        stage=WorkflowStage.QUESTION_ASKED,
        host_id="U12345",
        question="some question?",
        answers=(Answer("U1111", "jimbob", "answer 1", datetime(2018, 10, 9, 16, 30, 33, tzinfo=timezone.utc)),),
    )

    assert messages.status_text(state, "U12345").endswith("```10/09/2018 04:30:33 PM   @jimbob    answer 1```")
