"""User-facing text builders for game outcomes."""

from __future__ import annotations

from datetime import timezone
from datetime import tzinfo

from trivia.core.identity import count_graphemes
from trivia.core.identity import mention
from trivia.core.identity import pad_right
from trivia.scores.models import Participant
from trivia.workflow.models import Answer
from trivia.workflow.models import GameState
from trivia.workflow.models import WorkflowStage

SCORES_FORMAT = "```Scores:\n\n{}```"
NO_SCORES_TEXT = "No scores yet..."
ANSWER_TIME_FORMAT = "%m/%d/%Y %I:%M:%S %p"


def game_not_started(command: str) -> str:
    return f"A game has not yet been started. If you'd like to start a game, try `{command} start`"


def game_started(user_id: str) -> str:
    return f"OK, {mention(user_id)}, please ask a question."


def game_stopped(command: str) -> str:
    return (
        "The game has been stopped but scores have not been cleared. "
        f"If you'd like to start a new game, try `{command} start`."
    )


def question_asked(user_id: str, question: str) -> str:
    return f"{mention(user_id)} asked the following question:\n\n{question}"


def answer_given(user_id: str, answer: str) -> str:
    return f'{mention(user_id)} answers "{answer}"'


def unknown_participant(target: str) -> str:
    return f"User {target} does not exist. Please choose a valid user."


def correct_usage(command: str) -> str:
    return f"Usage: `{command} correct @jsmith Blue skies`"


def internal_failure() -> str:
    return "Something went wrong while updating the game. Please try again."


def sorted_scores(scores: dict[Participant, int]) -> list[tuple[Participant, int]]:
    """Highest score first, ties broken by display name."""
    return sorted(scores.items(), key=lambda item: (-item[1], item[0].display_name, item[0].participant_id))


def scores_text(scores: dict[Participant, int]) -> str:
    if not scores:
        return SCORES_FORMAT.format(NO_SCORES_TEXT)

    width = 1 + max(count_graphemes(participant.display_name) for participant in scores)
    lines = [
        f"@{pad_right(participant.display_name + ':', width)} {score:3d}"
        for participant, score in sorted_scores(scores)
    ]
    return SCORES_FORMAT.format("\n".join(lines))


def correct_answer(winner_id: str, answer: str | None, scores_block: str) -> str:
    text = f"{mention(winner_id)} is correct"
    if answer:
        text += f' with "{answer}"'
    return f"{text}!\n\n{scores_block}\n\nOK, {mention(winner_id)}, you're up!"


def nobody_correct(host_id: str, scores_block: str) -> str:
    return (
        "It looks like no one was able to answer that one!\n\n"
        f"{scores_block}\n\nOK, {mention(host_id)}, let's try another one!"
    )


def _answers_table(answers: tuple[Answer, ...], display_tz: tzinfo) -> str:
    width = 4 + max(count_graphemes(answer.display_name) for answer in answers)
    lines = [
        f"{answer.submitted_at.astimezone(display_tz).strftime(ANSWER_TIME_FORMAT)}   @{pad_right(answer.display_name, width)}{answer.text}"
        for answer in answers
    ]
    return "```" + "\n".join(lines) + "```"


def status_text(state: GameState, user_id: str, display_tz: tzinfo = timezone.utc) -> str:
    """Render the status view; answer times are shown in ``display_tz``."""
    turn = "Yours" if state.host_id == user_id else mention(state.host_id)
    text = f"*Topic:* {state.topic or 'None'}\n*Turn:* {turn}\n"

    if state.stage != WorkflowStage.QUESTION_ASKED:
        return text + "*Question:* Waiting..."

    text += f"*Question:*\n\n{state.question or '(not shown)'}\n\n"
    if not state.answers:
        return text + "*Answers:* Waiting..."
    return text + "*Answers:*\n\n" + _answers_table(state.answers, display_tz)
