"""Workflow domain package: per-channel turn state."""

from trivia.workflow.errors import AlreadyAskedError
from trivia.workflow.errors import AlreadyHostingError
from trivia.workflow.errors import GameNotStartedError
from trivia.workflow.errors import HostedByOtherError
from trivia.workflow.errors import NoQuestionYetError
from trivia.workflow.errors import NotYourTurnError
from trivia.workflow.errors import SelfAnswerError
from trivia.workflow.errors import StageViolationError
from trivia.workflow.errors import TurnViolationError
from trivia.workflow.errors import WorkflowError
from trivia.workflow.machine import WorkflowStateMachine
from trivia.workflow.models import Answer
from trivia.workflow.models import ChannelWorkflow
from trivia.workflow.models import GameState
from trivia.workflow.models import WorkflowStage
from trivia.workflow.store import InMemoryWorkflowStore
from trivia.workflow.store import SqliteWorkflowStore
from trivia.workflow.store import WorkflowStore

__all__ = [
    "AlreadyAskedError",
    "AlreadyHostingError",
    "Answer",
    "ChannelWorkflow",
    "GameNotStartedError",
    "GameState",
    "HostedByOtherError",
    "InMemoryWorkflowStore",
    "NoQuestionYetError",
    "NotYourTurnError",
    "SelfAnswerError",
    "SqliteWorkflowStore",
    "StageViolationError",
    "TurnViolationError",
    "WorkflowError",
    "WorkflowStage",
    "WorkflowStateMachine",
    "WorkflowStore",
]
