"""Data models for the quiz agent."""

from .quiz import (
    OPTION_COUNT,
    DifficultyTier,
    Question,
    QuizRequest,
    QuizResponse,
    SubjectArea,
)
from .state import QuizAgentState

__all__ = [
    "OPTION_COUNT",
    "DifficultyTier",
    "Question",
    "QuizRequest",
    "QuizResponse",
    "SubjectArea",
    "QuizAgentState",
]
