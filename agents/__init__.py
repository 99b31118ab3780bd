"""LangGraph agent implementations."""

from .quiz_agent import (
    QuizAgent,
    create_quiz_agent,
    get_quiz_agent,
    parse_question_response,
)

__all__ = [
    "QuizAgent",
    "create_quiz_agent",
    "get_quiz_agent",
    "parse_question_response",
]
