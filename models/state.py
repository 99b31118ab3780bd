"""
State definitions for the quiz agent graph.

LangGraph custom state schemas must be TypedDict types.
"""

from typing import Literal, TypedDict


class QuizAgentState(TypedDict, total=False):
    """State for the quiz generation graph."""
    # Inputs
    class_level: int
    topic: str
    current_difficulty: str | None
    previous_performance: list[bool]
    previous_hashes: list[str]

    # Resolved by the graph
    difficulty: str
    question: dict | None
    source: Literal["llm", "fallback"] | None
    llm_error: str | None
