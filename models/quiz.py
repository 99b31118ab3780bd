"""
Pydantic models for the adaptive quiz.

Covers the difficulty tiers, subject bands, the generated question value
object, and the HTTP request/response payloads.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# Difficulty & Subject
# =============================================================================

class DifficultyTier(str, Enum):
    """Difficulty tiers, declared from easiest to hardest."""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    EXTREME = "Extreme"

    @classmethod
    def ordered(cls) -> list["DifficultyTier"]:
        return list(cls)

    @classmethod
    def parse(cls, value: Any) -> "DifficultyTier":
        """Normalize any value to a tier. Unrecognized values become MEDIUM."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.MEDIUM

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        return isinstance(value, cls) or value in [tier.value for tier in cls]

    @property
    def rank(self) -> int:
        return self.ordered().index(self)

    def __lt__(self, other):
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank >= other.rank


class SubjectArea(str, Enum):
    """Math subject chosen from the learner's class level."""
    ARITHMETIC = "Arithmetic"
    ALGEBRA = "Algebra"
    QUADRATICS = "Quadratics"
    CALCULUS = "Calculus"


# =============================================================================
# Question
# =============================================================================

OPTION_COUNT = 4


class Question(BaseModel):
    """A multiple-choice question. Immutable once built."""
    question: str = Field(min_length=1, description="Prompt text")
    options: list[str] = Field(description="Exactly four answer options")
    correct_answer: str = Field(alias="correctAnswer")
    explanation: str
    hash: str = Field(description="SHA-256 hex digest of the prompt text")

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("options", mode="before")
    @classmethod
    def _stringify_options(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [str(option) for option in value]
        return value

    @field_validator("correct_answer", mode="before")
    @classmethod
    def _stringify_answer(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def _check_options(self) -> "Question":
        if len(self.options) != OPTION_COUNT:
            raise ValueError(f"Expected {OPTION_COUNT} options, got {len(self.options)}")
        if self.options.count(self.correct_answer) != 1:
            raise ValueError("correctAnswer must match exactly one option")
        return self

    @property
    def has_distinct_options(self) -> bool:
        return len(set(self.options)) == len(self.options)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


# =============================================================================
# API Request/Response Models
# =============================================================================

class QuizRequest(BaseModel):
    """Request for the next quiz question."""
    class_level: int | None = Field(default=None, alias="classLevel")
    topic: str | None = None
    current_difficulty: str | None = Field(
        default=None,
        alias="currentDifficulty",
        description="One of Easy/Medium/Hard/Extreme; anything else is treated as Medium",
    )
    previous_performance: list[bool] | None = Field(default=None, alias="previousPerformance")
    previous_hashes: list[str] | None = Field(default=None, alias="previousHashes")

    class Config:
        populate_by_name = True

    @model_validator(mode="before")
    @classmethod
    def _accept_difficulty_key(cls, data: Any) -> Any:
        if isinstance(data, dict) and "currentDifficulty" not in data and "difficulty" in data:
            data = {**data, "currentDifficulty": data["difficulty"]}
        return data

    @field_validator("current_difficulty", mode="before")
    @classmethod
    def _difficulty_as_text(cls, value: Any) -> Any:
        # Unknown tiers are normalized downstream, never rejected
        return value if value is None or isinstance(value, str) else str(value)


class QuizResponse(BaseModel):
    """Response carrying the question and the tier it was generated at."""
    question: str
    options: list[str]
    correct_answer: str = Field(alias="correctAnswer")
    explanation: str
    hash: str
    difficulty: DifficultyTier
    topic: str
    source: Literal["llm", "fallback"]

    class Config:
        populate_by_name = True
