"""
Quiz Services

Deterministic core of the adaptive quiz:
- Streak-based difficulty engine for tier transitions
- Subject generators with distractor construction
- Question synthesizer with fingerprint-based duplicate avoidance
- Prompt builders for LLM-first generation
"""

from .difficulty_engine import DifficultyEngine, next_tier
from .fingerprint import fingerprint
from .generators import GENERATORS
from .prompts import QUIZ_SYSTEM_PROMPT, build_quiz_prompt
from .synthesizer import (
    MAX_NOVELTY_ATTEMPTS,
    QuestionSynthesizer,
    generate_question,
    subject_for_class,
)

__all__ = [
    "DifficultyEngine",
    "next_tier",
    "fingerprint",
    "GENERATORS",
    "QUIZ_SYSTEM_PROMPT",
    "build_quiz_prompt",
    "MAX_NOVELTY_ATTEMPTS",
    "QuestionSynthesizer",
    "generate_question",
    "subject_for_class",
]
