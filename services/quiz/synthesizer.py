"""
Question Synthesizer

Deterministic, always-available question source. Picks a subject generator
from the learner's class level and regenerates until the question is new to
the learner, up to a fixed attempt budget.
"""

import logging
import random
from typing import Any, Iterable

from models.quiz import DifficultyTier, Question, SubjectArea

from .generators import GENERATORS

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

MAX_NOVELTY_ATTEMPTS = 10

# Highest class level (inclusive) for each subject; anything above is calculus
ARITHMETIC_MAX_CLASS = 5
ALGEBRA_MAX_CLASS = 8
QUADRATICS_MAX_CLASS = 10


def subject_for_class(class_level: int) -> SubjectArea:
    """Map a class level to its subject band."""
    if class_level <= ARITHMETIC_MAX_CLASS:
        return SubjectArea.ARITHMETIC
    if class_level <= ALGEBRA_MAX_CLASS:
        return SubjectArea.ALGEBRA
    if class_level <= QUADRATICS_MAX_CLASS:
        return SubjectArea.QUADRATICS
    return SubjectArea.CALCULUS


class QuestionSynthesizer:
    """
    Question Synthesizer.

    The topic is accepted for context only; the subject is decided by class
    level alone.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        max_attempts: int = MAX_NOVELTY_ATTEMPTS,
    ):
        self.rng = rng or random.Random()
        self.max_attempts = max(1, max_attempts)

    def generate(
        self,
        class_level: int,
        topic: str,
        difficulty: Any,
        seen_hashes: Iterable[str] | None = None,
    ) -> Question:
        """
        Generate a question the learner has not seen, if possible.

        Args:
            class_level: Learner's class level
            topic: Topic label (does not change the subject)
            difficulty: Difficulty tier; unrecognized values become MEDIUM
            seen_hashes: Fingerprints of questions already served

        Returns:
            A new Question, or the last candidate if every attempt was a duplicate
        """
        tier = DifficultyTier.parse(difficulty)
        subject = subject_for_class(class_level)
        generator = GENERATORS[subject]
        seen = set(seen_hashes or ())

        question = generator(tier, self.rng)
        attempts = 1
        while question.hash in seen and attempts < self.max_attempts:
            question = generator(tier, self.rng)
            attempts += 1

        if question.hash in seen:
            logger.warning(
                f"[QuestionSynthesizer] No unseen {subject.value} question after "
                f"{attempts} attempts (topic={topic!r}); returning a duplicate"
            )
        else:
            logger.debug(
                f"[QuestionSynthesizer] {subject.value}/{tier.value} question in {attempts} attempt(s)"
            )

        return question


def generate_question(
    class_level: int,
    topic: str,
    difficulty: Any,
    seen_hashes: Iterable[str] | None = None,
    rng: random.Random | None = None,
) -> Question:
    """Generate a single question with a one-off synthesizer."""
    return QuestionSynthesizer(rng=rng).generate(class_level, topic, difficulty, seen_hashes)
