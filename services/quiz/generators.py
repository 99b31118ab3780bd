"""
Subject Generators

One procedural generator per subject band. Each takes the difficulty tier and
an injected random.Random so callers control reproducibility.

- Arithmetic: two-operand +, -, × with tier-scaled operands
- Algebra: linear equations a·x + b = c with a positive integer solution
- Quadratics: monic quadratics with two positive integer roots
- Calculus: power-rule derivatives of coeff·x^n
"""

import random
from typing import Callable

from models.quiz import OPTION_COUNT, DifficultyTier, Question, SubjectArea

from .fingerprint import fingerprint

# =============================================================================
# Constants
# =============================================================================

# Inclusive operand ranges for arithmetic questions
ARITHMETIC_RANGES: dict[DifficultyTier, tuple[int, int]] = {
    DifficultyTier.EASY: (1, 10),
    DifficultyTier.MEDIUM: (10, 50),
    DifficultyTier.HARD: (50, 100),
    DifficultyTier.EXTREME: (100, 1000),
}

ARITHMETIC_OPERATORS: dict[str, tuple[str, Callable[[int, int], int]]] = {
    "+": ("+", lambda a, b: a + b),
    "-": ("-", lambda a, b: a - b),
    "*": ("×", lambda a, b: a * b),
}

ARITHMETIC_DISTRACTOR_SPREAD = 10
ALGEBRA_DISTRACTOR_SPREAD = 3


# =============================================================================
# Helpers
# =============================================================================

def _shuffled(options: list[str], rng: random.Random) -> list[str]:
    shuffled = list(options)
    rng.shuffle(shuffled)
    return shuffled


def _build(prompt: str, options: list[str], correct: str, explanation: str, rng: random.Random) -> Question:
    return Question(
        question=prompt,
        options=_shuffled(options, rng),
        correct_answer=correct,
        explanation=explanation,
        hash=fingerprint(prompt),
    )


def _collect_unique(correct: int, spread: int, rng: random.Random, accept: Callable[[int], bool]) -> list[str]:
    """Perturb the correct value until OPTION_COUNT unique options exist."""
    options = [str(correct)]
    while len(options) < OPTION_COUNT:
        wrong = correct + rng.randint(-spread, spread)
        if wrong != correct and accept(wrong) and str(wrong) not in options:
            options.append(str(wrong))
    return options


def _root_pair(first: int, second: int) -> str:
    return f"{min(first, second)}, {max(first, second)}"


# =============================================================================
# Generators
# =============================================================================

def generate_arithmetic(difficulty: DifficultyTier, rng: random.Random) -> Question:
    """What is a op b?"""
    low, high = ARITHMETIC_RANGES[difficulty]
    a = rng.randint(low, high)
    b = rng.randint(low, high)
    symbol, apply = ARITHMETIC_OPERATORS[rng.choice(list(ARITHMETIC_OPERATORS))]
    answer = apply(a, b)

    options = _collect_unique(answer, ARITHMETIC_DISTRACTOR_SPREAD, rng, accept=lambda _: True)

    return _build(
        prompt=f"What is {a} {symbol} {b}?",
        options=options,
        correct=str(answer),
        explanation=f"{a} {symbol} {b} = {answer}",
        rng=rng,
    )


def generate_algebra(difficulty: DifficultyTier, rng: random.Random) -> Question:
    """Solve a·x + b = c for a positive integer x."""
    max_coefficient = 10 if difficulty in (DifficultyTier.HARD, DifficultyTier.EXTREME) else 5
    x = rng.randint(1, 10)
    a = rng.randint(2, max_coefficient)
    b = rng.randint(1, 20)
    c = a * x + b

    # Solutions are positive, so distractors are too
    options = _collect_unique(x, ALGEBRA_DISTRACTOR_SPREAD, rng, accept=lambda value: value > 0)

    return _build(
        prompt=f"Solve for x: {a}x + {b} = {c}",
        options=options,
        correct=str(x),
        explanation=f"{a}x = {c} - {b} = {c - b}, so x = {c - b}/{a} = {x}",
        rng=rng,
    )


def generate_quadratics(difficulty: DifficultyTier, rng: random.Random) -> Question:
    """Find both roots of x² + bx + c = 0.

    Distractors are three fixed perturbations of the roots and are not
    deduplicated, so two of them can coincide when the roots are small or equal.
    """
    r1 = rng.randint(1, 10 if difficulty == DifficultyTier.EXTREME else 5)
    r2 = rng.randint(1, 5)
    b = -(r1 + r2)
    c = r1 * r2

    equation = f"x² {'-' if b < 0 else '+'} {abs(b)}x + {c} = 0"
    correct = _root_pair(r1, r2)
    options = [
        correct,
        _root_pair(r1 + 1, r2 + 1),
        _root_pair(r1 - 1, r2),
        _root_pair(r1, r2 - 1),
    ]

    return _build(
        prompt=f"Find the roots of: {equation}",
        options=options,
        correct=correct,
        explanation=f"Factor as (x - {r1})(x - {r2}) = 0",
        rng=rng,
    )


def generate_calculus(difficulty: DifficultyTier, rng: random.Random) -> Question:
    """Differentiate coeff·x^n with the power rule."""
    n = rng.randint(2, 5)
    coeff = rng.randint(2, 5)
    derived = coeff * n

    correct = f"{derived}x^{n - 1}"
    options = [
        correct,
        f"{coeff}x^{n - 1}",  # forgot to multiply by n
        f"{derived}x^{n}",  # forgot to decrement the power
        f"{coeff}x^{n + 1}",  # incremented the power
    ]

    return _build(
        prompt=f"Find the derivative of f(x) = {coeff}x^{n}",
        options=options,
        correct=correct,
        explanation=f"Power rule: d/dx(ax^n) = anx^(n-1). {coeff}*{n}x^({n}-1) = {correct}",
        rng=rng,
    )


GENERATORS: dict[SubjectArea, Callable[[DifficultyTier, random.Random], Question]] = {
    SubjectArea.ARITHMETIC: generate_arithmetic,
    SubjectArea.ALGEBRA: generate_algebra,
    SubjectArea.QUADRATICS: generate_quadratics,
    SubjectArea.CALCULUS: generate_calculus,
}
