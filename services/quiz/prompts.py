"""
Prompt Builders for Quiz Question Generation

Builds the system and user prompts for LLM-first question generation. The
deterministic synthesizer covers every case the model cannot.
"""

from models.quiz import DifficultyTier

from .synthesizer import subject_for_class

# =============================================================================
# System Prompt
# =============================================================================

QUIZ_SYSTEM_PROMPT = """You are an experienced math teacher writing multiple-choice practice questions.

When writing a question you must:
1. Pitch it at the learner's class level and the requested difficulty
2. Make it solvable with exactly one correct option
3. Use plausible distractors based on common mistakes
4. Explain the solution step by step

Always respond with valid JSON containing: question, options, correctAnswer, explanation.
Do not include any text outside the JSON object."""


DIFFICULTY_GUIDANCE = {
    DifficultyTier.EASY: "a warm-up question a struggling learner can answer with confidence",
    DifficultyTier.MEDIUM: "a standard question for this class level",
    DifficultyTier.HARD: "a multi-step question that stretches a confident learner",
    DifficultyTier.EXTREME: "a challenging question for learners on a long correct streak",
}


# =============================================================================
# User Prompt
# =============================================================================

def build_quiz_prompt(
    class_level: int,
    topic: str,
    difficulty: DifficultyTier,
) -> str:
    """
    Build the prompt for a single multiple-choice question.

    Args:
        class_level: Learner's class level
        topic: Topic label chosen by the learner
        difficulty: Target difficulty tier

    Returns:
        Formatted prompt string
    """
    subject = subject_for_class(class_level)

    return f"""Generate a unique multiple-choice math question.

## Target
- **Class**: {class_level} (typical subject: {subject.value})
- **Topic**: "{topic}"
- **Difficulty**: {difficulty.value} - {DIFFICULTY_GUIDANCE[difficulty]}

## Requirements
- Return strictly valid JSON.
- No markdown formatting (like ```json).
- Keys must be: "question", "options" (array of 4 distinct strings), "correctAnswer" (string that matches one option exactly), "explanation" (step-by-step logic).
- Ensure the question is solvable and has exactly one correct answer in the options.
- VARY the question structure. Do not just change numbers.

## Output Format
{{
  "question": "...",
  "options": ["...", "...", "...", "..."],
  "correctAnswer": "...",
  "explanation": "..."
}}"""
