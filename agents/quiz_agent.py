"""
Quiz Agent - LangGraph Implementation

Produces the next adaptive quiz question:
- Streak-based difficulty engine picks the tier
- LLM generation is tried first when a provider key is configured
- The deterministic synthesizer takes over whenever the model is unavailable,
  fails, returns invalid JSON, or repeats a question the learner has seen

Graph: START -> adjust_difficulty -> generate_llm? -> fallback? -> END
"""

import json
import logging
from typing import Any, Literal

from langchain_core.messages import HumanMessage, SystemMessage
from langgraph.graph import END, START, StateGraph
from pydantic import ValidationError

from config import settings
from models.quiz import DifficultyTier, Question, QuizResponse
from models.state import QuizAgentState
from services.model_factory import create_chat_model
from services.quiz.difficulty_engine import DifficultyEngine
from services.quiz.fingerprint import fingerprint
from services.quiz.prompts import QUIZ_SYSTEM_PROMPT, build_quiz_prompt
from services.quiz.synthesizer import QuestionSynthesizer

logger = logging.getLogger(__name__)


# =============================================================================
# Response Parsing
# =============================================================================

def _response_text(content: Any) -> str:
    """Flatten LangChain message content into plain text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, dict):
                parts.append(str(block.get("text", "")))
            else:
                parts.append(str(block))
        return "".join(parts)
    return str(content)


def parse_question_response(content: str, previous_hashes: set[str] | None = None) -> Question:
    """
    Parse and validate a model response into a Question.

    Args:
        content: Raw model output, possibly wrapped in markdown or prose
        previous_hashes: Fingerprints the learner has already seen

    Returns:
        Validated Question with a freshly computed fingerprint

    Raises:
        ValueError: If no JSON object is found, the JSON is invalid, the
            payload breaks the question schema, options repeat, or the
            question was already seen
    """
    start = content.find("{")
    end = content.rfind("}")
    if start == -1 or end < start:
        raise ValueError(f"No JSON found in response: {content[:200]}...")

    try:
        parsed = json.loads(content[start:end + 1])
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in response: {e}")

    if not isinstance(parsed, dict):
        raise ValueError("Response JSON is not an object")

    for field in ("question", "options", "correctAnswer", "explanation"):
        if not parsed.get(field):
            raise ValueError(f"Missing required field: {field}")

    if not isinstance(parsed["question"], str):
        raise ValueError("Field 'question' must be a string")

    try:
        question = Question(
            question=parsed["question"],
            options=parsed["options"],
            correct_answer=parsed["correctAnswer"],
            explanation=str(parsed["explanation"]),
            hash=fingerprint(parsed["question"]),
        )
    except ValidationError as e:
        raise ValueError(f"Response does not match question schema: {e}")

    if not question.has_distinct_options:
        raise ValueError("Response options are not distinct")

    if previous_hashes and question.hash in previous_hashes:
        raise ValueError("Duplicate content generated")

    return question


# =============================================================================
# Quiz Agent
# =============================================================================

class QuizAgent:
    """
    Quiz Agent.

    Wraps the difficulty engine, an optional chat model, and the synthesizer
    in a small LangGraph graph. The synthesizer path never fails, so neither
    does the agent.
    """

    def __init__(
        self,
        model: Any | None = None,
        synthesizer: QuestionSynthesizer | None = None,
        use_llm: bool | None = None,
    ):
        """
        Args:
            model: Chat model exposing ``ainvoke``; created from settings when omitted
            synthesizer: Deterministic fallback generator
            use_llm: Force the LLM path on or off; defaults to settings
        """
        self._model = model
        self.synthesizer = synthesizer or QuestionSynthesizer(
            max_attempts=settings.max_novelty_attempts,
        )
        self.use_llm = use_llm
        self.graph = self._build_graph()

    # =========================================================================
    # Public API
    # =========================================================================

    async def generate_question(
        self,
        class_level: int,
        topic: str,
        current_difficulty: str | None = None,
        previous_performance: list[bool] | None = None,
        previous_hashes: list[str] | None = None,
    ) -> dict:
        """
        Generate the next question for a learner.

        Args:
            class_level: Learner's class level
            topic: Topic label
            current_difficulty: Tier of the previous question; absent or
                unrecognized values count as Medium
            previous_performance: Answer results, oldest to newest
            previous_hashes: Fingerprints of questions already served

        Returns:
            QuizResponse dict (camelCase keys) with the question, effective
            difficulty, topic, and source ("llm" or "fallback")
        """
        state: QuizAgentState = {
            "class_level": class_level,
            "topic": topic,
            "current_difficulty": current_difficulty,
            "previous_performance": list(previous_performance or []),
            "previous_hashes": list(previous_hashes or []),
        }
        result = await self.graph.ainvoke(state)

        response = QuizResponse(
            **result["question"],
            difficulty=result["difficulty"],
            topic=topic,
            source=result["source"],
        )
        return response.model_dump(mode="json", by_alias=True)

    # =========================================================================
    # Graph
    # =========================================================================

    def _build_graph(self):
        graph = StateGraph(QuizAgentState)

        graph.add_node("adjust_difficulty", self._adjust_difficulty_node)
        graph.add_node("generate_llm", self._generate_llm_node)
        graph.add_node("fallback", self._fallback_node)

        graph.add_edge(START, "adjust_difficulty")
        graph.add_conditional_edges(
            "adjust_difficulty",
            self._route_generation,
            {"llm": "generate_llm", "fallback": "fallback"},
        )
        graph.add_conditional_edges(
            "generate_llm",
            self._route_after_llm,
            {"done": END, "fallback": "fallback"},
        )
        graph.add_edge("fallback", END)

        return graph.compile()

    def _adjust_difficulty_node(self, state: QuizAgentState) -> dict:
        """Resolve the effective tier for this turn."""
        current = state.get("current_difficulty") or settings.default_difficulty
        tier = DifficultyEngine.next_tier(state.get("previous_performance") or [], current)
        return {"difficulty": tier.value}

    def _route_generation(self, state: QuizAgentState) -> Literal["llm", "fallback"]:
        return "llm" if self._llm_enabled() else "fallback"

    def _route_after_llm(self, state: QuizAgentState) -> Literal["done", "fallback"]:
        return "done" if state.get("question") else "fallback"

    async def _generate_llm_node(self, state: QuizAgentState) -> dict:
        """Ask the model for a question; any failure hands over to the fallback."""
        tier = DifficultyTier(state["difficulty"])
        prompt = build_quiz_prompt(state["class_level"], state["topic"], tier)

        try:
            model = self._get_model()
            response = await model.ainvoke([
                SystemMessage(content=QUIZ_SYSTEM_PROMPT),
                HumanMessage(content=prompt),
            ])
            question = parse_question_response(
                _response_text(response.content),
                set(state.get("previous_hashes") or []),
            )
        except Exception as e:
            logger.warning(f"[QuizAgent] LLM generation failed, using fallback: {e}")
            return {"question": None, "llm_error": str(e)}

        return {"question": question.to_dict(), "source": "llm"}

    def _fallback_node(self, state: QuizAgentState) -> dict:
        """Rule-based generation, always available."""
        logger.info("[QuizAgent] Using rule-based fallback generator")
        question = self.synthesizer.generate(
            state["class_level"],
            state["topic"],
            state["difficulty"],
            state.get("previous_hashes") or [],
        )
        return {"question": question.to_dict(), "source": "fallback"}

    # =========================================================================
    # Helpers
    # =========================================================================

    def _llm_enabled(self) -> bool:
        if self.use_llm is not None:
            return self.use_llm
        if self._model is not None:
            return True
        return settings.enable_llm_generation and bool(settings.provider_api_key())

    def _get_model(self):
        """Lazy load the chat model."""
        if self._model is None:
            self._model = create_chat_model()
        return self._model


# =============================================================================
# Factory
# =============================================================================

def create_quiz_agent(**kwargs: Any) -> QuizAgent:
    """Create a Quiz Agent instance."""
    return QuizAgent(**kwargs)


_agent: QuizAgent | None = None


def get_quiz_agent() -> QuizAgent:
    """Get or create the global quiz agent."""
    global _agent
    if _agent is None:
        _agent = create_quiz_agent()
    return _agent
