"""Tests for the Quiz Agent."""

import json
import random

import pytest

from agents.quiz_agent import create_quiz_agent, parse_question_response
from services.quiz.fingerprint import fingerprint
from services.quiz.synthesizer import QuestionSynthesizer

TRAIN_QUESTION = "A train travels 60 km in 1.5 hours. What is its average speed in km/h?"


def _reply(**overrides) -> str:
    payload = {
        "question": "What is 12 squared?",
        "options": ["124", "144", "142", "164"],
        "correctAnswer": "144",
        "explanation": "12 × 12 = 144",
    }
    payload.update(overrides)
    return json.dumps(payload)


class TestParseQuestionResponse:
    """Test cases for model reply validation."""

    def test_parses_markdown_wrapped_json(self, llm_question_json):
        """Test JSON is extracted from surrounding prose and code fences."""
        question = parse_question_response(llm_question_json)

        assert question.question == TRAIN_QUESTION
        assert question.correct_answer == "40"
        assert question.hash == fingerprint(TRAIN_QUESTION)

    def test_numeric_options_become_strings(self):
        """Test numbers in the reply are accepted as option strings."""
        reply = json.dumps({
            "question": "What is 6 × 7?",
            "options": [42, 36, 48, 40],
            "correctAnswer": 42,
            "explanation": "6 × 7 = 42",
        })
        question = parse_question_response(reply)

        assert question.options == ["42", "36", "48", "40"]
        assert question.correct_answer == "42"

    @pytest.mark.parametrize("content", [
        "I cannot help with that.",
        "{not json}",
        "[1, 2, 3]",
    ])
    def test_rejects_unparsable_reply(self, content):
        """Test replies without a JSON object are rejected."""
        with pytest.raises(ValueError):
            parse_question_response(content)

    @pytest.mark.parametrize("overrides", [
        {"question": ""},
        {"explanation": None},
        {"options": ["1", "2", "3"]},
        {"options": ["1", "2", "3", "4", "5"]},
        {"correctAnswer": "999"},
        {"options": ["144", "144", "142", "164"]},
        {"options": ["124", "124", "144", "164"]},
    ])
    def test_rejects_schema_violations(self, overrides):
        """Test missing keys, wrong option counts and ambiguous answers are rejected."""
        with pytest.raises(ValueError):
            parse_question_response(_reply(**overrides))

    def test_rejects_seen_question(self):
        """Test a reply matching a previous fingerprint is rejected."""
        with pytest.raises(ValueError, match="Duplicate"):
            parse_question_response(_reply(), {fingerprint("What is 12 squared?")})


class TestQuizAgent:
    """Test cases for LLM-first generation with fallback."""

    def _agent(self, model=None, use_llm=None):
        return create_quiz_agent(
            model=model,
            synthesizer=QuestionSynthesizer(rng=random.Random(11)),
            use_llm=use_llm,
        )

    @pytest.mark.asyncio
    async def test_uses_llm_question_when_valid(self, fake_model, llm_question_json):
        """Test a valid model reply is returned with its fingerprint."""
        model = fake_model(content=llm_question_json)
        agent = self._agent(model=model)

        result = await agent.generate_question(class_level=7, topic="speed", current_difficulty="Easy")

        assert result["source"] == "llm"
        assert result["question"] == TRAIN_QUESTION
        assert result["correctAnswer"] == "40"
        assert result["hash"] == fingerprint(TRAIN_QUESTION)
        assert result["difficulty"] == "Easy"
        assert result["topic"] == "speed"
        assert len(model.calls) == 1

    @pytest.mark.asyncio
    async def test_prompt_carries_effective_difficulty(self, fake_model, llm_question_json):
        """Test the prompt is built for the adjusted tier."""
        model = fake_model(content=llm_question_json)
        agent = self._agent(model=model)

        await agent.generate_question(
            class_level=9,
            topic="roots",
            current_difficulty="Medium",
            previous_performance=[True, True, True],
        )

        prompt = model.calls[0][-1].content
        assert "Class**: 9" in prompt
        assert '"roots"' in prompt
        assert "Hard" in prompt

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [
        "Sorry, no JSON today",
        _reply(correctAnswer="not an option"),
        _reply(options=["1", "1", "2", "144"]),
    ])
    async def test_invalid_reply_falls_back(self, fake_model, content):
        """Test unparsable or schema-invalid replies use the synthesizer."""
        agent = self._agent(model=fake_model(content=content))

        result = await agent.generate_question(class_level=3, topic="addition", current_difficulty="Easy")

        assert result["source"] == "fallback"
        assert result["question"].startswith("What is ")
        assert len(result["options"]) == 4
        assert result["options"].count(result["correctAnswer"]) == 1

    @pytest.mark.asyncio
    async def test_duplicate_reply_falls_back(self, fake_model):
        """Test a reply the learner has already seen uses the synthesizer."""
        agent = self._agent(model=fake_model(content=_reply()))
        seen = [fingerprint("What is 12 squared?")]

        result = await agent.generate_question(class_level=11, topic="d", previous_hashes=seen)

        assert result["source"] == "fallback"
        assert result["question"].startswith("Find the derivative")
        assert result["hash"] not in seen

    @pytest.mark.asyncio
    async def test_model_error_falls_back(self, fake_model):
        """Test a failing model call uses the synthesizer."""
        agent = self._agent(model=fake_model(error=RuntimeError("quota exceeded")))

        result = await agent.generate_question(class_level=6, topic="linear")

        assert result["source"] == "fallback"
        assert result["question"].startswith("Solve for x:")

    @pytest.mark.asyncio
    async def test_llm_disabled_skips_model(self, fake_model, llm_question_json):
        """Test the model is never called when the LLM path is off."""
        model = fake_model(content=llm_question_json)
        agent = self._agent(model=model, use_llm=False)

        result = await agent.generate_question(class_level=10, topic="roots")

        assert result["source"] == "fallback"
        assert model.calls == []

    @pytest.mark.asyncio
    async def test_no_api_key_uses_fallback(self):
        """Test that without a model or key the synthesizer is used."""
        agent = self._agent()

        result = await agent.generate_question(class_level=4, topic="sums")

        assert result["source"] == "fallback"
        assert result["difficulty"] == "Medium"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("current,history,expected", [
        ("Hard", [True, True, True], "Extreme"),
        ("Extreme", [True, True, True], "Extreme"),
        ("Medium", [True, False, False], "Easy"),
        ("Easy", [False, False], "Easy"),
        ("Hard", [True, False], "Hard"),
        ("Hard", [], "Hard"),
        ("Hard", None, "Hard"),
        (None, [True, True, True], "Hard"),
        ("Bogus", [True, True, True], "Medium"),
        ("Bogus", None, "Medium"),
    ])
    async def test_effective_difficulty(self, current, history, expected):
        """Test the returned tier follows the streak rules."""
        agent = self._agent(use_llm=False)

        result = await agent.generate_question(
            class_level=2,
            topic="sums",
            current_difficulty=current,
            previous_performance=history,
        )

        assert result["difficulty"] == expected
