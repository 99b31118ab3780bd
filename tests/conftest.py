"""
Pytest configuration and fixtures for quiz agent tests.
"""

import os
import random
import sys

import pytest

# Add the parent directory to the path so we can import agents
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Keep the global agent on the deterministic path unless a test injects a model
os.environ["ENABLE_LLM_GENERATION"] = "false"
os.environ.pop("QUIZ_API_KEY", None)

from langchain_core.messages import AIMessage  # noqa: E402


class FakeChatModel:
    """Chat model stand-in returning a canned reply (or raising)."""

    def __init__(self, content=None, error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls: list[list] = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.content)


@pytest.fixture
def rng():
    """Seeded random source for reproducible generation."""
    return random.Random(1234)


@pytest.fixture
def fake_model():
    """Factory for fake chat models."""
    def _make(content=None, error: Exception | None = None) -> FakeChatModel:
        return FakeChatModel(content=content, error=error)

    return _make


@pytest.fixture
def llm_question_json():
    """A well-formed model reply."""
    return """Here is your question:
```json
{
  "question": "A train travels 60 km in 1.5 hours. What is its average speed in km/h?",
  "options": ["30", "40", "45", "90"],
  "correctAnswer": "40",
  "explanation": "Speed = distance / time = 60 / 1.5 = 40 km/h."
}
```"""
