"""
Quiz Agent - Main Entry Point

Runs a short simulated quiz session against the agent for local development.
"""

import argparse
import asyncio
import random

from agents import create_quiz_agent
from services.quiz.synthesizer import QuestionSynthesizer


async def demo_session(class_level: int, topic: str, turns: int, seed: int | None):
    """Play a session where a simulated learner answers at random."""
    print("=" * 60)
    print(f"Quiz Session Demo (class {class_level}, topic {topic!r})")
    print("=" * 60)

    rng = random.Random(seed)
    agent = create_quiz_agent(synthesizer=QuestionSynthesizer(rng=random.Random(seed)))

    difficulty = None
    performance: list[bool] = []
    hashes: list[str] = []

    for turn in range(1, turns + 1):
        result = await agent.generate_question(
            class_level=class_level,
            topic=topic,
            current_difficulty=difficulty,
            previous_performance=performance,
            previous_hashes=hashes,
        )
        difficulty = result["difficulty"]
        hashes.append(result["hash"])

        answer = rng.choice(result["options"])
        is_correct = answer == result["correctAnswer"]
        performance.append(is_correct)

        print(f"\nQ{turn} [{difficulty}, {result['source']}] {result['question']}")
        print(f"Options: {', '.join(result['options'])}")
        print(f"Answered {answer} -> {'correct' if is_correct else 'wrong'} ({result['explanation']})")


def main():
    parser = argparse.ArgumentParser(description="Run a simulated adaptive quiz session")
    parser.add_argument("--class-level", type=int, default=5)
    parser.add_argument("--topic", default="arithmetic")
    parser.add_argument("--turns", type=int, default=8)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    asyncio.run(demo_session(args.class_level, args.topic, args.turns, args.seed))


if __name__ == "__main__":
    main()
