"""
Test configuration for duplicate checker tests.

This module provides shared fixtures: question factories, question pools and
a mocked completion client.
"""
# Keep real credentials out of tests BEFORE any imports that might read them
import os
os.environ["OPENAI_API_KEY"] = ""
os.environ["AZURE_OPENAI_KEY"] = ""
os.environ["AZURE_OPENAI_ENDPOINT"] = ""
os.environ.setdefault("LOG_LEVEL", "WARNING")

import json
import pytest
from datetime import datetime, timedelta, timezone
from typing import List
from unittest.mock import AsyncMock

from dupcheck.models.question_models import Question, QuestionOption, ExistingQuestion
from dupcheck.services.duplicate_config import DuplicateDetectionConfig


BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_existing(
    question_id: str,
    stem: str,
    minutes: int = 0,
    **kwargs
) -> ExistingQuestion:
    """Build an existing question created `minutes` after BASE_TIME."""
    return ExistingQuestion(
        id=question_id,
        stem=stem,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        **kwargs
    )


def true_false(correct: str = "True") -> List[QuestionOption]:
    return [
        QuestionOption(text="True", is_correct=correct == "True"),
        QuestionOption(text="False", is_correct=correct == "False"),
    ]


def ai_response(similarities, confidence=0.9, fenced=False) -> str:
    """Render a completion text in the format the checker expects."""
    payload = json.dumps({
        "similarities": similarities,
        "overallAssessment": {
            "maxSimilarity": max((s.get("similarity", 0) for s in similarities), default=0),
            "isDuplicate": False,
            "confidence": confidence,
            "recommendation": "save",
            "summary": "test"
        }
    })
    if fenced:
        return f"```json\n{payload}\n```"
    return payload


@pytest.fixture
def config():
    """Default duplicate detection configuration."""
    return DuplicateDetectionConfig()


@pytest.fixture
def react_pool():
    """Existing questions about React hooks."""
    return [
        make_existing("react-1", "What does the useState hook return in React?", minutes=1,
                      category="Frontend", fields=["React"]),
        make_existing("react-2", "When does a useEffect cleanup function run?", minutes=2,
                      category="Frontend", fields=["React"]),
        make_existing("react-3", "Why must hooks be called at the top level of a component?", minutes=3,
                      category="Frontend", fields=["React"]),
    ]


@pytest.fixture
def closure_question():
    return Question(stem="What is a closure in JavaScript?", category="Frontend", fields=["JavaScript"])


@pytest.fixture
def docker_question():
    return Question(
        stem="How does Docker bridge networking isolate container traffic?",
        category="DevOps",
        fields=["Docker"]
    )


@pytest.fixture
def mock_completion_client():
    """Completion client whose send_prompt is an AsyncMock."""
    client = AsyncMock()
    client.send_prompt = AsyncMock()
    return client


@pytest.fixture
def recorded_sleeps():
    """Sleep function that records requested delays instead of sleeping."""
    delays: List[float] = []

    async def sleep(seconds: float) -> None:
        delays.append(seconds)

    sleep.delays = delays
    return sleep
