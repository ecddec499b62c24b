"""Shared fixtures for the tutor bot tests."""
import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage

from bot.models import InteractiveCodeExample, lesson_from_dict


class FakeSleep:
    """Simulated clock for retry_with_backoff: records delays instead of waiting."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def make_quiz(count: int) -> list[dict]:
    return [
        {
            "question": f"Question {i + 1}?",
            "options": ["A", "B", "C", "D"],
            "correctAnswer": "B",
        }
        for i in range(count)
    ]


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def lesson_dict():
    """Lesson payload in the provider's JSON shape, all parts present."""
    return {
        "explanation": "**Routing** maps URLs to code. Use `Route::get`.",
        "interactiveCodeExample": {
            "setupCode": "<?php\n\n",
            "interactiveCode": "Route::[[BLANK_1]]('/home', function () { return [[BLANK_2]]; });",
            "solution": ["get", "'Welcome'"],
            "explanation": "Registers a GET route that returns a string.",
        },
        "interviewQuestion": {
            "question": "How does route model binding work?",
            "sampleAnswer": "Laravel resolves the model from the route parameter.",
        },
        "quiz": make_quiz(7),
    }


@pytest.fixture
def lesson_json(lesson_dict):
    return json.dumps(lesson_dict)


@pytest.fixture
def lesson(lesson_dict):
    return lesson_from_dict(lesson_dict)


@pytest.fixture
def route_example():
    """The fill-in-the-blank exercise from the home route lesson."""
    return InteractiveCodeExample(
        setup_code="",
        interactive_code="Route::[[BLANK_1]]('/home', function () { return [[BLANK_2]]; });",
        solution=["get", "'Welcome'"],
        explanation="Registers a GET route.",
    )


@pytest.fixture
def placement_json():
    return json.dumps(make_quiz(10))


@pytest.fixture
def state():
    """Real FSM context on in-memory storage for one user."""
    return FSMContext(storage=MemoryStorage(), key=StorageKey(bot_id=1, chat_id=12345, user_id=12345))


def _make_mock_message(text: str = ""):
    message = MagicMock()
    message.text = text
    message.answer = AsyncMock()
    return message


def _make_mock_callback(data: str):
    callback = MagicMock()
    callback.data = data
    callback.answer = AsyncMock()
    callback.message = _make_mock_message()
    return callback


@pytest.fixture
def make_message():
    return _make_mock_message


@pytest.fixture
def make_callback():
    return _make_mock_callback
