"""Tests for LessonService: retries, validation and user-facing errors."""
import asyncio
import json
from unittest.mock import AsyncMock

import pytest

from bot.exceptions import ContentGenerationError, ProviderError
from bot.services.lesson_service import LessonService


def make_service(provider, fake_sleep):
    return LessonService(provider, sleep=fake_sleep)


class TestGenerateLesson:

    async def test_success(self, lesson_json, fake_sleep):
        provider = AsyncMock()
        provider.submit.return_value = lesson_json
        service = make_service(provider, fake_sleep)

        lesson = await service.generate_lesson("Routing")

        assert lesson.interactive_code_example.solution == ["get", "'Welcome'"]
        assert provider.submit.await_count == 1
        prompt, system_instruction, schema, schema_name = provider.submit.await_args.args
        assert '"Routing"' in prompt
        assert schema_name == "lesson"
        assert fake_sleep.delays == []

    async def test_retries_after_provider_errors(self, lesson_json, fake_sleep):
        provider = AsyncMock()
        provider.submit.side_effect = [
            ProviderError("rate limited"),
            ProviderError("timeout"),
            lesson_json,
        ]
        service = make_service(provider, fake_sleep)

        lesson = await service.generate_lesson("Routing")

        assert len(lesson.quiz) == 7
        assert provider.submit.await_count == 3
        assert fake_sleep.delays == [1.0, 2.0]

    async def test_invalid_shape_is_retried(self, lesson_dict, lesson_json, fake_sleep):
        broken = dict(lesson_dict, quiz=[])
        provider = AsyncMock()
        provider.submit.side_effect = [json.dumps(broken), lesson_json]
        service = make_service(provider, fake_sleep)

        lesson = await service.generate_lesson("Routing")

        assert len(lesson.quiz) == 7
        assert fake_sleep.delays == [1.0]

    async def test_gives_up_with_user_message(self, fake_sleep):
        provider = AsyncMock()
        provider.submit.side_effect = ProviderError("down")
        service = make_service(provider, fake_sleep)

        with pytest.raises(ContentGenerationError) as exc_info:
            await service.generate_lesson("Routing")

        assert str(exc_info.value) == 'Failed to generate content for topic "Routing". Please try again.'
        assert isinstance(exc_info.value.__cause__, ProviderError)
        assert provider.submit.await_count == 3

    async def test_concurrent_topics_do_not_interfere(self, lesson_dict, fake_sleep):
        def lesson_for(topic):
            return json.dumps(dict(lesson_dict, explanation=f"About {topic}"))

        async def submit(prompt, *args):
            await asyncio.sleep(0)
            topic = "Routing" if '"Routing"' in prompt else "Middleware"
            return lesson_for(topic)

        provider = AsyncMock()
        provider.submit.side_effect = submit
        service = make_service(provider, fake_sleep)

        routing, middleware = await asyncio.gather(
            service.generate_lesson("Routing"),
            service.generate_lesson("Middleware"),
        )

        assert routing.explanation == "About Routing"
        assert middleware.explanation == "About Middleware"


class TestGeneratePlacementQuiz:

    async def test_success(self, placement_json, fake_sleep):
        provider = AsyncMock()
        provider.submit.return_value = placement_json
        service = make_service(provider, fake_sleep)

        questions = await service.generate_placement_quiz()

        assert len(questions) == 10
        assert provider.submit.await_args.args[3] == "placement_quiz"

    async def test_empty_list_fails_after_all_attempts(self, fake_sleep):
        provider = AsyncMock()
        provider.submit.return_value = "[]"
        service = make_service(provider, fake_sleep)

        with pytest.raises(ContentGenerationError, match="Failed to generate the placement quiz"):
            await service.generate_placement_quiz()

        assert provider.submit.await_count == 3
        assert fake_sleep.delays == [1.0, 2.0]


class TestGetAnswerFeedback:

    async def test_returns_raw_text(self, fake_sleep):
        provider = AsyncMock()
        provider.submit.return_value = "Good start! **Bindings** are resolved lazily."
        service = make_service(provider, fake_sleep)

        feedback = await service.get_answer_feedback("What is the container?", "A registry")

        assert feedback == "Good start! **Bindings** are resolved lazily."
        assert provider.submit.await_args.args[2] is None

    async def test_failure(self, fake_sleep):
        provider = AsyncMock()
        provider.submit.side_effect = ProviderError("bad key", transient=False)
        service = make_service(provider, fake_sleep)

        with pytest.raises(ContentGenerationError, match="Failed to get feedback. Please try again."):
            await service.get_answer_feedback("Q?", "A")
