import logging
from typing import Any, Callable, Protocol

from bot.exceptions import ContentGenerationError
from bot.llm.backoff import INITIAL_DELAY_MS, MAX_ATTEMPTS, retry_with_backoff
from bot.llm.parser import parse_json, validate_lesson, validate_placement_quiz
from bot.llm.prompts import (
    ContentRequest,
    build_feedback_request,
    build_lesson_request,
    build_placement_quiz_request,
)
from bot.models import Lesson, QuizQuestion

logger = logging.getLogger(__name__)


class Provider(Protocol):
    async def submit(
        self, prompt: str, system_instruction: str, schema: dict | None = None, schema_name: str = "response",
    ) -> str: ...


class LessonService:
    """Builds requests, calls the provider with retries and validates the answers.

    Holds no per-call state, so calls for different topics may overlap.
    """

    def __init__(
        self,
        provider: Provider,
        subject: str = "Laravel",
        max_attempts: int = MAX_ATTEMPTS,
        initial_delay_ms: int = INITIAL_DELAY_MS,
        sleep: Callable | None = None,
    ):
        self.provider = provider
        self.subject = subject
        self.max_attempts = max_attempts
        self.initial_delay_ms = initial_delay_ms
        self._sleep = sleep

    async def generate_lesson(self, topic: str) -> Lesson:
        """Generate a full lesson for a topic."""
        logger.info("Generating lesson for topic %r", topic)
        request = build_lesson_request(topic, self.subject)
        try:
            lesson = await self._acquire(request, validate_lesson, f'generateLessonContent for "{topic}"')
        except Exception as e:
            logger.error("Error generating lesson content for %r: %s", topic, e, exc_info=e)
            raise ContentGenerationError(
                f'Failed to generate content for topic "{topic}". Please try again.'
            ) from e
        logger.info("Lesson for %r ready (%d quiz questions)", topic, len(lesson.quiz))
        return lesson

    async def generate_placement_quiz(self) -> list[QuizQuestion]:
        """Generate the standalone placement quiz."""
        logger.info("Generating placement quiz")
        request = build_placement_quiz_request(self.subject)
        try:
            return await self._acquire(request, validate_placement_quiz, "generatePlacementQuiz")
        except Exception as e:
            logger.error("Error generating placement quiz: %s", e, exc_info=e)
            raise ContentGenerationError("Failed to generate the placement quiz. Please try again.") from e

    async def get_answer_feedback(self, question: str, user_answer: str) -> str:
        """Get free-text feedback on an interview answer."""
        request = build_feedback_request(question, user_answer, self.subject)
        try:
            return await self._acquire(request, None, "getAnswerFeedback")
        except Exception as e:
            logger.error("Error generating feedback: %s", e, exc_info=e)
            raise ContentGenerationError("Failed to get feedback. Please try again.") from e

    async def _acquire(
        self,
        request: ContentRequest,
        validate: Callable[[Any], Any] | None,
        label: str,
    ) -> Any:
        """Submit, parse and validate inside one retried operation."""

        async def attempt():
            raw = await self.provider.submit(
                request.prompt,
                request.system_instruction,
                request.schema,
                request.schema_name,
            )
            if validate is None:
                return raw
            return validate(parse_json(raw))

        kwargs = {}
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        return await retry_with_backoff(
            attempt,
            label,
            max_attempts=self.max_attempts,
            initial_delay_ms=self.initial_delay_ms,
            **kwargs,
        )
