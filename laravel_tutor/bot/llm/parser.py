import json
import logging
import re
from typing import Any

from bot.exceptions import ShapeError
from bot.models import Lesson, QuizQuestion, lesson_from_dict, quiz_question_from_dict

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.+?)\s*```", re.DOTALL)


def parse_json(raw_text: str | None) -> Any:
    """Parse provider output as JSON. Raises ShapeError if it is not JSON."""
    if not raw_text or not raw_text.strip():
        raise ShapeError("Empty response received from API.")

    text = raw_text.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Some models wrap structured output in a markdown code block
    match = _FENCE_RE.search(text)
    if match:
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError:
            pass

    logger.error("Failed to parse provider response as JSON: %.200s", text)
    raise ShapeError("Response from API is not valid JSON.")


def validate_lesson(data: Any) -> Lesson:
    """Check that a parsed lesson has every part the bot renders."""
    if not isinstance(data, dict):
        raise ShapeError("Invalid lesson structure received from API.")

    code_example = data.get("interactiveCodeExample")
    interview = data.get("interviewQuestion")
    quiz = data.get("quiz")

    if (
        not data.get("explanation")
        or not isinstance(code_example, dict)
        or not code_example.get("interactiveCode")
        or not code_example.get("solution")
        or not isinstance(interview, dict)
        or not interview.get("question")
        or not interview.get("sampleAnswer")
        or not isinstance(quiz, list)
        or len(quiz) == 0
    ):
        raise ShapeError("Invalid lesson structure received from API.")

    return lesson_from_dict(data)


def validate_placement_quiz(data: Any) -> list[QuizQuestion]:
    if not isinstance(data, list) or len(data) == 0:
        raise ShapeError("Invalid quiz structure received from API.")

    questions = []
    for q in data:
        if isinstance(q, dict):
            questions.append(quiz_question_from_dict(q))
        else:
            logger.warning("Skipping invalid quiz question: %r", q)

    if not questions:
        raise ShapeError("Invalid quiz structure received from API.")
    return questions
