import re
from enum import Enum

from bot.models import QuizQuestion

_QUOTES_RE = re.compile(r"['\"`]")


class Feedback(str, Enum):
    UNKNOWN = "unknown"
    CORRECT = "correct"
    INCORRECT = "incorrect"


def normalize_answer(text: str) -> str:
    """Normalize a blank answer: strip, drop quote characters, lowercase."""
    # Strip again so whitespace that sat inside quotes does not break idempotence
    return _QUOTES_RE.sub("", text.strip()).strip().lower()


def grade(user_answer: str, solution: str) -> Feedback:
    """Compare the user's text for one blank with the stored solution."""
    if normalize_answer(user_answer) == normalize_answer(solution):
        return Feedback.CORRECT
    return Feedback.INCORRECT


def check_quiz_answer(question: QuizQuestion, user_answer: str | None) -> bool:
    """Quiz answers are picked from the options, so they must match exactly."""
    return user_answer is not None and user_answer == question.correct_answer
