from dataclasses import dataclass
from typing import List, Optional

from bot.models import QuizQuestion
from bot.services.answer_checker import check_quiz_answer

# (min percentage, message, icon), checked top to bottom
SCORE_BRACKETS = [
    (100, "Excellent! You aced it!", "🏆"),
    (70, "Great job! You have a solid understanding.", "🧠"),
    (50, "Good effort! A little more review might help.", "💡"),
    (0, "Don't worry, learning is a process. Let's try again!", "📖"),
]


@dataclass(frozen=True)
class QuizResult:
    score: int
    total: int
    percentage: float
    message: str
    icon: str


def pick_bracket(percentage: float) -> tuple[str, str]:
    """Return (message, icon) for a score percentage."""
    for min_percentage, message, icon in SCORE_BRACKETS:
        if percentage >= min_percentage:
            return message, icon
    _, message, icon = SCORE_BRACKETS[-1]
    return message, icon


def score_quiz(questions: List[QuizQuestion], answers: List[Optional[str]]) -> QuizResult:
    score = sum(
        1 for question, answer in zip(questions, answers)
        if check_quiz_answer(question, answer)
    )
    total = len(questions)
    percentage = score / total * 100 if total else 0.0
    message, icon = pick_bracket(percentage)
    return QuizResult(score=score, total=total, percentage=percentage, message=message, icon=icon)
