import logging
from typing import List

from bot.exceptions import ExerciseLocked, GradingPrecondition
from bot.models import InteractiveCodeExample
from bot.services.answer_checker import Feedback, grade
from bot.services.blank_parser import reconstruct

logger = logging.getLogger(__name__)


class ExerciseAttempt:
    """
    Grading state of one fill-in-the-blank exercise.

    Editing -> Submitted (check_answers) -> Editing (reset) ... until every
    blank is graded correct, after which the answers are read-only.
    The owner calls reset() whenever the active lesson changes.
    """

    def __init__(self, example: InteractiveCodeExample):
        self.example = example
        self.user_answers: List[str] = [""] * len(example.solution)
        self.feedback: List[Feedback] = [Feedback.UNKNOWN] * len(example.solution)
        self.submitted = False

    @property
    def blank_count(self) -> int:
        return len(self.example.solution)

    @property
    def can_submit(self) -> bool:
        """Checking is allowed only when no blank is empty."""
        return not self.is_solved and all(answer != "" for answer in self.user_answers)

    @property
    def is_solved(self) -> bool:
        return self.submitted and all(f == Feedback.CORRECT for f in self.feedback)

    def set_answer(self, index: int, text: str) -> None:
        if self.is_solved:
            raise ExerciseLocked("The exercise is already solved")
        self.user_answers[index] = text
        if self.submitted:
            # Only this blank goes back to ungraded
            self.feedback[index] = Feedback.UNKNOWN

    def check_answers(self) -> List[Feedback]:
        if not self.can_submit:
            raise GradingPrecondition("Fill in every blank before checking")
        self.feedback = [
            grade(answer, solution)
            for answer, solution in zip(self.user_answers, self.example.solution)
        ]
        self.submitted = True
        logger.debug(
            "Checked %d blanks: %d correct",
            self.blank_count,
            sum(f == Feedback.CORRECT for f in self.feedback),
        )
        return list(self.feedback)

    def reset(self) -> None:
        self.user_answers = [""] * self.blank_count
        self.feedback = [Feedback.UNKNOWN] * self.blank_count
        self.submitted = False

    def solved_code(self) -> str:
        """Complete code built from the stored solution, not the user's text."""
        return reconstruct(self.example.setup_code, self.example.interactive_code, self.example.solution)

    def to_dict(self) -> dict:
        return {
            "user_answers": list(self.user_answers),
            "feedback": [f.value for f in self.feedback],
            "submitted": self.submitted,
        }

    @classmethod
    def from_dict(cls, example: InteractiveCodeExample, data: dict | None) -> "ExerciseAttempt":
        """Restore an attempt saved with to_dict(); a missing or mismatched record starts fresh."""
        attempt = cls(example)
        if not data:
            return attempt
        answers = data.get("user_answers") or []
        feedback = data.get("feedback") or []
        if len(answers) != attempt.blank_count or len(feedback) != attempt.blank_count:
            return attempt
        attempt.user_answers = list(answers)
        attempt.feedback = [Feedback(f) for f in feedback]
        attempt.submitted = bool(data.get("submitted"))
        return attempt
