"""Data models for generated lesson content."""
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class QuizQuestion:
    """Multiple-choice question. correct_answer is one of options."""
    question: str
    options: List[str]
    correct_answer: str


@dataclass(frozen=True)
class InteractiveCodeExample:
    """Fill-in-the-blank code exercise."""
    setup_code: str
    interactive_code: str          # contains [[BLANK_1]] .. [[BLANK_N]]
    solution: List[str]            # solution[i] answers the i-th blank
    explanation: str = ""


@dataclass(frozen=True)
class InterviewQuestion:
    """Interview question with an expert sample answer."""
    question: str
    sample_answer: str


@dataclass(frozen=True)
class Lesson:
    """Full lesson for one topic."""
    explanation: str
    interactive_code_example: InteractiveCodeExample
    interview_question: InterviewQuestion
    quiz: List[QuizQuestion] = field(default_factory=list)


# ============================================================================
# CONVERTERS: provider JSON (camelCase) <-> dataclasses
# ============================================================================

def quiz_question_from_dict(data: dict) -> QuizQuestion:
    return QuizQuestion(
        question=data.get("question", ""),
        options=[str(option) for option in data.get("options") or []],
        correct_answer=data.get("correctAnswer", ""),
    )


def quiz_question_to_dict(question: QuizQuestion) -> dict:
    return {
        "question": question.question,
        "options": list(question.options),
        "correctAnswer": question.correct_answer,
    }


def code_example_from_dict(data: dict) -> InteractiveCodeExample:
    return InteractiveCodeExample(
        setup_code=data.get("setupCode") or "",
        interactive_code=data.get("interactiveCode", ""),
        solution=[str(answer) for answer in data.get("solution") or []],
        explanation=data.get("explanation") or "",
    )


def code_example_to_dict(example: InteractiveCodeExample) -> dict:
    return {
        "setupCode": example.setup_code,
        "interactiveCode": example.interactive_code,
        "solution": list(example.solution),
        "explanation": example.explanation,
    }


def lesson_from_dict(data: dict) -> Lesson:
    """Build a Lesson from the provider's JSON payload (already validated)."""
    interview = data.get("interviewQuestion") or {}
    return Lesson(
        explanation=data.get("explanation", ""),
        interactive_code_example=code_example_from_dict(data.get("interactiveCodeExample") or {}),
        interview_question=InterviewQuestion(
            question=interview.get("question", ""),
            sample_answer=interview.get("sampleAnswer", ""),
        ),
        quiz=[quiz_question_from_dict(q) for q in data.get("quiz") or []],
    )


def lesson_to_dict(lesson: Lesson) -> dict:
    """Inverse of lesson_from_dict, used to keep the lesson in FSM storage."""
    return {
        "explanation": lesson.explanation,
        "interactiveCodeExample": code_example_to_dict(lesson.interactive_code_example),
        "interviewQuestion": {
            "question": lesson.interview_question.question,
            "sampleAnswer": lesson.interview_question.sample_answer,
        },
        "quiz": [quiz_question_to_dict(q) for q in lesson.quiz],
    }
