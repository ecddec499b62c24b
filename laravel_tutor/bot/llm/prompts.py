from dataclasses import dataclass
from typing import Optional

from bot.config import LESSON_QUIZ_SIZE, PLACEMENT_QUIZ_SIZE, PLACEMENT_SUBTOPICS
from bot.llm.schemas import PLACEMENT_QUIZ_SCHEMA, build_lesson_schema


@dataclass(frozen=True)
class ContentRequest:
    """Everything the provider needs for one call. schema=None means free text."""
    prompt: str
    system_instruction: str
    schema: Optional[dict] = None
    schema_name: str = "response"


def build_lesson_request(topic: str, subject: str = "Laravel") -> ContentRequest:
    prompt = (
        f'Generate a lesson for a beginner learning about "{topic}" in {subject}. '
        "The lesson should include a simple explanation, an interactive fill-in-the-blanks "
        "code example, a relevant interview question with a sample expert answer, and a quiz "
        f"with {LESSON_QUIZ_SIZE} multiple-choice questions to test understanding."
    )
    system_instruction = (
        f"You are an expert {subject} tutor creating educational content for a beginner-friendly "
        "interactive app. Your responses must be clear, concise, and accurate. "
        "Provide content structured as JSON."
    )
    return ContentRequest(
        prompt=prompt,
        system_instruction=system_instruction,
        schema=build_lesson_schema(subject),
        schema_name="lesson",
    )


def build_placement_quiz_request(subject: str = "Laravel") -> ContentRequest:
    subtopics = ", ".join(PLACEMENT_SUBTOPICS[:-1]) + f", and {PLACEMENT_SUBTOPICS[-1]}"
    prompt = (
        f"Generate a placement quiz to assess a developer's beginner-level knowledge of {subject}. "
        f"Create exactly {PLACEMENT_QUIZ_SIZE} multiple-choice questions covering a range of "
        f"fundamental topics like {subtopics}. "
        "Ensure each question has 4 options and one correct answer."
    )
    system_instruction = (
        f"You are an expert {subject} tutor creating educational content. "
        "Your responses must be structured as a valid JSON array."
    )
    return ContentRequest(
        prompt=prompt,
        system_instruction=system_instruction,
        schema=PLACEMENT_QUIZ_SCHEMA,
        schema_name="placement_quiz",
    )


def build_feedback_request(question: str, user_answer: str, subject: str = "Laravel") -> ContentRequest:
    prompt = f"""As an expert {subject} interviewer, provide constructive and encouraging feedback on a candidate's answer.

Interview Question: "{question}"
Candidate's Answer: "{user_answer}"

Analyze their response for correctness, clarity, and completeness. Keep the feedback concise (2-4 sentences) and focus on reinforcing correct concepts and gently correcting any misunderstandings. Start with a positive note. Do not provide a sample answer, only feedback on their response. Use markdown for formatting."""

    return ContentRequest(
        prompt=prompt,
        system_instruction=f"You are an expert {subject} interviewer giving feedback to a junior developer.",
    )
