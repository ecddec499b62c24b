import html

from aiogram.types import Message
from aiogram.fsm.context import FSMContext

from bot.config import NEXT_LESSON_THRESHOLD
from bot.handlers.common import answer_html
from bot.keyboards.quiz_kb import quiz_results_keyboard
from bot.models import QuizQuestion, quiz_question_from_dict
from bot.services.quiz_scoring import QuizResult, score_quiz
from bot.services.topics import next_topic
from bot.states.tutor_states import TutorFlow


def format_results(questions: list[QuizQuestion], answers: list[str], result: QuizResult) -> str:
    lines = [
        "📊 <b>Quiz Results</b>\n",
        f"<b>{result.score} / {result.total}</b>",
        f"{result.icon} {result.message}\n",
    ]
    for i, q in enumerate(questions):
        answer = answers[i] if i < len(answers) else None
        lines.append(f"<b>{i + 1}. {html.escape(q.question, quote=False)}</b>")
        if answer == q.correct_answer:
            lines.append(f"✅ {html.escape(answer, quote=False)} (your answer)")
        else:
            if answer is not None:
                lines.append(f"❌ {html.escape(answer, quote=False)} (your answer)")
            lines.append(f"✅ {html.escape(q.correct_answer, quote=False)} (correct answer)")
        lines.append("")
    return "\n".join(lines).strip()


async def show_results(message: Message, state: FSMContext):
    """Show the final quiz results."""
    data = await state.get_data()
    quiz = data["quiz"]
    questions = [quiz_question_from_dict(q) for q in quiz["questions"]]
    answers = quiz["answers"]

    result = score_quiz(questions, answers)

    if quiz["kind"] == "placement":
        restart_text = "Take another quiz"
        show_next = False
    else:
        restart_text = "Try again"
        show_next = (
            result.percentage >= NEXT_LESSON_THRESHOLD
            and next_topic(data.get("topic", "")) is not None
        )

    await state.set_state(TutorFlow.viewing_lesson if data.get("lesson") else None)
    await answer_html(
        message,
        format_results(questions, answers, result),
        reply_markup=quiz_results_keyboard(restart_text, show_next),
    )
