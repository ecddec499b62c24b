import html

from aiogram import Router, F
from aiogram.types import Message, CallbackQuery
from aiogram.fsm.context import FSMContext

from bot.exceptions import ContentGenerationError
from bot.handlers.common import get_lesson
from bot.keyboards.main_menu import back_to_lesson_keyboard, main_menu_keyboard, retry_keyboard
from bot.keyboards.quiz_kb import multiple_choice_keyboard
from bot.models import QuizQuestion, quiz_question_from_dict, quiz_question_to_dict
from bot.services.lesson_service import LessonService
from bot.states.tutor_states import TutorFlow

router = Router()

LESSON_QUIZ = "lesson"
PLACEMENT_QUIZ = "placement"


async def start_quiz(message: Message, state: FSMContext, kind: str, questions: list[QuizQuestion]):
    """Store a fresh quiz in the FSM data and send its first question."""
    await state.update_data(quiz={
        "kind": kind,
        "questions": [quiz_question_to_dict(q) for q in questions],
        "answers": [],
        "index": 0,
    })
    await state.set_state(TutorFlow.answering_quiz)
    await _send_current_question(message, state)


async def _send_current_question(message: Message, state: FSMContext):
    data = await state.get_data()
    quiz = data["quiz"]
    questions = quiz["questions"]
    index = quiz["index"]

    if index >= len(questions):
        # No more questions, show results
        from bot.handlers.results import show_results
        await show_results(message, state)
        return

    q = quiz_question_from_dict(questions[index])
    title = "🎯 Placement quiz" if quiz["kind"] == PLACEMENT_QUIZ else "📝 Quiz"
    text = (
        f"{title}\n"
        f"<b>Question {index + 1} of {len(questions)}</b>\n\n"
        f"{html.escape(q.question, quote=False)}"
    )
    await message.answer(text, reply_markup=multiple_choice_keyboard(q.options), parse_mode="HTML")


@router.callback_query(F.data == "quiz:lesson")
async def start_lesson_quiz(callback: CallbackQuery, state: FSMContext):
    lesson = await get_lesson(state)
    await callback.answer()
    if lesson is None:
        await callback.message.answer("There is no active lesson. Choose a topic first.")
        return
    await start_quiz(callback.message, state, LESSON_QUIZ, lesson.quiz)


@router.callback_query(F.data == "placement")
async def start_placement_quiz(callback: CallbackQuery, state: FSMContext, lesson_service: LessonService):
    await callback.answer()
    await callback.message.answer("⏳ Generating your placement quiz...")
    try:
        questions = await lesson_service.generate_placement_quiz()
    except ContentGenerationError as e:
        await callback.message.answer(f"😞 {e}", reply_markup=retry_keyboard("placement"))
        return
    await start_quiz(callback.message, state, PLACEMENT_QUIZ, questions)


@router.callback_query(F.data == "quiz:restart")
async def restart_quiz(callback: CallbackQuery, state: FSMContext, lesson_service: LessonService):
    data = await state.get_data()
    quiz = data.get("quiz")
    if not quiz:
        await callback.answer()
        await callback.message.answer("Choose what to do next:", reply_markup=main_menu_keyboard())
        return

    if quiz["kind"] == PLACEMENT_QUIZ:
        # A retake of the placement quiz asks for a new set of questions
        await start_placement_quiz(callback, state, lesson_service)
        return

    await callback.answer()
    questions = [quiz_question_from_dict(q) for q in quiz["questions"]]
    await start_quiz(callback.message, state, LESSON_QUIZ, questions)


@router.callback_query(TutorFlow.answering_quiz, F.data.startswith("ans:"))
async def answer_selected(callback: CallbackQuery, state: FSMContext):
    data = await state.get_data()
    quiz = data["quiz"]
    q = quiz_question_from_dict(quiz["questions"][quiz["index"]])

    option_index = int(callback.data.split(":", 1)[1])
    if not 0 <= option_index < len(q.options):
        await callback.answer()
        return

    quiz["answers"].append(q.options[option_index])
    quiz["index"] += 1
    await state.update_data(quiz=quiz)
    await callback.answer()
    await _send_current_question(callback.message, state)


@router.callback_query(F.data == "cancel_quiz")
async def cancel_quiz(callback: CallbackQuery, state: FSMContext):
    """Cancel the current quiz; the active lesson stays loaded."""
    await state.update_data(quiz=None)
    lesson = await get_lesson(state)
    if lesson is not None:
        await state.set_state(TutorFlow.viewing_lesson)
        await callback.message.answer("Quiz cancelled.", reply_markup=back_to_lesson_keyboard())
    else:
        await state.set_state(None)
        await callback.message.answer("Quiz cancelled.", reply_markup=main_menu_keyboard())
    await callback.answer()
