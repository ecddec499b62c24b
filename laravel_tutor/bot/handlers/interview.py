import html

from aiogram import Router, F
from aiogram.types import CallbackQuery, Message
from aiogram.fsm.context import FSMContext

from bot.exceptions import ContentGenerationError
from bot.handlers.common import answer_html, get_lesson
from bot.keyboards.exercise_kb import interview_keyboard
from bot.services.lesson_service import LessonService
from bot.states.tutor_states import TutorFlow
from bot.utils.markdown import render_markdown

router = Router()


@router.callback_query(F.data == "interview")
async def show_question(callback: CallbackQuery, state: FSMContext):
    lesson = await get_lesson(state)
    await callback.answer()
    if lesson is None:
        await callback.message.answer("There is no active lesson. Choose a topic first.")
        return

    await state.set_state(TutorFlow.answering_interview)
    await answer_html(
        callback.message,
        "🎤 <b>Interview question</b>\n\n"
        f"{html.escape(lesson.interview_question.question, quote=False)}\n\n"
        "✏️ Type your answer and I'll give you feedback.",
        reply_markup=interview_keyboard(),
    )


@router.message(TutorFlow.answering_interview)
async def answer_entered(message: Message, state: FSMContext, lesson_service: LessonService):
    user_answer = message.text.strip() if message.text else ""
    if not user_answer:
        await message.answer("Type your answer as text:")
        return

    lesson = await get_lesson(state)
    if lesson is None:
        await state.set_state(None)
        await message.answer("There is no active lesson. Choose a topic first.")
        return

    await message.answer("⏳ Getting feedback...")
    try:
        feedback = await lesson_service.get_answer_feedback(lesson.interview_question.question, user_answer)
    except ContentGenerationError as e:
        # Stay in the answering state so the user can just send the answer again
        await message.answer(f"😞 {e}", reply_markup=interview_keyboard())
        return

    await answer_html(
        message,
        f"📝 <b>Feedback</b>\n\n{render_markdown(feedback)}",
        reply_markup=interview_keyboard(),
    )


@router.callback_query(F.data == "iq:sample")
async def show_sample_answer(callback: CallbackQuery, state: FSMContext):
    lesson = await get_lesson(state)
    await callback.answer()
    if lesson is None:
        await callback.message.answer("There is no active lesson. Choose a topic first.")
        return
    await answer_html(
        callback.message,
        f"💡 <b>Sample answer</b>\n\n{render_markdown(lesson.interview_question.sample_answer)}",
        reply_markup=interview_keyboard(),
    )
