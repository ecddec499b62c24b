import html
import logging
from uuid import uuid4

from aiogram import Router, F
from aiogram.types import CallbackQuery, Message
from aiogram.fsm.context import FSMContext

from bot.config import TOPICS
from bot.exceptions import ContentGenerationError
from bot.handlers.common import answer_html, get_lesson, is_current_lesson_request
from bot.keyboards.main_menu import lesson_menu_keyboard, retry_keyboard
from bot.keyboards.topic_kb import search_results_keyboard, topic_keyboard
from bot.models import lesson_to_dict
from bot.services.lesson_service import LessonService
from bot.services.topics import filter_topics, next_topic
from bot.states.tutor_states import TutorFlow
from bot.utils.markdown import render_markdown

logger = logging.getLogger(__name__)

router = Router()

TOPICS_TEXT = "📚 Choose a topic, or type a few letters to search:"


@router.callback_query(F.data.startswith("topics:"))
async def show_topics(callback: CallbackQuery, state: FSMContext):
    page = int(callback.data.split(":")[1])
    await state.set_state(TutorFlow.choosing_topic)
    await callback.message.answer(TOPICS_TEXT, reply_markup=topic_keyboard(page))
    await callback.answer()


@router.message(TutorFlow.choosing_topic)
async def search_topics(message: Message, state: FSMContext):
    term = message.text.strip() if message.text else ""
    if not term:
        await message.answer(TOPICS_TEXT, reply_markup=topic_keyboard())
        return

    found = filter_topics(term)
    if not found:
        await message.answer(
            f"🔍 No topics found for “{term}”. Try another word:",
            reply_markup=topic_keyboard(),
        )
        return

    await message.answer(
        f"🔍 Topics matching “{term}”:",
        reply_markup=search_results_keyboard(found),
    )


@router.callback_query(F.data.startswith("topic:"))
async def topic_selected(callback: CallbackQuery, state: FSMContext, lesson_service: LessonService):
    topic_index = int(callback.data.split(":")[1])
    if not 0 <= topic_index < len(TOPICS):
        await callback.answer("Unknown topic", show_alert=True)
        return
    await callback.answer()
    await open_lesson(callback.message, state, TOPICS[topic_index], lesson_service)


@router.callback_query(F.data == "next_lesson")
async def next_lesson(callback: CallbackQuery, state: FSMContext, lesson_service: LessonService):
    data = await state.get_data()
    following = next_topic(data.get("topic", ""))
    if following is None:
        await callback.answer("This was the last lesson 🎉", show_alert=True)
        return
    await callback.answer()
    await open_lesson(callback.message, state, following, lesson_service)


@router.callback_query(F.data == "retry_lesson")
async def retry_lesson(callback: CallbackQuery, state: FSMContext, lesson_service: LessonService):
    data = await state.get_data()
    topic = data.get("topic")
    await callback.answer()
    if not topic:
        await callback.message.answer(TOPICS_TEXT, reply_markup=topic_keyboard())
        return
    await open_lesson(callback.message, state, topic, lesson_service)


@router.callback_query(F.data == "lesson")
async def back_to_lesson(callback: CallbackQuery, state: FSMContext):
    lesson = await get_lesson(state)
    data = await state.get_data()
    await callback.answer()
    if lesson is None:
        await callback.message.answer(TOPICS_TEXT, reply_markup=topic_keyboard())
        return
    topic = data["topic"]
    await state.set_state(TutorFlow.viewing_lesson)
    await callback.message.answer(
        f"📘 {topic}\n\nWhat would you like to do next?",
        reply_markup=lesson_menu_keyboard(has_next=next_topic(topic) is not None),
    )


async def open_lesson(message: Message, state: FSMContext, topic: str, lesson_service: LessonService):
    """Make topic the active one, generate its lesson and show the explanation."""
    # Every request gets its own id; the previous lesson, exercise and quiz are discarded
    request_id = uuid4().hex
    await state.update_data(topic=topic, lesson_request=request_id, lesson=None, exercise=None, quiz=None)
    await state.set_state(TutorFlow.generating_lesson)
    await message.answer(f"⏳ Generating your lesson on “{topic}”...\n\nThis usually takes 10-20 seconds.")

    try:
        lesson = await lesson_service.generate_lesson(topic)
    except ContentGenerationError as e:
        if await is_current_lesson_request(state, request_id):
            await message.answer(f"😞 {e}", reply_markup=retry_keyboard("retry_lesson"))
        return

    # The user may have requested another lesson while this one was generating
    if not await is_current_lesson_request(state, request_id):
        logger.info("Discarding stale lesson for topic %r", topic)
        return

    await state.update_data(lesson=lesson_to_dict(lesson), exercise=None, quiz=None)
    await state.set_state(TutorFlow.viewing_lesson)

    text = f"<b>📘 {html.escape(topic)}</b>\n\n{render_markdown(lesson.explanation)}"
    await answer_html(message, text, reply_markup=lesson_menu_keyboard(has_next=next_topic(topic) is not None))
