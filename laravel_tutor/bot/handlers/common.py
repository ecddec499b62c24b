from aiogram.fsm.context import FSMContext
from aiogram.types import InlineKeyboardMarkup, Message

from bot.models import Lesson, lesson_from_dict
from bot.utils.markdown import split_message


async def get_lesson(state: FSMContext) -> Lesson | None:
    """Lesson of the active topic, or None if it is not loaded (yet)."""
    data = await state.get_data()
    lesson_data = data.get("lesson")
    if not lesson_data:
        return None
    return lesson_from_dict(lesson_data)


async def is_current_lesson_request(state: FSMContext, request_id: str) -> bool:
    """False once a newer lesson request (even for the same topic) has started."""
    data = await state.get_data()
    return data.get("lesson_request") == request_id


async def answer_html(message: Message, text: str, reply_markup: InlineKeyboardMarkup | None = None) -> None:
    """Send HTML text, split across messages if needed; the keyboard goes on the last one."""
    chunks = split_message(text)
    for i, chunk in enumerate(chunks):
        markup = reply_markup if i == len(chunks) - 1 else None
        await message.answer(chunk, reply_markup=markup, parse_mode="HTML")
