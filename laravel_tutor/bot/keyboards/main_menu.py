from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton


def main_menu_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="📚 Choose a topic", callback_data="topics:0")],
        [InlineKeyboardButton(text="🎯 Placement quiz", callback_data="placement")],
    ])


def lesson_menu_keyboard(has_next: bool) -> InlineKeyboardMarkup:
    buttons = [
        [InlineKeyboardButton(text="🧩 Code exercise", callback_data="exercise")],
        [InlineKeyboardButton(text="🎤 Interview question", callback_data="interview")],
        [InlineKeyboardButton(text="📝 Quiz", callback_data="quiz:lesson")],
    ]
    if has_next:
        buttons.append([InlineKeyboardButton(text="➡️ Next lesson", callback_data="next_lesson")])
    buttons.append([
        InlineKeyboardButton(text="📚 Topics", callback_data="topics:0"),
        InlineKeyboardButton(text="🏠 Home", callback_data="go_home"),
    ])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def back_to_lesson_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="🔙 Back to lesson", callback_data="lesson")],
    ])


def retry_keyboard(callback_data: str) -> InlineKeyboardMarkup:
    """Shown under a generation error; re-triggers the failed action."""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="🔄 Try again", callback_data=callback_data)],
        [InlineKeyboardButton(text="🏠 Home", callback_data="go_home")],
    ])
