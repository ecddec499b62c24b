from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton


def multiple_choice_keyboard(options: list[str]) -> InlineKeyboardMarkup:
    labels = ["A", "B", "C", "D"]
    buttons = []
    for i, option in enumerate(options):
        label = labels[i] if i < len(labels) else str(i + 1)
        # Options can exceed the 64-byte callback limit, so send the index
        buttons.append([InlineKeyboardButton(text=f"{label}) {option}", callback_data=f"ans:{i}")])
    buttons.append([InlineKeyboardButton(text="❌ Cancel quiz", callback_data="cancel_quiz")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def quiz_results_keyboard(restart_text: str, show_next: bool) -> InlineKeyboardMarkup:
    buttons = [[InlineKeyboardButton(text=f"🔄 {restart_text}", callback_data="quiz:restart")]]
    if show_next:
        buttons.append([InlineKeyboardButton(text="➡️ Next lesson", callback_data="next_lesson")])
    buttons.append([InlineKeyboardButton(text="🏠 Home", callback_data="go_home")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)
