from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from bot.services.answer_checker import Feedback
from bot.services.exercise import ExerciseAttempt

_FEEDBACK_MARKS = {
    Feedback.UNKNOWN: "",
    Feedback.CORRECT: " ✅",
    Feedback.INCORRECT: " ❌",
}


def exercise_keyboard(attempt: ExerciseAttempt) -> InlineKeyboardMarkup:
    """Blank buttons plus Check / Try again, depending on the attempt's state."""
    buttons = []
    if not attempt.is_solved:
        for i, answer in enumerate(attempt.user_answers):
            shown = answer if answer else "…"
            mark = _FEEDBACK_MARKS[attempt.feedback[i]]
            buttons.append([InlineKeyboardButton(
                text=f"✏️ Blank {i + 1}: {shown}{mark}",
                callback_data=f"blank:{i}",
            )])

        # Check stays hidden until every blank has an answer
        action_row = []
        if attempt.can_submit:
            action_row.append(InlineKeyboardButton(text="✔️ Check answer", callback_data="ex:check"))
        if attempt.submitted:
            action_row.append(InlineKeyboardButton(text="🔄 Try again", callback_data="ex:reset"))
        if action_row:
            buttons.append(action_row)

    buttons.append([InlineKeyboardButton(text="🔙 Back to lesson", callback_data="lesson")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def interview_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="💡 Show sample answer", callback_data="iq:sample")],
        [InlineKeyboardButton(text="🔙 Back to lesson", callback_data="lesson")],
    ])
