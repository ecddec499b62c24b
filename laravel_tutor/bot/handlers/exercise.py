import html

from aiogram import Router, F
from aiogram.types import CallbackQuery, Message
from aiogram.fsm.context import FSMContext

from bot.exceptions import ExerciseLocked, GradingPrecondition
from bot.handlers.common import answer_html, get_lesson
from bot.keyboards.exercise_kb import exercise_keyboard
from bot.keyboards.main_menu import back_to_lesson_keyboard
from bot.services.answer_checker import Feedback
from bot.services.blank_parser import Literal, parse_template
from bot.services.exercise import ExerciseAttempt
from bot.states.tutor_states import TutorFlow
from bot.utils.markdown import code_block, render_markdown

router = Router()

NO_LESSON_TEXT = "There is no active lesson. Choose a topic first."


def format_exercise(attempt: ExerciseAttempt) -> str:
    """Exercise code with every blank shown as ⟨n⟩ or ⟨n: answer⟩."""
    example = attempt.example
    parts = [html.escape(example.setup_code, quote=False)]
    for segment in parse_template(example.interactive_code):
        if isinstance(segment, Literal):
            parts.append(html.escape(segment.text, quote=False))
            continue
        number = segment.index + 1
        answer = attempt.user_answers[segment.index] if segment.index < attempt.blank_count else ""
        if answer:
            parts.append(f"⟨{number}: {html.escape(answer, quote=False)}⟩")
        else:
            parts.append(f"⟨{number}⟩")

    text = (
        "🧩 Complete the code snippet below by filling in the blanks.\n\n"
        f"<pre><code>{''.join(parts)}</code></pre>"
    )
    if attempt.submitted:
        correct = sum(f == Feedback.CORRECT for f in attempt.feedback)
        text += f"\n\n{correct} of {attempt.blank_count} blanks are correct."
    elif not attempt.can_submit:
        text += "\n\nTap a blank to type its answer."
    return text


def format_solved(attempt: ExerciseAttempt) -> str:
    return (
        "✅ <b>Correct! Well done.</b>\n\n"
        f"{render_markdown(attempt.example.explanation)}\n\n"
        "<b>Here is the complete code:</b>\n"
        f"{code_block(attempt.solved_code())}"
    )


async def _load_attempt(state: FSMContext) -> ExerciseAttempt | None:
    lesson = await get_lesson(state)
    if lesson is None:
        return None
    data = await state.get_data()
    return ExerciseAttempt.from_dict(lesson.interactive_code_example, data.get("exercise"))


async def _save_attempt(state: FSMContext, attempt: ExerciseAttempt) -> None:
    await state.update_data(exercise=attempt.to_dict())


async def _show(message: Message, attempt: ExerciseAttempt) -> None:
    if attempt.is_solved:
        await answer_html(message, format_solved(attempt), reply_markup=exercise_keyboard(attempt))
    else:
        await answer_html(message, format_exercise(attempt), reply_markup=exercise_keyboard(attempt))


@router.callback_query(F.data == "exercise")
async def show_exercise(callback: CallbackQuery, state: FSMContext):
    attempt = await _load_attempt(state)
    await callback.answer()
    if attempt is None:
        await callback.message.answer(NO_LESSON_TEXT)
        return
    await state.set_state(TutorFlow.viewing_lesson)
    await _show(callback.message, attempt)


@router.callback_query(F.data.startswith("blank:"))
async def choose_blank(callback: CallbackQuery, state: FSMContext):
    attempt = await _load_attempt(state)
    if attempt is None:
        await callback.answer()
        await callback.message.answer(NO_LESSON_TEXT)
        return
    if attempt.is_solved:
        await callback.answer("The exercise is already solved.")
        return

    index = int(callback.data.split(":")[1])
    if not 0 <= index < attempt.blank_count:
        await callback.answer()
        return

    await state.set_state(TutorFlow.entering_blank)
    await state.update_data(blank_index=index)
    await callback.answer()
    await callback.message.answer(
        f"✏️ Type the answer for blank {index + 1}:",
        reply_markup=back_to_lesson_keyboard(),
    )


@router.message(TutorFlow.entering_blank)
async def blank_entered(message: Message, state: FSMContext):
    text = message.text.strip() if message.text else ""
    if not text:
        await message.answer("The answer can't be empty. Type the missing code:")
        return

    attempt = await _load_attempt(state)
    if attempt is None:
        await state.set_state(None)
        await message.answer(NO_LESSON_TEXT)
        return

    data = await state.get_data()
    try:
        attempt.set_answer(data.get("blank_index", 0), text)
    except ExerciseLocked:
        await state.set_state(TutorFlow.viewing_lesson)
        await message.answer("The exercise is already solved.")
        return

    await _save_attempt(state, attempt)
    await state.set_state(TutorFlow.viewing_lesson)
    await _show(message, attempt)


@router.callback_query(F.data == "ex:check")
async def check_answers(callback: CallbackQuery, state: FSMContext):
    attempt = await _load_attempt(state)
    if attempt is None:
        await callback.answer()
        await callback.message.answer(NO_LESSON_TEXT)
        return

    try:
        attempt.check_answers()
    except GradingPrecondition:
        await callback.answer("Fill in every blank first.", show_alert=True)
        return

    await _save_attempt(state, attempt)
    await callback.answer()
    await _show(callback.message, attempt)


@router.callback_query(F.data == "ex:reset")
async def try_again(callback: CallbackQuery, state: FSMContext):
    attempt = await _load_attempt(state)
    await callback.answer()
    if attempt is None:
        await callback.message.answer(NO_LESSON_TEXT)
        return
    attempt.reset()
    await _save_attempt(state, attempt)
    await _show(callback.message, attempt)
