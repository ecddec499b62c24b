from aiogram import Router, F
from aiogram.filters import CommandStart
from aiogram.types import Message, CallbackQuery
from aiogram.fsm.context import FSMContext

from bot.keyboards.main_menu import main_menu_keyboard

router = Router()

WELCOME_TEXT = (
    "👋 Hi! I'm Laravel Tutor, your personal AI-powered guide to mastering Laravel.\n\n"
    "Pick a topic to get a lesson with a code exercise, an interview question and a quiz, "
    "or take the placement quiz to check what you already know."
)


@router.message(CommandStart())
async def cmd_start(message: Message, state: FSMContext):
    await state.clear()
    await message.answer(WELCOME_TEXT, reply_markup=main_menu_keyboard())


@router.callback_query(F.data == "go_home")
async def go_home(callback: CallbackQuery, state: FSMContext):
    await state.clear()
    await callback.message.answer(WELCOME_TEXT, reply_markup=main_menu_keyboard())
    await callback.answer()
