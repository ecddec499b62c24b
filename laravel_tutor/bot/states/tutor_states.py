from aiogram.fsm.state import StatesGroup, State


class TutorFlow(StatesGroup):
    choosing_topic = State()
    generating_lesson = State()
    viewing_lesson = State()
    entering_blank = State()
    answering_interview = State()
    answering_quiz = State()
