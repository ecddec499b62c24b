from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from bot.config import TOPICS

TOPICS_PER_PAGE = 8


def topic_keyboard(page: int = 0) -> InlineKeyboardMarkup:
    """One page of the topic list. Buttons carry the topic's index in TOPICS."""
    pages = max(1, (len(TOPICS) + TOPICS_PER_PAGE - 1) // TOPICS_PER_PAGE)
    page = min(max(page, 0), pages - 1)
    start = page * TOPICS_PER_PAGE

    buttons = []
    for i, topic in enumerate(TOPICS[start:start + TOPICS_PER_PAGE], start=start):
        buttons.append([InlineKeyboardButton(text=topic, callback_data=f"topic:{i}")])

    nav = []
    if page > 0:
        nav.append(InlineKeyboardButton(text="⬅️", callback_data=f"topics:{page - 1}"))
    if page < pages - 1:
        nav.append(InlineKeyboardButton(text="➡️", callback_data=f"topics:{page + 1}"))
    if nav:
        buttons.append(nav)
    buttons.append([InlineKeyboardButton(text="🏠 Home", callback_data="go_home")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def search_results_keyboard(topics: list[str]) -> InlineKeyboardMarkup:
    buttons = []
    for topic in topics:
        buttons.append([InlineKeyboardButton(text=topic, callback_data=f"topic:{TOPICS.index(topic)}")])
    buttons.append([InlineKeyboardButton(text="📚 All topics", callback_data="topics:0")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)
