"""Main entry point for Laravel Tutor Bot."""
import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import BotCommand
from pydantic import ValidationError

from bot.config import get_settings
from bot.handlers import start, topic, exercise, interview, quiz
from bot.llm.client import ContentProvider
from bot.services.lesson_service import LessonService

logger = logging.getLogger(__name__)


async def main():
    try:
        settings = get_settings()
    except ValidationError as e:
        logging.basicConfig(level=logging.INFO, stream=sys.stdout)
        logger.error("Configuration error, check your .env file (see .env.example):\n%s", e)
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout,
    )

    logger.info("Starting Laravel Tutor Bot (model %s)...", settings.LLM_MODEL)

    provider = ContentProvider(
        api_key=settings.LLM_API_KEY,
        base_url=settings.LLM_BASE_URL,
        model=settings.LLM_MODEL,
        timeout=settings.LLM_TIMEOUT,
    )
    lesson_service = LessonService(
        provider,
        subject=settings.SUBJECT,
        max_attempts=settings.LLM_MAX_ATTEMPTS,
        initial_delay_ms=settings.LLM_INITIAL_DELAY_MS,
    )

    bot = Bot(token=settings.BOT_TOKEN)
    # lesson_service is handed to every handler that asks for it
    dp = Dispatcher(storage=MemoryStorage(), lesson_service=lesson_service)

    dp.include_router(start.router)
    dp.include_router(topic.router)
    dp.include_router(exercise.router)
    dp.include_router(interview.router)
    dp.include_router(quiz.router)

    await bot.set_my_commands([
        BotCommand(command="start", description="Main menu"),
    ])

    try:
        logger.info("Starting bot polling...")
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        await provider.close()
        await bot.session.close()
        logger.info("Bot stopped")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
