from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from secret_santa.bot.handlers import router as handlers_router
from secret_santa.bot.utils import GameRegistry
from secret_santa.core.config import Settings


def create_bot(settings: Settings) -> Bot:
    return Bot(token=settings.bot_token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))


def create_dispatcher(settings: Settings) -> Dispatcher:
    dp = Dispatcher(games=GameRegistry(), settings=settings)
    dp.include_router(handlers_router)
    return dp
