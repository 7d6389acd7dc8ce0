from __future__ import annotations

import asyncio
import locale
import sys

from aiogram import Bot, Dispatcher
from aiogram.types import BotCommand, BotCommandScopeDefault
from loguru import logger

from secret_santa.bot import create_bot, create_dispatcher
from secret_santa.core.config import load_settings
from secret_santa.core.logging import setup_logging
from secret_santa.db import init_engine


USERS_COMMANDS: dict[str, str] = {
    "start": "start",
    "help": "how it works",
    "add": "add a participant",
    "reset": "start over",
    "share": "get a share code",
    "open": "open a share code",
    "save": "save as a room",
    "room": "open a room",
    "notify": "e-mail the matches",
}


async def set_default_commands(bot: Bot) -> None:
    await bot.set_my_commands(
        [
            BotCommand(command=command, description=description)
            for command, description in USERS_COMMANDS.items()
        ],
        scope=BotCommandScopeDefault(),
    )


async def on_startup(bot: Bot) -> None:
    logger.info("bot starting...")

    await set_default_commands(bot)

    bot_info = await bot.get_me()

    logger.info("Name     - {name}", name=bot_info.full_name)
    logger.info("Username - @{username}", username=bot_info.username)
    logger.info("ID       - {id}", id=bot_info.id)

    logger.info("bot started")


async def on_shutdown(bot: Bot, dispatcher: Dispatcher) -> None:
    logger.info("bot stopping...")

    await dispatcher.storage.close()
    await bot.session.close()

    logger.info("bot stopped")


async def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_path)
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as exc:
        logger.warning("Falling back to the C collation: {error}", error=str(exc))
    init_engine(settings.database_url)
    logger.bind(random_source=settings.random_source, delay=settings.generation_delay).info(
        "Draw settings loaded"
    )

    bot = create_bot(settings)
    dp = create_dispatcher(settings)
    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)

    await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())


if __name__ == "__main__":
    if sys.platform != "win32" and not getattr(asyncio, "debug", False):
        import uvloop

        uvloop.install()

    asyncio.run(main())
