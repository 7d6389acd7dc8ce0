from aiogram import Router

from secret_santa.bot.handlers import draw, roster, sharing, start

router = Router()
router.include_router(start.router)
router.include_router(draw.router)
router.include_router(sharing.router)
# Last: catches every plain text message as a new participant name.
router.include_router(roster.router)
