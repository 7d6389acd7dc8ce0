from aiogram import Router, types
from aiogram.filters import Command, CommandStart

from secret_santa.bot.screens import render
from secret_santa.bot.utils import GameRegistry, log_handler_exception

router = Router()

HELP_TEXT = (
    "Hello! I'm your Secret Santa helper.\n\n"
    "Send me the names of everyone taking part, one per message, "
    "then tap 'Start the draw!'. Everyone gives exactly one gift and receives exactly one.\n\n"
    "After the draw, pass the phone around: each person taps their own name "
    "to see who they are gifting, then hides it again.\n\n"
    "/share - get a link code for this draw\n"
    "/open &lt;code&gt; - load a draw from a link code\n"
    "/save [title] - store this draw as a room\n"
    "/room &lt;code&gt; - load a stored room\n"
    "/notify Name=email ... - e-mail each giver their match\n"
    "/reset - start over"
)


@router.message(CommandStart())
async def command_start_handler(message: types.Message, games: GameRegistry) -> None:
    if message.chat.type != "private":
        await message.answer("Please talk to me in a private chat so nobody peeks.")
        return

    try:
        state = games.get(message.chat.id)
        text, markup = render(state)
        await message.answer(HELP_TEXT)
        await message.answer(text, reply_markup=markup)
    except Exception as exc:
        log_handler_exception("start", message.from_user.id, message.chat.id, exc)
        await message.answer("Something went wrong. Please try again later.")


@router.message(Command("help"))
async def help_command_handler(message: types.Message) -> None:
    await message.answer(HELP_TEXT)
