import html

from aiogram import F, Router, types
from aiogram.filters import Command

from secret_santa.bot.screens import render
from secret_santa.bot.utils import GameRegistry, log_handler_exception, parse_id
from secret_santa.services import game_flow
from secret_santa.services.errors import InvalidTransition, ValidationError

router = Router()
router.message.filter(F.chat.type == "private")


async def _add_name(message: types.Message, games: GameRegistry, name: str) -> None:
    state = games.get(message.chat.id)
    if state.is_busy:
        return

    try:
        game_flow.add_participant(state, name)
    except ValidationError as exc:
        await message.answer(html.escape(str(exc)))
        return
    except InvalidTransition:
        await message.answer("The draw is done. Use /reset to start a new one.")
        return
    except Exception as exc:
        log_handler_exception("add", message.from_user.id, message.chat.id, exc)
        await message.answer("Something went wrong. Please try again later.")
        return

    text, markup = render(state)
    await message.answer(text, reply_markup=markup)


@router.message(Command("add"))
async def add_command_handler(message: types.Message, games: GameRegistry) -> None:
    parts = message.text.split(maxsplit=1)
    if len(parts) < 2:
        await message.answer("Usage: /add Alice")
        return
    await _add_name(message, games, parts[1])


@router.callback_query(lambda c: c.data and c.data.startswith("remove:"))
async def remove_callback_handler(query: types.CallbackQuery, games: GameRegistry) -> None:
    state = games.get(query.message.chat.id)
    participant_id = parse_id(query.data)
    if state.is_busy or participant_id is None:
        await query.answer()
        return

    try:
        game_flow.remove_participant(state, participant_id)
        text, markup = render(state)
        await query.message.edit_text(text, reply_markup=markup)
        await query.answer()
    except InvalidTransition:
        await query.answer("The draw is done. Use /reset to start a new one.", show_alert=True)
    except Exception as exc:
        log_handler_exception("remove", query.from_user.id, query.message.chat.id, exc)
        await query.answer("Something went wrong. Please try again later.", show_alert=True)


@router.callback_query(lambda c: c.data == "clear")
async def clear_callback_handler(query: types.CallbackQuery, games: GameRegistry) -> None:
    state = games.get(query.message.chat.id)
    if state.is_busy:
        await query.answer()
        return

    try:
        game_flow.clear_roster(state)
        text, markup = render(state)
        await query.message.edit_text(text, reply_markup=markup)
        await query.answer("List cleared.")
    except InvalidTransition:
        await query.answer("The draw is done. Use /reset to start a new one.", show_alert=True)
    except Exception as exc:
        log_handler_exception("clear", query.from_user.id, query.message.chat.id, exc)
        await query.answer("Something went wrong. Please try again later.", show_alert=True)


@router.message(F.text, ~F.text.startswith("/"))
async def name_message_handler(message: types.Message, games: GameRegistry) -> None:
    await _add_name(message, games, message.text)
