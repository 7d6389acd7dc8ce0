from aiogram import Router, types
from aiogram.filters import Command

from secret_santa.bot.screens import render
from secret_santa.bot.utils import GameRegistry, log_handler_exception, parse_id
from secret_santa.core.config import Settings
from secret_santa.services import game_flow
from secret_santa.services.assignment import make_rng
from secret_santa.services.errors import GenerationInProgress, InvalidTransition, ValidationError

router = Router()


async def _show(query: types.CallbackQuery, state: game_flow.GameState) -> None:
    text, markup = render(state)
    await query.message.edit_text(text, reply_markup=markup)


@router.callback_query(lambda c: c.data == "draw")
async def draw_callback_handler(query: types.CallbackQuery, games: GameRegistry, settings: Settings) -> None:
    state = games.get(query.message.chat.id)
    if state.is_busy:
        await query.answer()
        return

    try:
        task = game_flow.start_generation(
            state,
            rng=make_rng(settings.random_source),
            delay=settings.generation_delay,
        )
    except ValidationError as exc:
        await query.answer(str(exc), show_alert=True)
        return
    except InvalidTransition:
        await query.answer("The draw is already done.", show_alert=True)
        return

    try:
        await query.answer()
        await _show(query, state)
    except Exception as exc:
        log_handler_exception("draw", query.from_user.id, query.message.chat.id, exc)

    try:
        await task
        await _show(query, state)
    except Exception as exc:
        log_handler_exception("draw", query.from_user.id, query.message.chat.id, exc)
        await query.message.answer("Something went wrong. Please try again later.")


@router.callback_query(lambda c: c.data and c.data.startswith("reveal:"))
async def reveal_callback_handler(query: types.CallbackQuery, games: GameRegistry) -> None:
    state = games.get(query.message.chat.id)
    giver_id = parse_id(query.data)
    if state.is_busy or giver_id is None:
        await query.answer()
        return

    try:
        game_flow.select(state, giver_id)
        await _show(query, state)
        await query.answer()
    except (InvalidTransition, KeyError):
        await query.answer("That list is out of date.", show_alert=True)
    except Exception as exc:
        log_handler_exception("reveal", query.from_user.id, query.message.chat.id, exc)
        await query.answer("Something went wrong. Please try again later.", show_alert=True)


@router.callback_query(lambda c: c.data == "hide")
async def hide_callback_handler(query: types.CallbackQuery, games: GameRegistry) -> None:
    state = games.get(query.message.chat.id)
    if state.is_busy:
        await query.answer()
        return

    try:
        game_flow.dismiss(state)
        await _show(query, state)
        await query.answer()
    except InvalidTransition:
        await query.answer()
    except Exception as exc:
        log_handler_exception("hide", query.from_user.id, query.message.chat.id, exc)
        await query.answer("Something went wrong. Please try again later.", show_alert=True)


@router.callback_query(lambda c: c.data == "reset")
async def reset_callback_handler(query: types.CallbackQuery, games: GameRegistry) -> None:
    state = games.get(query.message.chat.id)
    if state.is_busy:
        await query.answer()
        return

    try:
        game_flow.reset(state)
        await _show(query, state)
        games.release(query.message.chat.id)
        await query.answer("Starting over.")
    except InvalidTransition:
        await query.answer()
    except Exception as exc:
        log_handler_exception("reset", query.from_user.id, query.message.chat.id, exc)
        await query.answer("Something went wrong. Please try again later.", show_alert=True)


@router.message(Command("reset"))
async def reset_command_handler(message: types.Message, games: GameRegistry) -> None:
    state = games.get(message.chat.id)
    if state.is_busy:
        return

    try:
        game_flow.reset(state)
    except GenerationInProgress:
        return
    except InvalidTransition:
        game_flow.clear_roster(state)
    except Exception as exc:
        log_handler_exception("reset", message.from_user.id, message.chat.id, exc)
        await message.answer("Something went wrong. Please try again later.")
        return

    text, markup = render(state)
    await message.answer("Starting over.")
    await message.answer(text, reply_markup=markup)
    games.release(message.chat.id)
