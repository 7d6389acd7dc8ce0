import html

from aiogram import Router, types
from aiogram.filters import Command

from secret_santa.bot.screens import render
from secret_santa.bot.utils import GameRegistry, log_handler_exception
from secret_santa.db import get_session
from secret_santa.services import game_flow, rooms, share_link
from secret_santa.services.errors import DecodeError, RoomNotFound
from secret_santa.services.game_flow import Stage
from secret_santa.services.notify import LogNotifier, notify_all

router = Router()

NOTHING_DRAWN = "Nothing has been drawn yet. Add names and start the draw first."


def _drawn(state: game_flow.GameState) -> bool:
    return state.stage in {Stage.LISTING, Stage.REVEALED} and state.assignments is not None


def _argument(message: types.Message) -> str:
    parts = (message.text or "").split(maxsplit=1)
    return parts[1].strip() if len(parts) > 1 else ""


@router.message(Command("share"))
async def share_command_handler(message: types.Message, games: GameRegistry) -> None:
    state = games.get(message.chat.id)
    if state.is_busy:
        return
    if not _drawn(state):
        await message.answer(NOTHING_DRAWN)
        return

    try:
        token = share_link.encode(state.assignments)
        await message.answer(
            "Share this code. Whoever sends <code>/open CODE</code> to me gets the same draw:\n\n"
            f"<code>{token}</code>"
        )
    except Exception as exc:
        log_handler_exception("share", message.from_user.id, message.chat.id, exc)
        await message.answer("Something went wrong. Please try again later.")


@router.message(Command("open"))
async def open_command_handler(message: types.Message, games: GameRegistry) -> None:
    state = games.get(message.chat.id)
    if state.is_busy:
        return
    token = _argument(message)
    if not token:
        await message.answer("Usage: /open CODE")
        return

    try:
        game_flow.open_share_link(state, token)
    except DecodeError as exc:
        await message.answer(f"{exc} Starting a new draw instead.")
    except Exception as exc:
        log_handler_exception("open", message.from_user.id, message.chat.id, exc)
        await message.answer("Something went wrong. Please try again later.")
        return

    text, markup = render(state)
    await message.answer(text, reply_markup=markup)


@router.message(Command("save"))
async def save_command_handler(message: types.Message, games: GameRegistry) -> None:
    state = games.get(message.chat.id)
    if state.is_busy:
        return
    if not _drawn(state):
        await message.answer(NOTHING_DRAWN)
        return

    try:
        with get_session() as session:
            code = rooms.save_room(session, state.assignments, title=_argument(message) or None)
        await message.answer(f"Room saved. Load it again with <code>/room {code}</code>")
    except Exception as exc:
        log_handler_exception("save", message.from_user.id, message.chat.id, exc)
        await message.answer("Something went wrong. Please try again later.")


@router.message(Command("room"))
async def room_command_handler(message: types.Message, games: GameRegistry) -> None:
    state = games.get(message.chat.id)
    if state.is_busy:
        return
    code = _argument(message)
    if not code:
        await message.answer("Usage: /room CODE")
        return

    try:
        with get_session() as session:
            game_flow.open_room(state, session, code)
    except RoomNotFound as exc:
        await message.answer(str(exc))
        return
    except Exception as exc:
        log_handler_exception("room", message.from_user.id, message.chat.id, exc)
        await message.answer("Something went wrong. Please try again later.")
        return

    text, markup = render(state)
    await message.answer(text, reply_markup=markup)


def parse_addresses(raw: str) -> dict[str, str]:
    addresses = {}
    for item in raw.split():
        name, sep, address = item.partition("=")
        if sep and name and address:
            addresses[name] = address
    return addresses


@router.message(Command("notify"))
async def notify_command_handler(message: types.Message, games: GameRegistry) -> None:
    state = games.get(message.chat.id)
    if state.is_busy:
        return
    if not _drawn(state):
        await message.answer(NOTHING_DRAWN)
        return

    addresses = parse_addresses(_argument(message))
    if not addresses:
        await message.answer("Usage: /notify Alice=alice@example.com Bob=bob@example.com")
        return

    try:
        failed = await notify_all(LogNotifier(), state.assignments, addresses)
    except Exception as exc:
        log_handler_exception("notify", message.from_user.id, message.chat.id, exc)
        await message.answer("Something went wrong. Please try again later.")
        return

    known = {giver.name for giver in state.assignments.participants()}
    unknown = sorted(name for name in addresses if name not in known)
    lines = [f"Sent {len(addresses) - len(unknown) - len(failed)} e-mail(s)."]
    if failed:
        lines.append("Could not reach: " + ", ".join(map(html.escape, failed)) + ". Fix the address and send /notify again.")
    if unknown:
        lines.append("Not in this draw: " + ", ".join(map(html.escape, unknown)))
    await message.answer("\n".join(lines))
