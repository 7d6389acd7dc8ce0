from __future__ import annotations

import html
from typing import Optional, Tuple

from aiogram.types import InlineKeyboardMarkup

from secret_santa.bot.keyboards import listing_keyboard, revealed_keyboard, setup_keyboard
from secret_santa.services import game_flow
from secret_santa.services.game_flow import GameState, Stage


def _setup_text(state: GameState) -> str:
    participants = state.roster.participants
    if not participants:
        return (
            "Nobody has joined yet.\n\n"
            "Send me a name to add a participant. You need at least 2 to start the draw."
        )
    lines = [f"• {html.escape(p.name)}" for p in participants]
    return f"Participants ({len(participants)}):\n" + "\n".join(lines)


def _listing_text() -> str:
    return (
        "<b>No-spoiler mode:</b> find your name and tap it to see who you are gifting. "
        "Tap Hide when you have remembered it, then pass the phone on."
    )


def _revealed_text(state: GameState) -> str:
    assignment = game_flow.revealed(state)
    return (
        f"{html.escape(assignment.giver.name)}, your secret gift goes to\n\n"
        f"🎁 <b>{html.escape(assignment.receiver.name)}</b>\n\n"
        "Shh! Don't tell anyone."
    )


def render(state: GameState) -> Tuple[str, Optional[InlineKeyboardMarkup]]:
    if state.stage == Stage.SETUP:
        return _setup_text(state), setup_keyboard(state.roster.participants)
    if state.stage == Stage.GENERATING:
        return "Santa is checking the list...", None
    if state.stage == Stage.LISTING:
        return _listing_text(), listing_keyboard(state.assignments)
    return _revealed_text(state), revealed_keyboard()
