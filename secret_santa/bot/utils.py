from __future__ import annotations

from typing import Dict, Optional

from loguru import logger

from secret_santa.services.game_flow import GameState, Stage


class GameRegistry:
    """One game per private chat."""

    def __init__(self) -> None:
        self._games: Dict[int, GameState] = {}

    def get(self, chat_id: int) -> GameState:
        state = self._games.get(chat_id)
        if state is None:
            state = self._games[chat_id] = GameState()
        return state

    def release(self, chat_id: int) -> None:
        """Forget a chat whose game is back to an empty setup."""
        state = self._games.get(chat_id)
        if state is not None and state.stage == Stage.SETUP and not len(state.roster):
            del self._games[chat_id]

    def __len__(self) -> int:
        return len(self._games)


def parse_id(data: Optional[str]) -> Optional[int]:
    _, _, raw = (data or "").partition(":")
    try:
        return int(raw)
    except ValueError:
        return None


def log_handler_exception(action: str, user_id: int | None, chat_id: int | None, error: Exception) -> None:
    logger.bind(action=action, user_id=user_id, chat_id=chat_id).exception(
        "Handler error: {error}", error=str(error)
    )
