from __future__ import annotations

import secrets
from typing import Optional

from loguru import logger

from secret_santa.db import repo
from secret_santa.services.assignment import Assignment, AssignmentSet
from secret_santa.services.errors import RoomNotFound, ValidationError
from secret_santa.services.roster import Participant

ROOM_CODE_BYTES = 6
MAX_CODE_ATTEMPTS = 5


def _new_code(session) -> str:
    for _ in range(MAX_CODE_ATTEMPTS):
        code = secrets.token_urlsafe(ROOM_CODE_BYTES)
        if not repo.room_code_exists(session, code):
            return code
    raise RuntimeError("Could not allocate a unique room code.")


def save_room(session, assignment_set: AssignmentSet, title: Optional[str] = None) -> str:
    code = _new_code(session)
    pairs = [
        (a.giver.id, a.giver.name, a.receiver.id, a.receiver.name)
        for a in assignment_set
    ]
    repo.create_room(session, code, title, pairs)
    logger.bind(room=code, participants=len(pairs)).info("Room saved")
    return code


def load_room(session, code: str) -> AssignmentSet:
    room = repo.get_room_by_code(session, (code or "").strip())
    if not room:
        raise RoomNotFound(code)

    rows = repo.list_room_assignments(session, room.id)
    assignments = [
        Assignment(
            giver=Participant(id=row.giver_participant_id, name=row.giver_name),
            receiver=Participant(id=row.receiver_participant_id, name=row.receiver_name),
        )
        for row in rows
    ]
    try:
        return AssignmentSet.from_assignments(assignments)
    except ValidationError as exc:
        logger.bind(room=code).error("Stored room is inconsistent: {error}", error=str(exc))
        raise RoomNotFound(code) from exc
