from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from sqlalchemy import select

from secret_santa.db.models import Room, RoomAssignment

# (giver_id, giver_name, receiver_id, receiver_name)
PairRow = Tuple[int, str, int, str]


def get_room_by_code(session, code: str) -> Optional[Room]:
    return session.scalar(select(Room).where(Room.code == code))


def room_code_exists(session, code: str) -> bool:
    return get_room_by_code(session, code) is not None


def create_room(session, code: str, title: Optional[str], pairs: Iterable[PairRow]) -> Room:
    room = Room(code=code, title=title)
    room.assignments = [
        RoomAssignment(
            position=position,
            giver_participant_id=giver_id,
            giver_name=giver_name,
            receiver_participant_id=receiver_id,
            receiver_name=receiver_name,
        )
        for position, (giver_id, giver_name, receiver_id, receiver_name) in enumerate(pairs)
    ]
    session.add(room)
    session.flush()
    return room


def list_room_assignments(session, room_id: int) -> List[RoomAssignment]:
    return list(
        session.scalars(
            select(RoomAssignment)
            .where(RoomAssignment.room_id == room_id)
            .order_by(RoomAssignment.position)
        ).all()
    )

