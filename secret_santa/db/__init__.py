from secret_santa.db.models import Base, Room, RoomAssignment
from secret_santa.db.session import SessionLocal, get_session, init_engine

__all__ = [
    "Base",
    "Room",
    "RoomAssignment",
    "SessionLocal",
    "get_session",
    "init_engine",
]
