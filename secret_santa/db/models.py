from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Room(Base):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True)
    code = Column(String, unique=True, nullable=False, index=True)
    title = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    assignments = relationship(
        "RoomAssignment",
        back_populates="room",
        cascade="all, delete-orphan",
        order_by="RoomAssignment.position",
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, code={self.code}, title={self.title})>"


class RoomAssignment(Base):
    __tablename__ = "room_assignments"

    id = Column(Integer, primary_key=True)
    room_id = Column(Integer, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    giver_participant_id = Column(Integer, nullable=False)
    giver_name = Column(String, nullable=False)
    receiver_participant_id = Column(Integer, nullable=False)
    receiver_name = Column(String, nullable=False)

    room = relationship("Room", back_populates="assignments")

    __table_args__ = (
        UniqueConstraint("room_id", "giver_participant_id", name="uq_room_assignments_room_giver"),
    )
