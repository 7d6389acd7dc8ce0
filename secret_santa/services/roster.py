from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from secret_santa.services.errors import DuplicateNameError, EmptyNameError


@dataclass(frozen=True)
class Participant:
    id: int
    name: str


@dataclass
class Roster:
    """Participants collected during setup, in insertion order."""

    _participants: List[Participant] = field(default_factory=list)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)

    def add(self, name: str) -> Participant:
        cleaned = (name or "").strip()
        if not cleaned:
            raise EmptyNameError()
        if self.find_by_name(cleaned) is not None:
            raise DuplicateNameError(cleaned)
        participant = Participant(id=next(self._ids), name=cleaned)
        self._participants.append(participant)
        return participant

    def remove(self, participant_id: int) -> None:
        self._participants = [p for p in self._participants if p.id != participant_id]

    def clear(self) -> None:
        self._participants.clear()

    def find_by_name(self, name: str) -> Optional[Participant]:
        for participant in self._participants:
            if participant.name == name:
                return participant
        return None

    @property
    def participants(self) -> Tuple[Participant, ...]:
        return tuple(self._participants)

    def __len__(self) -> int:
        return len(self._participants)

    def __iter__(self) -> Iterator[Participant]:
        return iter(tuple(self._participants))
