from __future__ import annotations

import locale
import random
import unicodedata
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from secret_santa.services.errors import TooFewParticipants, ValidationError
from secret_santa.services.roster import Participant

RANDOM_SOURCE_SYSTEM = "system"
RANDOM_SOURCE_SECURE = "secure"
RANDOM_SOURCES = (RANDOM_SOURCE_SYSTEM, RANDOM_SOURCE_SECURE)


@dataclass(frozen=True)
class Assignment:
    giver: Participant
    receiver: Participant


def _display_key(assignment: Assignment) -> Tuple[str, str, int]:
    # Folded first so case and accents do not split the list under the C locale.
    name = assignment.giver.name
    folded = unicodedata.normalize("NFKD", name).casefold()
    return locale.strxfrm(folded), name, assignment.giver.id


def validate_cycle(assignments: Sequence[Assignment]) -> None:
    """Raise ValidationError unless the assignments form one cycle over everybody."""
    if len(assignments) < 2:
        raise TooFewParticipants(len(assignments))

    receivers = {}
    for assignment in assignments:
        giver_id = assignment.giver.id
        if giver_id == assignment.receiver.id:
            raise ValidationError(f"{assignment.giver.name} cannot gift themselves.")
        if giver_id in receivers:
            raise ValidationError(f"{assignment.giver.name} appears twice as a giver.")
        receivers[giver_id] = assignment.receiver.id

    if set(receivers.values()) != set(receivers):
        raise ValidationError("Givers and receivers do not match.")

    start = assignments[0].giver.id
    visited = 1
    current = receivers[start]
    while current != start:
        visited += 1
        current = receivers[current]
    if visited != len(receivers):
        raise ValidationError("Assignments do not form a single cycle.")


@dataclass(frozen=True)
class AssignmentSet:
    assignments: Tuple[Assignment, ...]

    @classmethod
    def from_assignments(cls, assignments: Iterable[Assignment]) -> "AssignmentSet":
        items = list(assignments)
        validate_cycle(items)
        return cls(assignments=tuple(sorted(items, key=_display_key)))

    def for_giver(self, giver_id: int) -> Assignment:
        for assignment in self.assignments:
            if assignment.giver.id == giver_id:
                return assignment
        raise KeyError(giver_id)

    def participants(self) -> Tuple[Participant, ...]:
        return tuple(assignment.giver for assignment in self.assignments)

    def as_pairs(self) -> List[Tuple[str, str]]:
        return [(a.giver.name, a.receiver.name) for a in self.assignments]

    def __len__(self) -> int:
        return len(self.assignments)

    def __iter__(self) -> Iterator[Assignment]:
        return iter(self.assignments)


def make_rng(policy: str = RANDOM_SOURCE_SECURE, seed: Optional[int] = None) -> random.Random:
    if policy == RANDOM_SOURCE_SYSTEM:
        return random.Random(seed)
    if policy == RANDOM_SOURCE_SECURE:
        if seed is not None:
            raise ValueError("A seed cannot be used with the secure random source.")
        return random.SystemRandom()
    raise ValueError(f"Unknown random source: {policy!r}")


def generate_assignments(
    participants: Sequence[Participant],
    rng: Optional[random.Random] = None,
) -> AssignmentSet:
    if len(participants) < 2:
        raise TooFewParticipants(len(participants))
    if len({participant.id for participant in participants}) != len(participants):
        raise ValidationError("Participant ids must be unique.")

    rng = rng or make_rng()
    shuffled = list(participants)
    # Fisher-Yates: j drawn uniformly from [0, i] for i from the last index down.
    rng.shuffle(shuffled)

    size = len(shuffled)
    cycle = [
        Assignment(giver=shuffled[index], receiver=shuffled[(index + 1) % size])
        for index in range(size)
    ]
    return AssignmentSet.from_assignments(cycle)
