from __future__ import annotations

import asyncio
import enum
import random
from dataclasses import dataclass, field
from typing import Optional, Tuple

from loguru import logger

from secret_santa.services import rooms, share_link
from secret_santa.services.assignment import Assignment, AssignmentSet, generate_assignments
from secret_santa.services.errors import (
    DecodeError,
    GenerationInProgress,
    InvalidTransition,
    TooFewParticipants,
)
from secret_santa.services.roster import Participant, Roster


class Stage(str, enum.Enum):
    SETUP = "setup"
    GENERATING = "generating"
    LISTING = "listing"
    REVEALED = "revealed"


@dataclass
class GameState:
    """Everything one game owns: the roster, the drawn set and what is on screen."""

    roster: Roster = field(default_factory=Roster)
    stage: Stage = Stage.SETUP
    assignments: Optional[AssignmentSet] = None
    revealed_giver_id: Optional[int] = None

    @property
    def is_busy(self) -> bool:
        return self.stage == Stage.GENERATING


def _require(state: GameState, *stages: Stage) -> None:
    if state.stage in stages:
        return
    if state.stage == Stage.GENERATING:
        raise GenerationInProgress()
    expected = ", ".join(stage.value for stage in stages)
    raise InvalidTransition(f"Cannot do that while {state.stage.value} (expected {expected}).")


def add_participant(state: GameState, name: str) -> Participant:
    _require(state, Stage.SETUP)
    return state.roster.add(name)


def remove_participant(state: GameState, participant_id: int) -> None:
    _require(state, Stage.SETUP)
    state.roster.remove(participant_id)


def clear_roster(state: GameState) -> None:
    _require(state, Stage.SETUP)
    state.roster.clear()


def begin_generation(state: GameState) -> Tuple[Participant, ...]:
    _require(state, Stage.SETUP)
    participants = state.roster.participants
    if len(participants) < 2:
        raise TooFewParticipants(len(participants))
    state.stage = Stage.GENERATING
    return participants


def complete_generation(state: GameState, assignment_set: AssignmentSet) -> None:
    if state.stage != Stage.GENERATING:
        raise InvalidTransition("No draw is in progress.")
    state.assignments = assignment_set
    state.revealed_giver_id = None
    state.stage = Stage.LISTING


async def _run_generation(
    state: GameState,
    participants: Tuple[Participant, ...],
    rng: Optional[random.Random],
    delay: float,
) -> AssignmentSet:
    try:
        if delay:
            await asyncio.sleep(delay)
        assignment_set = generate_assignments(participants, rng=rng)
    except BaseException:
        state.stage = Stage.SETUP
        raise
    complete_generation(state, assignment_set)
    logger.bind(participants=len(assignment_set)).info("Assignments generated")
    return assignment_set


def start_generation(
    state: GameState,
    rng: Optional[random.Random] = None,
    delay: float = 0,
) -> "asyncio.Task[AssignmentSet]":
    """Enter Generating right away and finish the draw in a task.

    Validation happens before the task is created, so a too-short roster raises
    here and leaves the game in Setup. Must be called from a running event loop.
    """
    participants = begin_generation(state)
    return asyncio.ensure_future(_run_generation(state, participants, rng, delay))


async def generate(
    state: GameState,
    rng: Optional[random.Random] = None,
    delay: float = 0,
) -> AssignmentSet:
    return await start_generation(state, rng=rng, delay=delay)


def select(state: GameState, giver_id: int) -> Assignment:
    _require(state, Stage.LISTING)
    if state.assignments is None:
        raise InvalidTransition("Nothing has been drawn yet.")
    assignment = state.assignments.for_giver(giver_id)
    state.revealed_giver_id = giver_id
    state.stage = Stage.REVEALED
    return assignment


def dismiss(state: GameState) -> None:
    _require(state, Stage.REVEALED)
    state.revealed_giver_id = None
    state.stage = Stage.LISTING


def reset(state: GameState) -> None:
    _require(state, Stage.LISTING, Stage.REVEALED)
    _to_setup(state)


def _to_setup(state: GameState) -> None:
    state.roster.clear()
    state.assignments = None
    state.revealed_giver_id = None
    state.stage = Stage.SETUP


def revealed(state: GameState) -> Optional[Assignment]:
    if state.stage != Stage.REVEALED or state.assignments is None:
        return None
    return state.assignments.for_giver(state.revealed_giver_id)


def restore(state: GameState, assignment_set: AssignmentSet) -> None:
    _require(state, Stage.SETUP)
    state.roster.clear()
    state.assignments = assignment_set
    state.revealed_giver_id = None
    state.stage = Stage.LISTING


def open_share_link(state: GameState, token: str) -> AssignmentSet:
    _require(state, Stage.SETUP, Stage.LISTING, Stage.REVEALED)
    try:
        assignment_set = share_link.decode(token)
    except DecodeError as exc:
        logger.bind(reason=exc.reason).warning("Rejected share link")
        _to_setup(state)
        raise
    _to_setup(state)
    restore(state, assignment_set)
    return assignment_set


def open_room(state: GameState, session, code: str) -> AssignmentSet:
    _require(state, Stage.SETUP, Stage.LISTING, Stage.REVEALED)
    assignment_set = rooms.load_room(session, code)
    _to_setup(state)
    restore(state, assignment_set)
    return assignment_set
