import random

import pytest

from secret_santa.services.assignment import (
    Assignment,
    AssignmentSet,
    generate_assignments,
    make_rng,
)
from secret_santa.services.errors import TooFewParticipants, ValidationError
from secret_santa.services.roster import Participant

from conftest import follow_cycle, make_participants


def test_assignment_basic_bijection():
    participants = make_participants("Alice", "Bob", "Carol", "Dave")
    assignments = generate_assignments(participants, rng=random.Random(42))
    assert len(assignments) == 4
    assert {a.giver.id for a in assignments} == {p.id for p in participants}
    assert {a.receiver.id for a in assignments} == {p.id for p in participants}
    assert all(a.giver.id != a.receiver.id for a in assignments)


@pytest.mark.parametrize("size", [2, 3, 5, 8, 13, 50])
def test_assignment_is_single_cycle(size):
    participants = make_participants(*[f"P{i:02d}" for i in range(size)])
    for seed in range(20):
        assignments = generate_assignments(participants, rng=random.Random(seed))
        visited = follow_cycle(assignments)
        assert sorted(visited) == sorted(p.id for p in participants)


def test_assignment_two_people():
    alice, bob = make_participants("Alice", "Bob")
    assignments = generate_assignments([alice, bob], rng=random.Random(1))
    assert assignments.for_giver(alice.id).receiver == bob
    assert assignments.for_giver(bob.id).receiver == alice


def test_assignment_deterministic_seed():
    participants = make_participants("A", "B", "C", "D", "E")
    first = generate_assignments(participants, rng=random.Random(123))
    second = generate_assignments(participants, rng=random.Random(123))
    assert first == second


def test_assignment_sorted_by_giver_name():
    participants = make_participants("Dave", "Alice", "Carol", "Bob")
    assignments = generate_assignments(participants, rng=random.Random(3))
    assert [a.giver.name for a in assignments] == ["Alice", "Bob", "Carol", "Dave"]


def test_assignment_does_not_touch_input():
    participants = make_participants("Alice", "Bob", "Carol")
    snapshot = list(participants)
    generate_assignments(participants, rng=random.Random(5))
    assert participants == snapshot


@pytest.mark.parametrize("size", [0, 1])
def test_assignment_fails_for_too_few_participants(size):
    with pytest.raises(TooFewParticipants):
        generate_assignments(make_participants(*["Solo"] * size))


def test_assignment_rejects_duplicate_ids():
    twins = [Participant(id=1, name="A"), Participant(id=1, name="B")]
    with pytest.raises(ValidationError):
        generate_assignments(twins)


def test_every_cycle_shape_is_reachable():
    participants = make_participants("A", "B", "C", "D")
    rng = random.Random(2024)
    seen = set()
    for _ in range(500):
        assignments = generate_assignments(participants, rng=rng)
        seen.add(tuple(a.receiver.id for a in assignments))
    # (n - 1)! distinct single cycles exist for n = 4
    assert len(seen) == 6


def test_from_assignments_rejects_two_cycles():
    a, b, c, d = make_participants("A", "B", "C", "D")
    split = [
        Assignment(giver=a, receiver=b),
        Assignment(giver=b, receiver=a),
        Assignment(giver=c, receiver=d),
        Assignment(giver=d, receiver=c),
    ]
    with pytest.raises(ValidationError):
        AssignmentSet.from_assignments(split)


def test_from_assignments_rejects_self_gift():
    a, b = make_participants("A", "B")
    with pytest.raises(ValidationError):
        AssignmentSet.from_assignments([Assignment(a, a), Assignment(b, b)])


def test_for_giver_unknown_raises_key_error():
    assignments = generate_assignments(make_participants("A", "B"), rng=random.Random(0))
    with pytest.raises(KeyError):
        assignments.for_giver(99)


def test_make_rng_policies():
    assert isinstance(make_rng("secure"), random.SystemRandom)
    seeded = make_rng("system", seed=7)
    assert type(seeded) is random.Random
    assert seeded.random() == random.Random(7).random()


def test_make_rng_rejects_bad_input():
    with pytest.raises(ValueError):
        make_rng("dice")
    with pytest.raises(ValueError):
        make_rng("secure", seed=1)


def test_giver_order_ignores_case_and_accents():
    emile, bob, carol = make_participants("Émile", "bob", "Carol")
    cycle = [
        Assignment(giver=emile, receiver=bob),
        Assignment(giver=bob, receiver=carol),
        Assignment(giver=carol, receiver=emile),
    ]
    ordered = AssignmentSet.from_assignments(cycle)
    assert [a.giver.name for a in ordered] == ["bob", "Carol", "Émile"]
