import pytest

from secret_santa.services.errors import DuplicateNameError, EmptyNameError
from secret_santa.services.roster import Roster


def test_add_trims_and_assigns_increasing_ids():
    roster = Roster()
    alice = roster.add("  Alice ")
    bob = roster.add("Bob")
    assert alice.name == "Alice"
    assert bob.id > alice.id
    assert [p.name for p in roster] == ["Alice", "Bob"]


def test_duplicate_name_rejected_and_roster_unchanged():
    roster = Roster()
    roster.add("Alice")
    before = roster.participants
    with pytest.raises(DuplicateNameError):
        roster.add("Alice")
    with pytest.raises(DuplicateNameError):
        roster.add(" Alice ")
    assert roster.participants == before


def test_names_are_case_sensitive():
    roster = Roster()
    roster.add("Alice")
    roster.add("alice")
    assert len(roster) == 2


@pytest.mark.parametrize("name", ["", "   ", None])
def test_empty_name_rejected(name):
    roster = Roster()
    with pytest.raises(EmptyNameError):
        roster.add(name)
    assert len(roster) == 0


def test_remove_is_silent_for_unknown_id():
    roster = Roster()
    alice = roster.add("Alice")
    roster.remove(12345)
    assert roster.participants == (alice,)
    roster.remove(alice.id)
    assert len(roster) == 0


def test_ids_are_not_reused_after_removal():
    roster = Roster()
    first = roster.add("Alice")
    roster.remove(first.id)
    second = roster.add("Alice")
    assert second.id != first.id
