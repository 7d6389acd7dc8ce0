import asyncio
import random

import pytest

from secret_santa.services.assignment import generate_assignments
from secret_santa.services.errors import DeliveryError
from secret_santa.services.notify import (
    LogNotifier,
    format_assignment_message,
    looks_like_email,
    notify_all,
    notify_assignment,
)

from conftest import make_participants


class ExplodingNotifier:
    async def send(self, destination, giver_name, receiver_name):
        raise ConnectionError("smtp down")


@pytest.fixture
def drawn():
    return generate_assignments(make_participants("Alice", "Bob", "Carol"), rng=random.Random(6))


@pytest.mark.parametrize(
    "address,expected",
    [
        ("alice@example.com", True),
        (" bob@mail.example.org ", True),
        ("alice", False),
        ("alice@localhost", False),
        ("@example.com", False),
        ("a b@example.com", False),
        ("", False),
    ],
)
def test_looks_like_email(address, expected):
    assert looks_like_email(address) is expected


def test_message_escapes_names():
    text = format_assignment_message("<Alice>", "Bob & Co")
    assert "&lt;Alice&gt;" in text
    assert "Bob &amp; Co" in text


def test_notify_assignment_delivers(drawn):
    notifier = LogNotifier()
    assignment = next(iter(drawn))
    asyncio.run(notify_assignment(notifier, "alice@example.com", assignment))
    destination, text = notifier.outbox[0]
    assert destination == "alice@example.com"
    assert assignment.receiver.name in text


def test_notify_assignment_failure_raises(drawn):
    assignment = next(iter(drawn))
    with pytest.raises(DeliveryError):
        asyncio.run(notify_assignment(LogNotifier(), "not-an-address", assignment))
    with pytest.raises(DeliveryError):
        asyncio.run(notify_assignment(ExplodingNotifier(), "alice@example.com", assignment))


def test_notify_all_reports_failures(drawn):
    notifier = LogNotifier()
    addresses = {"Alice": "alice@example.com", "Bob": "broken", "Nobody": "x@example.com"}
    failed = asyncio.run(notify_all(notifier, drawn, addresses))
    assert failed == ["Bob"]
    assert [destination for destination, _ in notifier.outbox] == ["alice@example.com"]
