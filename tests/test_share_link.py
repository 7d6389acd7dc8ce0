import base64
import json
import random
import zlib

import pytest

from secret_santa.services import share_link
from secret_santa.services.assignment import generate_assignments
from secret_santa.services.errors import DecodeError

from conftest import make_participants


@pytest.fixture
def drawn():
    return generate_assignments(make_participants("Alice", "Bob", "Carol"), rng=random.Random(8))


def _forge(payload) -> str:
    data = zlib.compress(json.dumps(payload).encode("utf-8"))
    return base64.urlsafe_b64encode(share_link._checksum(data) + data).decode("ascii").rstrip("=")


def test_round_trip(drawn):
    token = share_link.encode(drawn)
    decoded = share_link.decode(token)
    assert decoded == drawn
    assert sorted(decoded.as_pairs()) == sorted(drawn.as_pairs())


def test_token_is_url_safe(drawn):
    token = share_link.encode(drawn)
    assert "=" not in token
    assert all(ch.isalnum() or ch in "-_" for ch in token)


def test_round_trip_keeps_unicode_names():
    drawn = generate_assignments(make_participants("Zoë", "李雷", "Ana María"), rng=random.Random(2))
    assert share_link.decode(share_link.encode(drawn)) == drawn


@pytest.mark.parametrize("token", ["", "   ", "%%%%", "abc", "not-a-real-link"])
def test_garbage_is_rejected(token):
    with pytest.raises(DecodeError):
        share_link.decode(token)


def test_truncated_token_is_rejected(drawn):
    token = share_link.encode(drawn)
    with pytest.raises(DecodeError):
        share_link.decode(token[:-6])


def test_flipped_character_is_rejected(drawn):
    token = share_link.encode(drawn)
    middle = len(token) // 2
    flipped = "A" if token[middle] != "A" else "B"
    with pytest.raises(DecodeError):
        share_link.decode(token[:middle] + flipped + token[middle + 1:])


def test_wrong_version_is_rejected():
    with pytest.raises(DecodeError):
        share_link.decode(_forge({"v": 99, "pairs": []}))


def test_self_gift_payload_is_rejected():
    pairs = [[1, "Alice", 1, "Alice"], [2, "Bob", 2, "Bob"]]
    with pytest.raises(DecodeError):
        share_link.decode(_forge({"v": 1, "pairs": pairs}))


def test_split_cycle_payload_is_rejected():
    pairs = [
        [1, "A", 2, "B"],
        [2, "B", 1, "A"],
        [3, "C", 4, "D"],
        [4, "D", 3, "C"],
    ]
    with pytest.raises(DecodeError):
        share_link.decode(_forge({"v": 1, "pairs": pairs}))


def test_inconsistent_names_are_rejected():
    pairs = [[1, "Alice", 2, "Bob"], [2, "Robert", 1, "Alice"]]
    with pytest.raises(DecodeError):
        share_link.decode(_forge({"v": 1, "pairs": pairs}))


def test_error_message_is_user_facing():
    with pytest.raises(DecodeError) as excinfo:
        share_link.decode("abc")
    assert str(excinfo.value) == "This share link is broken."


def test_oversized_payload_is_rejected():
    data = zlib.compress(b" " * (share_link.MAX_PAYLOAD_SIZE * 4))
    token = base64.urlsafe_b64encode(share_link._checksum(data) + data).decode("ascii")
    with pytest.raises(DecodeError) as excinfo:
        share_link.decode(token)
    assert excinfo.value.reason == "payload too large"
