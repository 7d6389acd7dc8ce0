"""Pack a drawn set into a token that can travel inside a link.

Token layout before base64: 8 bytes of the payload's sha256, then the
zlib-compressed JSON payload. Base64 padding is stripped so the token can be
pasted into a URL as-is.
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import json
import zlib

from secret_santa.services.assignment import Assignment, AssignmentSet
from secret_santa.services.errors import DecodeError, ValidationError
from secret_santa.services.roster import Participant

PAYLOAD_VERSION = 1
CHECKSUM_SIZE = 8
MAX_PAYLOAD_SIZE = 256 * 1024


def _checksum(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()[:CHECKSUM_SIZE]


def encode(assignment_set: AssignmentSet) -> str:
    payload = {
        "v": PAYLOAD_VERSION,
        "pairs": [
            [a.giver.id, a.giver.name, a.receiver.id, a.receiver.name]
            for a in assignment_set
        ],
    }
    data = zlib.compress(
        json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    )
    token = base64.urlsafe_b64encode(_checksum(data) + data).decode("ascii")
    return token.rstrip("=")


def _unpack(token: str) -> bytes:
    token = (token or "").strip()
    if not token:
        raise DecodeError("empty token")
    try:
        raw = base64.urlsafe_b64decode(token + "=" * (-len(token) % 4))
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("invalid base64") from exc
    if len(raw) <= CHECKSUM_SIZE:
        raise DecodeError("token too short")
    checksum, data = raw[:CHECKSUM_SIZE], raw[CHECKSUM_SIZE:]
    if checksum != _checksum(data):
        raise DecodeError("checksum mismatch")
    decompressor = zlib.decompressobj()
    try:
        payload = decompressor.decompress(data, MAX_PAYLOAD_SIZE)
    except zlib.error as exc:
        raise DecodeError("invalid compression") from exc
    if decompressor.unconsumed_tail:
        raise DecodeError("payload too large")
    if not decompressor.eof:
        raise DecodeError("invalid compression")
    return payload


def _participant(participant_id, name) -> Participant:
    if not isinstance(participant_id, int) or isinstance(participant_id, bool):
        raise DecodeError("participant id is not an integer")
    if not isinstance(name, str) or not name.strip():
        raise DecodeError("participant name is empty")
    return Participant(id=participant_id, name=name)


def decode(token: str) -> AssignmentSet:
    data = _unpack(token)
    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise DecodeError("invalid payload") from exc

    if not isinstance(payload, dict) or payload.get("v") != PAYLOAD_VERSION:
        raise DecodeError("unsupported payload version")
    pairs = payload.get("pairs")
    if not isinstance(pairs, list):
        raise DecodeError("missing pairs")

    assignments = []
    names = {}
    for pair in pairs:
        if not isinstance(pair, list) or len(pair) != 4:
            raise DecodeError("malformed pair")
        giver = _participant(pair[0], pair[1])
        receiver = _participant(pair[2], pair[3])
        for participant in (giver, receiver):
            if names.setdefault(participant.id, participant.name) != participant.name:
                raise DecodeError("participant id used for two names")
        assignments.append(Assignment(giver=giver, receiver=receiver))

    try:
        return AssignmentSet.from_assignments(assignments)
    except ValidationError as exc:
        raise DecodeError(str(exc)) from exc
