from __future__ import annotations

import html
from typing import List, Mapping, Protocol, Tuple

from loguru import logger

from secret_santa.services.assignment import Assignment, AssignmentSet
from secret_santa.services.errors import DeliveryError


class Notifier(Protocol):
    async def send(self, destination: str, giver_name: str, receiver_name: str) -> bool:
        ...


def looks_like_email(address: str) -> bool:
    local, sep, domain = (address or "").strip().partition("@")
    return bool(local and sep and "." in domain.strip(".") and " " not in address.strip())


def format_assignment_message(giver_name: str, receiver_name: str) -> str:
    return (
        f"Hi {html.escape(giver_name)}!\n\n"
        f"Secret Santa: You're giving a gift to {html.escape(receiver_name)}!\n"
        "Shh, don't tell anyone."
    )


class LogNotifier:
    """Pretends to send e-mail: writes the delivery to the log instead."""

    def __init__(self) -> None:
        self.outbox: List[Tuple[str, str]] = []

    async def send(self, destination: str, giver_name: str, receiver_name: str) -> bool:
        if not looks_like_email(destination):
            logger.bind(destination=destination).warning("Refusing to mail an invalid address")
            return False
        self.outbox.append((destination.strip(), format_assignment_message(giver_name, receiver_name)))
        logger.bind(destination=destination.strip()).info("Assignment e-mail delivered (simulated)")
        return True


async def notify_assignment(notifier: Notifier, destination: str, assignment: Assignment) -> None:
    try:
        delivered = await notifier.send(destination, assignment.giver.name, assignment.receiver.name)
    except Exception as exc:
        raise DeliveryError(f"Could not notify {assignment.giver.name}.") from exc
    if not delivered:
        raise DeliveryError(f"Could not notify {assignment.giver.name}.")


async def notify_all(
    notifier: Notifier,
    assignment_set: AssignmentSet,
    addresses: Mapping[str, str],
) -> List[str]:
    """Send every giver with a known address their receiver; return who failed."""
    failed: List[str] = []
    for assignment in assignment_set:
        destination = addresses.get(assignment.giver.name)
        if destination is None:
            continue
        try:
            await notify_assignment(notifier, destination, assignment)
        except DeliveryError as exc:
            logger.bind(giver=assignment.giver.name).warning("Delivery failed: {error}", error=str(exc))
            failed.append(assignment.giver.name)
    return failed
