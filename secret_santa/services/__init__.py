from secret_santa.services.assignment import Assignment, AssignmentSet, generate_assignments
from secret_santa.services.errors import (
    DecodeError,
    DeliveryError,
    DuplicateNameError,
    GenerationInProgress,
    InvalidTransition,
    RoomNotFound,
    SecretSantaError,
    TooFewParticipants,
    ValidationError,
)
from secret_santa.services.roster import Participant, Roster

__all__ = [
    "Assignment",
    "AssignmentSet",
    "generate_assignments",
    "DecodeError",
    "DeliveryError",
    "DuplicateNameError",
    "GenerationInProgress",
    "InvalidTransition",
    "RoomNotFound",
    "SecretSantaError",
    "TooFewParticipants",
    "ValidationError",
    "Participant",
    "Roster",
]
