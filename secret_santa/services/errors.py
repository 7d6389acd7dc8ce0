from __future__ import annotations


class SecretSantaError(RuntimeError):
    pass


class ValidationError(SecretSantaError):
    pass


class EmptyNameError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Name cannot be empty.")


class DuplicateNameError(ValidationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is already on the list.")
        self.name = name


class TooFewParticipants(ValidationError):
    def __init__(self, count: int) -> None:
        super().__init__("At least 2 participants are required.")
        self.count = count


class DecodeError(SecretSantaError):
    def __init__(self, reason: str) -> None:
        super().__init__("This share link is broken.")
        self.reason = reason


class DeliveryError(SecretSantaError):
    pass


class RoomNotFound(SecretSantaError):
    def __init__(self, code: str) -> None:
        super().__init__("No Secret Santa room found for this code.")
        self.code = code


class InvalidTransition(SecretSantaError):
    pass


class GenerationInProgress(InvalidTransition):
    def __init__(self) -> None:
        super().__init__("The draw is still in progress.")
