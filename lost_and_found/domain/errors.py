"""Domain error taxonomy for the lost and found core."""

from typing import Any, Optional


class LostAndFoundError(Exception):
    """Base class for all lost and found domain errors."""


class NotFoundError(LostAndFoundError):
    """A referenced entity does not exist in the store.

    Raised by the service layer before the core is invoked, so the core
    never proceeds with absent data.
    """

    def __init__(self, entity: str, entity_id: Any, message: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message or f"{entity} not found")


class InvalidArgumentError(LostAndFoundError, ValueError):
    """The core received an absent entity where a resolved one was contracted.

    This is a programming-contract violation, not a user-facing condition.
    """
