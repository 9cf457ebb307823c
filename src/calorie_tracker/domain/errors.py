"""Domain error hierarchy.

Services raise these; the HTTP layer maps each class to a status code in
one place (see ``calorie_tracker.api.app``).
"""


class CalorieTrackerError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidFoodDataError(CalorieTrackerError):
    """A referenced food has no usable nutrition profile."""


class MissingProfileDataError(CalorieTrackerError):
    """The user's biometric profile lacks data an operation needs."""


class NotFoundError(CalorieTrackerError):
    """A requested entity does not exist."""

    def __init__(self, entity: str, entity_id: object | None = None) -> None:
        detail = f"{entity} not found"
        if entity_id is not None:
            detail = f"{entity} {entity_id} not found"
        super().__init__(detail)
        self.entity = entity


class AccessDeniedError(CalorieTrackerError):
    """The caller may not read or change the entity."""


class ConflictError(CalorieTrackerError):
    """A unique value (email, barcode) is already taken."""


class InvalidRequestError(CalorieTrackerError):
    """The request is well-formed but cannot be applied."""


class AuthenticationError(CalorieTrackerError):
    """Credentials or token could not be verified."""
