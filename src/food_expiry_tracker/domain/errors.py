"""Domain errors mapped to HTTP responses by the API layer."""


class FoodTrackerError(Exception):
    """Base error carrying a user-facing message and an HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FoodTrackerError):
    """A required field is missing or malformed."""

    status_code = 400


class Unauthenticated(FoodTrackerError):
    """No session token, or the token failed verification."""

    status_code = 401


class Forbidden(FoodTrackerError):
    """The caller is authenticated but not allowed to perform the action."""

    status_code = 403


class NotFound(FoodTrackerError):
    """No record matches the given identifier."""

    status_code = 404


class StoreError(FoodTrackerError):
    """The persistence layer failed; the message is generic."""

    status_code = 500


class ServerConfigError(FoodTrackerError):
    """A required server setting is missing."""

    status_code = 500
