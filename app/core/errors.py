"""Domain errors raised by the game services and mapped to JSON at the HTTP boundary."""


class GameError(Exception):
    kind = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class ValidationError(GameError):
    """Missing or malformed input."""

    kind = "validation_error"
    status_code = 400


class AuthorizationError(GameError):
    """No usable identity where one is required."""

    kind = "unauthorized"
    status_code = 401


class NotFoundError(GameError):
    """Session or passage does not exist, is not open, or is not visible to the caller."""

    kind = "not_found"
    status_code = 404


class AlreadyAnsweredError(GameError):
    kind = "already_answered"
    status_code = 409


class StoreError(GameError):
    """Database failure after retries (or a non-retryable one)."""

    kind = "store_error"
    status_code = 500
