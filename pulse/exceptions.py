"""Domain errors raised by the Pulse services."""

from typing import Optional

from litestar.status_codes import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND


class PulseError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        body = {"status_code": self.status_code, "detail": self.message}
        if self.field:
            body["extra"] = [{"key": self.field, "message": self.message}]
        return body


class ValidationError(PulseError):
    """Malformed or missing input field."""


class NotFoundError(PulseError):
    """Referenced attendee does not exist."""

    status_code = HTTP_404_NOT_FOUND


class ConflictError(PulseError):
    """Uniqueness violation or duplicate feedback submission."""


class DependencyFailure(PulseError):
    """The database could not complete the operation."""
