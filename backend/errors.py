"""Error taxonomy shared by the repository, service and HTTP layers.

`CalendarError` subclasses carry an `ErrorKind`; the HTTP layer maps the
kind to a status code in one place. `StorageError` never leaves the
service layer, which wraps it as a `BusinessError`.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Error kinds surfaced to API clients. Values are the wire `error` field."""

    VALIDATION = "validation_error"
    BUSINESS = "business_error"
    NOT_FOUND = "not_found"
    INTERNAL = "internal_server_error"


@dataclass(eq=False)
class CalendarError(Exception):
    """Base error with a kind and a client-facing message."""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


class ValidationError(CalendarError):
    """Caller input is malformed: a missing field or a bad date format."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(kind=ErrorKind.VALIDATION, message=message)
        self.field = field

    def __str__(self) -> str:
        return f"validation error: {self.field} - {self.message}"


class BusinessError(CalendarError):
    """A storage failure surfaced after an otherwise valid request."""

    def __init__(self, message: str) -> None:
        super().__init__(kind=ErrorKind.BUSINESS, message=message)

    def __str__(self) -> str:
        return f"business error: {self.message}"


class NotFoundError(CalendarError):
    """An update or delete matched no rows."""

    def __init__(self, resource: str, id: str) -> None:
        super().__init__(kind=ErrorKind.NOT_FOUND, message=f"{resource} with id {id} not found")
        self.resource = resource
        self.id = id


class InternalError(CalendarError):
    """Unexpected fault. The message is generic and safe to return."""

    def __init__(self, message: str = "An unexpected error occurred") -> None:
        super().__init__(kind=ErrorKind.INTERNAL, message=message)


class StorageError(Exception):
    """Database failure raised by the repository."""


class ConfigError(Exception):
    """Configuration file is unreadable or malformed."""


class ServerError(Exception):
    """The HTTP listener failed to start or stopped unexpectedly."""
