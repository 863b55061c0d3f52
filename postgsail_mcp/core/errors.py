# Typed errors raised by the registries, the backend client and startup.
# Version: 0.1.0

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    CONFIGURATION = "configuration"  # fatal at startup
    VALIDATION = "validation"        # bad invocation, reported to the caller
    BACKEND = "backend"              # network, HTTP status or response shape


class PostgSailError(Exception):
    """
    Base class for every error the server raises on purpose.
    The dispatcher turns any of these into a failure envelope using `message`.
    """
    kind: ErrorKind = ErrorKind.BACKEND

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigurationError(PostgSailError):
    kind = ErrorKind.CONFIGURATION


class UnknownOperationError(PostgSailError):
    kind = ErrorKind.VALIDATION

    def __init__(self, name: str, what: str = "tool"):
        super().__init__(f"Unknown {what}: {name}")
        self.name = name


class NotFoundError(PostgSailError):
    kind = ErrorKind.VALIDATION

    def __init__(self, identifier: str, what: str = "resource"):
        super().__init__(f"Unknown {what}: {identifier}")
        self.identifier = identifier


class ArgumentRequiredError(PostgSailError):
    kind = ErrorKind.VALIDATION

    def __init__(self, field: str):
        super().__init__(f"Argument '{field}' is required")
        self.field = field


class ArgumentInvalidError(PostgSailError):
    kind = ErrorKind.VALIDATION

    def __init__(self, field: str, reason: str):
        super().__init__(f"Argument '{field}' is invalid: {reason}")
        self.field = field


class BackendError(PostgSailError):
    """Raised for transport failures and non-2xx responses."""
    kind = ErrorKind.BACKEND

    def __init__(self, message: str, status_code: Optional[int] = None, reason: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class MalformedResponseError(PostgSailError):
    kind = ErrorKind.BACKEND
