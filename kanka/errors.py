"""
Exceptions raised by the Kanka client.

Every failure surfaces as a subclass of KankaError. Services re-raise errors
with the operation and IDs prepended to the message, keeping the
exception type and attributes intact.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Iterator

import httpx

# Status codes Kanka documents as worth retrying.
TEMPORARY_STATUS_CODES = frozenset({
    httpx.codes.MISDIRECTED_REQUEST,  # 421
    httpx.codes.TOO_MANY_REQUESTS,    # 429
})


def is_success(code: int) -> bool:
    """Return True if the status code is of the 2xx family."""
    return 200 <= code < 300


def is_temporary(code: int) -> bool:
    """Return True if the status code represents a temporary error according to Kanka."""
    return code in TEMPORARY_STATUS_CODES


class KankaError(Exception):
    """Base exception for Kanka client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def prepend(self, context: str) -> None:
        """Prefix the message with the calling operation's context."""
        self.message = f"{context}: {self.message}"
        self.args = (self.message,)


class InvalidArgumentError(KankaError):
    """Caller supplied an argument the API can never accept."""
    pass


class InvalidIDError(InvalidArgumentError):
    """A resource ID used to build a path was negative."""

    def __init__(self, resource_id: object):
        super().__init__(f"provided ID ({resource_id}) cannot be negative")
        self.resource_id = resource_id


class ValidationKind(str, Enum):
    MISSING_FIELD = "missing_field"
    OUT_OF_RANGE = "out_of_range"


class PayloadValidationError(InvalidArgumentError):
    """A create/update payload failed its checks before serialization."""

    def __init__(self, message: str, kind: ValidationKind, model: str, field: str):
        super().__init__(message)
        self.kind = kind
        self.model = model
        self.field = field

    @classmethod
    def missing(cls, model: str, field: str) -> "PayloadValidationError":
        return cls(
            f"cannot serialize {model} with a missing {field}",
            kind=ValidationKind.MISSING_FIELD,
            model=model,
            field=field,
        )

    @classmethod
    def out_of_range(cls, model: str, field: str, detail: str) -> "PayloadValidationError":
        return cls(
            f"cannot serialize {model}: {field} {detail}",
            kind=ValidationKind.OUT_OF_RANGE,
            model=model,
            field=field,
        )


class RequestBuildError(KankaError):
    """The HTTP request could not be constructed (e.g. malformed URL)."""
    pass


class TransportError(KankaError):
    """The request could not be sent or its response could not be read."""
    pass


class DecodeError(KankaError):
    """The response body did not match the expected envelope."""

    def __init__(self, message: str, status_code: int | None = None, body: bytes = b""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ServerError(KankaError):
    """Kanka answered with a non-success status code."""

    def __init__(self, status_code: int, status: str, body: bytes = b""):
        super().__init__(f"server responded with status '{status}'")
        self.status_code = status_code
        self.status = status
        self.body = body

    @property
    def temporary(self) -> bool:
        """True if the same request may succeed later. Never acted on internally."""
        return is_temporary(self.status_code)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ServerError":
        status = f"{response.status_code} {response.reason_phrase}".strip()
        error_cls = NotFoundError if response.status_code == httpx.codes.NOT_FOUND else cls
        return error_cls(response.status_code, status, body=response.content)


class NotFoundError(ServerError):
    """Resource not found (404)."""
    pass


@contextmanager
def error_context(context: str) -> Iterator[None]:
    """Re-raise any KankaError from the block with ``context`` prepended."""
    try:
        yield
    except KankaError as e:
        e.prepend(context)
        raise
