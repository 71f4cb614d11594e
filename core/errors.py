"""
Domain error kinds and the result type returned by the service layer.

Services never raise for expected failures. They return ``Ok(value)`` or
``Err(kind, message)`` and the routers turn an ``Err`` into a
``ServiceError`` with ``unwrap()``. The exception handlers in ``main.py``
map the kind to an HTTP status.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

from starlette import status

T = TypeVar("T")


class ErrorKind(str, Enum):
    DUPLICATE_IDENTITY = "duplicate_identity"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_TOKEN = "invalid_token"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    VALIDATION_FAILED = "validation_failed"
    UNEXPECTED = "unexpected"


# kind -> (status code, error title)
HTTP_STATUS_BY_KIND = {
    ErrorKind.DUPLICATE_IDENTITY: (status.HTTP_409_CONFLICT, "Conflict"),
    ErrorKind.INVALID_CREDENTIALS: (status.HTTP_401_UNAUTHORIZED, "Unauthorized"),
    ErrorKind.INVALID_TOKEN: (status.HTTP_401_UNAUTHORIZED, "Unauthorized"),
    ErrorKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Not Found"),
    ErrorKind.FORBIDDEN: (status.HTTP_403_FORBIDDEN, "Forbidden"),
    ErrorKind.VALIDATION_FAILED: (status.HTTP_400_BAD_REQUEST, "Validation Failed"),
    ErrorKind.UNEXPECTED: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
}


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


class ServiceError(Exception):
    """
    Raised at the transport boundary for an ``Err`` result.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind][0]

    @property
    def title(self) -> str:
        return HTTP_STATUS_BY_KIND[self.kind][1]


def unwrap(result: Result[T]) -> T:
    if isinstance(result, Err):
        raise ServiceError(result.kind, result.message)
    return result.value
