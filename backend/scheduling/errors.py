"""
Error taxonomy for scheduling operations.

Each error carries a human-readable detail that callers pass through
verbatim, and the HTTP status the transport layer answers with.
"""

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = 'InvalidArgument'
    NOT_FOUND = 'NotFound'
    CONFLICT = 'Conflict'
    INTERNAL = 'Internal'


STATUS_CODES = {
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 400,
    ErrorKind.INTERNAL: 500,
}


class SchedulingError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


class InvalidArgument(SchedulingError):
    kind = ErrorKind.INVALID_ARGUMENT


class NotFound(SchedulingError):
    kind = ErrorKind.NOT_FOUND


class Conflict(SchedulingError):
    kind = ErrorKind.CONFLICT

    def __init__(self, detail: str, reason=None):
        super().__init__(detail)
        self.reason = reason


class Internal(SchedulingError):
    kind = ErrorKind.INTERNAL
