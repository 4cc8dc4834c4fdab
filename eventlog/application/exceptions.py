"""Application-layer exceptions. Closed set of gateway failure kinds; do not reuse domain exceptions."""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure kinds callers dispatch on. Every ApplicationError subclass maps to exactly one."""

    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"
    QUEUE = "queue"


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(ApplicationError):
    """Raised when the requested event log id does not exist in storage."""

    kind = ErrorKind.NOT_FOUND


class PersistenceError(ApplicationError):
    """Raised when the relational store rejects a read or write (connectivity, constraints)."""

    kind = ErrorKind.PERSISTENCE


class QueueError(ApplicationError):
    """Raised when the broker is unreachable or does not confirm delivery within the attempt budget."""

    kind = ErrorKind.QUEUE
