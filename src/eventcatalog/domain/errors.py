"""Domain error codes for the catalog and taxonomy."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_OPERATION = "INVALID_OPERATION"
    CONFLICT = "CONFLICT"
    INTEGRITY_VIOLATION = "INTEGRITY_VIOLATION"
    REFERENTIAL_CONFLICT = "REFERENTIAL_CONFLICT"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class CategoryNotFoundError(DomainError):
    """Raised when a referenced category does not exist."""

    def __init__(self, category_id: int) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=f"Category with ID {category_id} not found",
        )
        object.__setattr__(self, "category_id", category_id)


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: int) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=f"Event with ID {event_id} not found",
        )
        object.__setattr__(self, "event_id", event_id)


class VenueNotFoundError(DomainError):
    """Raised when an event references a venue that does not exist."""

    def __init__(self, venue_id: int) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=f"Venue with ID {venue_id} not found",
        )
        object.__setattr__(self, "venue_id", venue_id)


class SentinelCategoryError(DomainError):
    """Raised when an operation would remove or move the sentinel category."""

    def __init__(self, category_id: int | None, sentinel_name: str, rule: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_OPERATION,
            message=f'The "{sentinel_name}" category {rule}',
        )
        object.__setattr__(self, "category_id", category_id)
        object.__setattr__(self, "rule", rule)


class CategoryConflictError(DomainError):
    """Raised when a category change would leave the taxonomy invalid."""

    def __init__(self, category_id: int | None, rule: str) -> None:
        super().__init__(code=ErrorCode.CONFLICT, message=rule)
        object.__setattr__(self, "category_id", category_id)
        object.__setattr__(self, "rule", rule)


class IntegrityViolationError(DomainError):
    """Raised when an invariant the catalog depends on is broken.

    Not recoverable by the caller; surfaced as an internal error.
    """

    def __init__(self, message: str, *, category_id: int | None = None) -> None:
        super().__init__(code=ErrorCode.INTEGRITY_VIOLATION, message=message)
        object.__setattr__(self, "category_id", category_id)


class ReferentialConflictError(DomainError):
    """Raised by a store that refuses to delete a row still referenced."""

    def __init__(self, category_id: int) -> None:
        super().__init__(
            code=ErrorCode.REFERENTIAL_CONFLICT,
            message=f"Category with ID {category_id} is still referenced",
        )
        object.__setattr__(self, "category_id", category_id)
