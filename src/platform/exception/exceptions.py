from enum import StrEnum
from typing import Optional


class ErrorType(StrEnum):
    VALIDATION_ERROR = 'VALIDATION_ERROR'
    MOVIE_NOT_FOUND = 'MOVIE_NOT_FOUND'
    SHOWTIME_NOT_FOUND = 'SHOWTIME_NOT_FOUND'
    DUPLICATE_MOVIE_TITLE = 'DUPLICATE_MOVIE_TITLE'
    OVERLAPPING_SHOWTIME = 'OVERLAPPING_SHOWTIME'
    SEAT_ALREADY_BOOKED = 'SEAT_ALREADY_BOOKED'
    INVALID_SHOWTIME = 'INVALID_SHOWTIME'
    INTERNAL_SERVER_ERROR = 'INTERNAL_SERVER_ERROR'


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        *,
        error_type: ErrorType = ErrorType.INTERNAL_SERVER_ERROR,
        details: Optional[str] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        *,
        error_type: ErrorType = ErrorType.VALIDATION_ERROR,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, status_code, error_type=error_type, details=details)


class ValidationError(DomainError):
    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message, 400, error_type=ErrorType.VALIDATION_ERROR, details=details)


class InvalidShowtimeError(DomainError):
    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message, 400, error_type=ErrorType.INVALID_SHOWTIME, details=details)


class NotFoundError(CustomBaseError):
    def __init__(
        self, message: str, *, error_type: ErrorType, details: Optional[str] = None
    ) -> None:
        super().__init__(message, 404, error_type=error_type, details=details)


class MovieNotFoundError(NotFoundError):
    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message, error_type=ErrorType.MOVIE_NOT_FOUND, details=details)


class ShowtimeNotFoundError(NotFoundError):
    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message, error_type=ErrorType.SHOWTIME_NOT_FOUND, details=details)


class ConflictError(CustomBaseError):
    def __init__(
        self, message: str, *, error_type: ErrorType, details: Optional[str] = None
    ) -> None:
        super().__init__(message, 409, error_type=error_type, details=details)


class DuplicateMovieTitleError(ConflictError):
    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message, error_type=ErrorType.DUPLICATE_MOVIE_TITLE, details=details)


class OverlappingShowtimeError(ConflictError):
    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message, error_type=ErrorType.OVERLAPPING_SHOWTIME, details=details)


class SeatAlreadyBookedError(ConflictError):
    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message, error_type=ErrorType.SEAT_ALREADY_BOOKED, details=details)


class InternalError(CustomBaseError):
    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(
            message, 500, error_type=ErrorType.INTERNAL_SERVER_ERROR, details=details
        )


class StorageConflictError(Exception):
    """A write was rejected by a database constraint (unique / foreign key)."""

    def __init__(self, message: str, *, constraint: Optional[str] = None) -> None:
        self.constraint = constraint
        super().__init__(message)
