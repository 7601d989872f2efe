"""
Booking failure taxonomy and the tagged result returned by booking writers.

Writers raise these internally and convert them into a BookingResult at
their public boundary, so callers can pick a specific message per failure.
"""

import logging
import sqlite3
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Base class for expected booking failures."""

    code = 'booking_error'
    default_message = 'The booking could not be processed.'

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class BookingValidationError(BookingError):
    """Malformed input: caller must re-prompt."""

    code = 'validation'
    default_message = 'Invalid booking data provided.'


class BookingConflictError(BookingError):
    """Requested dates overlap an existing booking for the cottage."""

    code = 'conflict'
    default_message = ('The selected dates for this cottage are no longer available. '
                       'Please choose different dates.')


class PersistenceUnavailable(BookingError):
    """Backing store unreachable, locked past its timeout or misconfigured."""

    code = 'unavailable'
    default_message = 'The booking service is temporarily unavailable. Please try again.'


class BookingNotFound(BookingError):
    """Booking or referenced cottage does not exist."""

    code = 'not_found'
    default_message = 'Booking not found.'


@contextmanager
def store_errors():
    """
    Translate store failures into PersistenceUnavailable.

    Covers locks held past the timeout, unreachable or corrupt database files
    and filesystem errors. Constraint violations and API misuse propagate
    unchanged.
    """
    try:
        yield
    except (sqlite3.IntegrityError, sqlite3.ProgrammingError):
        raise
    except (sqlite3.DatabaseError, OSError) as e:
        logger.error('Booking store unavailable: %s', e)
        raise PersistenceUnavailable() from e


class BookingResult:
    """
    Outcome of a booking write.

    Either success with the booking ID, or failure carrying the BookingError.
    """

    def __init__(self, success: bool, booking_id: str = None, error: BookingError = None):
        self.success = success
        self.booking_id = booking_id
        self.error = error

    @classmethod
    def ok(cls, booking_id: str = None) -> 'BookingResult':
        return cls(True, booking_id=booking_id)

    @classmethod
    def failed(cls, error: BookingError) -> 'BookingResult':
        return cls(False, error=error)

    @property
    def error_code(self) -> str | None:
        return self.error.code if self.error else None

    @property
    def message(self) -> str | None:
        return self.error.message if self.error else None

    def __bool__(self):
        return self.success

    def __repr__(self):
        if self.success:
            return f'<BookingResult ok booking_id={self.booking_id!r}>'
        return f'<BookingResult failed code={self.error_code!r}>'
