"""
Booking data access functions.

This module re-exports the booking functions from the split modules:
- booking_availability.py: Availability query and conflict checking
- booking_crud.py: Create, read, update and pricing
- booking_errors.py: Failure taxonomy and BookingResult
"""

# Availability and conflicts
from .booking_availability import (
    # Constants
    STATUS_PENDING,
    STATUS_CONFIRMED,
    STATUS_CANCELLED,
    BOOKING_STATUSES,
    # Helpers
    to_date,
    ranges_overlap,
    # Availability query
    list_confirmed_bookings,
    list_blocked_ranges,
    # Conflict checker
    find_conflicting_bookings,
    check_booking_overlap,
)

# CRUD operations
from .booking_crud import (
    # Pricing
    nights_between,
    calculate_booking_price,
    # Validation
    validate_booking_details,
    # Create / update
    create_booking,
    update_booking,
    update_booking_status,
    # Read
    get_booking_by_id,
    get_booking_details,
    get_all_bookings,
    count_bookings_by_status,
    is_future_stay,
)

# Errors
from .booking_errors import (
    BookingError,
    BookingValidationError,
    BookingConflictError,
    PersistenceUnavailable,
    BookingNotFound,
    BookingResult,
)

# Cottages
from .cottage import (
    get_all_cottages,
    get_cottage_by_id,
    get_cottage_nightly_rate,
)
