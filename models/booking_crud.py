"""
Booking CRUD operations.
Handles create, read and update for bookings, including pricing.

Writers run the conflict check and the write inside one BEGIN IMMEDIATE
transaction, so two submissions for the same dates cannot both succeed.
"""

import logging
import math
import secrets
from datetime import date

from utils.validators import validate_email, validate_name, validate_phone, validate_optional_price, sanitize_input
from .booking_availability import (
    BOOKING_STATUSES,
    STATUS_CANCELLED,
    STATUS_PENDING,
    check_booking_overlap,
    to_date,
)
from .booking_errors import (
    BookingConflictError,
    BookingError,
    BookingNotFound,
    BookingResult,
    BookingValidationError,
    store_errors,
)
from .cottage import get_cottage_nightly_rate

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 3600


# =============================================================================
# PRICING
# =============================================================================

def nights_between(check_in, check_out) -> int:
    """
    Number of nights between check-in and check-out.

    Partial days count as a full night (ceiling of the duration in days).

    Args:
        check_in: date or datetime
        check_out: date or datetime (same type as check_in)

    Returns:
        int: Nights
    """
    delta = check_out - check_in
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def calculate_booking_price(nightly_rate: float, check_in, check_out, price_override: float = None) -> float:
    """
    Calculate the price of a stay.

    A positive override wins; otherwise nights x nightly rate.
    """
    if price_override and price_override > 0:
        return round(float(price_override), 2)
    return round(nights_between(check_in, check_out) * float(nightly_rate or 0), 2)


# =============================================================================
# VALIDATION
# =============================================================================

def _parse_date_field(details: dict, field: str, errors: list):
    value = details.get(field)
    if value in (None, ''):
        errors.append(f'{field}: required')
        return None
    try:
        return to_date(value)
    except (TypeError, ValueError):
        errors.append(f'{field}: invalid date')
        return None


def _text_field(details: dict, keys: tuple, errors: list, max_length: int):
    """
    First non-empty value among keys as sanitized text.

    Plain numbers are accepted as text (a phone sent as 7700900123).
    Returns None, after recording an error, for any other non-string value.
    """
    key = next((k for k in keys if details.get(k) not in (None, '')), None)
    if key is None:
        return ''

    value = details[key]
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        errors.append(f'{key}: must be text')
        return None
    return sanitize_input(str(value), max_length)


def validate_booking_details(details: dict) -> dict:
    """
    Validate and normalize booking details.

    Accepts 'name'/'guest_name', 'email'/'guest_email', 'phone'/'guest_phone',
    'cottage_id', 'check_in', 'check_out', 'notes'/'message'/'booking_notes'
    and an optional 'custom_price'/'price' override.

    Returns:
        dict: Normalized details with date objects

    Raises:
        BookingValidationError: Listing every invalid field
    """
    if not isinstance(details, dict):
        raise BookingValidationError()

    errors = []

    name = _text_field(details, ('guest_name', 'name'), errors, 200)
    email = _text_field(details, ('guest_email', 'email'), errors, 200)
    phone = _text_field(details, ('guest_phone', 'phone'), errors, 40)
    cottage_id = _text_field(details, ('cottage_id',), errors, 100)
    notes = _text_field(details, ('notes', 'booking_notes', 'message'), errors, 2000)

    if name is not None and not validate_name(name):
        errors.append('name: at least 2 characters required')
    if email is not None and not validate_email(email):
        errors.append('email: invalid email address')
    if phone is not None and not validate_phone(phone):
        errors.append('phone: at least 10 digits required')
    if cottage_id == '':
        errors.append('cottage_id: required')

    check_in = _parse_date_field(details, 'check_in', errors)
    check_out = _parse_date_field(details, 'check_out', errors)
    if check_in and check_out and check_out <= check_in:
        errors.append('check_out: must be after check_in')

    override = details.get('custom_price', details.get('price'))
    valid_price, price_override, price_error = validate_optional_price(override)
    if not valid_price:
        errors.append(price_error)

    if errors:
        raise BookingValidationError(f"Invalid data provided: {', '.join(errors)}")

    return {
        'guest_name': name,
        'guest_email': email,
        'guest_phone': phone,
        'cottage_id': cottage_id,
        'check_in': check_in,
        'check_out': check_out,
        'notes': notes,
        'price_override': price_override,
    }


def generate_booking_id() -> str:
    """Generate an opaque unique booking ID."""
    return secrets.token_hex(10)


# =============================================================================
# TRANSACTIONS
# =============================================================================

def _begin(db):
    with store_errors():
        db.execute('BEGIN IMMEDIATE')


def _fetch_booking_row(db, booking_id: str):
    with store_errors():
        return db.execute('SELECT * FROM bookings WHERE id = ?', (booking_id,)).fetchone()


def _run_write(db, operation, *args):
    """Run operation inside a write transaction, rolling back on any failure."""
    _begin(db)
    try:
        result = operation(db, *args)
        with store_errors():
            db.commit()
        return result
    except Exception:
        db.rollback()
        raise


# =============================================================================
# CREATE
# =============================================================================

def _insert_booking(db, data: dict, status: str) -> str:
    if check_booking_overlap(db, data['cottage_id'], data['check_in'], data['check_out']):
        raise BookingConflictError()

    nightly_rate = get_cottage_nightly_rate(db, data['cottage_id'])
    price = calculate_booking_price(
        nightly_rate, data['check_in'], data['check_out'], data['price_override']
    )

    booking_id = generate_booking_id()
    with store_errors():
        db.execute('''
            INSERT INTO bookings (
                id, cottage_id, guest_name, guest_email, guest_phone,
                check_in, check_out, status, price, notes, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, CURRENT_TIMESTAMP)
        ''', (
            booking_id, data['cottage_id'], data['guest_name'], data['guest_email'],
            data['guest_phone'], data['check_in'].isoformat(), data['check_out'].isoformat(),
            status, price, data['notes']
        ))

    return booking_id


def create_booking(db, details: dict, status: str = STATUS_PENDING) -> BookingResult:
    """
    Create a booking after an authoritative conflict check.

    Guest submissions are created pending, admin entries confirmed.

    Args:
        db: Database connection
        details: Guest and stay details (see validate_booking_details)
        status: Initial status ('pending' or 'confirmed')

    Returns:
        BookingResult: booking_id on success, tagged error otherwise
    """
    try:
        if status not in BOOKING_STATUSES or status == STATUS_CANCELLED:
            raise BookingValidationError(f'Invalid initial status: {status}')

        data = validate_booking_details(details)
        booking_id = _run_write(db, _insert_booking, data, status)

        logger.info('Booking %s created for cottage %s (%s..%s, %s)',
                    booking_id, data['cottage_id'], data['check_in'], data['check_out'], status)
        return BookingResult.ok(booking_id)

    except BookingError as e:
        logger.warning('Booking creation failed [%s]: %s', e.code, e.message)
        return BookingResult.failed(e)


# =============================================================================
# UPDATE
# =============================================================================

def _update_booking(db, booking_id: str, details: dict) -> None:
    existing = _fetch_booking_row(db, booking_id)
    if existing is None:
        raise BookingNotFound()

    requested_cottage = details.get('cottage_id')
    if requested_cottage and str(requested_cottage) != existing['cottage_id']:
        raise BookingValidationError('A booking cannot be moved to a different cottage.')

    data = validate_booking_details(dict(details, cottage_id=existing['cottage_id']))

    # Cancelled bookings do not block; their dates are re-checked on reactivation
    if existing['status'] != STATUS_CANCELLED and check_booking_overlap(
        db, data['cottage_id'], data['check_in'], data['check_out'],
        exclude_booking_id=booking_id
    ):
        raise BookingConflictError('The selected dates for this cottage conflict with another booking.')

    nightly_rate = get_cottage_nightly_rate(db, data['cottage_id'])
    price = calculate_booking_price(
        nightly_rate, data['check_in'], data['check_out'], data['price_override']
    )

    with store_errors():
        db.execute('''
            UPDATE bookings
            SET guest_name = ?, guest_email = ?, guest_phone = ?,
                check_in = ?, check_out = ?, price = ?, notes = ?,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
        ''', (
            data['guest_name'], data['guest_email'], data['guest_phone'],
            data['check_in'].isoformat(), data['check_out'].isoformat(),
            price, data['notes'], booking_id
        ))


def update_booking(db, booking_id: str, details: dict) -> BookingResult:
    """
    Update a booking's guest details, dates and price in place.

    The booking is excluded from its own conflict check. Status, cottage
    and created_at are preserved.

    Returns:
        BookingResult: booking_id on success, tagged error otherwise
    """
    try:
        if not booking_id:
            raise BookingValidationError('A booking ID is required.')
        if not isinstance(details, dict):
            raise BookingValidationError()

        _run_write(db, _update_booking, booking_id, details)

        logger.info('Booking %s updated', booking_id)
        return BookingResult.ok(booking_id)

    except BookingError as e:
        logger.warning('Booking %s update failed [%s]: %s', booking_id, e.code, e.message)
        return BookingResult.failed(e)


def _change_status(db, booking_id: str, status: str) -> None:
    existing = _fetch_booking_row(db, booking_id)
    if existing is None:
        raise BookingNotFound()

    if existing['status'] == STATUS_CANCELLED and status != STATUS_CANCELLED:
        if check_booking_overlap(
            db, existing['cottage_id'], existing['check_in'], existing['check_out'],
            exclude_booking_id=booking_id
        ):
            raise BookingConflictError(
                'This booking cannot be reactivated: its dates are now taken by another booking.'
            )

    with store_errors():
        db.execute('''
            UPDATE bookings SET status = ?, updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
        ''', (status, booking_id))


def update_booking_status(db, booking_id: str, status: str) -> BookingResult:
    """
    Change a booking's status (pending, confirmed, cancelled).

    Reactivating a cancelled booking re-runs the conflict check.
    """
    try:
        if not booking_id or status not in BOOKING_STATUSES:
            raise BookingValidationError('Invalid input provided.')

        _run_write(db, _change_status, booking_id, status)

        logger.info('Booking %s status changed to %s', booking_id, status)
        return BookingResult.ok(booking_id)

    except BookingError as e:
        logger.warning('Booking %s status change failed [%s]: %s', booking_id, e.code, e.message)
        return BookingResult.failed(e)


# =============================================================================
# READ
# =============================================================================

def get_booking_by_id(db, booking_id: str) -> dict:
    """
    Get booking by ID with its cottage name.

    Returns:
        dict: Booking or None if not found
    """
    if not booking_id:
        return None

    with store_errors():
        row = db.execute('''
            SELECT b.*, COALESCE(c.name, 'Unknown Cottage') as cottage_name
            FROM bookings b
            LEFT JOIN cottages c ON b.cottage_id = c.id
            WHERE b.id = ?
        ''', (booking_id,)).fetchone()

    return dict(row) if row else None


def get_booking_details(db, booking_id: str) -> dict:
    """
    Get the summary shown to a guest after booking.

    Total price is the stored price when positive, else nights x the
    cottage's current nightly rate.

    Returns:
        dict: id, name, email, phone, check_in, check_out, cottage_name,
              nights, total_price, status; None if not found
    """
    booking = get_booking_by_id(db, booking_id)
    if booking is None:
        return None

    check_in = to_date(booking['check_in'])
    check_out = to_date(booking['check_out'])
    nights = nights_between(check_in, check_out)

    price = booking.get('price') or 0
    if price > 0:
        total_price = price
    else:
        with store_errors():
            row = db.execute('SELECT price_per_night FROM cottages WHERE id = ?',
                             (booking['cottage_id'],)).fetchone()
        rate = (row['price_per_night'] if row else 0) or 0
        total_price = calculate_booking_price(rate, check_in, check_out)

    return {
        'id': booking['id'],
        'name': booking['guest_name'],
        'email': booking['guest_email'],
        'phone': booking['guest_phone'],
        'check_in': check_in.isoformat(),
        'check_out': check_out.isoformat(),
        'cottage_name': booking['cottage_name'],
        'nights': nights,
        'total_price': total_price,
        'status': booking['status'],
    }


def get_all_bookings(db, status: str = None) -> list:
    """
    Get all bookings for the back-office, newest first.

    Args:
        db: Database connection
        status: Optional status filter

    Returns:
        list: Booking dicts with cottage_name
    """
    query = '''
        SELECT b.*, COALESCE(c.name, 'Unknown Cottage') as cottage_name
        FROM bookings b
        LEFT JOIN cottages c ON b.cottage_id = c.id
    '''
    params = []

    if status:
        query += ' WHERE b.status = ?'
        params.append(status)

    query += ' ORDER BY b.created_at DESC, b.rowid DESC'

    with store_errors():
        rows = db.execute(query, params).fetchall()
    return [dict(row) for row in rows]


def count_bookings_by_status(db) -> dict:
    """Count bookings per status (all statuses present, zero if none)."""
    counts = {status: 0 for status in BOOKING_STATUSES}
    with store_errors():
        rows = db.execute('SELECT status, COUNT(*) as total FROM bookings GROUP BY status').fetchall()
    for row in rows:
        counts[row['status']] = row['total']
    return counts


def is_future_stay(check_in, today: date) -> bool:
    """True if the stay starts today or later."""
    return to_date(check_in) >= today
