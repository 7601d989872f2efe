"""
Booking availability and conflict detection.

Date ranges are half-open: [check_in, check_out). A stay may start on the
day another one ends.
"""

import logging
from datetime import date, datetime

from .booking_errors import store_errors

logger = logging.getLogger(__name__)

STATUS_PENDING = 'pending'
STATUS_CONFIRMED = 'confirmed'
STATUS_CANCELLED = 'cancelled'
BOOKING_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED, STATUS_CANCELLED)


# =============================================================================
# DATE HELPERS
# =============================================================================

def to_date(value) -> date:
    """
    Convert a stored or supplied value into a date.

    Accepts date, datetime, or an ISO string ('YYYY-MM-DD' or a full
    timestamp). Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return datetime.strptime(text, '%Y-%m-%d').date()
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    raise ValueError(f'Not a date: {value!r}')


def ranges_overlap(check_in, check_out, other_check_in, other_check_out) -> bool:
    """
    Half-open interval overlap test.

    Touching ranges (check_out == other_check_in) do not overlap.
    """
    return check_in < other_check_out and other_check_in < check_out


# =============================================================================
# AVAILABILITY QUERY
# =============================================================================

def _list_ranges(db, cottage_id: str, statuses: tuple) -> list:
    if not cottage_id:
        return []

    placeholders = ','.join('?' * len(statuses))
    with store_errors():
        cursor = db.execute(f'''
            SELECT id, check_in, check_out, status
            FROM bookings
            WHERE cottage_id = ?
              AND status IN ({placeholders})
            ORDER BY check_in
        ''', [cottage_id] + list(statuses))
        rows = cursor.fetchall()

    return [
        {
            'id': row['id'],
            'check_in': to_date(row['check_in']),
            'check_out': to_date(row['check_out']),
            'status': row['status'],
        }
        for row in rows
    ]


def list_confirmed_bookings(db, cottage_id: str) -> list:
    """
    Get the date ranges of all confirmed bookings for a cottage.

    Args:
        db: Database connection
        cottage_id: Cottage ID (missing or unknown yields an empty list)

    Returns:
        list: [{'id': str, 'check_in': date, 'check_out': date, 'status': str}]
    """
    return _list_ranges(db, cottage_id, (STATUS_CONFIRMED,))


def list_blocked_ranges(db, cottage_id: str, include_pending: bool = True) -> list:
    """
    Get the date ranges guests cannot book for a cottage.

    Pending bookings block as well unless include_pending is False, in which
    case this is the same as list_confirmed_bookings.
    """
    statuses = (STATUS_CONFIRMED, STATUS_PENDING) if include_pending else (STATUS_CONFIRMED,)
    return _list_ranges(db, cottage_id, statuses)


# =============================================================================
# CONFLICT CHECKER
# =============================================================================

def find_conflicting_bookings(
    db,
    cottage_id: str,
    check_in,
    check_out,
    exclude_booking_id: str = None
) -> list:
    """
    Get non-cancelled bookings on a cottage overlapping [check_in, check_out).

    The query only narrows on check_in < proposed check_out; the other half
    of the overlap test is applied to the fetched candidates.

    Args:
        db: Database connection
        cottage_id: Cottage ID
        check_in: Proposed check-in (date)
        check_out: Proposed check-out (date, exclusive)
        exclude_booking_id: Booking ID to ignore (for edits)

    Returns:
        list: Conflicting booking dicts

    Raises:
        PersistenceUnavailable: If the store cannot be read
    """
    check_in = to_date(check_in)
    check_out = to_date(check_out)

    with store_errors():
        cursor = db.execute('''
            SELECT id, guest_name, check_in, check_out, status
            FROM bookings
            WHERE cottage_id = ?
              AND status != ?
              AND check_in < ?
        ''', (cottage_id, STATUS_CANCELLED, check_out.isoformat()))
        candidates = cursor.fetchall()

    conflicts = []
    for row in candidates:
        if exclude_booking_id and row['id'] == exclude_booking_id:
            continue
        existing_in = to_date(row['check_in'])
        existing_out = to_date(row['check_out'])
        if ranges_overlap(check_in, check_out, existing_in, existing_out):
            conflicts.append({
                'id': row['id'],
                'guest_name': row['guest_name'],
                'check_in': existing_in,
                'check_out': existing_out,
                'status': row['status'],
            })

    return conflicts


def check_booking_overlap(
    db,
    cottage_id: str,
    check_in,
    check_out,
    exclude_booking_id: str = None
) -> bool:
    """
    Check whether a proposed stay overlaps any non-cancelled booking.

    Returns:
        bool: True if the dates are taken

    Raises:
        PersistenceUnavailable: If the store cannot be read
    """
    conflicts = find_conflicting_bookings(
        db, cottage_id, check_in, check_out, exclude_booking_id
    )
    if conflicts:
        logger.info(
            'Booking conflict on cottage %s for %s..%s with %s',
            cottage_id, check_in, check_out, [c['id'] for c in conflicts]
        )
    return bool(conflicts)
