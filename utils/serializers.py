"""
JSON serialization for booking records.
Dates are emitted as ISO strings.
"""

from utils.datetime_helpers import to_iso


def serialize_range(booking: dict) -> dict:
    """Serialize a blocked/confirmed range for calendar clients."""
    return {
        'id': booking['id'],
        'from': to_iso(booking['check_in']),
        'to': to_iso(booking['check_out']),
    }


def serialize_booking(booking: dict) -> dict:
    """Serialize a booking row (with cottage_name) for the back-office."""
    return {
        'id': booking['id'],
        'cottage_id': booking['cottage_id'],
        'cottage_name': booking.get('cottage_name') or 'Unknown Cottage',
        'name': booking['guest_name'],
        'email': booking['guest_email'],
        'phone': booking['guest_phone'],
        'check_in': to_iso(booking['check_in']),
        'check_out': to_iso(booking['check_out']),
        'status': booking['status'] or 'pending',
        'price': booking.get('price') or 0,
        'notes': booking.get('notes') or '',
        'created_at': to_iso(booking.get('created_at')),
        'updated_at': to_iso(booking.get('updated_at')),
    }
