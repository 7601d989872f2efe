"""
Public booking routes.
Guest-facing cottage list, calendar availability and booking submission.
"""

from flask import Blueprint, current_app, request

from database import get_db
from models.booking import (
    STATUS_PENDING,
    PersistenceUnavailable,
    create_booking,
    get_all_cottages,
    get_booking_details,
    is_future_stay,
    list_blocked_ranges,
)
from utils.api_response import api_success, api_error, api_booking_error
from utils.datetime_helpers import get_today
from utils.messages import MESSAGES
from utils.serializers import serialize_range

booking_bp = Blueprint('booking', __name__)


def _starts_in_past(value) -> bool:
    """True if value is a parsable check-in date before today."""
    try:
        return not is_future_stay(value, get_today())
    except (TypeError, ValueError):
        return False


@booking_bp.route('/cottages')
def cottages():
    """List cottages available for booking."""
    try:
        items = get_all_cottages(get_db())
    except PersistenceUnavailable as e:
        return api_booking_error(e)

    return api_success(data=[
        {'id': c['id'], 'name': c['name'], 'price_per_night': c['price_per_night']}
        for c in items
    ])


@booking_bp.route('/cottages/<cottage_id>/unavailable-dates')
def unavailable_dates(cottage_id):
    """
    Date ranges to disable in the booking calendar.

    Unknown cottages yield an empty list. These ranges are only a hint;
    submissions are re-checked server-side.
    """
    include_pending = current_app.config.get('BOOKING_CALENDAR_INCLUDES_PENDING', True)
    try:
        ranges = list_blocked_ranges(get_db(), cottage_id, include_pending=include_pending)
    except PersistenceUnavailable as e:
        return api_booking_error(e)

    return api_success(data=[serialize_range(r) for r in ranges])


@booking_bp.route('/', methods=['POST'])
def submit():
    """
    Submit a guest booking request.

    Request body (JSON):
        name, email, phone, cottage_id, check_in, check_out (YYYY-MM-DD),
        message (optional)

    Returns:
        201 with booking_id, or a tagged error (400/404/409/503)
    """
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return api_error(MESSAGES['data_required'], error_code='validation')

    if _starts_in_past(data.get('check_in')):
        return api_error(MESSAGES['check_in_in_past'], error_code='validation')

    details = {k: v for k, v in data.items() if k not in ('custom_price', 'price')}

    db = get_db()
    try:
        result = create_booking(db, details, status=STATUS_PENDING)
    except Exception as e:
        current_app.logger.error(f'Error submitting booking: {e}', exc_info=True)
        return api_error(MESSAGES['server_error'], 500, error_code='server_error')

    if not result:
        return api_booking_error(result.error)

    return api_success(
        data={'booking_id': result.booking_id},
        message=MESSAGES['booking_submitted'],
        status=201,
        booking_id=result.booking_id
    )


@booking_bp.route('/<booking_id>')
def details(booking_id):
    """Booking summary for the thank-you page."""
    try:
        booking = get_booking_details(get_db(), booking_id)
    except PersistenceUnavailable as e:
        return api_booking_error(e)

    if booking is None:
        return api_error(MESSAGES['booking_not_found'], 404, error_code='not_found')

    return api_success(data=booking)
