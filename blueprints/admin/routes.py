"""
Back-office booking routes.
Admin listing, creation, editing and status changes for bookings.
"""

from flask import Blueprint, current_app, request

from database import get_db
from models.booking import (
    BOOKING_STATUSES,
    STATUS_CONFIRMED,
    PersistenceUnavailable,
    count_bookings_by_status,
    create_booking,
    get_all_bookings,
    get_booking_by_id,
    get_cottage_by_id,
    list_confirmed_bookings,
    update_booking,
    update_booking_status,
)
from utils.api_response import api_success, api_error, api_booking_error
from utils.decorators import admin_required
from utils.messages import MESSAGES, get_message
from utils.serializers import serialize_booking, serialize_range

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/dashboard')
@admin_required
def dashboard():
    """Booking counts per status."""
    try:
        counts = count_bookings_by_status(get_db())
    except PersistenceUnavailable as e:
        return api_booking_error(e)

    return api_success(data={'bookings': counts, 'total': sum(counts.values())})


@admin_bp.route('/bookings')
@admin_required
def list_bookings():
    """
    List all bookings, newest first.

    Query params:
        status: Filter by status (optional)
    """
    status = request.args.get('status') or None
    if status and status not in BOOKING_STATUSES:
        return api_error(MESSAGES['invalid_status'], error_code='validation')

    try:
        bookings = get_all_bookings(get_db(), status=status)
    except PersistenceUnavailable as e:
        return api_booking_error(e)

    return api_success(data=[serialize_booking(b) for b in bookings], count=len(bookings))


@admin_bp.route('/bookings/<booking_id>')
@admin_required
def booking_detail(booking_id):
    """Get one booking."""
    try:
        booking = get_booking_by_id(get_db(), booking_id)
    except PersistenceUnavailable as e:
        return api_booking_error(e)

    if booking is None:
        return api_error(MESSAGES['booking_not_found'], 404, error_code='not_found')

    return api_success(data=serialize_booking(booking))


@admin_bp.route('/bookings', methods=['POST'])
@admin_required
def create():
    """
    Create a confirmed booking from the back-office.

    Request body (JSON):
        name, email, phone, cottage_id, check_in, check_out,
        custom_price (optional), booking_notes (optional)
    """
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return api_error(MESSAGES['data_required'], error_code='validation')

    db = get_db()
    try:
        result = create_booking(db, data, status=STATUS_CONFIRMED)
    except Exception as e:
        current_app.logger.error(f'Error creating admin booking: {e}', exc_info=True)
        return api_error(MESSAGES['server_error'], 500, error_code='server_error')

    if not result:
        return api_booking_error(result.error)

    return api_success(
        data={'booking_id': result.booking_id},
        message=MESSAGES['booking_created'],
        status=201,
        booking_id=result.booking_id
    )


@admin_bp.route('/bookings/<booking_id>', methods=['PUT'])
@admin_required
def edit(booking_id):
    """Edit a booking's guest details, dates and price."""
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return api_error(MESSAGES['data_required'], error_code='validation')

    db = get_db()
    try:
        result = update_booking(db, booking_id, data)
    except Exception as e:
        current_app.logger.error(f'Error updating booking {booking_id}: {e}', exc_info=True)
        return api_error(MESSAGES['server_error'], 500, error_code='server_error')

    if not result:
        return api_booking_error(result.error)

    return api_success(message=MESSAGES['booking_updated'], booking_id=booking_id)


@admin_bp.route('/bookings/<booking_id>/status', methods=['POST'])
@admin_required
def change_status(booking_id):
    """
    Change a booking's status.

    Request body (JSON):
        status: 'pending' | 'confirmed' | 'cancelled'
    """
    data = request.get_json(silent=True)
    status = data.get('status') if isinstance(data, dict) else None
    if status not in BOOKING_STATUSES:
        return api_error(MESSAGES['invalid_status'], error_code='validation')

    db = get_db()
    try:
        result = update_booking_status(db, booking_id, status)
    except Exception as e:
        current_app.logger.error(f'Error updating booking {booking_id}: {e}', exc_info=True)
        return api_error(MESSAGES['server_error'], 500, error_code='server_error')

    if not result:
        return api_booking_error(result.error)

    return api_success(message=get_message('booking_status_updated', status=status), booking_status=status)


@admin_bp.route('/cottages/<cottage_id>/bookings')
@admin_required
def cottage_bookings(cottage_id):
    """Confirmed date ranges for a cottage."""
    try:
        db = get_db()
        if get_cottage_by_id(db, cottage_id) is None:
            return api_error(MESSAGES['cottage_not_found'], 404, error_code='not_found')
        ranges = list_confirmed_bookings(db, cottage_id)
    except PersistenceUnavailable as e:
        return api_booking_error(e)

    return api_success(data=[serialize_range(r) for r in ranges])
