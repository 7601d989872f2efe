"""
Standardized API response helpers.

Provides consistent JSON response format across all API endpoints:

    Success:  {"success": true, "data": {...}, "message": "..."}
    Error:    {"success": false, "error": "...", "error_code": "..."}
    Warning:  {"success": true, "data": {...}, "warning": "..."}

Usage:
    from utils.api_response import api_success, api_error

    return api_success(data={'booking_id': 'abc'}, message='Booking created', status=201)
    return api_error('Data required', status=400)
"""

from flask import jsonify
from typing import Any

# HTTP status per BookingError code
BOOKING_ERROR_STATUS = {
    'validation': 400,
    'not_found': 404,
    'conflict': 409,
    'unavailable': 503,
}


def api_success(
    data: dict | list | None = None,
    message: str | None = None,
    warning: str | None = None,
    status: int = 200,
    **extra_fields: Any
) -> tuple:
    """
    Build a standardized success JSON response.

    Args:
        data: Optional dict or list to include as 'data' key.
        message: Optional success message.
        warning: Optional warning message.
        status: HTTP status code (default 200).
        **extra_fields: Additional top-level fields to include in the response.

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': True}

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if warning:
        response['warning'] = warning

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def api_error(error: str, status: int = 400, **extra_fields: Any) -> tuple:
    """
    Build a standardized error JSON response.

    Args:
        error: Error message.
        status: HTTP status code (default 400).
        **extra_fields: Additional top-level fields (e.g., error_code).

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': False, 'error': error}

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def api_booking_error(error) -> tuple:
    """
    Build an error response from a BookingError, mapping its code to a status.

    Args:
        error: BookingError instance

    Returns:
        Tuple of (Response, status_code)
    """
    status = BOOKING_ERROR_STATUS.get(error.code, 500)
    return api_error(error.message, status, error_code=error.code)
