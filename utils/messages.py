"""
Centralized UI messages.
All user-facing text in one place for consistency.
"""

MESSAGES = {
    # Success messages
    'login_success': 'Welcome {name}',
    'logout_success': 'You have been logged out',
    'booking_submitted': 'Thank you! Your booking request has been received.',
    'booking_created': 'Booking created successfully',
    'booking_updated': 'Booking updated successfully',
    'booking_status_updated': 'Booking status changed to {status}',

    # Error messages
    'invalid_credentials': 'Invalid username or password',
    'account_disabled': 'Your account has been disabled. Contact an administrator.',
    'permission_denied': 'You do not have permission for this action',
    'data_required': 'Request data required',
    'booking_not_found': 'Booking not found',
    'cottage_not_found': 'Cottage not found',
    'check_in_in_past': 'Check-in date cannot be in the past',
    'invalid_status': 'Status must be one of: pending, confirmed, cancelled',
    'server_error': 'An unexpected error occurred. Please try again later.',
    'not_found': 'Resource not found',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get message with optional formatting.

    Args:
        key: Message key
        **kwargs: Format parameters

    Returns:
        Formatted message or key if not found
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message
