"""
Route decorators for authentication and authorization.
Provides role-based access control for back-office routes.
"""

from functools import wraps
from flask_login import login_required, current_user

from utils.api_response import api_error
from utils.messages import MESSAGES


def admin_required(func):
    """
    Decorator to require an authenticated admin user.

    Usage:
        @admin_bp.route('/bookings')
        @admin_required
        def list_bookings():
            ...
    """
    @wraps(func)
    @login_required
    def wrapper(*args, **kwargs):
        if not getattr(current_user, 'is_admin', False):
            return api_error(MESSAGES['permission_denied'], 403, error_code='forbidden')
        return func(*args, **kwargs)
    return wrapper


# Re-export login_required for convenience
__all__ = ['login_required', 'admin_required']
