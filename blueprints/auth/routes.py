"""
Authentication routes: login, logout, current user.
Handles back-office session authentication.
"""

from flask import Blueprint
from flask_login import login_user, logout_user, login_required, current_user

from blueprints.auth.forms import LoginForm
from database import get_db
from models.user import User, get_user_by_username, update_last_login, check_password
from utils.api_response import api_success, api_error
from utils.messages import MESSAGES

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Log in with username and password (form data or JSON).
    """
    form = LoginForm()

    if not form.validate_on_submit():
        return api_error(
            MESSAGES['invalid_credentials'], 400,
            error_code='validation', fields=form.errors
        )

    db = get_db()
    user_dict = get_user_by_username(db, form.username.data)

    if user_dict is None or not check_password(user_dict, form.password.data):
        return api_error(MESSAGES['invalid_credentials'], 401, error_code='unauthorized')

    if not user_dict.get('active'):
        return api_error(MESSAGES['account_disabled'], 403, error_code='forbidden')

    user = User(user_dict)
    login_user(user, remember=form.remember_me.data)
    update_last_login(db, user.id)

    return api_success(
        data={'id': user.id, 'username': user.username, 'role': user.role},
        message=MESSAGES['login_success'].format(name=user.full_name or user.username)
    )


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Logout current user."""
    logout_user()
    return api_success(message=MESSAGES['logout_success'])


@auth_bp.route('/me')
@login_required
def me():
    """Current user details."""
    return api_success(data={
        'id': current_user.id,
        'username': current_user.username,
        'email': current_user.email,
        'full_name': current_user.full_name,
        'role': current_user.role,
    })
