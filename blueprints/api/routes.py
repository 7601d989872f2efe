"""
API routes for JSON endpoints.
Health check and CSRF token for browser clients.
"""

from flask import current_app, jsonify, Blueprint
from flask_wtf.csrf import generate_csrf

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint (no authentication required).

    Returns:
        JSON with status and version
    """
    return jsonify({
        'status': 'ok',
        'version': current_app.config.get('APP_VERSION', '1.0.0'),
        'app': current_app.config.get('APP_NAME')
    })


@api_bp.route('/csrf-token')
def csrf_token():
    """CSRF token to send as X-CSRFToken on POST/PUT requests."""
    return jsonify({'csrf_token': generate_csrf()})
