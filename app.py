"""
Green's Green Retreat - Booking Service
Flask application factory and initialization
"""

import os
import logging

import click
from flask import Flask, g
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import login_manager, csrf

# Import database functions
from database import close_db, init_db, get_db


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    config_class = config.get(config_name, config['default'])
    app.config.from_object(config_class)
    if config_name == 'production':
        config_class.validate()

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    # Initialize Flask-Login
    login_manager.init_app(app)
    # Initialize CSRF Protection
    csrf.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    from blueprints.auth.routes import auth_bp
    from blueprints.admin.routes import admin_bp
    from blueprints.booking.routes import booking_bp
    from blueprints.api.routes import api_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(booking_bp, url_prefix='/booking')
    app.register_blueprint(api_bp, url_prefix='/api')

    @app.route('/')
    def index():
        """Service banner."""
        from flask import jsonify
        return jsonify({'app': app.config.get('APP_NAME'), 'booking': '/booking/cottages'})


def register_error_handlers(app):
    """Register error handlers."""
    from utils.api_response import api_error, api_booking_error
    from utils.messages import MESSAGES
    from models.booking_errors import PersistenceUnavailable

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return api_error(MESSAGES['not_found'], 404, error_code='not_found')

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        """Handle 405 errors."""
        return api_error('Method not allowed', 405, error_code='method_not_allowed')

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        # Rollback database on error
        db = g.get('db')
        if db:
            db.rollback()
        app.logger.error(f'Unhandled error: {error}', exc_info=True)
        return api_error(MESSAGES['server_error'], 500, error_code='server_error')

    @app.errorhandler(PersistenceUnavailable)
    def store_unavailable_error(error):
        """Handle an unreachable or locked booking store."""
        app.logger.error(f'Booking store unavailable: {error.__cause__}')
        return api_booking_error(error)

    @app.errorhandler(403)
    def forbidden_error(error):
        """Handle 403 errors."""
        return api_error(MESSAGES['permission_denied'], 403, error_code='forbidden')


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize database with schema and seed data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('seed-cottages')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def seed_cottages_command(path):
        """Upsert cottages from a JSON file (slug is used as the ID)."""
        from database.seed import load_cottages_file, seed_cottages

        with app.app_context():
            db = get_db()
            count = seed_cottages(db, load_cottages_file(path))
            db.commit()
        click.echo(f'Upserted {count} cottages')

    @app.cli.command('create-user')
    @click.argument('username')
    @click.argument('email')
    @click.password_option()
    def create_user_command(username, email, password):
        """Create a new back-office admin user."""
        import sqlite3
        from models.user import create_user
        from utils.validators import validate_password

        valid, message = validate_password(password)
        if not valid:
            raise click.BadParameter(message, param_hint='password')

        with app.app_context():
            try:
                user_id = create_user(get_db(), username=username, email=email, password=password)
            except sqlite3.IntegrityError as e:
                raise click.ClickException(f'Error creating user: {e}')
            click.echo(f'User created successfully! ID: {user_id}')


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/greens_retreat.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        # Booking model loggers share the app's handler
        logging.getLogger('models').addHandler(file_handler)
        logging.getLogger('models').setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Booking service startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', debug=True)
