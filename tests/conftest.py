"""
Pytest configuration and fixtures.
Ensures tests use an isolated test database, not the production database.
"""

import os
import pytest
import tempfile

# Set test database path BEFORE importing app
# This ensures all tests use an isolated database
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), 'greens_retreat_test.db')
os.environ['DATABASE_PATH'] = TEST_DB_PATH


@pytest.fixture(scope='session', autouse=True)
def setup_test_environment():
    """Set up test environment before any tests run."""
    os.environ['DATABASE_PATH'] = TEST_DB_PATH
    os.environ['FLASK_ENV'] = 'test'

    yield

    # Cleanup: remove test database after all tests
    for suffix in ('', '-wal', '-shm'):
        path = TEST_DB_PATH + suffix
        if os.path.exists(path):
            try:
                os.remove(path)
            except PermissionError:
                pass  # Windows may have file locked


@pytest.fixture
def app():
    """Create test application with isolated database."""
    from app import create_app
    from database import init_db

    os.environ['DATABASE_PATH'] = TEST_DB_PATH

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    app.config['DATABASE_PATH'] = TEST_DB_PATH

    with app.app_context():
        init_db()
        yield app


@pytest.fixture
def db(app):
    """Database connection for the test's app context."""
    from database import get_db
    return get_db()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def authenticated_client(app, client):
    """Create authenticated test client (seeded admin user)."""
    client.post('/login', data={
        'username': 'admin',
        'password': 'admin123'
    })
    return client


@pytest.fixture
def cottage_id(db):
    """A cottage priced at 100 per night."""
    db.execute('''
        INSERT INTO cottages (id, name, slug, price_per_night)
        VALUES ('test-cottage', 'Test Cottage', 'test-cottage', 100)
    ''')
    db.commit()
    return 'test-cottage'


@pytest.fixture
def insert_booking(db):
    """Insert a booking row directly, bypassing the conflict check."""
    counter = {'n': 0}

    def _insert(cottage_id, check_in, check_out, status='confirmed', price=0):
        counter['n'] += 1
        booking_id = f'seed-{counter["n"]}'
        db.execute('''
            INSERT INTO bookings (
                id, cottage_id, guest_name, guest_email, guest_phone,
                check_in, check_out, status, price
            ) VALUES (?, ?, 'Seed Guest', 'seed@example.com', '07700900123', ?, ?, ?, ?)
        ''', (booking_id, cottage_id, check_in, check_out, status, price))
        db.commit()
        return booking_id

    return _insert


@pytest.fixture
def guest_details(cottage_id):
    """Factory for valid booking details on the test cottage."""
    def _details(check_in, check_out, **overrides):
        details = {
            'name': 'Ada Green',
            'email': 'ada@example.com',
            'phone': '+44 7700 900123',
            'cottage_id': cottage_id,
            'check_in': check_in,
            'check_out': check_out,
        }
        details.update(overrides)
        return details

    return _details


@pytest.fixture
def broken_store(app, tmp_path):
    """Point the app at a database path that cannot be opened."""
    from flask import g

    not_a_directory = tmp_path / 'not-a-directory'
    not_a_directory.write_text('')

    db = g.pop('db', None)
    if db is not None:
        db.close()
    app.config['DATABASE_PATH'] = str(not_a_directory / 'greens_retreat.db')
    return app
