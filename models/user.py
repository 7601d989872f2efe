"""
Back-office user model and data access functions.
Handles password checks, creation, and Flask-Login integration.
"""

from werkzeug.security import generate_password_hash, check_password_hash


class User:
    """
    User class for Flask-Login integration.
    Wraps database row dictionary with required Flask-Login properties.
    """

    def __init__(self, user_dict):
        self.id = user_dict['id']
        self.username = user_dict['username']
        self.email = user_dict['email']
        self.full_name = user_dict.get('full_name')
        self.role = user_dict.get('role', 'admin')
        self.active = user_dict['active']
        self.created_at = user_dict.get('created_at')
        self.last_login = user_dict.get('last_login')

    @property
    def is_authenticated(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_active(self):
        """Required by Flask-Login."""
        return self.active == 1

    @property
    def is_anonymous(self):
        """Required by Flask-Login."""
        return False

    @property
    def is_admin(self):
        return self.role == 'admin'

    def get_id(self):
        """Required by Flask-Login. Returns user ID as unicode string."""
        return str(self.id)


def get_user_by_id(db, user_id: int) -> dict:
    """
    Get user by ID.

    Returns:
        User dict or None if not found
    """
    row = db.execute('SELECT * FROM users WHERE id = ?', (user_id,)).fetchone()
    return dict(row) if row else None


def get_user_by_username(db, username: str) -> dict:
    """
    Get user by username.

    Returns:
        User dict or None if not found
    """
    row = db.execute('SELECT * FROM users WHERE username = ?', (username,)).fetchone()
    return dict(row) if row else None


def check_password(user_dict: dict, password: str) -> bool:
    """Check a plain text password against the stored hash."""
    if not user_dict or not password:
        return False
    return check_password_hash(user_dict['password_hash'], password)


def create_user(db, username: str, email: str, password: str, full_name: str = None, role: str = 'admin') -> int:
    """
    Create new user with hashed password.

    Returns:
        New user ID

    Raises:
        sqlite3.IntegrityError if username or email already exists
    """
    password_hash = generate_password_hash(password)

    cursor = db.execute('''
        INSERT INTO users (username, email, password_hash, full_name, role)
        VALUES (?, ?, ?, ?, ?)
    ''', (username, email, password_hash, full_name, role))

    db.commit()
    return cursor.lastrowid


def update_last_login(db, user_id: int) -> None:
    """Update last login timestamp."""
    db.execute('UPDATE users SET last_login = CURRENT_TIMESTAMP WHERE id = ?', (user_id,))
    db.commit()
