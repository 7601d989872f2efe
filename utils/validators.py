"""
Input validation helper functions.
Provides validation for common input types.
"""

import re


def validate_email(email: str) -> bool:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if valid email format
    """
    if not email:
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))


def validate_phone(phone: str, min_digits: int = 10) -> bool:
    """
    Validate phone number format.
    Accepts an optional leading '+', digits, spaces and common separators.

    Args:
        phone: Phone number to validate
        min_digits: Minimum number of digits required

    Returns:
        True if valid phone format
    """
    if not phone:
        return False

    # Remove spaces and common separators
    cleaned = re.sub(r'[\s\-\(\)\.]', '', phone)

    if not re.match(r'^\+?[0-9]+$', cleaned):
        return False

    return min_digits <= len(cleaned.lstrip('+')) <= 15


def validate_name(name: str, min_length: int = 2) -> bool:
    """Validate a person's name has at least min_length non-blank characters."""
    if not name:
        return False
    return len(name.strip()) >= min_length


def validate_optional_price(value) -> tuple:
    """
    Validate an optional price override.

    Empty values mean no override.

    Returns:
        Tuple of (is_valid, float or None, error_message)
    """
    if value in (None, ''):
        return True, None, ''

    if isinstance(value, bool):
        return False, None, 'custom_price must be a number'

    try:
        price = float(value)
    except (TypeError, ValueError):
        return False, None, 'custom_price must be a number'

    if price < 0:
        return False, None, 'custom_price cannot be negative'

    return True, price, ''


def validate_password(password: str, min_length: int = 8) -> tuple:
    """
    Validate password strength.

    Args:
        password: Password to validate
        min_length: Minimum password length

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not password:
        return False, 'Password is required'

    if len(password) < min_length:
        return False, f'Password must be at least {min_length} characters'

    return True, ''


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    # Strip whitespace
    sanitized = text.strip()

    # Limit length if specified
    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
