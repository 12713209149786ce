"""Password hashing and password form rules."""

from typing import Optional

import bcrypt

MIN_PASSWORD_LENGTH = 8
# bcrypt only reads the first 72 bytes and bcrypt>=5 rejects longer input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: Optional[str]) -> bool:
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        # Malformed hash stored for the user
        return False


def validate_password_rules(password: Optional[str], confirmation: Optional[str]) -> list[str]:
    """
    Check a new password against the registration rules.

    Returns:
        The list of error messages, empty when the password is acceptable.
    """
    if not password:
        return ["The password field is required."]

    errors = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"The password field must be at least {MIN_PASSWORD_LENGTH} characters.")
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        errors.append(f"The password field must not be greater than {MAX_PASSWORD_BYTES} bytes.")
    if password != confirmation:
        errors.append("The password field confirmation does not match.")
    return errors
