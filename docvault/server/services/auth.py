"""
Authentication Service.

Login checks the bcrypt hash stored for the user name. Vendors register with
their legacy vendor code: the code must belong to an active vendor of the
ERP, whose name becomes the login name.
"""

from typing import Optional

from fastapi import Request

from docvault.core.database.entities.users import User
from docvault.core.database.repositories import LegacyLookupRepository, UserRepository
from docvault.core.logging_config import get_logger
from docvault.core.security import hash_password, validate_password_rules, verify_password
from docvault.server.exception_handlers import FormValidationError

from .deps import SESSION_USER_KEY

logger = get_logger(__name__)

FAILED_LOGIN_MESSAGE = "These credentials do not match our records."
UNKNOWN_VENDOR_MESSAGE = "The vendor code does not exist."
MAX_CO_VEN_LENGTH = 255


async def authenticate(users: UserRepository, name: Optional[str], password: Optional[str]) -> User:
    """
    Check login credentials.

    Raises:
        FormValidationError: When fields are missing or the credentials are wrong
    """
    errors = {}
    if not (name or "").strip():
        errors["name"] = ["The name field is required."]
    if not password:
        errors["password"] = ["The password field is required."]
    if errors:
        raise FormValidationError(errors)

    user = await users.get_by_name(name.strip())
    if user is None or not verify_password(password, user.password_hash):
        logger.info(f"Failed login attempt for {name!r}")
        raise FormValidationError.single("name", FAILED_LOGIN_MESSAGE)
    return user


def login(request: Request, user: User) -> None:
    """Start a fresh session for ``user``."""
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id
    logger.info(f"User {user.id} ({user.name}) logged in")


def logout(request: Request) -> None:
    user_id = request.session.get(SESSION_USER_KEY)
    request.session.clear()
    if user_id is not None:
        logger.info(f"User {user_id} logged out")


async def register_vendor(
    users: UserRepository,
    lookups: LegacyLookupRepository,
    co_ven: Optional[str],
    password: Optional[str],
    password_confirmation: Optional[str],
) -> User:
    """
    Create the account of an active legacy vendor.

    Raises:
        FormValidationError: On invalid input, an already registered code or an unknown vendor
    """
    co_ven = (co_ven or "").strip()
    errors = {}
    if not co_ven:
        errors["co_ven"] = ["The co ven field is required."]
    elif len(co_ven) > MAX_CO_VEN_LENGTH:
        errors["co_ven"] = [f"The co ven field must not be greater than {MAX_CO_VEN_LENGTH} characters."]
    elif await users.get_by_co_ven(co_ven) is not None:
        errors["co_ven"] = ["The co ven has already been taken."]

    password_errors = validate_password_rules(password, password_confirmation)
    if password_errors:
        errors["password"] = password_errors
    if errors:
        raise FormValidationError(errors)

    vendor = await lookups.find_active_vendor(co_ven)
    if vendor is None or not vendor.ven_des:
        raise FormValidationError.single("co_ven", UNKNOWN_VENDOR_MESSAGE)

    if await users.get_by_name(vendor.ven_des) is not None:
        raise FormValidationError.single("co_ven", "An account with this vendor name already exists.")

    user = await users.create(User(name=vendor.ven_des, co_ven=co_ven, password_hash=hash_password(password)))
    logger.info(f"Registered vendor {co_ven} as user {user.id}")
    return user
