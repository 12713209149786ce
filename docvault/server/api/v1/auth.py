"""
Authentication Endpoints.

Welcome page, login, logout and vendor self-registration. The session is a
signed cookie managed by Starlette's ``SessionMiddleware``.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Form, HTTPException, Request, status

from docvault.core.logging_config import get_logger
from docvault.server.core.config import settings
from docvault.server.services import auth as auth_service
from docvault.server.services.deps import SESSION_USER_KEY, LookupsDep, UsersDep
from docvault.server.services.pages import redirect, render

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])

HOME_URL = "/dashboard"


async def _session_user(request: Request, users: UsersDep):
    user_id = request.session.get(SESSION_USER_KEY)
    return await users.get_by_id(user_id) if user_id is not None else None


@router.get(
    "/",
    summary="Welcome Page",
    description="Landing page; tells the frontend whether self-registration is available.",
)
async def welcome(request: Request, users: UsersDep):
    user = await _session_user(request, users)
    return render(request, "welcome", {"can_register": settings.registration_enabled}, user)


@router.get("/login", summary="Login Page")
async def login_page(request: Request, users: UsersDep):
    user = await _session_user(request, users)
    if user is not None:
        return redirect(HOME_URL)
    return render(request, "auth/login", {"can_register": settings.registration_enabled})


@router.post(
    "/login",
    summary="Log In",
    description="Check the credentials and start a session.",
    responses={
        303: {"description": "Logged in, redirected to the dashboard"},
        422: {"description": "Missing fields or wrong credentials"},
    },
)
async def login(
    request: Request,
    users: UsersDep,
    name: Annotated[Optional[str], Form()] = None,
    password: Annotated[Optional[str], Form()] = None,
):
    """
    Log a user in.

    - **name**: Login name (zone name, ``ADMIN`` or the vendor name)
    - **password**: Account password
    """
    user = await auth_service.authenticate(users, name, password)
    auth_service.login(request, user)
    return redirect(HOME_URL)


@router.post("/logout", summary="Log Out", responses={303: {"description": "Session cleared"}})
async def logout(request: Request):
    auth_service.logout(request)
    return redirect("/")


def _ensure_registration_enabled() -> None:
    if not settings.registration_enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")


@router.get("/register", summary="Registration Page")
async def register_page(request: Request):
    _ensure_registration_enabled()
    return render(request, "auth/register")


@router.post(
    "/register",
    summary="Register Vendor",
    description="Create the account of an active legacy vendor and log it in.",
    responses={
        303: {"description": "Registered, redirected to the dashboard"},
        404: {"description": "Registration is disabled"},
        422: {"description": "Invalid input or unknown vendor code"},
    },
)
async def register(
    request: Request,
    users: UsersDep,
    lookups: LookupsDep,
    co_ven: Annotated[Optional[str], Form()] = None,
    password: Annotated[Optional[str], Form()] = None,
    password_confirmation: Annotated[Optional[str], Form()] = None,
):
    """
    Register a vendor.

    - **co_ven**: Vendor code of the legacy ERP; the vendor must be active
    - **password** / **password_confirmation**: At least 8 characters, matching
    """
    _ensure_registration_enabled()
    user = await auth_service.register_vendor(users, lookups, co_ven, password, password_confirmation)
    auth_service.login(request, user)
    return redirect(HOME_URL)
