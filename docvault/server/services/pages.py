"""
Page rendering helpers.

Page routes return a ``PagePayload`` naming the frontend component and its
props. Form submissions answer with a 303 redirect and leave a one-shot flash
message in the session, which the next rendered page picks up.
"""

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import RedirectResponse

from docvault.core.database.entities.users import User
from docvault.core.models.io import FlashMessages, PagePayload, UserRead
from docvault.server.exception_handlers import FormValidationError

FLASH_KEY = "_flash"


def flash(request: Request, message: str, kind: str = "success") -> None:
    """Store a message for the next rendered page."""
    messages = dict(request.session.get(FLASH_KEY) or {})
    messages[kind] = message
    request.session[FLASH_KEY] = messages


def pop_flash(request: Request) -> FlashMessages:
    """Read and remove the pending flash messages."""
    return FlashMessages(**(request.session.pop(FLASH_KEY, None) or {}))


def page_url(request: Request) -> str:
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return url


def render(
    request: Request,
    component: str,
    props: Optional[Dict[str, Any]] = None,
    user: Optional[User] = None,
) -> Dict[str, Any]:
    """Build the page object for ``component``."""
    shared: Dict[str, Any] = {"auth": {"user": UserRead.model_validate(user) if user is not None else None}}
    shared.update(props or {})
    payload = PagePayload(
        component=component,
        props=jsonable_encoder(shared),
        url=page_url(request),
        flash=pop_flash(request),
    )
    return payload.model_dump()


def redirect(url: str) -> RedirectResponse:
    """Redirect after a form submission (303 See Other)."""
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def redirect_back(request: Request, fallback: str) -> RedirectResponse:
    """Redirect to the page the request came from, or ``fallback``."""
    return redirect(request.headers.get("referer") or fallback)


async def submitted_data(request: Request) -> Dict[str, Any]:
    """Body of a form or JSON submission as a plain dict (uploaded files excluded)."""
    if request.headers.get("content-type", "").startswith("application/json"):
        try:
            data = await request.json()
        except ValueError as e:
            raise FormValidationError.single("request", "The request body must be valid JSON.") from e
        if not isinstance(data, dict):
            raise FormValidationError.single("request", "The request body must be a JSON object.")
        return data
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}
