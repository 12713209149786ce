"""
Validation error rendering.

Form and JSON validation failures are answered with HTTP 422 and a body the
frontend maps onto its form fields::

    {"message": "The title field is required.", "errors": {"title": ["The title field is required."]}}

Both FastAPI's ``RequestValidationError`` and the application's own
``FormValidationError`` use this shape.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docvault.core.logging_config import get_logger

logger = get_logger(__name__)

# Location prefixes FastAPI adds in front of the field name
_LOCATION_ROOTS = {"body", "query", "path", "form", "header", "cookie"}


class FormValidationError(Exception):
    """Raised by handlers when submitted data breaks a business rule."""

    def __init__(self, errors: Mapping[str, Iterable[str]]):
        self.errors: Dict[str, List[str]] = {field: list(messages) for field, messages in errors.items()}
        super().__init__(self.message)

    @classmethod
    def single(cls, field: str, message: str) -> "FormValidationError":
        return cls({field: [message]})

    @property
    def message(self) -> str:
        for messages in self.errors.values():
            if messages:
                return messages[0]
        return "The given data was invalid."


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in _LOCATION_ROOTS:
        parts = parts[1:]
    return ".".join(parts) or "request"


def _humanize(error: Mapping[str, Any], field: str) -> str:
    label = field.replace("_", " ")
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "missing" or (kind in ("string_too_short", "too_short") and ctx.get("min_length") == 1):
        return f"The {label} field is required."
    if kind == "string_too_long":
        return f"The {label} field must not be greater than {ctx.get('max_length')} characters."
    if kind == "string_too_short":
        return f"The {label} field must be at least {ctx.get('min_length')} characters."
    if kind in ("int_parsing", "int_type", "int_from_float"):
        return f"The {label} field must be an integer."
    if kind in ("string_type", "list_type"):
        expected = "a string" if kind == "string_type" else "an array"
        return f"The {label} field must be {expected}."

    message = str(error.get("msg", "Invalid value."))
    return message.removeprefix("Value error, ")


def errors_from_pydantic(errors: Iterable[Mapping[str, Any]]) -> Dict[str, List[str]]:
    """Group pydantic error entries by field, with user-facing messages."""
    grouped: Dict[str, List[str]] = {}
    for error in errors:
        field = _field_name(error.get("loc", ()))
        grouped.setdefault(field, []).append(_humanize(error, field))
    return grouped


def validation_payload(errors: Dict[str, List[str]], message: Optional[str] = None) -> Dict[str, Any]:
    if message is None:
        message = FormValidationError(errors).message
    return {"message": message, "errors": errors}


async def form_validation_exception_handler(request: Request, exc: FormValidationError) -> JSONResponse:
    """Render a ``FormValidationError`` as 422."""
    logger.debug(f"Form validation failed on {request.method} {request.url.path}: {exc.errors}")
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=validation_payload(exc.errors))


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI request validation failures as 422 with per-field messages."""
    errors = errors_from_pydantic(exc.errors())
    logger.debug(f"Request validation failed on {request.method} {request.url.path}: {errors}")
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=validation_payload(errors))
