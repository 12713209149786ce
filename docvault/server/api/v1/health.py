"""
Health Check Endpoints.

``/health`` pings the primary and the legacy databases so deployments notice a
lost ERP connection; ``/version`` reports the server and page schema versions.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from docvault.core.logging_config import get_logger
from docvault.server.core import constant
from docvault.server.services.deps import LegacySessionDep, SessionDep

logger = get_logger(__name__)

router = APIRouter()


async def _ping(name: str, session: AsyncSession) -> str:
    try:
        await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check: {name} database unreachable: {e}")
        return "unavailable"
    return "ok"


@router.get(
    "/health",
    summary="Health Check",
    description="Check that the server and both databases are reachable.",
    responses={503: {"description": "A database is unreachable"}},
)
async def health_check(session: SessionDep, legacy_session: LegacySessionDep):
    databases = {
        "primary": await _ping("primary", session),
        "legacy": await _ping("legacy", legacy_session),
    }
    healthy = all(state == "ok" for state in databases.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ok" if healthy else "degraded", "databases": databases},
    )


@router.get("/version", summary="Get Version")
async def version():
    return {"version": constant.VERSION, "schema_version": constant.SCHEMA_VERSION}
