"""
Request Dependencies.

Provides database sessions, repositories, the storage disk and the
authenticated user to the API endpoints.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from docvault.core.database import get_legacy_session, get_session
from docvault.core.database.entities.users import User
from docvault.core.database.repositories import (
    CategoryRepository,
    DocumentRepository,
    LegacyClientRepository,
    LegacyLookupRepository,
    UserRepository,
)
from docvault.core.logging_config import get_logger
from docvault.core.storage import LocalStorage
from docvault.server.core.config import settings
from docvault.server.services.pdf_splitter import PdfSplitter

logger = get_logger(__name__)

SESSION_USER_KEY = "user_id"

SessionDep = Annotated[AsyncSession, Depends(get_session)]
LegacySessionDep = Annotated[AsyncSession, Depends(get_legacy_session)]


def get_storage() -> LocalStorage:
    """The document storage disk."""
    return LocalStorage(settings.storage.root_path)


StorageDep = Annotated[LocalStorage, Depends(get_storage)]


def get_user_repository(session: SessionDep) -> UserRepository:
    return UserRepository(session)


def get_category_repository(session: SessionDep) -> CategoryRepository:
    return CategoryRepository(session)


def get_document_repository(session: SessionDep) -> DocumentRepository:
    return DocumentRepository(session)


def get_client_repository(session: LegacySessionDep) -> LegacyClientRepository:
    return LegacyClientRepository(session)


def get_lookup_repository(session: LegacySessionDep) -> LegacyLookupRepository:
    return LegacyLookupRepository(session)


UsersDep = Annotated[UserRepository, Depends(get_user_repository)]
CategoriesDep = Annotated[CategoryRepository, Depends(get_category_repository)]
DocumentsDep = Annotated[DocumentRepository, Depends(get_document_repository)]
ClientsDep = Annotated[LegacyClientRepository, Depends(get_client_repository)]
LookupsDep = Annotated[LegacyLookupRepository, Depends(get_lookup_repository)]


async def get_current_user(request: Request, users: UsersDep) -> User:
    """
    Resolve the user logged in through the session cookie.

    Raises:
        HTTPException: 401 when there is no valid session
    """
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthenticated.")

    user = await users.get_by_id(user_id)
    if user is None:
        logger.warning(f"Session refers to missing user {user_id}; clearing it")
        request.session.clear()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthenticated.")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def get_admin_user(user: CurrentUser) -> User:
    """
    Restrict an endpoint to administrators.

    Raises:
        HTTPException: 403 for non-admin users
    """
    if not user.is_administrator:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="This action is unauthorized.")
    return user


AdminUser = Annotated[User, Depends(get_admin_user)]


def get_pdf_splitter(storage: StorageDep) -> PdfSplitter:
    return PdfSplitter(storage, settings.storage.temp_dir, settings.splitter_temp_ttl_minutes)


SplitterDep = Annotated[PdfSplitter, Depends(get_pdf_splitter)]
