"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and the frontend. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- pages: Page payload and flash messages
- pagination: Paginated lists
- users: Authenticated user and user references
- categories: Category I/O models
- documents: Document I/O models
- clients: Legacy client I/O models
- dashboard: Dashboard statistics
- splitter: PDF splitter requests and results
"""

from .categories import CategoryRead, CategoryShare, CategoryWithCount
from .clients import ClientDetail, ClientListItem, ClientOption, ClientRead, ClientStats
from .dashboard import DashboardStats, RecentDocument, TopClient
from .documents import ClientSummary, DocumentListItem, DocumentRead, DocumentSearchResult, DocumentUpdate
from .pages import FlashMessages, PagePayload
from .pagination import Paginated
from .splitter import (
    CleanupRequest,
    DownloadRequest,
    FailureResult,
    SaveResult,
    SaveToClientRequest,
    SplitRequest,
    SplitResult,
    UploadResult,
)
from .users import UserRead, UserSummary

__all__ = [
    "CategoryRead",
    "CategoryShare",
    "CategoryWithCount",
    "CleanupRequest",
    "ClientDetail",
    "ClientListItem",
    "ClientOption",
    "ClientRead",
    "ClientStats",
    "ClientSummary",
    "DashboardStats",
    "DocumentListItem",
    "DocumentRead",
    "DocumentSearchResult",
    "DocumentUpdate",
    "DownloadRequest",
    "FailureResult",
    "FlashMessages",
    "PagePayload",
    "Paginated",
    "RecentDocument",
    "SaveResult",
    "SaveToClientRequest",
    "SplitRequest",
    "SplitResult",
    "TopClient",
    "UploadResult",
    "UserRead",
    "UserSummary",
]
