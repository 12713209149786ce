"""
Database repository layer using SQLModel.

Modules:
- base: BaseRepository interface, QueryBuilder and pagination utilities
- users: User account repository
- categories: Category repository
- documents: Document repository
- clients: Legacy client repository with zone/vendor access rules
- lookups: Legacy segment and vendor lookups
"""

from .categories import CategoryRepository
from .clients import LegacyClientRepository
from .documents import DocumentRepository
from .lookups import LegacyLookupRepository
from .users import UserRepository

__all__ = [
    "CategoryRepository",
    "DocumentRepository",
    "LegacyClientRepository",
    "LegacyLookupRepository",
    "UserRepository",
]
