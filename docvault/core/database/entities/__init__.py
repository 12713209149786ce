"""
Database entity models.

Modules:
- users: User accounts (zone managers and vendors)
- categories: Document categories
- documents: Stored PDF documents
- legacy: Read-only tables of the legacy ERP database (clients, segments, vendors)
"""

from . import categories, documents, legacy, users

__all__ = [
    "categories",
    "documents",
    "legacy",
    "users",
]
