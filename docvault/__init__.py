"""DocVault.

A document vault for the clients of a commercial back office: vendors and
zone managers upload, categorize and download PDF documents attached to the
clients stored in a legacy ERP database.

Core subpackages
----------------

- ``docvault.core``:

  - Formatting helpers, zone access rules and local-disk storage.
  - Database engines, SQLModel entities and async repositories for both the
    primary database and the read-only legacy database.

- ``docvault.server``:

  - The FastAPI application: authentication, dashboard, clients, documents,
    categories and the PDF splitter tool.
"""
