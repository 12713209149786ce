"""
Service layer of the DocVault server.

Modules:
- deps: FastAPI dependencies (sessions, repositories, storage, current user)
- pages: Page payloads, flash messages and redirects
- auth: Login, logout and vendor registration
- document_files: Upload validation and storage layout of document files
- pdf_splitter: Temporary files of the PDF splitter tool (PyMuPDF)
- client_export: XLSX client/category matrix (openpyxl)
"""
