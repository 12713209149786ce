"""
Document Endpoints.

Listing, upload, metadata edition, preview, download and soft deletion of
client documents, plus the quick search used by the header search box.
"""

from typing import Annotated, List, Optional
from urllib.parse import quote

from fastapi import APIRouter, File, Form, HTTPException, Query, Request, UploadFile, status
from fastapi.responses import FileResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from docvault.core.database.entities.documents import PDF_MIME_TYPE, Document
from docvault.core.database.repositories import CategoryRepository, DocumentRepository
from docvault.core.formatting import diff_for_humans
from docvault.core.logging_config import get_logger
from docvault.core.models.io import (
    CategoryRead,
    ClientOption,
    ClientRead,
    DocumentListItem,
    DocumentRead,
    DocumentSearchResult,
    DocumentUpdate,
    Paginated,
)
from docvault.core.monitoring import log_document_event
from docvault.server.core.config import settings
from docvault.server.exception_handlers import FormValidationError, errors_from_pydantic
from docvault.server.services.deps import CategoriesDep, ClientsDep, CurrentUser, DocumentsDep, StorageDep
from docvault.server.services.document_files import (
    client_summary,
    default_title,
    generated_document_path,
    validate_pdf_upload,
)
from docvault.server.services.pages import flash, redirect, redirect_back, render, submitted_data

logger = get_logger(__name__)

router = APIRouter(tags=["documents"])

MISSING_FILE_MESSAGE = "The file does not exist on the server."
MAX_TAG_LENGTH = 50
SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 10


def client_url(code: str) -> str:
    return f"/clients/{quote(code)}"


async def resolve_category(
    categories: CategoryRepository, value: Optional[str | int], field: str = "category"
) -> Optional[int]:
    """Category id for a submitted id or name; unknown ids are rejected."""
    category_id = await categories.resolve(value)
    if category_id is not None and str(value).strip().isdigit():
        if await categories.get_by_id(category_id) is None:
            raise FormValidationError.single(field, f"The selected {field} is invalid.")
    return category_id


async def get_document_or_404(documents: DocumentRepository, document_id: int) -> Document:
    document = await documents.get_by_id(document_id)
    if document is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found.")
    return document


@router.get(
    "/documents",
    summary="List Documents",
    description="Paginated documents, newest first, with search and category filters.",
    responses={401: {"description": "Not logged in"}},
)
async def list_documents(
    request: Request,
    user: CurrentUser,
    documents: DocumentsDep,
    categories: CategoriesDep,
    clients: ClientsDep,
    search: Optional[str] = None,
    category: Optional[str] = None,
    page: int = Query(default=1, ge=1),
):
    """
    List documents.

    - **search**: Matches title, file name, client code or client name
    - **category**: Category id or name
    - **page**: Page number (20 documents per page)
    """
    client_codes = await clients.codes_matching(search) if search else None
    result = await documents.paginate(
        page=page,
        per_page=settings.documents_per_page,
        search=search,
        category=category,
        client_codes=client_codes,
    )

    legacy = await clients.get_many({doc.client_id for doc in result.items})
    rows = [
        DocumentListItem.model_validate(doc).model_copy(
            update={"client": client_summary(doc.client_id, legacy.get(doc.client_id))}
        )
        for doc in result.items
    ]

    return render(
        request,
        "documents/index",
        {
            "documents": Paginated.build(result, rows),
            "clients": [ClientOption.model_validate(client) for client in await clients.active_options(user)],
            "categories": [CategoryRead.model_validate(item) for item in await categories.list()],
            "filters": {"search": search, "category": category},
        },
        user,
    )


@router.get(
    "/search/documents",
    summary="Quick Document Search",
    description="Up to 10 documents whose title, description or file name contains the term.",
    response_model=List[DocumentSearchResult],
)
async def search_documents(
    user: CurrentUser,
    documents: DocumentsDep,
    clients: ClientsDep,
    term: str = "",
) -> List[DocumentSearchResult]:
    term = term.strip()
    if len(term) < SEARCH_MIN_LENGTH:
        return []

    found = await documents.search(term, SEARCH_LIMIT)
    legacy = await clients.get_many({doc.client_id for doc in found})
    return [
        DocumentSearchResult(
            id=doc.id,
            title=doc.title,
            client=client_summary(doc.client_id, legacy.get(doc.client_id)),
            category=doc.category.name if doc.category is not None else None,
            created_at=diff_for_humans(doc.created_at),
        )
        for doc in found
    ]


@router.get(
    "/clients/{code}/documents/create",
    summary="Upload Form",
    responses={404: {"description": "Client not found or not accessible"}},
)
async def create_document(
    code: str,
    request: Request,
    user: CurrentUser,
    clients: ClientsDep,
    categories: CategoriesDep,
):
    client = await clients.get_accessible(user, code)
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found.")
    return render(
        request,
        "documents/create",
        {
            "client": ClientRead.model_validate(client),
            "categories": [CategoryRead.model_validate(item) for item in await categories.list()],
        },
        user,
    )


@router.post(
    "/clients/{code}/documents",
    summary="Upload Document",
    description="Store a PDF for a client and record it.",
    responses={
        303: {"description": "Uploaded, redirected to the client page"},
        404: {"description": "Client not found or not accessible"},
        422: {"description": "Invalid metadata or file"},
    },
)
async def store_document(
    code: str,
    request: Request,
    user: CurrentUser,
    clients: ClientsDep,
    documents: DocumentsDep,
    categories: CategoriesDep,
    storage: StorageDep,
    file: Annotated[Optional[UploadFile], File()] = None,
    title: Annotated[Optional[str], Form(max_length=255)] = None,
    description: Annotated[Optional[str], Form(max_length=1000)] = None,
    category: Annotated[Optional[str], Form(max_length=100)] = None,
    tags: Annotated[Optional[List[str]], Form()] = None,
):
    """
    Upload a PDF for a client.

    - **file**: The PDF (``%PDF`` content, ``.pdf`` name)
    - **title**: Defaults to the file name without extension
    - **category**: Category id, or a name created when missing
    - **tags**: Free-form tags of at most 50 characters
    """
    client = await clients.get_accessible(user, code)
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found.")

    size = await validate_pdf_upload(file, settings.max_upload_kb)

    tags = [tag.strip() for tag in tags or [] if tag and tag.strip()]
    too_long = {
        f"tags.{index}": [f"The tags.{index} field must not be greater than {MAX_TAG_LENGTH} characters."]
        for index, tag in enumerate(tags)
        if len(tag) > MAX_TAG_LENGTH
    }
    if too_long:
        raise FormValidationError(too_long)

    category_id = await resolve_category(categories, category)
    title = (title or "").strip() or default_title(file.filename)

    file_path = generated_document_path(client.co_cli)
    user_id = user.id
    try:
        await run_in_threadpool(storage.put_stream, file_path, file.file)
        document = await documents.create(
            Document(
                client_id=client.co_cli,
                uploaded_by=user_id,
                title=title,
                description=(description or "").strip() or None,
                category_id=category_id,
                tags=tags or None,
                filename=file.filename,
                file_path=file_path,
                file_size=size,
                mime_type=PDF_MIME_TYPE,
            )
        )
    except Exception:
        await documents.session.rollback()
        await run_in_threadpool(storage.delete, file_path)
        logger.error(f"Upload for client {client.co_cli} by user {user_id} failed, stored file removed")
        raise

    logger.info(f"User {user.id} uploaded document {document.id} for client {client.co_cli}")
    log_document_event("uploaded", document.id, client.co_cli, user.id)

    flash(request, f"Document '{document.title}' uploaded successfully.")
    return redirect(client_url(client.co_cli))


@router.get(
    "/documents/{document_id}",
    summary="Show Document",
    responses={404: {"description": "Document not found"}},
)
async def show_document(
    document_id: int,
    request: Request,
    user: CurrentUser,
    documents: DocumentsDep,
    clients: ClientsDep,
):
    document = await get_document_or_404(documents, document_id)
    client = await clients.get_by_id(document.client_id)
    return render(
        request,
        "documents/show",
        {
            "document": DocumentRead.model_validate(document),
            "client": client_summary(document.client_id, client),
            "uploader": document.uploader.name if document.uploader is not None else None,
        },
        user,
    )


@router.put(
    "/documents/{document_id}",
    summary="Update Document",
    description="Edit title, description and category; accepts form or JSON bodies.",
    responses={
        303: {"description": "Updated, redirected back"},
        404: {"description": "Document not found"},
        422: {"description": "Invalid metadata"},
    },
)
async def update_document(
    document_id: int,
    request: Request,
    user: CurrentUser,
    documents: DocumentsDep,
    categories: CategoriesDep,
):
    """
    Update document metadata.

    - **title**: Required, at most 255 characters
    - **description**: At most 1000 characters
    - **category**: Category id or name; empty clears the category
    """
    document = await get_document_or_404(documents, document_id)

    try:
        data = DocumentUpdate.model_validate(await submitted_data(request))
    except ValidationError as e:
        raise FormValidationError(errors_from_pydantic(e.errors())) from e

    document.title = data.title
    document.description = data.description
    document.category_id = await resolve_category(categories, data.category)
    document = await documents.update(document)
    logger.info(f"User {user.id} updated document {document.id}")

    flash(request, "Document updated successfully.")
    return redirect_back(request, client_url(document.client_id))


@router.delete(
    "/documents/{document_id}",
    summary="Delete Document",
    description="Soft delete: the record is hidden and the file is kept.",
    responses={
        303: {"description": "Deleted, redirected to the client page"},
        404: {"description": "Document not found"},
    },
)
async def delete_document(
    document_id: int,
    request: Request,
    user: CurrentUser,
    documents: DocumentsDep,
):
    document = await get_document_or_404(documents, document_id)
    title, client_code = document.title, document.client_id
    await documents.soft_delete(document)
    log_document_event("deleted", document_id, client_code, user.id)

    flash(request, f"Document '{title}' deleted successfully.")
    return redirect(client_url(client_code))


@router.get(
    "/documents/{document_id}/preview",
    summary="Preview Document",
    description="The PDF served inline for the browser viewer.",
    response_class=FileResponse,
    responses={404: {"description": "Document or file not found"}},
)
async def preview_document(
    document_id: int,
    user: CurrentUser,
    documents: DocumentsDep,
    storage: StorageDep,
):
    document = await get_document_or_404(documents, document_id)
    if not storage.exists(document.file_path):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MISSING_FILE_MESSAGE)
    return FileResponse(
        storage.path(document.file_path),
        media_type=PDF_MIME_TYPE,
        filename=document.filename,
        content_disposition_type="inline",
    )


@router.get(
    "/documents/{document_id}/download",
    summary="Download Document",
    description="The PDF as an attachment named after the original file; counts the download.",
    response_class=FileResponse,
    responses={404: {"description": "Document or file not found"}},
)
async def download_document(
    document_id: int,
    user: CurrentUser,
    documents: DocumentsDep,
    storage: StorageDep,
):
    document = await get_document_or_404(documents, document_id)
    if not storage.exists(document.file_path):
        logger.warning(f"File of document {document.id} is missing: {document.file_path}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MISSING_FILE_MESSAGE)

    await documents.register_download(document)
    log_document_event("downloaded", document.id, document.client_id, user.id)
    return FileResponse(
        storage.path(document.file_path),
        media_type=document.mime_type or PDF_MIME_TYPE,
        filename=document.filename,
    )
