"""
PDF Splitter Endpoints.

The tool lets a user upload a PDF, pick pages to build a new PDF from, and
either download the result or save it as a document of one of their clients.
Intermediate files live in the splitter temp directory of the storage disk.
"""

from pathlib import PurePosixPath
from typing import Annotated, Optional

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status
from fastapi.responses import FileResponse, JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile as StarletteUploadFile

from docvault.core.database.entities.documents import PDF_MIME_TYPE, Document
from docvault.core.logging_config import get_logger
from docvault.core.models.io import (
    CategoryRead,
    CleanupRequest,
    ClientOption,
    DocumentRead,
    DownloadRequest,
    FailureResult,
    SaveResult,
    SaveToClientRequest,
    SplitRequest,
    SplitResult,
    UploadResult,
)
from docvault.core.monitoring import log_document_event, log_error
from docvault.server.core.config import settings
from docvault.server.exception_handlers import FormValidationError, errors_from_pydantic
from docvault.server.services.deps import (
    CategoriesDep,
    ClientsDep,
    CurrentUser,
    DocumentsDep,
    SplitterDep,
    StorageDep,
)
from docvault.server.services.document_files import (
    available_path,
    client_folder,
    sanitize_filename,
    validate_pdf_upload,
)
from docvault.server.services.pages import render, submitted_data
from docvault.server.services.pdf_splitter import InvalidPdfError, PageOutOfRangeError, TempFileNotFoundError

logger = get_logger(__name__)

router = APIRouter(prefix="/tools/pdf-splitter", tags=["pdf-splitter"])

INVALID_PDF_MESSAGE = "The file could not be read as a PDF."
SAVE_FAILED_MESSAGE = "Error saving the file."
SAVED_MESSAGE = "Document saved successfully."
TEMP_NOT_FOUND_MESSAGE = "The temporary file does not exist."


def _failure(message: str, status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=FailureResult(message=message).model_dump())


@router.get(
    "",
    summary="PDF Splitter Page",
    description="Clients the user may save documents to, and the categories.",
    responses={401: {"description": "Not logged in"}},
)
async def splitter_page(request: Request, user: CurrentUser, clients: ClientsDep, categories: CategoriesDep):
    return render(
        request,
        "tools/pdf-splitter",
        {
            "clients": [ClientOption.model_validate(client) for client in await clients.active_options(user)],
            "categories": [CategoryRead.model_validate(item) for item in await categories.list()],
        },
        user,
    )


@router.post(
    "/upload",
    summary="Upload PDF",
    description="Keep a PDF in the temp directory and report its page count. Stale temp files are removed first.",
    response_model=UploadResult,
    responses={422: {"description": "Missing file or unreadable PDF"}},
)
async def upload_pdf(
    user: CurrentUser,
    splitter: SplitterDep,
    pdf: Annotated[Optional[UploadFile], File()] = None,
):
    await validate_pdf_upload(pdf, settings.max_upload_kb, field="pdf")
    try:
        temp_path, page_count = await run_in_threadpool(splitter.store_upload, pdf.file)
    except InvalidPdfError as e:
        logger.info(f"Rejected unreadable PDF {pdf.filename!r} from user {user.id}: {e}")
        return _failure(INVALID_PDF_MESSAGE)
    return UploadResult(temp_path=temp_path, page_count=page_count, filename=pdf.filename)


@router.post(
    "/split",
    summary="Split PDF",
    description="Build a new PDF from pages of an uploaded PDF, in the given order.",
    response_model=SplitResult,
    responses={
        404: {"description": "Unknown temporary file"},
        422: {"description": "Invalid request or pages out of range"},
    },
)
async def split_pdf(payload: SplitRequest, user: CurrentUser, splitter: SplitterDep):
    """
    Split an uploaded PDF.

    - **temp_path**: Path returned by the upload
    - **pages**: 1-based page numbers, in output order
    """
    try:
        split_path, page_count = await run_in_threadpool(splitter.split, payload.temp_path, payload.pages)
    except TempFileNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TEMP_NOT_FOUND_MESSAGE)
    except PageOutOfRangeError as e:
        return _failure(str(e))
    return SplitResult(split_path=split_path, page_count=page_count)


@router.post(
    "/save-to-client",
    summary="Save To Client",
    description=(
        "Store a split PDF (``split_path``, JSON) or an uploaded PDF (``pdf``, multipart) "
        "as a document of a client."
    ),
    response_model=SaveResult,
    responses={422: {"description": "Invalid request, or the file could not be saved"}},
)
async def save_to_client(
    request: Request,
    user: CurrentUser,
    clients: ClientsDep,
    documents: DocumentsDep,
    categories: CategoriesDep,
    storage: StorageDep,
    splitter: SplitterDep,
):
    """
    Save a PDF as a client document.

    - **client_id**: Client code, must be accessible to the user
    - **title**: Document title, also used to name the stored file
    - **category_id**: Optional existing category id
    - **description**: Optional description
    """
    user_id = user.id
    upload = None
    if request.headers.get("content-type", "").startswith("multipart/form-data"):
        form = await request.form()
        candidate = form.get("pdf")
        upload = candidate if isinstance(candidate, StarletteUploadFile) else None

    try:
        data = SaveToClientRequest.model_validate(await submitted_data(request))
    except ValidationError as e:
        raise FormValidationError(errors_from_pydantic(e.errors())) from e

    if upload is not None:
        await validate_pdf_upload(upload, settings.max_upload_kb, field="pdf")
    elif not data.split_path:
        raise FormValidationError.single("pdf", "The pdf field is required.")

    if data.category_id is not None and await categories.get_by_id(data.category_id) is None:
        raise FormValidationError.single("category_id", "The selected category id is invalid.")

    target = None
    document = None
    try:
        client = await clients.get_accessible(user, data.client_id)
        if client is None:
            raise LookupError(f"Client {data.client_id} is not accessible to user {user.id}")

        target = await run_in_threadpool(
            available_path, storage, f"{client_folder(client.co_cli)}/{sanitize_filename(data.title)}"
        )
        if upload is not None:
            stored = await run_in_threadpool(storage.put_stream, target, upload.file)
        else:
            source = await run_in_threadpool(splitter.resolve, data.split_path)
            stored = await run_in_threadpool(storage.copy, storage.relative(source), target)
        size = await run_in_threadpool(storage.size, stored)

        document = await documents.create(
            Document(
                client_id=client.co_cli,
                uploaded_by=user_id,
                title=data.title,
                description=data.description,
                category_id=data.category_id,
                filename=PurePosixPath(stored).name,
                file_path=stored,
                file_size=size,
                mime_type=PDF_MIME_TYPE,
            )
        )

        if data.split_path:
            await run_in_threadpool(splitter.discard, data.split_path)
    except Exception as e:
        await documents.session.rollback()
        if target is not None and document is None:
            await run_in_threadpool(storage.delete, target)
        logger.error(f"Error saving processed PDF: {e}", exc_info=True)
        log_error(type(e).__name__, str(e), {"client_id": data.client_id, "user_id": user_id})
        return _failure(SAVE_FAILED_MESSAGE)

    logger.info(f"User {user.id} saved split PDF as document {document.id} of client {client.co_cli}")
    log_document_event("uploaded", document.id, client.co_cli, user.id)
    return SaveResult(document=DocumentRead.model_validate(document), message=SAVED_MESSAGE)


@router.post(
    "/download",
    summary="Download Split PDF",
    response_class=FileResponse,
    responses={404: {"description": "Unknown temporary file"}, 422: {"description": "Invalid request"}},
)
async def download_split(request: Request, user: CurrentUser, splitter: SplitterDep):
    """
    Download a split PDF.

    - **split_path**: Path returned by the split
    - **filename**: Name of the downloaded file (``document.pdf`` when omitted)
    """
    try:
        data = DownloadRequest.model_validate(await submitted_data(request))
    except ValidationError as e:
        raise FormValidationError(errors_from_pydantic(e.errors())) from e

    try:
        path = await run_in_threadpool(splitter.resolve, data.split_path)
    except TempFileNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TEMP_NOT_FOUND_MESSAGE)

    filename = PurePosixPath(data.filename or "document").stem or "document"
    return FileResponse(path, media_type=PDF_MIME_TYPE, filename=sanitize_filename(filename))


@router.post(
    "/cleanup",
    summary="Discard Temporary File",
    description="Delete a temporary file of the splitter; unknown paths are ignored.",
)
async def cleanup(payload: CleanupRequest, user: CurrentUser, splitter: SplitterDep):
    removed = await run_in_threadpool(splitter.discard, payload.temp_path)
    logger.debug(f"Cleanup of {payload.temp_path} by user {user.id}: removed={removed}")
    return {"success": True}
