"""
Client Endpoints.

Clients come from the legacy ERP and are filtered by the zone or vendor of the
logged-in user. Document statistics are merged in from the primary database.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.responses import StreamingResponse
from starlette.concurrency import run_in_threadpool

from docvault.core.formatting import format_bytes
from docvault.core.logging_config import get_logger
from docvault.core.models.io import (
    CategoryRead,
    ClientDetail,
    ClientListItem,
    ClientStats,
    DocumentRead,
    Paginated,
)
from docvault.server.core.config import settings
from docvault.server.services.client_export import XLSX_MEDIA_TYPE, build_client_matrix
from docvault.server.services.deps import CategoriesDep, ClientsDep, CurrentUser, DocumentsDep
from docvault.server.services.pages import render

logger = get_logger(__name__)

router = APIRouter(tags=["clients"])


@router.get(
    "/clients",
    summary="List Clients",
    description="Paginated clients visible to the user, with document statistics.",
    responses={401: {"description": "Not logged in"}},
)
async def list_clients(
    request: Request,
    user: CurrentUser,
    clients: ClientsDep,
    documents: DocumentsDep,
    categories: CategoriesDep,
    search: Optional[str] = None,
    status_filter: Optional[str] = Query(default=None, alias="status"),
    file_status: Optional[str] = None,
    page: int = Query(default=1, ge=1),
):
    """
    List clients.

    - **search**: Matches client code, name or tax id
    - **status**: ``active`` or ``inactive``
    - **file_status**: ``with_files`` or ``without_files``
    - **page**: Page number (15 clients per page)
    """
    codes_with_files = await documents.client_codes_with_documents() if file_status else None
    result = await clients.paginate(
        user,
        page=page,
        per_page=settings.clients_per_page,
        search=search,
        status=status_filter,
        file_status=file_status,
        codes_with_files=codes_with_files,
    )

    codes = [client.co_cli for client in result.items]
    totals = await documents.counts_by_client(codes)
    covered = await documents.category_counts_by_client(codes)
    all_category_ids = {category.id for category in await categories.list()}

    rows = []
    for client in result.items:
        count, size = totals.get(client.co_cli, (0, 0))
        client_categories = set(covered.get(client.co_cli, {}))
        rows.append(
            ClientListItem.model_validate(client).model_copy(
                update={
                    "documents_count": count,
                    "categories_count": len(client_categories),
                    "is_complete": bool(all_category_ids) and all_category_ids <= client_categories,
                    "formatted_total_size": format_bytes(size),
                }
            )
        )

    return render(
        request,
        "clients/index",
        {
            "clients": Paginated.build(result, rows),
            "filters": {"search": search, "status": status_filter, "file_status": file_status},
        },
        user,
    )


@router.get(
    "/clients/export-matrix",
    summary="Export Client Matrix",
    description="XLSX workbook with the number of documents per client and category.",
    response_class=StreamingResponse,
    responses={200: {"content": {XLSX_MEDIA_TYPE: {}}, "description": "The workbook"}},
)
async def export_matrix(
    user: CurrentUser,
    clients: ClientsDep,
    documents: DocumentsDep,
    categories: CategoriesDep,
):
    active = await clients.active_options(user)
    all_categories = await categories.list()
    counts = await documents.category_counts_by_client([client.co_cli for client in active])

    workbook = await run_in_threadpool(build_client_matrix, active, all_categories, counts)
    filename = f"client-documents-{datetime.now():%Y-%m-%d}.xlsx"
    logger.info(f"User {user.id} exported the document matrix of {len(active)} clients")
    return StreamingResponse(
        workbook,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    "/clients/{code}",
    summary="Show Client",
    description="Client details with its documents and statistics.",
    responses={404: {"description": "Client not found or not accessible"}},
)
async def show_client(
    code: str,
    request: Request,
    user: CurrentUser,
    clients: ClientsDep,
    documents: DocumentsDep,
    categories: CategoriesDep,
):
    client = await clients.get_accessible(user, code)
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found.")

    client_documents = [DocumentRead.model_validate(doc) for doc in await documents.for_client(client.co_cli)]
    total_size = sum(doc.file_size for doc in client_documents)
    category_names = []
    for doc in client_documents:
        if doc.category is not None and doc.category.name not in category_names:
            category_names.append(doc.category.name)

    stats = ClientStats(
        total_documents=len(client_documents),
        total_size=total_size,
        formatted_size=format_bytes(total_size),
        categories=category_names,
    )

    return render(
        request,
        "clients/show",
        {
            "client": ClientDetail.model_validate(client).model_copy(update={"documents": client_documents}),
            "stats": stats,
            "categories": [CategoryRead.model_validate(category) for category in await categories.list()],
        },
        user,
    )
