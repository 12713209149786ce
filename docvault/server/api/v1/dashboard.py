"""
Dashboard Endpoint.

Global statistics of the vault: active clients, documents, storage used,
downloads, the latest uploads, the clients with most documents and the most
used categories.
"""

from fastapi import APIRouter, Request

from docvault.core.formatting import diff_for_humans, format_bytes
from docvault.core.models.io import CategoryShare, DashboardStats, RecentDocument, TopClient
from docvault.server.services.deps import CategoriesDep, ClientsDep, CurrentUser, DocumentsDep
from docvault.server.services.document_files import client_summary
from docvault.server.services.pages import render

router = APIRouter(tags=["dashboard"])

RECENT_DOCUMENTS = 3
TOP_CLIENTS = 3
TOP_CATEGORIES = 5


@router.get(
    "/dashboard",
    summary="Dashboard",
    description="Statistics, recent documents, top clients and the category distribution.",
    responses={401: {"description": "Not logged in"}},
)
async def dashboard(
    request: Request,
    user: CurrentUser,
    documents: DocumentsDep,
    categories: CategoriesDep,
    clients: ClientsDep,
):
    total_documents, total_storage, total_downloads = await documents.totals()
    stats = DashboardStats(
        total_clients=await clients.count_active(),
        total_documents=total_documents,
        total_storage=total_storage,
        formatted_storage=format_bytes(total_storage),
        total_downloads=total_downloads,
    )

    recent = await documents.recent(RECENT_DOCUMENTS)
    top = await documents.top_clients(TOP_CLIENTS)
    legacy = await clients.get_many({doc.client_id for doc in recent} | {code for code, _, _ in top})

    recent_documents = [
        RecentDocument(
            id=doc.id,
            title=doc.title,
            formatted_size=format_bytes(doc.file_size),
            created_at=diff_for_humans(doc.created_at),
            client=client_summary(doc.client_id, legacy.get(doc.client_id)),
        )
        for doc in recent
    ]

    # Documents of clients missing from the ERP are left out
    top_clients = [
        TopClient(
            id=code,
            code=code,
            name=legacy[code].cli_des or code,
            documents_count=count,
            formatted_total_size=format_bytes(size),
        )
        for code, count, size in top
        if code in legacy
    ]

    distribution = [
        CategoryShare(category=category.name, count=count)
        for category, count in await categories.distribution(TOP_CATEGORIES)
    ]

    return render(
        request,
        "dashboard",
        {
            "stats": stats,
            "recent_documents": recent_documents,
            "top_clients": top_clients,
            "categories_distribution": distribution,
        },
        user,
    )
