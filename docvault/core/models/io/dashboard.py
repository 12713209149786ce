"""Dashboard I/O models."""

from __future__ import annotations

from pydantic import BaseModel

from .documents import ClientSummary


class DashboardStats(BaseModel):
    total_clients: int
    total_documents: int
    total_storage: int
    formatted_storage: str
    total_downloads: int


class RecentDocument(BaseModel):
    id: int
    title: str
    formatted_size: str
    created_at: str
    client: ClientSummary


class TopClient(BaseModel):
    id: str
    code: str
    name: str
    documents_count: int
    formatted_total_size: str
