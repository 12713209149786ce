"""Legacy client I/O models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .documents import DocumentRead


class ClientRead(BaseModel):
    """Schema for reading a legacy client."""

    co_cli: str = Field(description="Client code")
    cli_des: Optional[str] = Field(default=None, description="Client name")
    co_seg: Optional[str] = None
    co_ven: Optional[str] = None
    direc1: Optional[str] = None
    telefonos: Optional[str] = None
    rif: Optional[str] = None
    email: Optional[str] = None
    inactivo: bool = False

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def is_active(self) -> bool:
        return not self.inactivo


class ClientListItem(ClientRead):
    """Client row of the clients index."""

    documents_count: int = 0
    categories_count: int = 0
    is_complete: bool = Field(default=False, description="Whether documents cover every category")
    formatted_total_size: str = "0 B"


class ClientDetail(ClientRead):
    """Client with its documents, for the client page."""

    documents: List[DocumentRead] = Field(default_factory=list)


class ClientOption(BaseModel):
    """Client entry of selectors."""

    co_cli: str
    cli_des: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ClientStats(BaseModel):
    total_documents: int
    total_size: int
    formatted_size: str
    categories: List[str]
