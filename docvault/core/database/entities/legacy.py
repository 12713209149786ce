"""
Legacy ERP entity models.

These tables belong to the back-office ERP and are only ever read by
DocVault. Column names follow the ERP (Spanish abbreviations) so the mapping
works against the production schema unchanged. Every text column uses
``LegacyText`` so values come back trimmed.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from ..base import LegacyBase, LegacyText

ACTIVE_VENDOR_TYPE = "A"


class LegacyClient(LegacyBase, table=True):
    """Client of the commercial department.

    Table: clientes
    """

    __tablename__ = "clientes"
    __table_args__ = ({"extend_existing": True},)

    co_cli: str = Field(primary_key=True, sa_type=LegacyText(20), description="Client code")
    cli_des: Optional[str] = Field(default=None, sa_type=LegacyText(255), description="Client name")
    co_seg: Optional[str] = Field(default=None, sa_type=LegacyText(20), description="Segment code")
    co_ven: Optional[str] = Field(default=None, sa_type=LegacyText(20), description="Vendor code")
    direc1: Optional[str] = Field(default=None, sa_type=LegacyText(500), description="Address")
    telefonos: Optional[str] = Field(default=None, sa_type=LegacyText(100), description="Phone numbers")
    rif: Optional[str] = Field(default=None, sa_type=LegacyText(30), description="Tax identifier")
    email: Optional[str] = Field(default=None, sa_type=LegacyText(255))
    inactivo: bool = Field(default=False, description="Whether the client is inactive")

    @property
    def is_active(self) -> bool:
        return not self.inactivo

    def __repr__(self) -> str:
        return f"LegacyClient(co_cli={self.co_cli}, cli_des={self.cli_des})"


class Segment(LegacyBase, table=True):
    """Commercial segment; its description encodes the zone.

    Table: segmento
    """

    __tablename__ = "segmento"
    __table_args__ = ({"extend_existing": True},)

    co_seg: str = Field(primary_key=True, sa_type=LegacyText(20))
    seg_des: Optional[str] = Field(default=None, sa_type=LegacyText(255))


class Vendor(LegacyBase, table=True):
    """Sales representative.

    Table: vendedor
    """

    __tablename__ = "vendedor"
    __table_args__ = ({"extend_existing": True},)

    co_ven: str = Field(primary_key=True, sa_type=LegacyText(20))
    ven_des: Optional[str] = Field(default=None, sa_type=LegacyText(255))
    tipo: Optional[str] = Field(default=None, sa_type=LegacyText(1))
