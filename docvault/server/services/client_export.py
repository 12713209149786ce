"""
Client Document Matrix Export.

Builds an XLSX workbook with one row per client and one column per category,
each cell holding the number of documents the client has in that category.
"""

from io import BytesIO
from typing import Dict, List

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from docvault.core.database.entities.categories import Category
from docvault.core.database.entities.legacy import LegacyClient

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_HEADER_FILL = PatternFill(start_color="FFD9E1F2", end_color="FFD9E1F2", fill_type="solid")
_MISSING_FILL = PatternFill(start_color="FFFD5F67", end_color="FFFD5F67", fill_type="solid")


def build_client_matrix(
    clients: List[LegacyClient],
    categories: List[Category],
    counts: Dict[str, Dict[int, int]],
) -> BytesIO:
    """
    Write the client/category matrix to an in-memory workbook.

    Args:
        clients: Clients, one row each, in output order
        categories: Categories, one column each, in output order
        counts: ``client code -> {category id: documents}``

    Returns:
        The saved workbook, rewound
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Documents"

    header = ["Code", "Client", "Tax ID"] + [category.name for category in categories] + ["Total"]
    ws.append(header)
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.fill = _HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)

    for client in clients:
        client_counts = counts.get(client.co_cli, {})
        values = [client_counts.get(category.id, 0) for category in categories]
        ws.append([client.co_cli, client.cli_des or "", client.rif or ""] + values + [sum(values)])

        row = ws.max_row
        for offset, value in enumerate(values):
            if value == 0:
                ws.cell(row=row, column=4 + offset).fill = _MISSING_FILL

    ws.freeze_panes = "D2"
    ws.column_dimensions["A"].width = 14
    ws.column_dimensions["B"].width = 40
    ws.column_dimensions["C"].width = 16

    bio = BytesIO()
    wb.save(bio)
    bio.seek(0)
    return bio
