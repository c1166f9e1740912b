from __future__ import annotations

import io
from typing import Sequence

from openpyxl import Workbook

from .models import Cell
from .rules import SHEET_NAME


def _cell_value(cell: Cell) -> Cell:
    # empty strings would otherwise be written as empty text cells
    if cell == "":
        return None
    return cell


def encode_workbook(rows: Sequence[Sequence[Cell]], sheet_name: str = SHEET_NAME) -> bytes:
    """Serialize rows into a single-sheet .xlsx and return the file bytes."""
    wb = Workbook(write_only=True)
    ws = wb.create_sheet(title=sheet_name)
    for row in rows:
        ws.append([_cell_value(cell) for cell in row])

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
