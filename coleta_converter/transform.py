"""
Grid reshaping for a collection submission.

The header gets the metadata column label, every non-blank data row gets
the collection date at the same position, and numeric-looking text is turned
into numbers so spreadsheet tools treat it as such.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .errors import EmptyOrInvalidInput, InvalidDateFormat, NoDataRows
from .models import Cell, CollectionMetadata, TransformedGrid
from .rules import (
    DATE_SEPARATOR,
    FILE_NAME_TEMPLATE,
    METADATA_COLUMN_INDEX,
    METADATA_HEADER,
    NUMERIC_PATTERN,
)


def split_date(date: str) -> Tuple[str, str, str]:
    """Split a ``YYYY-MM-DD`` string into its literal components."""
    parts = date.split(DATE_SEPARATOR)
    year, month, day = (parts + ["", "", ""])[:3]
    if not year or not month or not day:
        raise InvalidDateFormat()
    return year, month, day


def format_dates(date: str) -> Tuple[str, str]:
    """Return (in-sheet date, file name date) without re-padding the components."""
    year, month, day = split_date(date)
    return f"{day}/{month}/{year}", f"{day}-{month}-{year}"


def _is_blank(cell: Optional[Cell]) -> bool:
    return cell is None or str(cell).strip() == ""


def is_blank_row(row: Sequence[Optional[Cell]]) -> bool:
    return all(_is_blank(cell) for cell in row)


def coerce_cell(cell: Optional[Cell]) -> Cell:
    if not isinstance(cell, str):
        return cell
    trimmed = cell.strip()
    if trimmed == "":
        return None
    if NUMERIC_PATTERN.fullmatch(trimmed):
        return float(trimmed)
    return trimmed


def insert_metadata(row: List[Cell], value: Cell) -> List[Cell]:
    # list.insert past the end appends; short rows are not padded
    row.insert(METADATA_COLUMN_INDEX, value)
    return row


def transform_grid(grid: Sequence[Sequence[Cell]], metadata: CollectionMetadata) -> TransformedGrid:
    """
    Build the output grid for one submission.

    Raises EmptyOrInvalidInput when there is no usable header, InvalidDateFormat
    when the date doesn't have year, month and day, and NoDataRows when every
    data row is blank. The input grid is left untouched.
    """
    if not grid or len(grid[0]) == 0:
        raise EmptyOrInvalidInput()

    column_date, file_date = format_dates(metadata.date)

    rows: List[List[Cell]] = [insert_metadata(list(grid[0]), METADATA_HEADER)]
    for row in grid[1:]:
        if is_blank_row(row):
            continue
        rows.append(insert_metadata([coerce_cell(cell) for cell in row], column_date))

    if len(rows) == 1:
        raise NoDataRows()

    return TransformedGrid(rows=rows, file_date=file_date)


def build_file_name(location: str, file_date: str) -> str:
    return FILE_NAME_TEMPLATE.format(location=location, date=file_date)
