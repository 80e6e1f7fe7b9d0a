"""
Public entry points.

Every call opens its own workbook, does one thing, and releases it; no
state is kept between calls. A workbook that cannot be opened raises
WorkbookOpenError. A sheet whose range cannot be read parses as an
empty grid.

Example:
    >>> from xls_grid import sheet_names, parse
    >>> sheet_names("report.xlsx", show_hidden=False)
    ['Summary', 'Data']
    >>> parse("report.xlsx", "Summary")[0]
    [Text(value='Region'), Text(value='Total')]
"""

from __future__ import annotations

import os
from typing import Union

from .models import Grid, SheetMetadata
from .normalize import filter_sheet_names
from .workbook import Source, open_workbook

PathLike = Union[str, "os.PathLike[str]"]
Binary = Union[bytes, bytearray, memoryview]


def sheet_names(source: Source, show_hidden: bool = True) -> list[str]:
    """List the sheet names of a workbook.

    Args:
        source: Path to the workbook, or its complete bytes.
        show_hidden: Include hidden and very hidden sheets. When False,
            only visible sheets are returned.

    Returns:
        Sheet names in workbook order.

    Raises:
        WorkbookOpenError: If the workbook cannot be opened.
    """
    with open_workbook(source) as wb:
        return filter_sheet_names(wb.sheet_names, wb.sheets_metadata, show_hidden)


def sheets_metadata(source: Source) -> list[SheetMetadata]:
    """Name, visibility and type of every sheet, in workbook order.

    Raises:
        WorkbookOpenError: If the workbook cannot be opened.
    """
    with open_workbook(source) as wb:
        return wb.sheets_metadata


def parse(source: Source, sheet_name: str) -> Grid:
    """Extract a sheet as a grid of normalized cell values.

    Args:
        source: Path to the workbook, or its complete bytes.
        sheet_name: Name of the sheet to extract.

    Returns:
        Rows of CellValue. Empty if the sheet has no data, does not exist,
        or its range could not be read.

    Raises:
        WorkbookOpenError: If the workbook cannot be opened.
    """
    with open_workbook(source) as wb:
        return wb.extract_sheet(sheet_name)


def _require_path(path: PathLike) -> PathLike:
    if not isinstance(path, (str, os.PathLike)):
        raise TypeError(f"Expected a path, got {type(path).__name__}")
    return path


def _require_binary(content: Binary) -> Binary:
    if not isinstance(content, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected bytes, got {type(content).__name__}")
    return content


def sheet_names_from_path(path: PathLike, show_hidden: bool = True) -> list[str]:
    """sheet_names() for a workbook on disk."""
    return sheet_names(_require_path(path), show_hidden)


def sheet_names_from_binary(content: Binary, show_hidden: bool = True) -> list[str]:
    """sheet_names() for a workbook held in memory."""
    return sheet_names(_require_binary(content), show_hidden)


def parse_from_path(path: PathLike, sheet_name: str) -> Grid:
    """parse() for a workbook on disk."""
    return parse(_require_path(path), sheet_name)


def parse_from_binary(content: Binary, sheet_name: str) -> Grid:
    """parse() for a workbook held in memory."""
    return parse(_require_binary(content), sheet_name)
