"""
xls-grid: Spreadsheet sheets as grids of typed cell values.

This library opens .xlsx/.xlsm and .ods workbooks from a path or from
bytes, lists their sheets, and extracts a sheet as rows of cell values
drawn from a fixed set of tagged variants (Integer, Real, Text, Boolean,
DateTime, DateTimeText, DurationText, ErrorText, Empty).

Basic usage:
    >>> from xls_grid import sheet_names, parse
    >>> sheet_names("workbook.xlsx", show_hidden=False)
    ['Summary']
    >>> grid = parse("workbook.xlsx", "Summary")
    >>> grid[0][0].to_dict()
    {'type': 'string', 'value': 'Region'}

From memory:
    >>> from xls_grid import parse_from_binary
    >>> grid = parse_from_binary(content, "Summary")
"""

from .api import (
    parse,
    parse_from_binary,
    parse_from_path,
    sheet_names,
    sheet_names_from_binary,
    sheet_names_from_path,
    sheets_metadata,
)
from .exceptions import SheetRangeError, WorkbookOpenError, XlsGridError
from .models import (
    # Cell values
    EMPTY,
    Boolean,
    CellTag,
    CellValue,
    DateTime,
    DateTimeText,
    DurationText,
    Empty,
    ErrorText,
    Grid,
    Integer,
    Real,
    Text,
    cell_from_dict,
    grid_to_dicts,
    # Sheets
    SheetMetadata,
    SheetType,
    SheetVisibility,
)
from .normalize import filter_sheet_names, map_cell
from .workbook import WorkbookHandle, detect_format, open_workbook

__version__ = "0.1.0"

__all__ = [
    # Main API
    "sheet_names",
    "sheet_names_from_path",
    "sheet_names_from_binary",
    "parse",
    "parse_from_path",
    "parse_from_binary",
    "sheets_metadata",
    # Access layer
    "open_workbook",
    "WorkbookHandle",
    "detect_format",
    # Normalization
    "map_cell",
    "filter_sheet_names",
    # Cell values
    "CellTag",
    "CellValue",
    "Grid",
    "Integer",
    "Real",
    "Text",
    "Boolean",
    "DateTime",
    "DateTimeText",
    "DurationText",
    "ErrorText",
    "Empty",
    "EMPTY",
    "cell_from_dict",
    "grid_to_dicts",
    # Sheets
    "SheetMetadata",
    "SheetType",
    "SheetVisibility",
    # Errors
    "XlsGridError",
    "WorkbookOpenError",
    "SheetRangeError",
]
