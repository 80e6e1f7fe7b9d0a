"""Office Open XML (.xlsx, .xlsm) reader built on openpyxl."""

from __future__ import annotations

import logging
import re
import warnings
from datetime import date, time, timedelta
from typing import Any, BinaryIO

import openpyxl
from openpyxl.cell.cell import Cell
from openpyxl.styles.numbers import is_date_format
from openpyxl.worksheet.worksheet import Worksheet

from ..exceptions import SheetRangeError
from ..models import SheetMetadata, SheetType, SheetVisibility
from .base import BaseReader, CellError, ExcelDateTime, RawRow, crop_to_bounds

logger = logging.getLogger(__name__)

# openpyxl warns with this text, then stores the cell as a #VALUE! error
DATE_OUT_OF_RANGE = re.compile(r"Cell (\S+) is marked as a date but the serial value")


class XlsxReader(BaseReader):
    """Reads cached cell values from an Office Open XML workbook."""

    format = "xlsx"

    def __init__(self, stream: BinaryIO):
        super().__init__(stream)
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            self.workbook = openpyxl.load_workbook(
                stream,
                read_only=False,
                data_only=True,  # Cached results, not formula text
                keep_links=False,
            )

        # Coordinates whose date serial openpyxl could not convert
        self._bad_date_cells = set()
        for warning in caught:
            match = DATE_OUT_OF_RANGE.search(str(warning.message))
            if match:
                self._bad_date_cells.add(match.group(1))
            else:
                logger.debug("openpyxl: %s", warning.message)

    @property
    def sheet_names(self) -> list[str]:
        return list(self.workbook.sheetnames)

    def sheets_metadata(self) -> list[SheetMetadata]:
        sheets = []
        for sheet_name in self.workbook.sheetnames:
            sheet = self.workbook[sheet_name]
            sheets.append(SheetMetadata(
                name=sheet_name,
                visibility=self._get_visibility(sheet),
                sheet_type=(
                    SheetType.WORKSHEET if isinstance(sheet, Worksheet)
                    else SheetType.CHARTSHEET
                ),
            ))
        return sheets

    def worksheet_range(self, sheet_name: str) -> list[RawRow]:
        if sheet_name not in self.workbook.sheetnames:
            raise SheetRangeError(sheet_name, f"Worksheet '{sheet_name}' not found")

        sheet = self.workbook[sheet_name]
        if not isinstance(sheet, Worksheet):
            raise SheetRangeError(sheet_name, f"'{sheet_name}' is not a worksheet")

        rows = [
            [self._raw_value(cell) for cell in row]
            for row in sheet.iter_rows()
        ]
        return crop_to_bounds(rows)

    def close(self) -> None:
        self.workbook.close()
        super().close()

    def _get_visibility(self, sheet) -> SheetVisibility:
        """Get sheet visibility state."""
        state = getattr(sheet, "sheet_state", "visible")
        if state == "hidden":
            return SheetVisibility.HIDDEN
        elif state == "veryHidden":
            return SheetVisibility.VERY_HIDDEN
        else:
            return SheetVisibility.VISIBLE

    def _is_bad_date(self, cell: Cell) -> bool:
        """Whether an error cell is really a date serial out of range."""
        return (
            cell.value == "#VALUE!"
            and cell.coordinate in self._bad_date_cells
            and is_date_format(cell.number_format)
        )

    def _raw_value(self, cell: Cell) -> Any:
        """Convert an openpyxl cell to a raw value."""
        value = cell.value
        if value is None:
            return None

        if cell.data_type == "e":
            if self._is_bad_date(cell):
                return ExcelDateTime(None, epoch=self.workbook.epoch)
            return CellError(str(value))

        # openpyxl already turned date-styled numbers into date/time objects
        if isinstance(value, (date, time, timedelta)):
            return ExcelDateTime(value, epoch=self.workbook.epoch)

        return value
