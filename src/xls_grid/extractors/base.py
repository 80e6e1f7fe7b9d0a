"""Base reader protocol and the raw cell values readers produce."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, BinaryIO

from openpyxl.utils.datetime import CALENDAR_WINDOWS_1900, from_excel

from ..models import SheetMetadata

# A raw row is a list of: None, bool, int, float, str, ExcelDateTime,
# DateTimeIso, DurationIso or CellError.
RawRow = list[Any]


class DateTimeIso(str):
    """ISO 8601 date/time text that the reader left unresolved."""

    __slots__ = ()


class DurationIso(str):
    """ISO 8601 duration text (e.g. ``PT13H07M09S``)."""

    __slots__ = ()


@dataclass(frozen=True)
class CellError:
    """An error cell, identified by its code (e.g. ``#N/A``)."""

    code: str

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class ExcelDateTime:
    """A date/time cell that is tied to the workbook's calendar.

    Attributes:
        value: What the reader produced: a datetime, date, time or
            timedelta, a raw serial day number, or None when the serial
            had no date equivalent.
        epoch: Day zero of the workbook's date system.
    """

    value: Any
    epoch: datetime = CALENDAR_WINDOWS_1900

    def as_datetime(self) -> datetime | None:
        """Resolve to a naive calendar datetime.

        Returns:
            The datetime, or None if the value has no calendar equivalent
        """
        value = self.value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                value = from_excel(value, self.epoch)
            except (OverflowError, ValueError):
                return None

        try:
            if isinstance(value, datetime):
                return value.replace(tzinfo=None)
            if isinstance(value, date):
                return datetime.combine(value, time())
            if isinstance(value, time):
                return datetime.combine(self.epoch.date(), value.replace(tzinfo=None))
            if isinstance(value, timedelta):
                return self.epoch + value
        except OverflowError:
            return None
        return None


class BaseReader(ABC):
    """Base class for all workbook readers.

    A reader owns one opened workbook. It is created from a binary stream
    and must be closed when no longer needed.
    """

    format: str = "base"

    def __init__(self, stream: BinaryIO):
        """Initialize reader.

        Args:
            stream: Binary stream holding the whole workbook

        Raises:
            Exception: Whatever the underlying library raises for input it
                cannot open. The access layer turns it into
                WorkbookOpenError.
        """
        self.stream = stream

    @property
    @abstractmethod
    def sheet_names(self) -> list[str]:
        """Sheet names in workbook order."""

    @abstractmethod
    def sheets_metadata(self) -> list[SheetMetadata]:
        """Name, visibility and type of every sheet, in workbook order."""

    @abstractmethod
    def worksheet_range(self, sheet_name: str) -> list[RawRow]:
        """Read the populated range of a sheet as raw rows.

        Args:
            sheet_name: Name of the sheet to read

        Returns:
            Rows of raw values; empty if the sheet holds no data

        Raises:
            SheetRangeError: If the sheet is missing or cannot be decoded
        """

    def close(self) -> None:
        """Release the workbook."""
        self.stream.close()


def populated_bounds(rows: list[RawRow]) -> tuple[int, int, int, int] | None:
    """Bounding box of the non-empty cells in a list of rows.

    Returns:
        (first_row, last_row, first_col, last_col), 0-based and inclusive,
        or None if every cell is empty
    """
    first_row = last_row = first_col = last_col = None
    for r, row in enumerate(rows):
        cols = [c for c, value in enumerate(row) if value is not None]
        if not cols:
            continue
        if first_row is None:
            first_row = r
        last_row = r
        first_col = cols[0] if first_col is None else min(first_col, cols[0])
        last_col = cols[-1] if last_col is None else max(last_col, cols[-1])

    if first_row is None:
        return None
    return first_row, last_row, first_col, last_col


def crop_to_bounds(rows: list[RawRow]) -> list[RawRow]:
    """Crop rows to the populated bounding box, padding short rows with None."""
    bounds = populated_bounds(rows)
    if bounds is None:
        return []

    first_row, last_row, first_col, last_col = bounds
    width = last_col - first_col + 1
    cropped = []
    for row in rows[first_row : last_row + 1]:
        cells = row[first_col : last_col + 1]
        cropped.append(cells + [None] * (width - len(cells)))
    return cropped
