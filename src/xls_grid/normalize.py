"""
Normalization of raw reader output.

map_cell() turns each raw value a reader yields into exactly one CellValue
variant. filter_sheet_names() applies the visible/not-visible split to a
workbook's sheet list.

Example:
    >>> map_cell(3)
    Integer(value=3)
    >>> map_cell(ExcelDateTime(datetime(2024, 1, 5, 13, 7, 9)))
    DateTime(value='2024-01-05T13:07:09')
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timedelta
from typing import Any

from .extractors.base import CellError, DateTimeIso, DurationIso, ExcelDateTime, RawRow
from .models import (
    EMPTY,
    Boolean,
    CellValue,
    DateTime,
    DateTimeText,
    DurationText,
    ErrorText,
    Grid,
    Integer,
    Real,
    SheetMetadata,
    Text,
)

INVALID_DATETIME = "Invalid DateTime"

# Integer payloads are 64-bit signed
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def format_datetime(value: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS``, dropping sub-seconds and timezone."""
    return value.replace(microsecond=0, tzinfo=None).isoformat()


def map_cell(raw: Any) -> CellValue:
    """Map a raw reader value to its CellValue variant.

    Numbers keep the reader's own int/float classification, except that
    integers outside the 64-bit signed range become Real. The mapping
    never raises: values of unknown types become Text of their str().
    """
    if raw is None:
        return EMPTY
    # bool before int: bool is an int subclass
    if isinstance(raw, bool):
        return Boolean(raw)
    if isinstance(raw, int):
        if INT64_MIN <= raw <= INT64_MAX:
            return Integer(raw)
        return _wide_integer(raw)
    if isinstance(raw, float):
        return Real(raw)
    if isinstance(raw, CellError):
        return ErrorText(str(raw))
    if isinstance(raw, (date, time, timedelta)):
        raw = ExcelDateTime(raw)
    if isinstance(raw, ExcelDateTime):
        resolved = raw.as_datetime()
        if resolved is None:
            return DateTime(INVALID_DATETIME)
        return DateTime(format_datetime(resolved))
    # Tagged strings before plain str
    if isinstance(raw, DateTimeIso):
        return DateTimeText(str(raw))
    if isinstance(raw, DurationIso):
        return DurationText(str(raw))
    if isinstance(raw, str):
        return Text(raw)
    return Text(str(raw))


def _wide_integer(raw: int) -> CellValue:
    """An integer outside the 64-bit range, as the nearest float."""
    try:
        return Real(float(raw))
    except OverflowError:
        return Text(str(raw))


def map_rows(rows: Iterable[RawRow]) -> Grid:
    """Map every cell of every row, keeping row lengths as they are."""
    return [[map_cell(value) for value in row] for row in rows]


def filter_sheet_names(
    names: Sequence[str],
    metadata: Iterable[SheetMetadata],
    show_hidden: bool,
) -> list[str]:
    """Select sheet names by visibility.

    With show_hidden, ``names`` is returned as given and metadata is not
    consulted. Otherwise the result is the visible sheets in metadata order;
    hidden and very hidden sheets are dropped, as is any sheet that only
    one of ``names`` and ``metadata`` lists.
    """
    if show_hidden:
        return list(names)
    known = set(names)
    return [sheet.name for sheet in metadata if sheet.is_visible and sheet.name in known]
