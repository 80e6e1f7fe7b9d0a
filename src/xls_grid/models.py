"""
Data models for normalized workbook contents.

This module contains the closed set of cell value variants returned by
parse(), and the sheet metadata used for visibility filtering. Every variant
carries an outward tag so a caller can tell an Integer(3) from a Real(3.0)
from a Text("3") without knowing anything about the source format.

Example:
    >>> from xls_grid import parse
    >>> grid = parse("workbook.xlsx", "Summary")
    >>> for row in grid:
    ...     print([cell.to_dict() for cell in row])
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union


# =============================================================================
# Enums
# =============================================================================


class SheetVisibility(Enum):
    """Visibility state of a worksheet.

    Attributes:
        VISIBLE: Sheet is visible in the workbook.
        HIDDEN: Sheet is hidden but can be unhidden via the UI.
        VERY_HIDDEN: Sheet is hidden and can only be unhidden via VBA.
    """

    VISIBLE = "visible"
    HIDDEN = "hidden"
    VERY_HIDDEN = "very_hidden"


class SheetType(Enum):
    """Kind of sheet behind a tab."""

    WORKSHEET = "worksheet"
    CHARTSHEET = "chartsheet"


class CellTag(Enum):
    """Outward tag of a normalized cell value.

    The values are part of the boundary contract: they appear as the
    ``type`` key of CellValue.to_dict().
    """

    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOL = "bool"
    DATETIME = "datetime"
    DATETIME_ISO = "datetime_iso"
    DURATION_ISO = "duration_iso"
    ERROR = "error"
    EMPTY = "empty"


# =============================================================================
# Sheet Metadata
# =============================================================================


@dataclass(frozen=True)
class SheetMetadata:
    """Name and visibility of a sheet, as reported by the reader.

    Attributes:
        name: Name of the sheet as shown on the tab.
        visibility: Whether the sheet is visible, hidden, or very hidden.
        sheet_type: Worksheet or chartsheet.
    """

    name: str
    visibility: SheetVisibility = SheetVisibility.VISIBLE
    sheet_type: SheetType = SheetType.WORKSHEET

    @property
    def is_visible(self) -> bool:
        """Whether the sheet is shown by default."""
        return self.visibility is SheetVisibility.VISIBLE


# =============================================================================
# Cell Values
# =============================================================================


class _Cell:
    """Behaviour shared by all cell value variants."""

    tag: ClassVar[CellTag]
    value: Any

    def to_dict(self) -> dict[str, Any]:
        """Tagged form used at the host boundary."""
        return {"type": self.tag.value, "value": self.value}


@dataclass(frozen=True)
class Integer(_Cell):
    """Exact integral numeric cell."""

    value: int
    tag: ClassVar[CellTag] = CellTag.INT


@dataclass(frozen=True)
class Real(_Cell):
    """Floating point numeric cell."""

    value: float
    tag: ClassVar[CellTag] = CellTag.FLOAT


@dataclass(frozen=True)
class Text(_Cell):
    """String cell."""

    value: str
    tag: ClassVar[CellTag] = CellTag.STRING


@dataclass(frozen=True)
class Boolean(_Cell):
    """Boolean cell."""

    value: bool
    tag: ClassVar[CellTag] = CellTag.BOOL


@dataclass(frozen=True)
class DateTime(_Cell):
    """Calendar date-time formatted as ``YYYY-MM-DDTHH:MM:SS``.

    Holds ``"Invalid DateTime"`` when the reader's value had no calendar
    equivalent.
    """

    value: str
    tag: ClassVar[CellTag] = CellTag.DATETIME


@dataclass(frozen=True)
class DateTimeText(_Cell):
    """ISO 8601 date-time text the reader did not resolve."""

    value: str
    tag: ClassVar[CellTag] = CellTag.DATETIME_ISO


@dataclass(frozen=True)
class DurationText(_Cell):
    """ISO 8601 duration text."""

    value: str
    tag: ClassVar[CellTag] = CellTag.DURATION_ISO


@dataclass(frozen=True)
class ErrorText(_Cell):
    """Formula error cell (e.g. ``#DIV/0!``)."""

    value: str
    tag: ClassVar[CellTag] = CellTag.ERROR


@dataclass(frozen=True)
class Empty(_Cell):
    """Empty cell."""

    value: ClassVar[None] = None
    tag: ClassVar[CellTag] = CellTag.EMPTY


CellValue = Union[
    Integer,
    Real,
    Text,
    Boolean,
    DateTime,
    DateTimeText,
    DurationText,
    ErrorText,
    Empty,
]

Grid = list[list[CellValue]]

EMPTY = Empty()

_VARIANTS: dict[CellTag, type] = {
    cls.tag: cls
    for cls in (
        Integer,
        Real,
        Text,
        Boolean,
        DateTime,
        DateTimeText,
        DurationText,
        ErrorText,
        Empty,
    )
}


def cell_from_dict(data: dict[str, Any]) -> CellValue:
    """Rebuild a cell value from its tagged dict form.

    Raises:
        ValueError: If the ``type`` key is not a known tag.
    """
    tag = CellTag(data["type"])
    if tag is CellTag.EMPTY:
        return EMPTY
    return _VARIANTS[tag](data["value"])


def grid_to_dicts(grid: Grid) -> list[list[dict[str, Any]]]:
    """Convert a grid to nested lists of tagged dicts (JSON-ready)."""
    return [[cell.to_dict() for cell in row] for row in grid]
