"""OpenDocument spreadsheet (.ods) reader built on odfpy."""

from __future__ import annotations

from typing import Any, BinaryIO

from odf import opendocument, teletype
from odf.namespaces import OFFICENS, STYLENS, TABLENS, TEXTNS
from odf.office import Spreadsheet
from odf.style import Style, TableProperties

from ..exceptions import SheetRangeError
from ..models import SheetMetadata, SheetVisibility
from .base import BaseReader, CellError, DateTimeIso, DurationIso, RawRow, crop_to_bounds

CALCEXTNS = "urn:org:documentfoundation:names:experimental:calc:xmlns:calcext:1.0"

TABLE = (TABLENS, "table")
TABLE_ROW = (TABLENS, "table-row")
TABLE_CELL = (TABLENS, "table-cell")
COVERED_TABLE_CELL = (TABLENS, "covered-table-cell")
PARAGRAPH = (TEXTNS, "p")

# Containers that may sit between a table and its rows
ROW_GROUPS = {
    (TABLENS, "table-header-rows"),
    (TABLENS, "table-rows"),
    (TABLENS, "table-row-group"),
}


def _qname(node) -> tuple[str, str] | None:
    # Text nodes have no qname
    return getattr(node, "qname", None)


def _attr(node, namespace: str, name: str) -> str | None:
    return node.attributes.get((namespace, name))


def _repeat(node, name: str) -> int:
    return int(_attr(node, TABLENS, name) or 1)


class OdsReader(BaseReader):
    """Reads cell values from an OpenDocument spreadsheet."""

    format = "ods"

    def __init__(self, stream: BinaryIO):
        super().__init__(stream)
        self.document = opendocument.load(stream)
        bodies = self.document.body.getElementsByType(Spreadsheet)
        if not bodies:
            raise ValueError("Document has no spreadsheet body")
        self._tables = [
            node for node in bodies[0].childNodes if _qname(node) == TABLE
        ]

    @property
    def sheet_names(self) -> list[str]:
        return [_attr(table, TABLENS, "name") for table in self._tables]

    def sheets_metadata(self) -> list[SheetMetadata]:
        hidden_styles = self._hidden_table_styles()
        return [
            SheetMetadata(
                name=_attr(table, TABLENS, "name"),
                visibility=(
                    SheetVisibility.HIDDEN
                    if _attr(table, TABLENS, "style-name") in hidden_styles
                    else SheetVisibility.VISIBLE
                ),
            )
            for table in self._tables
        ]

    def worksheet_range(self, sheet_name: str) -> list[RawRow]:
        table = next(
            (t for t in self._tables if _attr(t, TABLENS, "name") == sheet_name),
            None,
        )
        if table is None:
            raise SheetRangeError(sheet_name, f"Worksheet '{sheet_name}' not found")

        try:
            rows = self._read_rows(table)
        except (ValueError, TypeError) as e:
            raise SheetRangeError(sheet_name, str(e), original_error=e) from e
        return crop_to_bounds(rows)

    def _hidden_table_styles(self) -> set[str]:
        """Names of table styles with ``table:display="false"``."""
        hidden = set()
        for styles in (self.document.automaticstyles, self.document.styles):
            for style in styles.getElementsByType(Style):
                if _attr(style, STYLENS, "family") != "table":
                    continue
                for props in style.getElementsByType(TableProperties):
                    if _attr(props, TABLENS, "display") == "false":
                        hidden.add(_attr(style, STYLENS, "name"))
        return hidden

    def _iter_row_elements(self, parent):
        for node in parent.childNodes:
            qname = _qname(node)
            if qname == TABLE_ROW:
                yield node
            elif qname in ROW_GROUPS:
                yield from self._iter_row_elements(node)

    def _read_rows(self, table) -> list[RawRow]:
        """Expand repeated rows, skipping trailing empties.

        Empty runs are only materialized once a populated row follows
        them, so the million-row repeat LibreOffice writes at the end of
        a sheet is never expanded.
        """
        rows: list[RawRow] = []
        pending_empty_rows = 0

        for row_el in self._iter_row_elements(table):
            repeat = _repeat(row_el, "number-rows-repeated")
            cells = self._read_cells(row_el)
            if not cells:
                pending_empty_rows += repeat
                continue

            rows.extend([] for _ in range(pending_empty_rows))
            pending_empty_rows = 0
            rows.extend(list(cells) for _ in range(repeat))

        return rows

    def _read_cells(self, row_el) -> RawRow:
        cells: RawRow = []
        pending_empty = 0

        for node in row_el.childNodes:
            qname = _qname(node)
            if qname not in (TABLE_CELL, COVERED_TABLE_CELL):
                continue

            repeat = _repeat(node, "number-columns-repeated")
            value = cell_value(node) if qname == TABLE_CELL else None
            if value is None:
                pending_empty += repeat
                continue

            cells.extend([None] * pending_empty)
            pending_empty = 0
            cells.extend([value] * repeat)

        return cells


def cell_value(cell) -> Any:
    """Map one table:table-cell element to a raw value."""
    text = "\n".join(
        teletype.extractText(node)
        for node in cell.childNodes
        if _qname(node) == PARAGRAPH
    )

    if _attr(cell, CALCEXTNS, "value-type") == "error":
        return CellError(text)

    value_type = _attr(cell, OFFICENS, "value-type")
    if value_type in ("float", "percentage", "currency"):
        return float(_attr(cell, OFFICENS, "value"))
    elif value_type == "boolean":
        return _attr(cell, OFFICENS, "boolean-value") == "true"
    elif value_type == "date":
        return DateTimeIso(_attr(cell, OFFICENS, "date-value") or text)
    elif value_type == "time":
        return DurationIso(_attr(cell, OFFICENS, "time-value") or text)
    elif value_type == "string":
        string_value = _attr(cell, OFFICENS, "string-value")
        return string_value if string_value is not None else text

    return text or None
