"""Pytest fixtures for xls-grid tests."""

from __future__ import annotations

import tempfile
from datetime import date, datetime, time, timedelta
from pathlib import Path

import pytest
from odf.opendocument import OpenDocumentSpreadsheet
from odf.style import Style, TableProperties
from odf.table import CoveredTableCell, Table, TableCell, TableRow
from odf.text import P
from openpyxl import Workbook
from openpyxl.chart import BarChart, Reference


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as td:
        yield Path(td)


@pytest.fixture
def simple_workbook(temp_dir) -> Path:
    """Create a simple workbook with basic data."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Data"

    ws["A1"] = "Name"
    ws["B1"] = "Value"
    ws["A2"] = "Item 1"
    ws["B2"] = 100
    ws["A3"] = "Item 2"
    ws["B3"] = 2.5
    ws["A4"] = "Total"
    ws["B4"] = "=SUM(B2:B3)"  # No cached value

    path = temp_dir / "simple.xlsx"
    wb.save(path)
    wb.close()
    return path


@pytest.fixture
def typed_workbook(temp_dir) -> Path:
    """Create a workbook with one cell of each kind openpyxl can write."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Types"

    ws["A1"] = 42
    ws["B1"] = 2.5
    ws["C1"] = "hello"
    ws["D1"] = True
    ws["E1"] = datetime(2024, 1, 5, 13, 7, 9)
    ws["F1"] = "#DIV/0!"  # Stored as an error cell

    ws["A2"] = date(2024, 2, 29)
    ws["B2"] = time(6, 30)
    ws["C2"] = timedelta(hours=1, minutes=30)
    ws["D2"] = datetime(2024, 1, 5, 13, 7, 9, 500000)
    ws["E2"] = "#N/A"
    ws["F2"] = False

    path = temp_dir / "typed.xlsx"
    wb.save(path)
    wb.close()
    return path


@pytest.fixture
def multi_sheet_workbook(temp_dir) -> Path:
    """Create a workbook with multiple sheets including hidden ones."""
    wb = Workbook()

    ws1 = wb.active
    ws1.title = "Visible"
    ws1["A1"] = "This is visible"

    ws2 = wb.create_sheet("Hidden")
    ws2["A1"] = "This is hidden"
    ws2.sheet_state = "hidden"

    ws3 = wb.create_sheet("VeryHidden")
    ws3["A1"] = "This is very hidden"
    ws3.sheet_state = "veryHidden"

    ws4 = wb.create_sheet("Also Visible")
    ws4["A1"] = 1

    path = temp_dir / "multi_sheet.xlsx"
    wb.save(path)
    wb.close()
    return path


@pytest.fixture
def layout_workbook(temp_dir) -> Path:
    """Create a workbook with offset data, an empty sheet and a chartsheet."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Offset"

    # Populated extent is C3:E5
    ws["C3"] = "top-left"
    ws["E3"] = 1
    ws["D4"] = 2
    ws["E5"] = "bottom-right"

    wb.create_sheet("Blank")

    data = wb.create_sheet("Series")
    for row in (["Month", "Sales"], ["Jan", 10], ["Feb", 20]):
        data.append(row)

    chart = BarChart()
    chart.add_data(Reference(data, min_col=2, min_row=1, max_row=3), titles_from_data=True)
    chartsheet = wb.create_chartsheet("Chart")
    chartsheet.add_chart(chart)

    path = temp_dir / "layout.xlsx"
    wb.save(path)
    wb.close()
    return path


@pytest.fixture
def bad_date_workbook(temp_dir) -> Path:
    """Create a workbook with a date-formatted serial too large for a date."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Dates"

    ws["A1"] = 1e10
    ws["A1"].number_format = "yyyy-mm-dd hh:mm:ss"
    ws["B1"] = "#VALUE!"  # A real error cell, also date-formatted
    ws["B1"].number_format = "yyyy-mm-dd hh:mm:ss"
    ws["C1"] = datetime(2024, 1, 5, 13, 7, 9)

    path = temp_dir / "bad_date.xlsx"
    wb.save(path)
    wb.close()
    return path


def _text_cell(text: str) -> TableCell:
    cell = TableCell(valuetype="string")
    cell.addElement(P(text=text))
    return cell


def _float_cell(value: float, **kwargs) -> TableCell:
    cell = TableCell(valuetype="float", value=value, **kwargs)
    cell.addElement(P(text=str(value)))
    return cell


@pytest.fixture
def ods_workbook(temp_dir) -> Path:
    """Create an ODS file with typed cells, repeats and a hidden sheet."""
    doc = OpenDocumentSpreadsheet()

    hidden_style = Style(name="ta_hidden", family="table")
    hidden_style.addElement(TableProperties(display="false"))
    doc.automaticstyles.addElement(hidden_style)

    # Sheet 1: one cell of each ODS value type
    types = Table(name="Types")
    row = TableRow()
    row.addElement(_float_cell(2.5))
    row.addElement(_text_cell("hello"))
    boolean = TableCell(valuetype="boolean", booleanvalue="true")
    boolean.addElement(P(text="TRUE"))
    row.addElement(boolean)
    when = TableCell(valuetype="date", datevalue="2024-01-05T13:07:09")
    when.addElement(P(text="01/05/2024 13:07:09"))
    row.addElement(when)
    duration = TableCell(valuetype="time", timevalue="PT13H07M09S")
    duration.addElement(P(text="13:07:09"))
    row.addElement(duration)
    types.addElement(row)
    doc.spreadsheet.addElement(types)

    # Sheet 2: repeated cells and rows, trailing filler like LibreOffice writes
    repeats = Table(name="Repeats")
    row = TableRow(numberrowsrepeated=2)
    row.addElement(_float_cell(1, numbercolumnsrepeated=3))
    row.addElement(TableCell(numbercolumnsrepeated=1000))
    repeats.addElement(row)
    row = TableRow()
    row.addElement(_text_cell("a"))
    row.addElement(TableCell())
    row.addElement(_text_cell("b"))
    row.addElement(CoveredTableCell())
    repeats.addElement(row)
    filler = TableRow(numberrowsrepeated=1048570)
    filler.addElement(TableCell(numbercolumnsrepeated=1024))
    repeats.addElement(filler)
    doc.spreadsheet.addElement(repeats)

    # Sheet 3: hidden
    secret = Table(name="Secret", stylename=hidden_style)
    row = TableRow()
    row.addElement(_text_cell("hidden"))
    secret.addElement(row)
    doc.spreadsheet.addElement(secret)

    path = temp_dir / "workbook.ods"
    doc.save(str(path))
    return path
