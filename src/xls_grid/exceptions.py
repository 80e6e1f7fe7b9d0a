"""Exceptions raised by xls-grid.

Exception Hierarchy:
    XlsGridError
      - WorkbookOpenError  (workbook could not be opened; fatal)
      - SheetRangeError    (a sheet's range could not be read)

Only WorkbookOpenError ever reaches callers of parse() and sheet_names().
SheetRangeError is raised by readers and absorbed by the access layer,
which returns an empty grid instead.
"""

from __future__ import annotations


class XlsGridError(Exception):
    """Base exception for all xls-grid errors.

    Attributes:
        message: Human-readable error message.
        original_error: The underlying exception, if any.
    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class WorkbookOpenError(XlsGridError, ValueError):
    """The workbook could not be opened.

    Covers unreadable paths, unrecognized or unsupported containers, and
    corrupt files. The message is the underlying error's text, unchanged.
    """


class SheetRangeError(XlsGridError):
    """A sheet's data range could not be resolved.

    Attributes:
        sheet_name: Name of the sheet that was requested.
    """

    def __init__(
        self,
        sheet_name: str,
        message: str,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.sheet_name = sheet_name
