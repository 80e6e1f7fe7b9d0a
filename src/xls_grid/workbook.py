"""
Workbook access layer.

Opens a workbook from a path or an in-memory buffer, picks the reader for
its container format, and hands out sheet metadata and sheet ranges.

Example:
    >>> with open_workbook("report.xlsx") as wb:
    ...     print(wb.sheet_names)
    ...     grid = wb.extract_sheet("Summary")
"""

from __future__ import annotations

import io
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union
from zipfile import ZipFile

from odf.odfmanifest import manifestlist

from .exceptions import SheetRangeError, WorkbookOpenError
from .extractors import READERS, BaseReader
from .extractors.base import RawRow
from .models import Grid, SheetMetadata
from .normalize import map_rows

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", bytes, bytearray, memoryview]

ZIP_MAGIC = b"PK\x03\x04"
OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ODS_MIMETYPE = b"application/vnd.oasis.opendocument.spreadsheet"
MANIFEST = "META-INF/manifest.xml"


def detect_format(data: bytes) -> str:
    """Detect the container format of a workbook from its content.

    Args:
        data: The complete workbook bytes.

    Returns:
        Format name, a key of READERS ("xlsx" or "ods").

    Raises:
        WorkbookOpenError: If the container is unsupported or unrecognized.
    """
    if data.startswith(OLE2_MAGIC):
        raise WorkbookOpenError("Legacy binary workbooks (.xls) are not supported")

    if not data.startswith(ZIP_MAGIC):
        raise WorkbookOpenError("Unrecognized workbook format")

    try:
        with ZipFile(io.BytesIO(data), "r") as zf:
            names = set(zf.namelist())
            if _odf_media_type(zf, names).startswith(ODS_MIMETYPE):
                return "ods"
    except Exception as e:  # BadZipFile, zlib errors, encrypted members
        raise WorkbookOpenError(str(e), original_error=e) from e

    if "xl/workbook.xml" in names:
        return "xlsx"
    if "xl/workbook.bin" in names:
        raise WorkbookOpenError("Binary workbooks (.xlsb) are not supported")
    raise WorkbookOpenError("Unrecognized workbook format")


def _odf_media_type(zf: ZipFile, names: set[str]) -> bytes:
    """Media type of an OpenDocument package, or b"" if it is not one.

    The ``mimetype`` member wins; packages without it declare their type
    on the root entry of the manifest.
    """
    if "mimetype" in names:
        return zf.read("mimetype").strip()
    if "content.xml" in names and MANIFEST in names:
        entry = manifestlist(zf.read(MANIFEST)).get("/", {})
        return (entry.get("media-type") or "").encode()
    return b""


def read_source(source: Source) -> bytes:
    """Return the complete bytes of a workbook source.

    Raises:
        WorkbookOpenError: If a path cannot be read.
        TypeError: If the source is neither a path nor a bytes-like buffer.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)):
        try:
            return Path(source).read_bytes()
        except OSError as e:
            raise WorkbookOpenError(str(e), original_error=e) from e
    raise TypeError(f"Expected a path or bytes, got {type(source).__name__}")


@contextmanager
def open_workbook(source: Source, format: str | None = None) -> Iterator["WorkbookHandle"]:
    """Open a workbook for the duration of a with block.

    Args:
        source: Path to the workbook, or its complete bytes.
        format: Container format to assume instead of detecting it
            (a key of READERS).

    Yields:
        WorkbookHandle for sheet listing and extraction.

    Raises:
        WorkbookOpenError: If the workbook cannot be opened.
    """
    data = read_source(source)
    if format is None:
        format = detect_format(data)
        logger.debug("Detected %s container", format)
    elif format not in READERS:
        raise WorkbookOpenError(f"Unsupported workbook format: {format}")

    reader_cls = READERS[format]
    stream = io.BytesIO(data)
    try:
        reader = reader_cls(stream)
    except Exception as e:
        stream.close()
        raise WorkbookOpenError(str(e), original_error=e) from e

    logger.debug("Opened %s workbook (%d bytes)", format, len(data))
    try:
        yield WorkbookHandle(reader)
    finally:
        reader.close()


class WorkbookHandle:
    """Handle on one opened workbook.

    Provides access to sheet metadata and to individual sheet ranges,
    raw or normalized.
    """

    def __init__(self, reader: BaseReader):
        self._reader = reader

    @property
    def format(self) -> str:
        """Container format of the workbook."""
        return self._reader.format

    @property
    def sheet_names(self) -> list[str]:
        """List of sheet names in workbook order."""
        return self._reader.sheet_names

    @property
    def sheets_metadata(self) -> list[SheetMetadata]:
        """Name, visibility and type of every sheet."""
        return self._reader.sheets_metadata()

    def worksheet_range(self, sheet_name: str) -> list[RawRow]:
        """Raw rows of a sheet.

        Raises:
            SheetRangeError: If the sheet is missing or unreadable.
        """
        return self._reader.worksheet_range(sheet_name)

    def extract_sheet(self, sheet_name: str) -> Grid:
        """Normalized grid of a sheet.

        A sheet that is missing or cannot be read yields an empty grid
        rather than an error, so one bad sheet does not block the rest of
        the workbook.
        """
        try:
            rows = self._reader.worksheet_range(sheet_name)
        except SheetRangeError as e:
            logger.warning("Returning empty grid for sheet %r: %s", sheet_name, e)
            return []
        return map_rows(rows)
