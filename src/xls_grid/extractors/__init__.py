"""Workbook readers, one per container format."""

from .base import (
    BaseReader,
    CellError,
    DateTimeIso,
    DurationIso,
    ExcelDateTime,
    crop_to_bounds,
)
from .ods import OdsReader
from .xlsx import XlsxReader

# Container format name -> reader class
READERS: dict[str, type[BaseReader]] = {
    XlsxReader.format: XlsxReader,
    OdsReader.format: OdsReader,
}

__all__ = [
    "BaseReader",
    "CellError",
    "DateTimeIso",
    "DurationIso",
    "ExcelDateTime",
    "crop_to_bounds",
    "XlsxReader",
    "OdsReader",
    "READERS",
]
