"""CLI entry point for xls-grid.

Usage:
    python -m xls_grid sheets workbook.xlsx --show-hidden
    xls-grid parse workbook.xlsx Summary --format csv
"""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys

from .exceptions import WorkbookOpenError
from .models import grid_to_dicts


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="xls-grid",
        description="List sheets and extract typed cell grids from spreadsheets",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sheets_parser = subparsers.add_parser("sheets", help="List sheet names")
    sheets_parser.add_argument("input", help="Path to workbook (.xlsx, .xlsm, .ods)")
    sheets_parser.add_argument(
        "--show-hidden",
        action="store_true",
        help="Include hidden and very hidden sheets",
    )

    parse_parser = subparsers.add_parser("parse", help="Extract a sheet")
    parse_parser.add_argument("input", help="Path to workbook (.xlsx, .xlsm, .ods)")
    parse_parser.add_argument("sheet", help="Name of the sheet to extract")
    parse_parser.add_argument(
        "--format",
        choices=("json", "csv"),
        default="json",
        help="Output format: tagged JSON cells (default) or plain CSV values",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    from . import parse, sheet_names

    try:
        if args.command == "sheets":
            for name in sheet_names(args.input, show_hidden=args.show_hidden):
                print(name)

        else:
            grid = parse(args.input, args.sheet)
            if args.format == "csv":
                writer = csv.writer(sys.stdout)
                for row in grid:
                    writer.writerow(["" if cell.value is None else cell.value for cell in row])
            else:
                json.dump(grid_to_dicts(grid), sys.stdout)
                print()

        return 0

    except KeyboardInterrupt:
        print("\nCancelled.")
        return 130
    except WorkbookOpenError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
