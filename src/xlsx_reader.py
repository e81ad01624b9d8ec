"""Read and validate a list of arithmetic problems from an XLSX workbook."""

from __future__ import annotations

import sys
from pathlib import Path

import openpyxl

from models import HissanError, OperandPair, Operation

OPERATOR_ALIASES = {
    "+": Operation.ADD,
    "-": Operation.SUBTRACT,
    "−": Operation.SUBTRACT,
    "×": Operation.MULTIPLY,
    "x": Operation.MULTIPLY,
    "*": Operation.MULTIPLY,
    "÷": Operation.DIVIDE,
    "/": Operation.DIVIDE,
}


def read_problems(path: str | Path) -> list[OperandPair]:
    """Open *path*, detect header, parse rows, validate and return operand pairs.

    Expected columns: number (ordering hint), first operand, operator symbol,
    second operand.
    """
    path = Path(path)
    if not path.exists():
        raise HissanError(f"File not found: {path}")

    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    ws = wb.active

    header_row = _detect_header_row(ws)
    rows: list[tuple[int, int, int, Operation]] = []

    for row in ws.iter_rows(min_row=header_row + 1, max_col=4, values_only=True):
        if not row or row[0] is None:
            continue
        try:
            number = int(row[0])
            first = _whole_number(row[1])
            second = _whole_number(row[3])
        except (ValueError, TypeError, IndexError):
            continue
        if first is None or second is None:
            print(
                f"Warning: skipping row {number} (operands must be whole numbers)",
                file=sys.stderr,
            )
            continue
        operation = _parse_operator(row[2])
        if operation is None:
            print(
                f"Warning: skipping row {number} (unknown operator {row[2]!r})",
                file=sys.stderr,
            )
            continue
        rows.append((number, first, second, operation))

    wb.close()
    rows.sort(key=lambda r: r[0])
    return _validate_and_filter(rows)


def _detect_header_row(sheet) -> int:
    """Return the 1-based index of the header row (0 when data starts at row 1).

    The row before the first one whose column A is an int is assumed to be
    the header.  Falls back to row 1.
    """
    for row in sheet.iter_rows(min_row=1, max_row=20, max_col=1, values_only=False):
        cell = row[0]
        try:
            int(cell.value)
            # This row is data; header is the row before
            return max(0, cell.row - 1)
        except (ValueError, TypeError):
            continue
    return 1


def _whole_number(raw) -> int | None:
    """Operand cell as an int; None for a fractional number such as 12.7."""
    if isinstance(raw, float) and not raw.is_integer():
        return None
    return int(raw)


def _parse_operator(raw) -> Operation | None:
    if raw is None:
        return None
    text = str(raw).strip().lower()
    return OPERATOR_ALIASES.get(text)


def _validate_and_filter(
    rows: list[tuple[int, int, int, Operation]],
) -> list[OperandPair]:
    """Drop rows the layout generator cannot take, error if none remain."""
    result: list[OperandPair] = []

    for number, first, second, operation in rows:
        if first < 0 or second < 0:
            print(
                f"Warning: skipping row {number} (negative operand)",
                file=sys.stderr,
            )
            continue
        if operation == Operation.SUBTRACT and first < second:
            print(
                f"Warning: skipping row {number} ({first} - {second} is below zero)",
                file=sys.stderr,
            )
            continue
        if operation == Operation.DIVIDE and second == 0:
            print(
                f"Warning: skipping row {number} (division by zero)",
                file=sys.stderr,
            )
            continue
        result.append(OperandPair(first=first, second=second, operation=operation))

    if not result:
        raise HissanError("No valid problems after filtering")

    return result
