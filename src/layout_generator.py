"""Build the column-arithmetic Grid for an operand pair.

Row 0 holds carries (addition, multiplication) or the quotient (division).
Every input cell gets a ``focus_order`` so the input session can walk the
worked solution in the order a child would write it.
"""

from __future__ import annotations

from dataclasses import dataclass

from models import Cell, CellKind, Grid, OperandPair, Operation


@dataclass(frozen=True)
class DivisionStep:
    """One bring-down step of long division.

    ``product`` is None for an explicit ``0`` quotient digit written while
    the accumulated value is still below the divisor.
    """

    column: int  # index into the dividend's digits
    accumulated: int
    quotient_digit: int
    product: int | None
    remainder: int


def generate_layout(pair: OperandPair) -> Grid:
    """Return the grid for *pair*. Preconditions are the caller's job."""
    op = pair.operation
    if op in (Operation.ADD, Operation.SUBTRACT):
        return _add_sub_layout(pair.first, pair.second, op)
    if op == Operation.MULTIPLY:
        return _multiply_layout(pair.first, pair.second)
    return _division_layout(pair.first, pair.second)


def _input(row: int, col: int, value: str, **opts) -> Cell:
    return Cell(row=row, col=col, kind=CellKind.INPUT, expected=value, **opts)


def _static(row: int, col: int, value: str, **opts) -> Cell:
    return Cell(row=row, col=col, kind=CellKind.STATIC, expected=value, **opts)


def _running_carries(top: str, bottom: str | None, multiplier: int | None, width: int) -> dict[int, str]:
    """Map grid column -> carry digit written above it.

    Addition passes *bottom*; single-digit multiplication passes *multiplier*.
    A carry produced by digit column i lands one column to its left.
    """
    carries: dict[int, str] = {}
    carry = 0
    span = len(top) if bottom is None else max(len(top), len(bottom))
    for i in range(span):
        d1 = int(top[-1 - i]) if i < len(top) else 0
        if multiplier is None:
            d2 = int(bottom[-1 - i]) if i < len(bottom) else 0
            total = d1 + d2 + carry
        else:
            total = d1 * multiplier + carry
        carry = total // 10
        target = width - 2 - i
        if carry > 0 and target >= 0:
            carries[target] = str(carry)
    return carries


def _operand_rows(s1: str, s2: str, symbol: str, width: int) -> list[Cell]:
    """Rows 1-2: first operand, then operator + second operand over a rule."""
    cells = [_static(1, width - len(s1) + i, d) for i, d in enumerate(s1)]
    cells.append(
        Cell(row=2, col=0, kind=CellKind.OPERATOR, expected=symbol, has_rule_below=True)
    )
    for c in range(1, width - len(s2)):
        cells.append(Cell(row=2, col=c, has_rule_below=True))
    cells.extend(
        _static(2, width - len(s2) + i, d, has_rule_below=True) for i, d in enumerate(s2)
    )
    return cells


def _order_result_then_carry(
    result: dict[int, str], carries: dict[int, str], result_row: int, width: int
) -> list[Cell]:
    """Right to left: each result digit, then the carry cell to its left."""
    cells: list[Cell] = []
    order = 1
    for col in range(width - 1, -1, -1):
        if col in result:
            cells.append(_input(result_row, col, result[col], focus_order=order))
            order += 1
        if col - 1 in carries:
            cells.append(_input(0, col - 1, carries[col - 1], is_carry=True, focus_order=order))
            order += 1
    return cells


def _right_aligned(value: str, last_col: int) -> dict[int, str]:
    return {last_col - i: d for i, d in enumerate(reversed(value))}


def _add_sub_layout(n1: int, n2: int, op: Operation) -> Grid:
    s1, s2 = str(n1), str(n2)
    s_res = str(n1 + n2 if op == Operation.ADD else n1 - n2)
    width = max(len(s1), len(s2), len(s_res)) + 1

    # Subtraction borrows are played out in the session, not pre-computed.
    carries = _running_carries(s1, s2, None, width) if op == Operation.ADD else {}

    cells = _operand_rows(s1, s2, op.symbol, width)
    cells.extend(
        _order_result_then_carry(_right_aligned(s_res, width - 1), carries, 3, width)
    )
    return Grid(rows=4, cols=width, cells=tuple(cells), operation=op)


def _multiply_layout(n1: int, n2: int) -> Grid:
    s1, s2 = str(n1), str(n2)
    product = n1 * n2
    width = max(len(s1) + len(s2), len(str(product))) + 1

    cells = _operand_rows(s1, s2, Operation.MULTIPLY.symbol, width)
    row = 3

    if len(s2) == 1:
        carries = _running_carries(s1, None, n2, width)
        cells.extend(
            _order_result_then_carry(_right_aligned(str(product), width - 1), carries, row, width)
        )
        return Grid(rows=row + 1, cols=width, cells=tuple(cells), operation=Operation.MULTIPLY)

    order = 1
    for i, digit in enumerate(reversed(s2)):
        partial = str(n1 * int(digit))
        is_last = i == len(s2) - 1
        for j, d in enumerate(reversed(partial)):
            cells.append(
                _input(row, width - 1 - i - j, d, has_rule_below=is_last, focus_order=order)
            )
            order += 1
        if is_last:
            start = width - i - len(partial)
            cells.extend(Cell(row=row, col=c, has_rule_below=True) for c in range(start))
        row += 1

    for j, d in enumerate(reversed(str(product))):
        cells.append(_input(row, width - 1 - j, d, focus_order=order))
        order += 1
    return Grid(rows=row + 1, cols=width, cells=tuple(cells), operation=Operation.MULTIPLY)


def division_steps(dividend: int, divisor: int) -> list[DivisionStep]:
    """Simulate long division left to right over the dividend's digits.

    Leading quotient zeros are suppressed; once the quotient has started a
    value below the divisor yields an explicit 0 digit. A dividend smaller
    than the divisor still produces one full step at its last digit.
    """
    digits = str(dividend)
    steps: list[DivisionStep] = []
    acc = ""
    started = False
    for idx, d in enumerate(digits):
        acc += d
        value = int(acc)
        is_last = idx == len(digits) - 1
        if value < divisor and (started or not is_last):
            if started:
                steps.append(DivisionStep(idx, value, 0, None, value))
            continue
        started = True
        q = value // divisor
        product = q * divisor
        steps.append(DivisionStep(idx, value, q, product, value - product))
        acc = str(value - product)
    return steps


def _division_layout(dividend: int, divisor: int) -> Grid:
    s_dividend, s_divisor = str(dividend), str(divisor)
    start = len(s_divisor) + 1
    width = start + len(s_dividend)

    cells = [_static(1, i, d) for i, d in enumerate(s_divisor)]
    cells.append(
        Cell(row=1, col=len(s_divisor), kind=CellKind.OPERATOR, expected=")",
             is_divisor_boundary=True)
    )
    cells.extend(
        _static(1, start + i, d, is_dividend_boundary=True) for i, d in enumerate(s_dividend)
    )

    row = 2
    order = 1
    for step in division_steps(dividend, divisor):
        col = start + step.column
        cells.append(_input(0, col, str(step.quotient_digit), focus_order=order))
        order += 1
        if step.product is None:
            # A zero digit brings the next dividend digit down onto the
            # current remainder row.
            if step.column < len(s_dividend) - 1:
                cells.append(_static(row - 1, col + 1, s_dividend[step.column + 1]))
            continue

        for c, d in sorted(_right_aligned(str(step.product), col).items()):
            cells.append(_input(row, c, d, has_rule_below=True, focus_order=order))
            order += 1
        row += 1

        for c, d in sorted(_right_aligned(str(step.remainder), col).items()):
            cells.append(_input(row, c, d, focus_order=order))
            order += 1
        if step.column < len(s_dividend) - 1:
            cells.append(_static(row, col + 1, s_dividend[step.column + 1]))
        row += 1

    return Grid(rows=row, cols=width, cells=tuple(cells), operation=Operation.DIVIDE)
