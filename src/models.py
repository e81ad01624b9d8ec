"""Data models for the column-arithmetic trainer."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum


class Operation(Enum):
    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"

    @property
    def symbol(self) -> str:
        return OPERATOR_SYMBOLS[self]


OPERATOR_SYMBOLS = {
    Operation.ADD: "+",
    Operation.SUBTRACT: "-",
    Operation.MULTIPLY: "×",
    Operation.DIVIDE: "÷",
}


class Mode(Enum):
    LEARNING = "LEARNING"
    PRACTICE = "PRACTICE"


class CellKind(Enum):
    STATIC = "STATIC"
    INPUT = "INPUT"
    OPERATOR = "OPERATOR"
    EMPTY = "EMPTY"


def _new_problem_id() -> str:
    return uuid.uuid4().hex[:9]


@dataclass(frozen=True)
class OperandPair:
    """Two operands and an operation.

    Subtraction requires ``first >= second`` and division ``second > 0``;
    the caller guarantees both.
    """

    first: int
    second: int
    operation: Operation
    id: str = field(default_factory=_new_problem_id, compare=False)

    @property
    def expression(self) -> str:
        return f"{self.first} {self.operation.symbol} {self.second}"

    @property
    def answer_text(self) -> str:
        """Exact answer, e.g. ``"14"`` or ``"5 r 3"`` for division."""
        a, b = self.first, self.second
        if self.operation == Operation.ADD:
            return str(a + b)
        if self.operation == Operation.SUBTRACT:
            return str(a - b)
        if self.operation == Operation.MULTIPLY:
            return str(a * b)
        q, r = divmod(a, b)
        return f"{q} r {r}" if r else str(q)


@dataclass(frozen=True)
class Cell:
    """A single cell of a column-arithmetic grid.

    ``expected`` is the digit or symbol the cell must hold (empty for
    structural cells). ``focus_order`` is the canonical fill sequence.
    """

    row: int
    col: int
    kind: CellKind = CellKind.EMPTY
    expected: str = ""
    is_carry: bool = False
    has_rule_below: bool = False
    is_divisor_boundary: bool = False
    is_dividend_boundary: bool = False
    focus_order: int | None = None

    @property
    def key(self) -> str:
        return cell_key(self.row, self.col)

    @property
    def is_input(self) -> bool:
        return self.kind == CellKind.INPUT


def cell_key(row: int, col: int) -> str:
    return f"{row}-{col}"


@dataclass(frozen=True)
class Grid:
    """Dimensions plus cells of one problem, indexed by cell key."""

    rows: int
    cols: int
    cells: tuple[Cell, ...]
    operation: Operation
    _index: dict[str, Cell] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, Cell] = {}
        for cell in self.cells:
            if cell.key in index:
                raise ValueError(f"Cell conflict at ({cell.row},{cell.col})")
            index[cell.key] = cell
        object.__setattr__(self, "_index", index)

    def cell(self, key: str) -> Cell | None:
        return self._index.get(key)

    def at(self, row: int, col: int) -> Cell | None:
        return self._index.get(cell_key(row, col))

    @property
    def input_cells(self) -> list[Cell]:
        return [c for c in self.cells if c.is_input]

    @property
    def required_cells(self) -> list[Cell]:
        """Input cells that gate completion (everything except carry aids)."""
        return [c for c in self.cells if c.is_input and not c.is_carry]

    def row_cells(self, row: int) -> list[Cell]:
        """Cells of *row*, left to right."""
        return sorted((c for c in self.cells if c.row == row), key=lambda c: c.col)


@dataclass(frozen=True)
class Outcome:
    """Result of submitting one digit to an input session."""

    advance_to: str | None
    completed: bool = False
    mistake: bool = False
    rejected: bool = False


@dataclass(frozen=True)
class ProblemResult:
    """A finished problem and whether it was solved without a mistake."""

    pair: OperandPair
    perfect: bool


class HissanError(Exception):
    """Fatal, user-facing error (bad input file, nothing to render)."""
