"""Track, validate and sequence the learner's entries into one Grid."""

from __future__ import annotations

from models import Cell, CellKind, Grid, Operation, Outcome

TOP_ROW = 1
BOTTOM_ROW = 2


def next_cell_key(grid: Grid, entered: dict[str, str]) -> str | None:
    """Pick the next input cell that does not yet hold its expected value.

    Lowest ``focus_order`` wins; grids without one fall back to a scan that
    depends on the operation.
    """
    remaining = [c for c in grid.input_cells if entered.get(c.key) != c.expected]
    if not remaining:
        return None

    ordered = [c for c in remaining if c.focus_order is not None]
    if ordered:
        return min(ordered, key=lambda c: c.focus_order).key
    return min(remaining, key=_geometric_key(grid.operation)).key


def _geometric_key(op: Operation):
    if op == Operation.DIVIDE:
        return lambda c: (c.row, c.col)
    if op == Operation.MULTIPLY:
        return lambda c: (c.row, -c.col)
    # Rightmost place value first, carry row before result row.
    return lambda c: (-c.col, c.row)


class InputSession:
    """Mutable entry state for one problem.

    Created together with its Grid and thrown away when the learner moves
    on. All operations run synchronously on the caller's thread.
    """

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.entered: dict[str, str] = {}
        self.has_recorded_mistake = False
        self.is_complete = False
        self.effective_top_digits: dict[int, int] = {}
        self.received_borrow: set[int] = set()

        if grid.operation == Operation.SUBTRACT:
            self.effective_top_digits = self._initial_top_digits()

        self.active_cell_key = next_cell_key(grid, self.entered)
        if self.active_cell_key is None:
            self.is_complete = True

    def active_cell(self) -> str | None:
        return self.active_cell_key

    def required_complete(self, entered: dict[str, str] | None = None) -> bool:
        """True when every non-carry input cell holds its expected value."""
        values = self.entered if entered is None else entered
        return all(values.get(c.key) == c.expected for c in self.grid.required_cells)

    def submit_digit(self, value: str) -> Outcome:
        if self.is_complete or self.active_cell_key is None:
            return Outcome(advance_to=None, completed=self.is_complete, rejected=True)

        cell = self.grid.cell(self.active_cell_key)
        self.entered[cell.key] = value

        if value != cell.expected:
            self.has_recorded_mistake = True
            return Outcome(advance_to=cell.key, mistake=True)

        if self.required_complete():
            self.is_complete = True
            self.active_cell_key = None
            return Outcome(advance_to=None, completed=True)

        self.active_cell_key = next_cell_key(self.grid, self.entered)
        return Outcome(advance_to=self.active_cell_key)

    def delete_digit(self) -> bool:
        """Clear the active cell's entry; the cursor stays put."""
        if self.is_complete or self.active_cell_key is None:
            return False
        self.entered.pop(self.active_cell_key, None)
        return True

    def select_cell(self, key: str) -> bool:
        cell = self.grid.cell(key)
        if self.is_complete or cell is None or cell.kind != CellKind.INPUT:
            return False
        self.active_cell_key = key
        return True

    def is_wrong(self, key: str) -> bool:
        cell = self.grid.cell(key)
        value = self.entered.get(key)
        return cell is not None and bool(value) and value != cell.expected

    # ── Interactive borrowing (subtraction only) ─────────────────────

    def can_borrow(self, col: int) -> bool:
        """A column may borrow when its top digit is smaller than the bottom
        digit and its left neighbour still has something to give."""
        if self.grid.operation != Operation.SUBTRACT:
            return False
        top = self.effective_top_digits.get(col)
        if top is None:
            return False
        bottom = self._bottom_digit(col)
        if top >= bottom:
            return False
        left = self.effective_top_digits.get(col - 1)
        return left is not None and left > 0

    def try_borrow(self, col: int) -> bool:
        """Move ten from column ``col - 1`` into *col*. Expected values are
        never touched; this is a visual aid only."""
        if self.is_complete or not self.can_borrow(col):
            return False
        self.effective_top_digits[col - 1] -= 1
        self.effective_top_digits[col] += 10
        self.received_borrow.add(col)
        return True

    def top_digit_changed(self, col: int) -> bool:
        """True when the top digit at *col* differs from the printed one."""
        original = self.grid.at(TOP_ROW, col)
        current = self.effective_top_digits.get(col)
        if original is None or current is None:
            return False
        return current != int(original.expected)

    def _initial_top_digits(self) -> dict[int, int]:
        return {
            c.col: int(c.expected)
            for c in self.grid.row_cells(TOP_ROW)
            if c.kind == CellKind.STATIC
        }

    def _bottom_digit(self, col: int) -> int:
        cell: Cell | None = self.grid.at(BOTTOM_ROW, col)
        if cell is None or cell.kind != CellKind.STATIC:
            return 0
        return int(cell.expected)
