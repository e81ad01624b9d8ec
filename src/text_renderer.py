"""Render a grid as fixed-width text (terminal play and hint prompts)."""

from __future__ import annotations

from input_session import TOP_ROW, InputSession
from models import CellKind, Grid, Operation

TARGET_MARK = "[TARGET]"


def render_grid_text(
    grid: Grid,
    entered: dict[str, str] | None = None,
    target_key: str | None = None,
    show_answers: bool = False,
) -> str:
    """One line per row, three characters per cell.

    Input cells print as ``[v]`` (entered), ``[?]`` (blank) or ``[TARGET]``;
    static and operator cells print their value; gaps print ``[ ]``.
    """
    entered = entered or {}
    lines: list[str] = []
    for r in range(grid.rows):
        parts: list[str] = []
        for c in range(grid.cols):
            cell = grid.at(r, c)
            if cell is None:
                parts.append("[ ]")
            elif target_key is not None and cell.key == target_key:
                parts.append(TARGET_MARK)
            elif cell.kind == CellKind.INPUT:
                value = cell.expected if show_answers else entered.get(cell.key, "")
                parts.append(f"[{value}]" if value else "[?]")
            else:
                parts.append(f" {cell.expected or ' '} ")
        lines.append("".join(parts))
    return "\n".join(lines)


def render_session_text(session: InputSession) -> str:
    """Terminal view of a live session: rules, cursor, wrong entries, borrows."""
    grid = session.grid
    lines: list[str] = []
    header = "    " + "".join(f"{c:^4}" for c in range(grid.cols))
    lines.append(header)

    for r in range(grid.rows):
        row_text = f"{r:>3} "
        rule = False
        for c in range(grid.cols):
            cell = grid.at(r, c)
            row_text += _session_cell_text(session, r, c)
            if cell is not None and cell.has_rule_below:
                rule = True
        lines.append(row_text.rstrip())
        if rule:
            lines.append("    " + "----" * grid.cols)

    if grid.operation == Operation.SUBTRACT and session.effective_top_digits:
        borrowed = [
            f"col {c}: {session.effective_top_digits[c]}"
            for c in sorted(session.effective_top_digits)
            if session.top_digit_changed(c)
        ]
        if borrowed:
            lines.append("    borrowed -> " + ", ".join(borrowed))
    return "\n".join(lines)


def _session_cell_text(session: InputSession, r: int, c: int) -> str:
    cell = session.grid.at(r, c)
    if cell is None:
        return "    "
    if cell.kind == CellKind.INPUT:
        value = session.entered.get(cell.key, "") or "_"
        if cell.key == session.active_cell_key:
            return f">{value}< "
        if session.is_wrong(cell.key):
            return f"!{value}! "
        if cell.is_carry:
            return f"({value}) "
        return f" {value}  "
    if r == TOP_ROW and session.top_digit_changed(c):
        return f" {cell.expected}/ "
    return f" {cell.expected or ' '}  "
