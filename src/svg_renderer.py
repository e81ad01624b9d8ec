"""Render a column-arithmetic grid as standalone SVG."""

from __future__ import annotations

from xml.sax.saxutils import escape

from input_session import TOP_ROW, InputSession
from models import Cell, CellKind, Grid

FONT = "Helvetica, Arial, sans-serif"


def render_svg(
    grid: Grid,
    output_path: str,
    show_answers: bool = False,
    session: InputSession | None = None,
    cell_size: float | None = None,
) -> None:
    """Write *grid* to an SVG file.

    With *session*, input cells show the learner's entries (wrong ones in
    red), the active cell is highlighted and borrowed top digits are struck
    through with their current value beside them.
    """
    if cell_size is None:
        cell_size = _default_cell_size(grid.cols)

    width = cell_size * grid.cols
    height = cell_size * grid.rows

    parts: list[str] = []
    parts.append(
        f'<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">\n'
    )
    parts.append(f'  <rect x="0" y="0" width="{width}" height="{height}" fill="white"/>\n')

    for cell in grid.cells:
        parts.extend(_cell_parts(cell, cell_size, show_answers, session))

    parts.append('</svg>\n')

    with open(output_path, 'w', encoding='utf-8') as f:
        f.writelines(parts)


def render_puzzle_svg(grid: Grid, output_path: str) -> None:
    """Render the blank problem (no answers) to SVG."""
    render_svg(grid, output_path, show_answers=False)


def render_answer_svg(grid: Grid, output_path: str) -> None:
    """Render the worked solution to SVG."""
    render_svg(grid, output_path, show_answers=True)


def _cell_parts(
    cell: Cell, cs: float, show_answers: bool, session: InputSession | None
) -> list[str]:
    x = cell.col * cs
    y = cell.row * cs
    parts: list[str] = []

    if cell.kind == CellKind.INPUT:
        parts.extend(_input_parts(cell, x, y, cs, show_answers, session))
    elif cell.is_divisor_boundary:
        # Curved bracket between divisor and dividend
        parts.append(
            f'  <path d="M {x + cs} {y} Q {x + cs * 0.75} {y + cs * 0.4} '
            f'{x + cs * 0.25} {y + cs * 0.9}" fill="none" stroke="black" '
            f'stroke-width="2" stroke-linecap="round"/>\n'
        )
    elif cell.expected:
        struck = session is not None and cell.row == TOP_ROW and session.top_digit_changed(cell.col)
        color = "gray" if struck else "black"
        parts.append(_text(x + cs / 2, y + cs / 2, cell.expected, cs * 0.55, color))
        if struck:
            parts.append(
                f'  <line x1="{x + cs * 0.25}" y1="{y + cs * 0.8}" '
                f'x2="{x + cs * 0.75}" y2="{y + cs * 0.2}" '
                f'stroke="red" stroke-width="1.5"/>\n'
            )
            helper = session.effective_top_digits[cell.col]
            parts.append(_text(x + cs / 2, y + cs, str(helper), cs * 0.3, "red"))

    if cell.has_rule_below:
        parts.append(
            f'  <line x1="{x}" y1="{y + cs}" x2="{x + cs}" y2="{y + cs}" '
            f'stroke="black" stroke-width="2"/>\n'
        )
    if cell.is_dividend_boundary:
        parts.append(
            f'  <line x1="{x}" y1="{y}" x2="{x + cs}" y2="{y}" '
            f'stroke="black" stroke-width="2"/>\n'
        )
    return parts


def _input_parts(
    cell: Cell, x: float, y: float, cs: float, show_answers: bool, session: InputSession | None
) -> list[str]:
    inset = cs * (0.3 if cell.is_carry else 0.1)
    box = cs - 2 * inset
    active = session is not None and session.active_cell_key == cell.key
    stroke = "blue" if active else "gray"
    dash = "" if active else ' stroke-dasharray="3,2"'
    parts = [
        f'  <rect x="{x + inset}" y="{y + inset}" width="{box}" height="{box}" '
        f'rx="3" fill="none" stroke="{stroke}" stroke-width="1"{dash}/>\n'
    ]

    value = ""
    color = "black"
    if show_answers:
        value = cell.expected
    elif session is not None:
        value = session.entered.get(cell.key, "")
        if session.is_wrong(cell.key):
            color = "red"
    if value:
        font = cs * (0.3 if cell.is_carry else 0.55)
        parts.append(_text(x + cs / 2, y + cs / 2, value, font, color))
    return parts


def _text(x: float, y: float, value: str, size: float, color: str) -> str:
    return (
        f'  <text x="{x}" y="{y}" text-anchor="middle" dominant-baseline="central" '
        f'font-family="{FONT}" font-size="{size}" fill="{color}">{escape(value)}</text>\n'
    )


def _default_cell_size(cols: int) -> float:
    if cols <= 6:
        return 40.0
    elif cols <= 10:
        return 32.0
    else:
        return 24.0
