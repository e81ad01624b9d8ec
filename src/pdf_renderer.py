"""Render a printable worksheet of column-arithmetic problems using ReportLab.

Layout: title banner at the top, numbered problem grids flowing left to
right in equal slots below it, then the same pages again as an answer key.
"""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.pagesizes import letter
from reportlab.pdfbase.pdfmetrics import stringWidth

from models import CellKind, Grid, OperandPair

PAGE_W, PAGE_H = letter  # 612 x 792
MARGIN = 36
MIN_CELL_SIZE = 14.0


@dataclass
class LayoutParams:
    """All computed layout measurements."""

    page_w: float = PAGE_W
    page_h: float = PAGE_H
    margin: float = MARGIN
    usable_w: float = PAGE_W - 2 * MARGIN
    usable_h: float = PAGE_H - 2 * MARGIN

    # Title banner
    banner_h: float = 28.0
    banner_y: float = 0.0

    # Problem slots
    cell_size: float = 28.0
    max_cols: int = 1
    max_rows: int = 1
    label_h: float = 16.0
    slot_pad: float = 8.0
    gap: float = 14.0
    slot_w: float = 0.0
    slot_h: float = 0.0
    slots_per_row: int = 1
    rows_per_page: int = 1
    content_top: float = 0.0

    # Title text
    title: str = "WORKSHEET"

    @property
    def per_page(self) -> int:
        return self.slots_per_row * self.rows_per_page


def render_pdf(
    pairs: list[OperandPair],
    grids: list[Grid],
    title: str,
    output_path: str,
) -> None:
    """Compute layout, adaptive fit, draw the problem pages then the answer key."""
    from reportlab.pdfgen.canvas import Canvas

    layout = _compute_layout(grids, title)
    layout = _adaptive_fit(len(grids), layout)

    c = Canvas(output_path, pagesize=letter)

    # --- Problem pages ---
    _draw_pages(c, pairs, grids, layout, show_answers=False)

    # --- Answer key ---
    key_layout = _compute_layout(grids, "ANSWER KEY")
    key_layout.cell_size = layout.cell_size
    _recompute_positions(key_layout)
    _draw_pages(c, pairs, grids, key_layout, show_answers=True)

    c.save()


def _compute_layout(grids: list[Grid], title: str) -> LayoutParams:
    """Size slots for the largest grid on the sheet."""
    lp = LayoutParams(title=title)
    lp.max_cols = max((g.cols for g in grids), default=1)
    lp.max_rows = max((g.rows for g in grids), default=1)

    # Cell size scaling by grid width
    if lp.max_cols <= 5:
        lp.cell_size = 28.0
    elif lp.max_cols <= 8:
        lp.cell_size = 24.0
    else:
        lp.cell_size = 20.0

    _recompute_positions(lp)
    return lp


def _recompute_positions(lp: LayoutParams) -> None:
    """(Re)calculate derived positions from current params."""
    lp.banner_y = lp.page_h - lp.margin - lp.banner_h
    lp.content_top = lp.banner_y - 12

    lp.slot_w = lp.max_cols * lp.cell_size + 2 * lp.slot_pad
    lp.slot_h = lp.label_h + lp.max_rows * lp.cell_size + 2 * lp.slot_pad

    lp.slots_per_row = max(1, int((lp.usable_w + lp.gap) // (lp.slot_w + lp.gap)))
    content_h = lp.content_top - lp.margin
    lp.rows_per_page = max(1, int((content_h + lp.gap) // (lp.slot_h + lp.gap)))


def _adaptive_fit(count: int, layout: LayoutParams) -> LayoutParams:
    """Shrink cells until every problem fits on one page, else paginate."""
    for _ in range(12):
        if _content_fits(count, layout):
            return layout
        if layout.cell_size - 2 >= MIN_CELL_SIZE:
            layout.cell_size -= 2
            _recompute_positions(layout)
            continue
        break
    return layout


def _content_fits(count: int, layout: LayoutParams) -> bool:
    return count <= layout.per_page


# ─── Drawing functions ──────────────────────────────────────────────────────


def _draw_pages(
    c,
    pairs: list[OperandPair],
    grids: list[Grid],
    layout: LayoutParams,
    show_answers: bool,
) -> None:
    per_page = layout.per_page
    for start in range(0, max(len(grids), 1), per_page):
        _draw_title_banner(c, layout)
        chunk = list(zip(pairs, grids))[start:start + per_page]
        for i, (pair, grid) in enumerate(chunk):
            slot_row, slot_col = divmod(i, layout.slots_per_row)
            x = layout.margin + slot_col * (layout.slot_w + layout.gap)
            y = layout.content_top - slot_row * (layout.slot_h + layout.gap)
            label = f"({start + i + 1})  {pair.expression}"
            if show_answers:
                label += f" = {pair.answer_text}"
            _draw_label(c, label, x, y)
            # Right-align narrower grids inside the slot
            gx = x + layout.slot_pad + (layout.max_cols - grid.cols) * layout.cell_size
            gy = y - layout.label_h - layout.slot_pad
            _draw_grid(c, grid, gx, gy, layout.cell_size, show_answers)
        c.showPage()


def _draw_title_banner(c, layout: LayoutParams) -> None:
    """Black rect + white centered bold text."""
    x = layout.margin
    y = layout.banner_y
    w = layout.usable_w
    h = layout.banner_h

    c.setFillColorRGB(0, 0, 0)
    c.rect(x, y, w, h, fill=1, stroke=0)

    c.setFillColorRGB(1, 1, 1)
    c.setFont("Helvetica-Bold", 16)
    text_w = stringWidth(layout.title, "Helvetica-Bold", 16)
    tx = x + (w - text_w) / 2
    ty = y + (h - 16) / 2 + 2
    c.drawString(tx, ty, layout.title)


def _draw_label(c, text: str, x: float, y: float) -> None:
    c.setFillColorRGB(0, 0, 0)
    c.setFont("Helvetica-Bold", 10)
    c.drawString(x, y - 11, text)


def _draw_grid(c, grid: Grid, x0: float, y0: float, cs: float, show_answers: bool) -> None:
    """Draw one problem grid with its top-left corner at (x0, y0)."""
    for cell in grid.cells:
        cx = x0 + cell.col * cs
        cy = y0 - (cell.row + 1) * cs

        if cell.kind == CellKind.INPUT:
            inset = cs * (0.25 if cell.is_carry else 0.08)
            c.setStrokeColorRGB(0.6, 0.6, 0.6)
            c.setLineWidth(0.5)
            c.setDash(2, 2)
            c.rect(cx + inset, cy + inset, cs - 2 * inset, cs - 2 * inset, fill=0, stroke=1)
            c.setDash()
            if show_answers:
                _draw_centered(c, cell.expected, cx, cy, cs, cs * (0.3 if cell.is_carry else 0.55))
        elif cell.is_divisor_boundary:
            c.setStrokeColorRGB(0, 0, 0)
            c.setLineWidth(1.5)
            c.bezier(cx + cs, cy + cs, cx + cs * 0.7, cy + cs * 0.6,
                     cx + cs * 0.6, cy + cs * 0.3, cx + cs * 0.3, cy + cs * 0.05)
        elif cell.expected:
            _draw_centered(c, cell.expected, cx, cy, cs, cs * 0.55)

        c.setStrokeColorRGB(0, 0, 0)
        c.setLineWidth(1.2)
        if cell.has_rule_below:
            c.line(cx, cy, cx + cs, cy)
        if cell.is_dividend_boundary:
            c.line(cx, cy + cs, cx + cs, cy + cs)


def _draw_centered(c, text: str, cx: float, cy: float, cs: float, font_size: float) -> None:
    c.setFillColorRGB(0, 0, 0)
    c.setFont("Helvetica", font_size)
    tw = stringWidth(text, "Helvetica", font_size)
    c.drawString(cx + (cs - tw) / 2, cy + (cs - font_size * 0.7) / 2, text)
