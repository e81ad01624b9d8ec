"""Write a worksheet's answer key (and optional play results) to XLSX."""

from __future__ import annotations

import openpyxl
from openpyxl.styles import Font

from models import OperandPair, ProblemResult


def write_answer_key_xlsx(
    pairs: list[OperandPair],
    output_path: str,
    results: list[ProblemResult] | None = None,
) -> None:
    """Write the problems and answers to an Excel workbook.

    Columns: No., first operand, operator, second operand, answer. The
    layout matches what ``read_problems`` accepts, so a key can be fed back
    in. If *results* is provided, a second sheet lists each finished
    problem and whether it was solved without a mistake.
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Problems"

    header_font = Font(bold=True, size=12)
    for col, label in enumerate(("No.", "First", "Op", "Second", "Answer"), start=1):
        ws.cell(row=1, column=col, value=label).font = header_font

    for i, pair in enumerate(pairs, start=1):
        row = i + 1
        ws.cell(row=row, column=1, value=i)
        ws.cell(row=row, column=2, value=pair.first)
        ws.cell(row=row, column=3, value=pair.operation.symbol)
        ws.cell(row=row, column=4, value=pair.second)
        ws.cell(row=row, column=5, value=pair.answer_text)

    # Set column widths
    ws.column_dimensions["A"].width = 6
    for letter in ("B", "D", "E"):
        ws.column_dimensions[letter].width = 12
    ws.column_dimensions["C"].width = 5

    # Results sheet
    if results:
        ws2 = wb.create_sheet(title="Results")
        ws2.cell(row=1, column=1, value="Problem").font = header_font
        ws2.cell(row=1, column=2, value="Answer").font = header_font
        ws2.cell(row=1, column=3, value="Perfect").font = header_font
        for i, result in enumerate(results, start=2):
            ws2.cell(row=i, column=1, value=result.pair.expression)
            ws2.cell(row=i, column=2, value=result.pair.answer_text)
            ws2.cell(row=i, column=3, value="yes" if result.perfect else "no")
        ws2.column_dimensions["A"].width = 20
        ws2.column_dimensions["B"].width = 12

    wb.save(output_path)
