"""Tests for xlsx_writer.py."""

import os
import tempfile

import openpyxl

from models import OperandPair, Operation, ProblemResult
from xlsx_reader import read_problems
from xlsx_writer import write_answer_key_xlsx


def _pairs():
    return [
        OperandPair(47, 85, Operation.ADD),
        OperandPair(23, 4, Operation.DIVIDE),
    ]


class TestWriteAnswerKeyXlsx:
    def test_creates_file(self):
        with tempfile.NamedTemporaryFile(suffix=".xlsx", delete=False) as f:
            path = f.name
        try:
            write_answer_key_xlsx(_pairs(), path)
            assert os.path.getsize(path) > 0
        finally:
            os.unlink(path)

    def test_problems_sheet(self):
        with tempfile.NamedTemporaryFile(suffix=".xlsx", delete=False) as f:
            path = f.name
        try:
            write_answer_key_xlsx(_pairs(), path)
            wb = openpyxl.load_workbook(path)
            ws = wb["Problems"]
            assert [c.value for c in ws[1]] == ["No.", "First", "Op", "Second", "Answer"]
            assert [c.value for c in ws[2]] == [1, 47, "+", 85, "132"]
            assert [c.value for c in ws[3]] == [2, 23, "÷", 4, "5 r 3"]
            assert "Results" not in wb.sheetnames
            wb.close()
        finally:
            os.unlink(path)

    def test_results_sheet(self):
        pairs = _pairs()
        results = [ProblemResult(pairs[0], True), ProblemResult(pairs[1], False)]
        with tempfile.NamedTemporaryFile(suffix=".xlsx", delete=False) as f:
            path = f.name
        try:
            write_answer_key_xlsx(pairs, path, results=results)
            wb = openpyxl.load_workbook(path)
            ws = wb["Results"]
            assert [c.value for c in ws[2]] == ["47 + 85", "132", "yes"]
            assert [c.value for c in ws[3]] == ["23 ÷ 4", "5 r 3", "no"]
            wb.close()
        finally:
            os.unlink(path)

    def test_key_reads_back_as_problem_list(self):
        with tempfile.NamedTemporaryFile(suffix=".xlsx", delete=False) as f:
            path = f.name
        try:
            write_answer_key_xlsx(_pairs(), path)
            assert read_problems(path) == _pairs()
        finally:
            os.unlink(path)
