"""Tests for xlsx_reader.py."""

import os
import tempfile

import openpyxl
import pytest

from models import HissanError, OperandPair, Operation
from xlsx_reader import _parse_operator, _validate_and_filter, read_problems


def _workbook(rows, header=True):
    wb = openpyxl.Workbook()
    ws = wb.active
    if header:
        ws.append(["No.", "First", "Op", "Second"])
    for row in rows:
        ws.append(list(row))
    with tempfile.NamedTemporaryFile(suffix=".xlsx", delete=False) as f:
        path = f.name
    wb.save(path)
    return path


class TestReadProblems:
    def test_valid_parse(self):
        path = _workbook([(1, 47, "+", 85), (2, 52, "-", 27), (3, 23, "×", 45), (4, 84, "÷", 4)])
        try:
            pairs = read_problems(path)
        finally:
            os.unlink(path)
        assert [p.expression for p in pairs] == ["47 + 85", "52 - 27", "23 × 45", "84 ÷ 4"]
        assert all(isinstance(p, OperandPair) for p in pairs)

    def test_sorted_by_number(self):
        path = _workbook([(3, 1, "+", 1), (1, 2, "+", 2), (2, 3, "+", 3)])
        try:
            pairs = read_problems(path)
        finally:
            os.unlink(path)
        assert [p.first for p in pairs] == [2, 3, 1]

    def test_without_header_row(self):
        path = _workbook([(1, 8, "+", 6), (2, 9, "+", 9)], header=False)
        try:
            pairs = read_problems(path)
        finally:
            os.unlink(path)
        assert len(pairs) == 2
        assert pairs[0].first == 8

    def test_ascii_operators(self):
        path = _workbook([(1, 6, "x", 7), (2, 6, "*", 7), (3, 42, "/", 7)])
        try:
            pairs = read_problems(path)
        finally:
            os.unlink(path)
        assert [p.operation for p in pairs] == [
            Operation.MULTIPLY, Operation.MULTIPLY, Operation.DIVIDE,
        ]

    def test_unknown_operator_skipped(self, capsys):
        path = _workbook([(1, 8, "+", 6), (2, 8, "%", 6)])
        try:
            pairs = read_problems(path)
        finally:
            os.unlink(path)
        assert len(pairs) == 1
        assert "unknown operator" in capsys.readouterr().err

    def test_fractional_operands_skipped(self, capsys):
        path = _workbook([(1, 12.7, "+", 3), (2, 12.0, "+", 3), (3, 8, "÷", 2.5)])
        try:
            pairs = read_problems(path)
        finally:
            os.unlink(path)
        assert [(p.first, p.second) for p in pairs] == [(12, 3)]
        assert capsys.readouterr().err.count("whole numbers") == 2

    def test_non_numeric_rows_skipped(self):
        path = _workbook([(1, 8, "+", 6), (2, "eight", "+", 6)])
        try:
            pairs = read_problems(path)
        finally:
            os.unlink(path)
        assert len(pairs) == 1

    def test_file_not_found(self):
        with pytest.raises(HissanError, match="File not found"):
            read_problems("nonexistent.xlsx")

    def test_empty_file_error(self):
        path = _workbook([])
        try:
            with pytest.raises(HissanError):
                read_problems(path)
        finally:
            os.unlink(path)


class TestParseOperator:
    def test_symbols(self):
        assert _parse_operator("+") == Operation.ADD
        assert _parse_operator(" − ") == Operation.SUBTRACT
        assert _parse_operator("X") == Operation.MULTIPLY
        assert _parse_operator("÷") == Operation.DIVIDE

    def test_unknown(self):
        assert _parse_operator(None) is None
        assert _parse_operator("plus") is None


class TestValidateAndFilter:
    def test_drops_invalid_rows(self, capsys):
        rows = [
            (1, 8, 6, Operation.ADD),
            (2, -1, 6, Operation.ADD),
            (3, 5, 9, Operation.SUBTRACT),
            (4, 9, 0, Operation.DIVIDE),
            (5, 0, 7, Operation.DIVIDE),
        ]
        pairs = _validate_and_filter(rows)
        assert [(p.first, p.second) for p in pairs] == [(8, 6), (0, 7)]
        err = capsys.readouterr().err
        assert "negative operand" in err
        assert "below zero" in err
        assert "division by zero" in err

    def test_nothing_left_raises(self):
        with pytest.raises(HissanError, match="No valid problems"):
            _validate_and_filter([(1, 1, 2, Operation.SUBTRACT)])
