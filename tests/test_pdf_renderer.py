"""Tests for pdf_renderer.py."""

import os
import re
import tempfile

from layout_generator import generate_layout
from models import OperandPair, Operation
from pdf_renderer import (
    MIN_CELL_SIZE,
    _adaptive_fit,
    _compute_layout,
    render_pdf,
)


def _sheet(pairs):
    return pairs, [generate_layout(p) for p in pairs]


def _render(pairs, grids, title="WORKSHEET"):
    with tempfile.NamedTemporaryFile(suffix=".pdf", delete=False) as f:
        path = f.name
    try:
        render_pdf(pairs, grids, title, path)
        with open(path, "rb") as f:
            return f.read()
    finally:
        os.unlink(path)


def _page_count(data):
    return len(re.findall(rb"/Type\s*/Page[^s]", data))


class TestRenderPdf:
    def test_creates_valid_pdf(self):
        pairs, grids = _sheet([OperandPair(8, 6, Operation.ADD)])
        data = _render(pairs, grids)
        assert data[:5] == b"%PDF-"
        assert len(data) > 500

    def test_problem_page_plus_answer_key(self):
        pairs, grids = _sheet([
            OperandPair(47, 85, Operation.ADD),
            OperandPair(52, 27, Operation.SUBTRACT),
            OperandPair(23, 45, Operation.MULTIPLY),
            OperandPair(84, 4, Operation.DIVIDE),
        ])
        assert _page_count(_render(pairs, grids)) == 2

    def test_many_problems_paginate(self):
        pairs, grids = _sheet([OperandPair(8, 6, Operation.ADD) for _ in range(100)])
        # 42 slots per page at the smallest cell size: 3 pages each
        assert _page_count(_render(pairs, grids)) == 6


class TestLayout:
    def test_cell_size_by_width(self):
        narrow = [generate_layout(OperandPair(8, 6, Operation.ADD))]
        wide = [generate_layout(OperandPair(12345, 9, Operation.DIVIDE))]
        assert _compute_layout(narrow, "T").cell_size == 28.0
        assert _compute_layout(wide, "T").cell_size == 24.0

    def test_slots_sized_for_largest_grid(self):
        grids = [
            generate_layout(OperandPair(8, 6, Operation.ADD)),
            generate_layout(OperandPair(23, 45, Operation.MULTIPLY)),
        ]
        layout = _compute_layout(grids, "T")
        assert layout.max_cols == 5
        assert layout.max_rows == 6

    def test_adaptive_fit_keeps_size_when_it_fits(self):
        grids = [generate_layout(OperandPair(8, 6, Operation.ADD))]
        layout = _adaptive_fit(1, _compute_layout(grids, "T"))
        assert layout.cell_size == 28.0

    def test_adaptive_fit_shrinks_to_minimum(self):
        grids = [generate_layout(OperandPair(8, 6, Operation.ADD))]
        layout = _adaptive_fit(100, _compute_layout(grids, "T"))
        assert layout.cell_size == MIN_CELL_SIZE
        assert layout.per_page == 42

    def test_adaptive_fit_stops_shrinking_once_it_fits(self):
        grids = [generate_layout(OperandPair(8, 6, Operation.ADD))]
        layout = _adaptive_fit(20, _compute_layout(grids, "T"))
        assert layout.cell_size == 26.0
        assert layout.per_page >= 20
