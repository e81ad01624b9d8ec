"""Tests for svg_renderer.py."""

import os
import tempfile
import xml.etree.ElementTree as ET

from input_session import InputSession
from layout_generator import generate_layout
from models import OperandPair, Operation
from svg_renderer import render_answer_svg, render_puzzle_svg, render_svg

SVG_NS = "{http://www.w3.org/2000/svg}"


def _render(grid, **kwargs):
    with tempfile.NamedTemporaryFile(suffix=".svg", delete=False) as f:
        path = f.name
    try:
        render_svg(grid, path, **kwargs)
        return ET.parse(path).getroot()
    finally:
        os.unlink(path)


def _texts(root):
    return [t.text for t in root.iter(f"{SVG_NS}text")]


class TestRenderSvg:
    def test_creates_valid_svg(self):
        root = _render(generate_layout(OperandPair(8, 6, Operation.ADD)))
        assert root.tag == f"{SVG_NS}svg"

    def test_correct_dimensions(self):
        grid = generate_layout(OperandPair(8, 6, Operation.ADD))
        root = _render(grid, cell_size=24.0)
        assert root.get("width") == str(24.0 * grid.cols)
        assert root.get("height") == str(24.0 * grid.rows)

    def test_puzzle_shows_only_printed_digits(self):
        root = _render(generate_layout(OperandPair(8, 6, Operation.ADD)))
        assert sorted(_texts(root)) == sorted(["8", "+", "6"])

    def test_answers_fill_input_cells(self):
        root = _render(generate_layout(OperandPair(8, 6, Operation.ADD)), show_answers=True)
        texts = _texts(root)
        assert texts.count("1") == 2
        assert "4" in texts

    def test_input_boxes_drawn(self):
        grid = generate_layout(OperandPair(47, 85, Operation.ADD))
        root = _render(grid)
        dashed = [r for r in root.iter(f"{SVG_NS}rect") if r.get("stroke-dasharray")]
        assert len(dashed) == len(grid.input_cells)

    def test_division_bracket(self):
        root = _render(generate_layout(OperandPair(84, 4, Operation.DIVIDE)))
        assert len(list(root.iter(f"{SVG_NS}path"))) == 1


class TestRenderWithSession:
    def test_active_and_wrong_cells(self):
        session = InputSession(generate_layout(OperandPair(8, 6, Operation.ADD)))
        session.submit_digit("5")
        root = _render(session.grid, session=session)
        blue = [r for r in root.iter(f"{SVG_NS}rect") if r.get("stroke") == "blue"]
        assert len(blue) == 1
        red = [t for t in root.iter(f"{SVG_NS}text") if t.get("fill") == "red"]
        assert [t.text for t in red] == ["5"]

    def test_borrow_strikes_top_digits(self):
        session = InputSession(generate_layout(OperandPair(52, 27, Operation.SUBTRACT)))
        session.try_borrow(2)
        root = _render(session.grid, session=session)
        red_lines = [ln for ln in root.iter(f"{SVG_NS}line") if ln.get("stroke") == "red"]
        assert len(red_lines) == 2
        helpers = [t.text for t in root.iter(f"{SVG_NS}text") if t.get("fill") == "red"]
        assert sorted(helpers) == ["12", "4"]


class TestConvenienceWrappers:
    def test_puzzle_and_answer(self):
        grid = generate_layout(OperandPair(23, 4, Operation.DIVIDE))
        with tempfile.TemporaryDirectory() as tmp:
            puzzle = os.path.join(tmp, "p.svg")
            answer = os.path.join(tmp, "a.svg")
            render_puzzle_svg(grid, puzzle)
            render_answer_svg(grid, answer)
            assert "5" not in _texts(ET.parse(puzzle).getroot())
            assert "5" in _texts(ET.parse(answer).getroot())
