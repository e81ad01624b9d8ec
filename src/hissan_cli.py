#!/usr/bin/env python3
"""CLI entry point for the column-arithmetic trainer.

Three modes:
  1. XLSX mode (default): read problem list → build grids → render worksheet
  2. Generate mode (--generate): worksheet of random problems for a level
  3. Play mode (--play): solve problems interactively in the terminal
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import sys
import time
from pathlib import Path

from pydantic import ValidationError

from config import Settings, get_settings
from models import HissanError, Mode, OperandPair, Operation

OPERATION_NAMES = {
    "add": Operation.ADD,
    "sub": Operation.SUBTRACT,
    "mul": Operation.MULTIPLY,
    "div": Operation.DIVIDE,
}


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Column-arithmetic worksheets and practice."
    )
    p.add_argument("input", nargs="?", default=None,
                   help="Path to XLSX file with problems (not needed with --generate/--play)")
    p.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Output PDF path (default: worksheet.pdf or input with .pdf extension)",
    )
    p.add_argument("--generate", action="store_true",
                   help="Generate a worksheet of random problems")
    p.add_argument("--play", action="store_true",
                   help="Solve problems interactively in the terminal")
    p.add_argument("--operation", choices=sorted(OPERATION_NAMES), default="add",
                   help="Operation for --generate/--play (default: add)")
    p.add_argument("--mode", choices=["learning", "practice"], default="practice",
                   help="Number ranges and hints (default: practice)")
    p.add_argument("--count", type=int, default=12,
                   help="Problems per generated worksheet (default: 12)")
    p.add_argument("--level", type=int, default=None,
                   help="Difficulty level (default: saved level, 0 if none)")
    p.add_argument("--title", default="WORKSHEET",
                   help='Title text (default: "WORKSHEET")')
    p.add_argument("--seed", type=int, default=None,
                   help="Random seed (default: random)")
    p.add_argument("--snapshot", default=None,
                   help="With --play, keep an SVG of the board at this path")
    return p


def main(argv: list[str] | None = None, settings: Settings | None = None) -> None:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    if settings is None:
        try:
            settings = get_settings()
        except ValidationError as e:
            print(f"Error: invalid configuration: {e}", file=sys.stderr)
            sys.exit(1)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    seed = args.seed if args.seed is not None else random.randint(0, 2**31)
    t0 = time.time()

    try:
        if args.play:
            _run_play_mode(args, settings, seed)
        elif args.generate:
            _run_generate_mode(args, settings, seed, t0)
        else:
            if args.input is None:
                parser.error("input XLSX file is required (or use --generate/--play)")
            _run_xlsx_mode(args, t0)

    except HissanError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _output_all(pairs: list[OperandPair], title: str, output_path: str) -> None:
    """Generate all output files in an 'output' folder: PDF, XLSX, puzzle and answer SVGs."""
    from layout_generator import generate_layout
    from pdf_renderer import render_pdf
    from svg_renderer import render_answer_svg, render_puzzle_svg
    from xlsx_writer import write_answer_key_xlsx

    if not pairs:
        raise HissanError("No problems to render")

    stem = Path(output_path).stem
    out_dir = Path(output_path).parent / "output"
    out_dir.mkdir(exist_ok=True)

    grids = [generate_layout(pair) for pair in pairs]

    pdf_path = str(out_dir / f"{stem}.pdf")
    xlsx_path = str(out_dir / f"{stem}_answers.xlsx")

    render_pdf(pairs, grids, title, pdf_path)
    write_answer_key_xlsx(pairs, xlsx_path)
    for i, grid in enumerate(grids, start=1):
        render_puzzle_svg(grid, str(out_dir / f"{stem}_{i:02d}_puzzle.svg"))
        render_answer_svg(grid, str(out_dir / f"{stem}_{i:02d}_answer.svg"))

    print(f"Output: {pdf_path}", file=sys.stderr)
    print(f"Output: {xlsx_path}", file=sys.stderr)
    print(f"Output: {len(grids)} puzzle/answer SVG pairs in {out_dir}", file=sys.stderr)


def _resolve_level(args, settings: Settings) -> int:
    if args.level is not None:
        return args.level
    from score_ledger import ScoreLedger

    return ScoreLedger.load(settings.ledger_path).difficulty_level


def _run_generate_mode(args, settings: Settings, seed: int, t0: float) -> None:
    """Worksheet of random problems for one operation and level."""
    from problem_supplier import generate_problems

    operation = OPERATION_NAMES[args.operation]
    mode = Mode.LEARNING if args.mode == "learning" else Mode.PRACTICE
    level = _resolve_level(args, settings)
    output_path = args.output or args.input or "worksheet.pdf"

    print(f"Generating {args.count} {args.operation} problems "
          f"(level={level}, seed={seed})...", file=sys.stderr)

    try:
        pairs = generate_problems(operation, mode, args.count, level, seed)
    except ValueError as e:
        raise HissanError(str(e)) from e

    _output_all(pairs, args.title, output_path)

    elapsed = time.time() - t0
    print(f"Generated {len(pairs)} problems, time {elapsed:.1f}s", file=sys.stderr)


def _run_xlsx_mode(args, t0: float) -> None:
    """Worksheet from an XLSX problem list."""
    from xlsx_reader import read_problems

    input_path = Path(args.input)
    output_path = args.output or str(input_path.with_suffix(".pdf"))

    pairs = read_problems(input_path)
    print(f"Read {len(pairs)} valid problems", file=sys.stderr)

    _output_all(pairs, args.title, output_path)

    elapsed = time.time() - t0
    print(f"Rendered {len(pairs)} problems, time {elapsed:.1f}s", file=sys.stderr)


def _run_play_mode(args, settings: Settings, seed: int) -> None:
    """Interactive terminal session; progress goes to the ledger save file."""
    from hint_provider import AffirmationProvider, HintProvider
    from score_ledger import ScoreLedger
    from terminal_play import play
    from xlsx_writer import write_answer_key_xlsx

    operation = OPERATION_NAMES[args.operation]
    mode = Mode.LEARNING if args.mode == "learning" else Mode.PRACTICE
    ledger = ScoreLedger.load(settings.ledger_path)
    if args.level is not None:
        if args.level < 0:
            raise HissanError(f"Difficulty level must be non-negative, got {args.level}")
        ledger.difficulty_level = args.level

    rng = random.Random(seed)
    hints = HintProvider(api_key=settings.gemini_api_key, model=settings.hint_model)
    if mode == Mode.LEARNING and not hints.online:
        print("No Gemini API key configured; using built-in hints.", file=sys.stderr)

    results = asyncio.run(
        play(operation, mode, ledger, settings.ledger_path, hints,
             AffirmationProvider(rng), rng, snapshot_path=args.snapshot)
    )

    perfect = sum(1 for r in results if r.perfect)
    print(f"Solved {len(results)} problems, {perfect} perfect, "
          f"tickets {ledger.tickets}, level {ledger.difficulty_level + 1}", file=sys.stderr)

    results_path = args.output or args.input
    if results and results_path:
        pairs = [r.pair for r in results]
        write_answer_key_xlsx(pairs, results_path, results=results)
        print(f"Output: {results_path}", file=sys.stderr)


if __name__ == "__main__":
    main()
