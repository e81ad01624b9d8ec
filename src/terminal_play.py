"""Interactive terminal play: one input session per problem.

Commands typed at the prompt:
  <digits>   write digits into the active cell (one cell per digit)
  d          delete the active cell's entry
  @R,C       move the cursor to the input cell at row R, column C
  bN         borrow ten into column N (subtraction)
  ?          ask the teacher for a hint
  q          stop playing
"""

from __future__ import annotations

import asyncio
import random
import re
from collections import namedtuple
from pathlib import Path
from typing import Awaitable, Callable, Optional

from coach import THINKING_MESSAGE, Coach
from hint_provider import AffirmationProvider, HintProvider
from input_session import InputSession
from layout_generator import generate_layout
from models import Mode, Operation, ProblemResult, cell_key
from problem_supplier import generate_problem
from score_ledger import STREAK_FOR_TICKET, ScoreLedger
from svg_renderer import render_svg
from text_renderer import render_session_text

PRACTICE_ROUND_LENGTH = 10
HINT_WAIT_SECONDS = 10.0

Command = namedtuple("Command", ["name", "arg"])
ReadLine = Callable[[], Awaitable[Optional[str]]]

_SELECT_RE = re.compile(r"^@\s*(\d+)\s*,\s*(\d+)$")
_BORROW_RE = re.compile(r"^b\s*(\d+)$")


def parse_command(line: str) -> Command:
    text = line.strip().lower()
    if text in ("q", "quit", "exit"):
        return Command("quit", None)
    if text in ("d", "del", "delete"):
        return Command("delete", None)
    if text == "?":
        return Command("hint", None)
    m = _SELECT_RE.match(text)
    if m:
        return Command("select", cell_key(int(m.group(1)), int(m.group(2))))
    m = _BORROW_RE.match(text)
    if m:
        return Command("borrow", int(m.group(1)))
    if text and text.isdigit():
        return Command("digits", text)
    return Command("unknown", text)


async def apply_command(session: InputSession, coach: Coach, command: Command) -> str:
    """Run one command against the session; return a feedback line."""
    if command.name == "digits":
        for digit in command.arg:
            key = session.active_cell()
            outcome = session.submit_digit(digit)
            await coach.on_outcome(outcome, key)
            if outcome.rejected:
                return "Nothing to fill in."
            if outcome.mistake or outcome.completed:
                break
        return coach.message
    if command.name == "delete":
        if not session.delete_digit():
            return "Nothing to delete."
        coach.on_delete()
        return coach.message
    if command.name == "select":
        if not session.select_cell(command.arg):
            return f"Cell {command.arg} cannot be selected."
        return coach.message
    if command.name == "borrow":
        if not session.try_borrow(command.arg):
            return f"Column {command.arg} cannot borrow."
        return f"Borrowed ten into column {command.arg}."
    if command.name == "hint":
        task = coach.request_hint_in_background()
        if task is None:
            return coach.message or "No hint needed."
        done, _ = await asyncio.wait({task}, timeout=HINT_WAIT_SECONDS)
        if not done:
            return THINKING_MESSAGE
        hint = task.result()
        return hint.guidance if hint else "No hint needed."
    return f"Unknown command: {command.arg!r}"


async def _stdin_line() -> str | None:
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, input, "> ")
    except EOFError:
        return None


async def play_problem(
    pair,
    hints: HintProvider,
    affirmations: AffirmationProvider,
    read_line: ReadLine,
    write: Callable[[str], None],
    learning: bool,
    snapshot_path: str | Path | None = None,
) -> bool | None:
    """Drive one problem. Returns the perfect flag, or None if the player quit.

    With *snapshot_path*, the live board is also written there as SVG after
    every move.
    """
    session = InputSession(generate_layout(pair))
    coach = Coach(pair, session, hints, affirmations)
    write(f"\n{pair.expression}")

    while not session.is_complete:
        if snapshot_path is not None:
            render_svg(session.grid, str(snapshot_path), session=session)
        if learning:
            coach.request_hint_in_background()
            await asyncio.sleep(0)
        write(render_session_text(session))
        if learning and coach.message:
            write(f"Teacher: {coach.message}")

        line = await read_line()
        if line is None:
            await coach.cancel_pending()
            return None
        command = parse_command(line)
        if command.name == "quit":
            await coach.cancel_pending()
            return None
        write(await apply_command(session, coach, command))

    await coach.cancel_pending()
    if snapshot_path is not None:
        render_svg(session.grid, str(snapshot_path), session=session)
    write(render_session_text(session))
    if coach.cheer:
        write(f"*** {coach.cheer} ***")
    return not session.has_recorded_mistake


async def play(
    operation: Operation,
    mode: Mode,
    ledger: ScoreLedger,
    ledger_path: str | Path | None,
    hints: HintProvider,
    affirmations: AffirmationProvider | None = None,
    rng: random.Random | None = None,
    read_line: ReadLine | None = None,
    write: Callable[[str], None] = print,
    snapshot_path: str | Path | None = None,
) -> list[ProblemResult]:
    """Serve problems until the player quits (or a practice round ends)."""
    affirmations = affirmations or AffirmationProvider(rng)
    read_line = read_line or _stdin_line
    rng = rng or random.Random()
    learning = mode == Mode.LEARNING
    results: list[ProblemResult] = []

    while True:
        if mode == Mode.PRACTICE:
            write(f"\nQuestion {len(results) + 1}/{PRACTICE_ROUND_LENGTH}")
        pair = generate_problem(operation, mode, ledger.difficulty_level, rng)
        perfect = await play_problem(
            pair, hints, affirmations, read_line, write, learning, snapshot_path
        )
        if perfect is None:
            ledger.reset_streak()
            break

        results.append(ProblemResult(pair=pair, perfect=perfect))
        update = ledger.record(perfect)
        if ledger_path is not None:
            ledger.save(ledger_path)
        write(f"Streak: {update.streak}/{STREAK_FOR_TICKET}")
        if update.ticket_awarded:
            write("Ten perfect in a row! You earned a ticket!")
        if update.leveled_up:
            write(f"Level up! Problems get harder now (level {ledger.difficulty_level + 1}).")

        if mode == Mode.PRACTICE and len(results) >= PRACTICE_ROUND_LENGTH:
            ledger.reset_streak()
            break

    return results
