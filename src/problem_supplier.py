"""Pick operands for a requested operation, mode and difficulty level.

Level 0 is the base range; each level widens ranges by 20% and shifts
minimums up. Subtraction never goes below zero and division is always an
exact ``quotient × divisor``.
"""

from __future__ import annotations

import random

from models import Mode, OperandPair, Operation


def generate_problem(
    operation: Operation,
    mode: Mode,
    level: int = 0,
    rng: random.Random | None = None,
) -> OperandPair:
    """Return a fresh OperandPair for *operation* at difficulty *level*."""
    if level < 0:
        raise ValueError(f"Difficulty level must be non-negative, got {level}")
    rng = rng or random.Random()
    learning = mode == Mode.LEARNING

    if operation == Operation.ADD:
        a, b = _addition(rng, level, learning)
    elif operation == Operation.SUBTRACT:
        a, b = _subtraction(rng, level, learning)
    elif operation == Operation.MULTIPLY:
        a, b = _multiplication(rng, level, learning)
    else:
        a, b = _division(rng, level, learning)

    return OperandPair(first=a, second=b, operation=operation)


def generate_problems(
    operation: Operation,
    mode: Mode,
    count: int,
    level: int = 0,
    seed: int | None = None,
) -> list[OperandPair]:
    """Generate *count* problems from one seeded RNG (reproducible worksheets)."""
    rng = random.Random(seed)
    return [generate_problem(operation, mode, level, rng) for _ in range(count)]


def _scale(level: int) -> float:
    return 1 + level * 0.2


def _addition(rng: random.Random, level: int, learning: bool) -> tuple[int, int]:
    if learning:
        # Base: 10-90
        top = int(80 * _scale(level)) + level * 10
        return rng.randrange(top) + 10, rng.randrange(top) + 10
    # Base: 100-990, pushes into 4 digits as the level rises
    top = int(890 * _scale(level))
    low = 100 + level * 50
    return rng.randrange(top) + low, rng.randrange(top) + low


def _subtraction(rng: random.Random, level: int, learning: bool) -> tuple[int, int]:
    if learning:
        # Base: 20-100
        top = int(80 * _scale(level)) + level * 10
        a = rng.randrange(top) + 20
        return a, rng.randrange(a - 10) + 5
    top = int(800 * _scale(level))
    low = 200 + level * 50
    a = rng.randrange(top) + low
    return a, rng.randrange(a - 50) + 10


def _multiplication(rng: random.Random, level: int, learning: bool) -> tuple[int, int]:
    if learning:
        # 2-digit × 1-digit, multiplier range grows slowly
        a = rng.randrange(int(80 * _scale(level))) + 10
        b = rng.randrange(4 + int(level * 0.5)) + 2
        return a, b
    a = rng.randrange(int(90 * _scale(level)) + level * 20) + 10
    b = rng.randrange(8 + level) + 2
    return a, b


def _division(rng: random.Random, level: int, learning: bool) -> tuple[int, int]:
    if learning:
        quotient = rng.randrange(8 + level * 5) + 2
        divisor = rng.randrange(5 + int(level * 0.5)) + 2
    else:
        quotient = rng.randrange(20 + level * 15) + 2
        divisor = rng.randrange(7 + level) + 3
    return quotient * divisor, divisor
