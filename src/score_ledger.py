"""Streak, reward-ticket and difficulty bookkeeping across problems."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

STREAK_FOR_TICKET = 10
SETS_FOR_LEVEL_UP = 2


@dataclass(frozen=True)
class LedgerUpdate:
    """What changed after recording one finished problem."""

    streak: int
    ticket_awarded: bool = False
    leveled_up: bool = False


@dataclass
class ScoreLedger:
    """Owns everything the input session reports to but never reads.

    ``streak`` lives only for the current run; tickets, level and completed
    perfect sets are saved.
    """

    tickets: int = 0
    difficulty_level: int = 0
    perfect_sets: int = 0
    streak: int = 0

    def record(self, perfect: bool) -> LedgerUpdate:
        if not perfect:
            self.streak = 0
            return LedgerUpdate(streak=0)

        self.streak += 1
        if self.streak < STREAK_FOR_TICKET:
            return LedgerUpdate(streak=self.streak)

        self.streak = 0
        self.tickets += 1
        self.perfect_sets += 1
        leveled_up = False
        if self.perfect_sets >= SETS_FOR_LEVEL_UP:
            self.perfect_sets = 0
            self.difficulty_level += 1
            leveled_up = True
        return LedgerUpdate(streak=0, ticket_awarded=True, leveled_up=leveled_up)

    def reset_streak(self) -> None:
        self.streak = 0

    def save(self, path: str | Path) -> None:
        data = asdict(self)
        del data["streak"]
        Path(path).write_text(json.dumps(data, indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: str | Path) -> ScoreLedger:
        """Load a saved ledger; a missing or unreadable file starts fresh."""
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return cls(
                tickets=int(data.get("tickets", 0)),
                difficulty_level=int(data.get("difficulty_level", 0)),
                perfect_sets=int(data.get("perfect_sets", 0)),
            )
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("Failed to load saved data from %s: %s", path, e)
            return cls()
