"""Advisory messages for one input session.

Hint requests are keyed by their target cell. A reply is cached either way
but only shown if that cell is still the active one, so a slow reply never
overwrites advice for a cell the learner has already moved past.
"""

from __future__ import annotations

import asyncio

from hint_provider import AffirmationProvider, Explanation, HintProvider
from input_session import InputSession
from models import OperandPair, Outcome

THINKING_MESSAGE = "Teacher is thinking..."
DEFAULT_MISTAKE_MESSAGE = "Oops! Maybe a slip? Check it once more!"
COMPLETE_MESSAGE = "Perfect! Great job!"


class Coach:
    def __init__(
        self,
        pair: OperandPair,
        session: InputSession,
        hints: HintProvider,
        affirmations: AffirmationProvider,
    ) -> None:
        self.pair = pair
        self.session = session
        self._hints = hints
        self._affirmations = affirmations
        self._cache: dict[str, Explanation] = {}
        self._pending: dict[str, asyncio.Task] = {}
        self.message = ""
        self.cheer = ""
        self.is_thinking = False

    def cached(self, key: str) -> Explanation | None:
        return self._cache.get(key)

    async def request_hint(self, target_key: str | None = None) -> Explanation | None:
        """Fetch (or reuse) the hint for *target_key*, default the active cell."""
        key = target_key or self.session.active_cell()
        if key is None or self.session.is_complete:
            return None

        hint = self._cache.get(key)
        if hint is None:
            if key == self.session.active_cell():
                self.is_thinking = True
                self.message = THINKING_MESSAGE
            hint = await self._hints.explain(
                self.pair, self.session.grid, dict(self.session.entered), key
            )
            self._cache[key] = hint

        if key == self.session.active_cell() and not self.session.is_complete:
            self.message = hint.guidance
            self.is_thinking = False
        return hint

    def request_hint_in_background(self) -> asyncio.Task | None:
        """Fire-and-forget hint for the active cell; needs a running loop."""
        key = self.session.active_cell()
        if key is None or self.session.is_complete:
            return None
        cached = self._cache.get(key)
        if cached is not None:
            self.message = cached.guidance
            self.is_thinking = False
            return None
        task = self._pending.get(key)
        if task is None or task.done():
            task = asyncio.create_task(self.request_hint(key))
            self._pending[key] = task
        return task

    async def on_outcome(self, outcome: Outcome, cell_key: str | None) -> None:
        """Update the message after a submission."""
        if outcome.rejected:
            return
        if outcome.completed:
            self.is_thinking = False
            self.message = COMPLETE_MESSAGE
            self.cheer = await self._affirmations.cheer()
            return
        if outcome.mistake:
            hint = self._cache.get(cell_key) if cell_key else None
            self.message = hint.mistake_hint if hint and hint.mistake_hint else DEFAULT_MISTAKE_MESSAGE
            return
        hint = self._cache.get(outcome.advance_to) if outcome.advance_to else None
        if hint is not None:
            self.message = hint.guidance
            self.is_thinking = False

    def on_delete(self) -> None:
        key = self.session.active_cell()
        hint = self._cache.get(key) if key else None
        if hint is not None:
            self.message = hint.guidance

    async def cancel_pending(self) -> None:
        """Cancel outstanding background requests (used on teardown).

        A hint that never resolves must not hold up the next problem.
        """
        pending = [t for t in self._pending.values() if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._pending.clear()
