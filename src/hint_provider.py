"""
Hint and affirmation providers.

HintProvider asks Gemini for a short explanation of the target cell and
falls back to a static per-operation hint when no key is configured, the
request fails or the reply does not parse. Nothing raised here ever
reaches the input session.
"""

from __future__ import annotations

import logging
import random

from google import genai
from google.genai import types
from pydantic import BaseModel, Field, ValidationError

from models import Grid, OperandPair, Operation
from text_renderer import render_grid_text

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


class Explanation(BaseModel):
    """Structured hint for one target cell."""

    guidance: str = Field(
        description="Hint shown before input. Explain how to think, never the answer. Under 80 characters."
    )
    mistake_hint: str = Field(
        description="Encouraging hint shown after a wrong digit. Under 60 characters."
    )


FALLBACK_EXPLANATIONS = {
    Operation.ADD: Explanation(
        guidance="Line up the places and add each column!",
        mistake_hint="Did you forget to carry?",
    ),
    Operation.SUBTRACT: Explanation(
        guidance="Take the bottom number away from the top number!",
        mistake_hint="If the top is too small, borrow from the left!",
    ),
    Operation.MULTIPLY: Explanation(
        guidance="Use your times tables!",
        mistake_hint="Check your times table, then add the carry.",
    ),
    Operation.DIVIDE: Explanation(
        guidance="Divide, multiply, subtract, bring down!",
        mistake_hint="Is the remainder bigger than the divisor?",
    ),
}

PROMPT_TEMPLATE = """\
You are "Teacher AI", a cheerful video host loved by primary school children.
Coach the child through this column-arithmetic problem.

Problem: {expression}
Current worksheet ([?] = still blank, [x] = written by the child):
{grid_art}

Give advice for the cell marked {target_mark}.
Reply with JSON: "guidance" is a hint before input that explains how to
think without giving the answer; "mistake_hint" encourages the child after
a wrong digit.
"""


def fallback_explanation(operation: Operation) -> Explanation:
    return FALLBACK_EXPLANATIONS[operation]


def build_prompt(
    pair: OperandPair, grid: Grid, entered: dict[str, str], target_key: str | None
) -> str:
    grid_art = render_grid_text(grid, entered, target_key=target_key)
    return PROMPT_TEMPLATE.format(
        expression=pair.expression, grid_art=grid_art, target_mark="[TARGET]"
    )


class HintProvider:
    """Gemini-backed hints with a static fallback.

    *client* may be injected (tests); otherwise one is created when an API
    key is given. Without either, every call returns the fallback.
    """

    def __init__(self, api_key: str = "", model: str = DEFAULT_MODEL, client=None) -> None:
        self.model = model
        if client is None and api_key:
            client = genai.Client(api_key=api_key)
        self._client = client

    @property
    def online(self) -> bool:
        return self._client is not None

    async def explain(
        self,
        pair: OperandPair,
        grid: Grid,
        entered: dict[str, str],
        target_key: str | None,
    ) -> Explanation:
        fallback = fallback_explanation(pair.operation)
        if self._client is None:
            return fallback

        prompt = build_prompt(pair, grid, entered, target_key)
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=Explanation,
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            logger.warning("Gemini API error (falling back to local hint): %s", e)
            return fallback

        parsed = getattr(response, "parsed", None)
        if isinstance(parsed, Explanation):
            return parsed
        text = getattr(response, "text", None)
        if not text:
            return fallback
        try:
            return Explanation.model_validate_json(text)
        except ValidationError as e:
            logger.warning("Unusable hint response (falling back to local hint): %s", e)
            return fallback


# Cheers are picked locally to save API calls.
CHEER_WORDS = [
    "Amazing!", "Genius!", "Keep it up!", "So cool!", "Unstoppable!",
    "Perfect!", "Well done!", "Nice!", "The best!", "You've got it!",
    "Not bad at all!", "As expected!", "Top level!", "Nailed it!",
]


class AffirmationProvider:
    """Returns a short cheer on completion; always resolves."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    async def cheer(self) -> str:
        return self._rng.choice(CHEER_WORDS)
