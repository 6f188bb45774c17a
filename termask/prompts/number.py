"""Number prompt with optional inclusive bounds."""

from __future__ import annotations

import math
from typing import Any

from ..options import NumberOptions
from .text import TextPrompt


class NumberPrompt(TextPrompt[float]):
    """Parses the answer as an int or a float and checks it against the bounds.

    The range check runs before the user's validate function. A failed
    parse or range check prints a diagnostic and asks again.
    """

    def __init__(self, options: NumberOptions) -> None:
        super().__init__(options)
        self.min = options.min if options.min is not None else -math.inf
        self.max = options.max if options.max is not None else math.inf
        self.number_type = options.number_type
        self.message = self.message_with_range()

    def message_with_range(self) -> str:
        has_min = self.min != -math.inf
        has_max = self.max != math.inf
        if has_min and has_max:
            return f"{self.message} ({self.min}-{self.max})"
        if has_min:
            return f"{self.message} (>= {self.min})"
        if has_max:
            return f"{self.message} (<= {self.max})"
        return self.message

    def is_within_range(self, value: float) -> bool:
        return self.min <= value <= self.max

    def parse(self, answer: str) -> int | float:
        text = answer.strip()
        try:
            if self.number_type == "integer":
                return int(text, 10)
            value = float(text)
        except ValueError:
            kind = "integer" if self.number_type == "integer" else "number"
            raise ValueError(f"'{answer}' is not a valid {kind}") from None
        if math.isnan(value):
            raise ValueError(f"'{answer}' is not a valid number")
        return value

    async def check(self, value: Any) -> bool:
        if not self.is_within_range(value):
            raise ValueError(self._range_error())
        return await super().check(value)

    def _range_error(self) -> str:
        has_min = self.min != -math.inf
        has_max = self.max != math.inf
        if has_min and has_max:
            return (
                f"Please enter a number between {self.min} "
                f"and {self.max}"
            )
        if has_min:
            return f"Please enter a number greater than or equal to {self.min}"
        return f"Please enter a number less than or equal to {self.max}"

    async def ask(self) -> int | float | None:
        return await self.ask_until_valid(self.parse)
