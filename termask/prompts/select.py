"""Single-choice list prompt."""

from __future__ import annotations

from typing import Any

from ..options import SelectOptions
from .list_prompt import ListPrompt


class SelectPrompt(ListPrompt):
    """Up/Down moves the cursor, Enter picks the highlighted choice.

    Returns the chosen value, or None if no choice could be picked.
    """

    def __init__(self, options: SelectOptions) -> None:
        super().__init__(options)

    async def ask(self) -> Any:
        values = await self.choose()
        return values[0] if values else None
