"""Plain text prompt."""

from __future__ import annotations

from ..options import InputOptions
from .text import TextPrompt


class InputPrompt(TextPrompt[str]):
    """Asks for a line of text; None when the user interrupts."""

    def __init__(self, options: InputOptions) -> None:
        super().__init__(options)

    async def ask(self) -> str | None:
        return await self.ask_until_valid()
