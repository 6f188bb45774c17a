"""Password prompt.

Typed characters are echoed as the mask character, or not at all when no
mask is configured.
"""

from __future__ import annotations

from ..options import PasswordOptions
from .text import TextPrompt


class PasswordPrompt(TextPrompt[str]):
    def __init__(self, options: PasswordOptions) -> None:
        super().__init__(options, mask=options.mask, hidden=not options.mask)

    def default_display(self) -> str | None:
        # Never print a default secret
        return None

    async def ask(self) -> str | None:
        return await self.ask_until_valid()
