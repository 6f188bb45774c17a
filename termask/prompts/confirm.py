"""Yes/No confirmation prompt."""

from __future__ import annotations

from ..options import ConfirmOptions
from .text import TextPrompt


class ConfirmPrompt(TextPrompt[bool]):
    """Returns True when the answer equals ``accept`` (case-insensitive).

    Any other answer is False. An empty answer uses the default when one
    is configured (True answers ``accept``, False answers ``deny``) and is
    otherwise False. Interrupt gives None.
    """

    def __init__(self, options: ConfirmOptions) -> None:
        super().__init__(options)
        self.accept = options.accept
        self.deny = options.deny
        self.message = f"{self.message} [{self.accept}/{self.deny}]"

    def default_answer(self) -> str | None:
        if self.default is None:
            return None
        if isinstance(self.default, bool):
            return self.accept if self.default else self.deny
        return str(self.default)

    def default_display(self) -> str | None:
        return self.default_answer()

    def to_bool(self, answer: str) -> bool:
        return answer.lower() == self.accept.lower()

    async def ask(self) -> bool | None:
        return await self.ask_until_valid(self.to_bool)
