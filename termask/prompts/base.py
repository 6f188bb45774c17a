"""Base class shared by every prompt type."""

from __future__ import annotations

import sys
from typing import IO, Any, Generic, TypeVar

from ..elements.manager import ElementManager
from ..elements.terminal import ANSI, InputChannel, as_input_channel
from ..options import PromptOptions

T = TypeVar("T")

DEFAULT_PREFIX_STYLE = "green"


class Prompt(Generic[T]):
    """A question bound to a pair of channels.

    Subclasses implement ``ask()``; ``run()`` wraps its answer in a
    single-key dict so batch results can be merged.
    """

    def __init__(self, options: PromptOptions) -> None:
        self.options = options
        self.name = options.name
        self.message = options.message or options.name
        self.prefix = (
            options.prefix
            if options.prefix is not None
            else ANSI.style("?", DEFAULT_PREFIX_STYLE)
        )
        self.suffix = options.suffix or ""
        self.default = options.default
        self.input: InputChannel = as_input_channel(options.input)
        self.output: IO[str] = options.output if options.output is not None else sys.stdout
        self._manager = ElementManager(self.input, self.output)

    def write(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

    def default_display(self) -> str | None:
        """Text shown in parentheses after the message, if any."""
        if self.default is None or self.default == "":
            return None
        return str(self.default)

    def get_prompt(self) -> str:
        components: list[str] = []
        if self.prefix:
            components.append(self.prefix)

        question = ANSI.style(self.message, "bold")
        default = self.default_display()
        if default is not None:
            question += f" ({default})"
        components.append(question + self.suffix)
        components.append("")
        return " ".join(components)

    async def ask(self) -> T | None:
        raise NotImplementedError

    async def run(self) -> dict[str, Any]:
        return {self.name: await self.ask()}
