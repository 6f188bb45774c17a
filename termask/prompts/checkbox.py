"""Multiple-choice list prompt."""

from __future__ import annotations

from typing import Any

from ..elements.terminal import ANSI
from ..options import CheckboxOptions
from .list_prompt import ListPrompt


class CheckboxPrompt(ListPrompt):
    """Space toggles the highlighted choice, Enter confirms.

    Returns the values of the toggled choices in list order.
    """

    multi_select = True

    def __init__(self, options: CheckboxOptions) -> None:
        super().__init__(
            options,
            selected_prefix=(
                options.selected_prefix
                if options.selected_prefix is not None
                else ANSI.style("◉ ", "cyan")
            ),
            unselected_prefix=(
                options.unselected_prefix
                if options.unselected_prefix is not None
                else "◯ "
            ),
        )

    async def ask(self) -> list[Any]:
        return await self.choose()
