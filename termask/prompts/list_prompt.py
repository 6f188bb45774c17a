"""Shared logic of the select and checkbox prompts."""

from __future__ import annotations

from typing import Any

from ..elements.choices import Choice, ListEntry, to_entries
from ..elements.menu_select import MenuSelect
from ..elements.terminal import ANSI
from ..options import ListOptions
from .base import Prompt

LIST_PLACEHOLDER = "<list>"


class ListPrompt(Prompt[Any]):
    """Runs a MenuSelect under the question line.

    When the session ends the menu rows are erased and the question line
    is rewritten with a one-line summary of the answer.
    """

    multi_select = False

    def __init__(
        self,
        options: ListOptions,
        selected_prefix: str = "",
        unselected_prefix: str = "",
    ) -> None:
        super().__init__(options)
        self.entries: list[ListEntry] = to_entries(options.choices)
        self.selected_prefix = selected_prefix
        self.unselected_prefix = unselected_prefix
        self.inactive_formatter = options.inactive_formatter
        self.active_formatter = options.active_formatter
        self.disabled_formatter = options.disabled_formatter

    def default_index(self) -> int:
        """Index of the choice whose value equals the default, else 0."""
        if self.default is None:
            return 0
        for i, entry in enumerate(self.entries):
            if isinstance(entry, Choice) and entry.value == self.default:
                return i
        return 0

    def summary(self, chosen: list[Choice]) -> str:
        if len(chosen) == 1:
            return chosen[0].message
        return ANSI.style(LIST_PLACEHOLDER, "bright_black italic")

    async def choose(self) -> list[Any]:
        prompt = self.get_prompt()
        self.write(prompt + "\n")

        element = MenuSelect(
            entries=self.entries,
            multi_select=self.multi_select,
            default_index=self.default_index(),
            selected_prefix=self.selected_prefix,
            unselected_prefix=self.unselected_prefix,
            inactive_formatter=self.inactive_formatter,
            active_formatter=self.active_formatter,
            disabled_formatter=self.disabled_formatter,
        )
        values = await self._manager.run(element) or []

        # The menu is erased; step back onto the question line
        self.write(
            "\r" + ANSI.CLEAR_LINE + ANSI.CURSOR_UP + "\r" + ANSI.CLEAR_LINE + prompt
        )
        self.write(self.summary(element.navigator.selected_entries()) + "\n")
        return values
