"""Menu selection element.

Allows user to select one or several entries using arrow keys.

ListNavigator holds the pure navigation state (active index, selection
set) and knows nothing about the terminal; MenuSelect maps keys onto it
and formats the rows that ElementManager draws.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from ..errors import PromptAborted
from .base import ActiveElement, InputEvent
from .choices import Choice, ListEntry, Separator
from .terminal import ANSI

Formatter = Callable[[str], str]


class ListNavigator:
    """Active/selected state over a list of entries.

    Only selectable choices can become active. When no entry is
    selectable the active index stays where it started and every move is
    a no-op.
    """

    def __init__(
        self,
        entries: Sequence[ListEntry],
        multi_select: bool = False,
        active: int = 0,
    ) -> None:
        self.entries = list(entries)
        self.multi_select = multi_select
        self.selected: set[int] = set()
        self.active = active if 0 <= active < len(self.entries) else 0
        if self.entries and not self.is_selectable(self.active):
            self.move_down()

    def is_selectable(self, index: int) -> bool:
        return self.entries[index].selectable

    def _step(self, direction: int) -> None:
        count = len(self.entries)
        if count == 0:
            return
        start = self.active
        index = start
        while True:
            index = (index + direction) % count
            if index == start:
                return
            if self.is_selectable(index):
                self.active = index
                return

    def move_down(self) -> None:
        self._step(1)

    def move_up(self) -> None:
        self._step(-1)

    def toggle(self) -> None:
        if not self.multi_select or not self.entries:
            return
        if not self.is_selectable(self.active):
            return
        if self.active in self.selected:
            self.selected.remove(self.active)
        else:
            self.selected.add(self.active)

    def commit(self) -> None:
        if self.multi_select or not self.entries:
            return
        if self.is_selectable(self.active):
            self.selected = {self.active}

    def selected_entries(self) -> list[Choice]:
        return [
            entry  # type: ignore[misc]
            for i, entry in enumerate(self.entries)
            if i in self.selected
        ]

    def selected_values(self) -> list[Any]:
        return [entry.value for entry in self.selected_entries()]


def default_inactive_formatter(message: str) -> str:
    return f"  {message}"


def default_active_formatter(message: str) -> str:
    return ANSI.style(f"❯ {message}", "cyan")


def default_disabled_formatter(message: str) -> str:
    return ANSI.style(f"- {message} (disabled)", "bright_black")


@dataclass
class MenuSelect(ActiveElement[list[Any]]):
    """List selection with arrow keys.

    - Single-select: Enter selects the highlighted entry.
    - Multi-select: Space toggles, Enter confirms selections.
    Returns the selected values in list order. Interrupt raises
    PromptAborted.
    """

    entries: list[ListEntry] = field(default_factory=list)
    multi_select: bool = False
    default_index: int = 0
    selected_prefix: str = ""
    unselected_prefix: str = ""
    inactive_formatter: Formatter | None = None
    active_formatter: Formatter | None = None
    disabled_formatter: Formatter | None = None
    navigator: ListNavigator = field(init=False)

    def __post_init__(self) -> None:
        self.navigator = ListNavigator(
            self.entries, multi_select=self.multi_select, active=self.default_index
        )

    def uses_region(self) -> bool:
        return True

    def format_entry(self, index: int) -> str:
        entry = self.entries[index]
        if isinstance(entry, Separator):
            return entry.message

        prefix = (
            self.selected_prefix
            if index in self.navigator.selected
            else self.unselected_prefix
        )
        full_message = prefix + entry.message
        if entry.disabled:
            return (self.disabled_formatter or default_disabled_formatter)(full_message)
        if index == self.navigator.active:
            return (self.active_formatter or default_active_formatter)(full_message)
        return (self.inactive_formatter or default_inactive_formatter)(full_message)

    def get_lines(self) -> list[str]:
        return [self.format_entry(i) for i in range(len(self.entries))]

    def handle_input(self, event: InputEvent) -> tuple[bool, list[Any] | None]:
        if event.key == "Enter":
            self.navigator.commit()
            return (True, self.navigator.selected_values())
        elif event.key == "Interrupt":
            raise PromptAborted("Terminated by user.")
        elif event.char == " " and not event.ctrl:
            self.navigator.toggle()
        elif event.key == "Down":
            self.navigator.move_down()
        elif event.key == "Up":
            self.navigator.move_up()
        return (False, None)
