"""Base classes for interactive prompt elements.

This module provides the core abstractions:
- InputEvent: A decoded keyboard event
- ActiveElement: A keystroke-driven state machine run by ElementManager
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class InputEvent:
    """A keyboard input event."""

    # 'Enter', 'Backspace', 'Delete', 'Up', 'Down', 'Left', 'Right', 'Home',
    # 'End', 'Escape', 'Interrupt', 'Unknown', or the typed character
    key: str
    char: str | None = None  # Printable character (or ctrl letter) or None
    ctrl: bool = False

    @property
    def is_printable(self) -> bool:
        return not self.ctrl and self.char is not None and self.char == self.key


class ActiveElement(ABC, Generic[T]):
    """An interactive element with exclusive control of the terminal.

    Lifecycle:
        1. on_activate() - setup
        2. get_lines() -> drawn as a region before each key (region elements)
        3. handle_input() -> process key, return (done, result)
        4. take_echo() -> text written after each key
        5. on_deactivate() - cleanup

    Region elements redraw their whole block on every key; echo elements
    write incremental output through take_echo() instead.
    """

    def uses_region(self) -> bool:
        """Return True if the element redraws a block of lines per key."""
        return False

    def get_lines(self) -> list[str]:
        """Return lines to render in the region."""
        return []

    def take_echo(self) -> str:
        """Return (and forget) output produced by the last key."""
        return ""

    @abstractmethod
    def handle_input(self, event: InputEvent) -> tuple[bool, T | None]:
        """Handle input event.

        Returns:
            (done, result) - if done=True, element completes with result
        """
        ...

    def on_activate(self) -> None:
        """Called when element becomes active."""
        pass

    def on_deactivate(self) -> None:
        """Called when element completes."""
        pass
