"""Exceptions raised by termask."""

from __future__ import annotations

from typing import Any


class AskError(Exception):
    """Base class for library errors."""


class ConfigurationError(AskError, ValueError):
    """Prompt options are invalid (missing name, unknown type, ...)."""


class MaxAttemptsExceededError(AskError):
    """Validation kept failing until the attempt ceiling was reached."""

    def __init__(self, name: str, attempts: int, last_value: Any = None) -> None:
        super().__init__(
            f"Maximum attempts exceeded for '{name}' ({attempts} attempts)."
        )
        self.name = name
        self.attempts = attempts
        self.last_value = last_value


class EditorNotFoundError(AskError):
    """No external editor could be resolved."""


class EditorCancelledError(AskError):
    """The user interrupted the editor prompt before launching the editor."""


class PromptAborted(KeyboardInterrupt):
    """The user interrupted a list prompt.

    List prompts have no "no answer" result, so an interrupt propagates like
    ctrl-C would in a cooked terminal and ends the program unless caught.
    """
