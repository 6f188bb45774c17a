"""Prompt types, one per question type."""

from __future__ import annotations

from .base import Prompt
from .checkbox import CheckboxPrompt
from .confirm import ConfirmPrompt
from .editor import EditorPrompt, get_preferred_editor
from .input import InputPrompt
from .list_prompt import ListPrompt
from .number import NumberPrompt
from .password import PasswordPrompt
from .select import SelectPrompt
from .text import TextPrompt

PROMPTS_BY_TYPE: dict[str, type[Prompt]] = {
    "input": InputPrompt,
    "number": NumberPrompt,
    "confirm": ConfirmPrompt,
    "password": PasswordPrompt,
    "select": SelectPrompt,
    "checkbox": CheckboxPrompt,
    "editor": EditorPrompt,
}

__all__ = [
    "Prompt",
    "TextPrompt",
    "ListPrompt",
    "InputPrompt",
    "NumberPrompt",
    "ConfirmPrompt",
    "PasswordPrompt",
    "SelectPrompt",
    "CheckboxPrompt",
    "EditorPrompt",
    "PROMPTS_BY_TYPE",
    "get_preferred_editor",
]
