"""Interactive terminal elements used by the prompts.

This module provides the keystroke engine the prompts are built on: raw
input decoding, the line editor and the list navigator.

Usage:
    from termask.elements import ElementManager, LineEditor, StdinChannel

    manager = ElementManager(StdinChannel(), sys.stdout)

    # Masked text entry
    secret = await manager.run(LineEditor(mask="*"))

    # Multi-select list
    values = await manager.run(MenuSelect(
        entries=[Choice("red"), Separator(), Choice("blue")],
        multi_select=True,
    ))
"""

from .base import ActiveElement, InputEvent
from .choices import Choice, ListEntry, Separator
from .line_editor import LineEditor
from .manager import ElementManager
from .menu_select import ListNavigator, MenuSelect
from .terminal import (
    ANSI,
    InputChannel,
    KeyDecoder,
    RawInputReader,
    StdinChannel,
    StreamInputChannel,
    TerminalRegion,
    raw_mode,
)

__all__ = [
    # Base
    "ActiveElement",
    "InputEvent",
    # Manager
    "ElementManager",
    # Terminal
    "ANSI",
    "InputChannel",
    "StdinChannel",
    "StreamInputChannel",
    "KeyDecoder",
    "RawInputReader",
    "TerminalRegion",
    "raw_mode",
    # Elements
    "LineEditor",
    "MenuSelect",
    "ListNavigator",
    # Choices
    "Choice",
    "Separator",
    "ListEntry",
]
