"""termask: interactive command-line prompts.

Renders a question to the terminal, reads raw keystrokes and returns a
typed answer. Text prompts (input, number, confirm, password) use a line
editor with optional masking; list prompts (select, checkbox) use an
arrow-key menu redrawn in place.

Usage:
    import asyncio
    from termask import Ask

    async def main():
        ask = Ask()
        answers = await ask.prompt([
            {"type": "input", "name": "name", "message": "Name?"},
            {"type": "select", "name": "color", "message": "Color?",
             "choices": ["red", "green", "blue"]},
        ])
        print(answers)

    asyncio.run(main())
"""

import logging

from .ask import Ask
from .elements import Choice, Separator, StdinChannel, StreamInputChannel
from .errors import (
    AskError,
    ConfigurationError,
    EditorCancelledError,
    EditorNotFoundError,
    MaxAttemptsExceededError,
    PromptAborted,
)
from .log import setup_logging
from .options import (
    CheckboxOptions,
    ConfirmOptions,
    EditorOptions,
    GlobalOptions,
    InputOptions,
    NumberOptions,
    PasswordOptions,
    PromptOptions,
    SelectOptions,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Facade
    "Ask",
    # Choices
    "Choice",
    "Separator",
    # Channels
    "StdinChannel",
    "StreamInputChannel",
    # Options
    "GlobalOptions",
    "PromptOptions",
    "InputOptions",
    "NumberOptions",
    "ConfirmOptions",
    "PasswordOptions",
    "SelectOptions",
    "CheckboxOptions",
    "EditorOptions",
    # Errors
    "AskError",
    "ConfigurationError",
    "MaxAttemptsExceededError",
    "EditorNotFoundError",
    "EditorCancelledError",
    "PromptAborted",
    # Logging
    "setup_logging",
]
