"""Element manager that drives an element against a terminal.

ElementManager:
- Holds the input channel in raw mode for the whole session
- Draws region elements before every key and erases them after it
- Writes the incremental echo of echo elements
"""

from __future__ import annotations

import logging
from typing import IO, Any, TypeVar

from .base import ActiveElement
from .terminal import InputChannel, RawInputReader, TerminalRegion, raw_mode

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ElementManager:
    """Runs one element at a time on a pair of borrowed channels."""

    def __init__(self, input_channel: InputChannel, output: IO[str]) -> None:
        self._channel = input_channel
        self._region = TerminalRegion(output)
        self._active: ActiveElement[Any] | None = None

    @property
    def region(self) -> TerminalRegion:
        return self._region

    async def run(self, element: ActiveElement[T]) -> T | None:
        """Run an element until it returns a result.

        Raw mode is released on every exit path, including exceptions
        raised by the element itself (e.g. an aborted list prompt).
        """
        if self._active is not None:
            raise RuntimeError("Another element is already active")

        self._active = element
        element.on_activate()
        reader = RawInputReader(self._channel)
        try:
            with raw_mode(self._channel):
                while True:
                    if element.uses_region():
                        self._region.draw(element.get_lines())

                    event = await reader.read()
                    try:
                        done, result = element.handle_input(event)
                    finally:
                        self._region.write(element.take_echo())
                        if element.uses_region():
                            self._region.clear()

                    if done:
                        logger.debug("%s finished", type(element).__name__)
                        return result
        finally:
            element.on_deactivate()
            self._active = None
