"""Single-line text editor element.

Echoes edits incrementally with backspaces instead of redrawing, so it
works on a plain ANSI terminal without knowing the cursor column. The
echo can show the typed characters, a mask character, or nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .base import ActiveElement, InputEvent
from .terminal import ANSI


@dataclass
class LineEditor(ActiveElement[str]):
    """Text input with cursor movement, masking and hidden mode.

    Returns the buffer on Enter, or None on Interrupt (ctrl-C/ctrl-D) so
    callers can tell a cancelled prompt from an empty answer.
    """

    mask: str | None = None
    hidden: bool = False
    buffer: str = ""
    cursor_pos: int = 0
    _echo: list[str] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.mask:
            self.mask = self.mask[0]
        else:
            self.mask = None

    # -- display --

    @property
    def silent(self) -> bool:
        return self.hidden and not self.mask

    def _display(self, text: str) -> str:
        if self.mask:
            return self.mask * len(text)
        return text

    def _write(self, text: str) -> None:
        if text and not self.silent:
            self._echo.append(text)

    def take_echo(self) -> str:
        text = "".join(self._echo)
        self._echo.clear()
        return text

    def _width(self, text: str) -> int:
        """Columns the displayed form of text takes up."""
        return ANSI.visual_len(self._display(text))

    def _rewrite_tail(self, freed: int) -> None:
        """Redraw everything right of the cursor and blank the freed cells."""
        tail = self.buffer[self.cursor_pos :]
        width = self._width(tail)
        self._write(
            self._display(tail) + " " * freed + ANSI.BACKSPACE * (width + freed)
        )

    # -- edits --

    def insert(self, ch: str) -> None:
        self.buffer = (
            self.buffer[: self.cursor_pos] + ch + self.buffer[self.cursor_pos :]
        )
        self.cursor_pos += len(ch)
        tail = self.buffer[self.cursor_pos :]
        self._write(
            self._display(ch) + self._display(tail) + ANSI.BACKSPACE * self._width(tail)
        )

    def backspace(self) -> None:
        if self.cursor_pos == 0:
            return
        removed = self._width(self.buffer[self.cursor_pos - 1])
        self.buffer = self.buffer[: self.cursor_pos - 1] + self.buffer[self.cursor_pos :]
        self.cursor_pos -= 1
        self._write(ANSI.BACKSPACE * removed)
        self._rewrite_tail(removed)

    def delete(self) -> None:
        if self.cursor_pos == len(self.buffer):
            return
        removed = self._width(self.buffer[self.cursor_pos])
        self.buffer = self.buffer[: self.cursor_pos] + self.buffer[self.cursor_pos + 1 :]
        self._rewrite_tail(removed)

    def move_left(self) -> None:
        if self.cursor_pos > 0:
            self.cursor_pos -= 1
            self._write(ANSI.BACKSPACE * self._width(self.buffer[self.cursor_pos]))

    def move_right(self) -> None:
        if self.cursor_pos < len(self.buffer):
            self._write(self._display(self.buffer[self.cursor_pos]))
            self.cursor_pos += 1

    def move_home(self) -> None:
        self._write(ANSI.BACKSPACE * self._width(self.buffer[: self.cursor_pos]))
        self.cursor_pos = 0

    def move_end(self) -> None:
        self._write(self._display(self.buffer[self.cursor_pos :]))
        self.cursor_pos = len(self.buffer)

    def handle_input(self, event: InputEvent) -> tuple[bool, str | None]:
        if event.key == "Enter":
            self._echo.append("\n")
            return (True, self.buffer)
        elif event.key == "Interrupt":
            self._echo.append("\n")
            return (True, None)
        elif event.key == "Backspace":
            self.backspace()
        elif event.key == "Delete":
            self.delete()
        elif event.key == "Left" or (event.ctrl and event.char == "b"):
            self.move_left()
        elif event.key == "Right" or (event.ctrl and event.char == "f"):
            self.move_right()
        elif event.key == "Home" or (event.ctrl and event.char == "a"):
            self.move_home()
        elif event.key == "End" or (event.ctrl and event.char == "e"):
            self.move_end()
        elif event.is_printable:
            self.insert(event.char)  # type: ignore[arg-type]
        return (False, None)
