"""Terminal plumbing: ANSI helpers, input channels, key decoding, redraw.

This module provides:
- ANSI: escape constants plus width/styling helpers
- InputChannel: text source with an optional raw-mode capability
- StdinChannel / StreamInputChannel: the two channel implementations
- raw_mode(): scoped raw mode with guaranteed restore
- KeyDecoder: text -> InputEvent on top of prompt_toolkit's Vt100Parser
- RawInputReader: async key reader on top of a channel
- TerminalRegion: draw a block of lines and erase it in place
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import os
import re
import sys
from collections import deque
from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any, Iterator, Protocol, runtime_checkable

from prompt_toolkit.input import create_input
from prompt_toolkit.input.vt100_parser import Vt100Parser
from prompt_toolkit.keys import Keys
from rich.color import ColorSystem
from rich.style import Style
from wcwidth import wcwidth

from .base import InputEvent

if TYPE_CHECKING:
    from prompt_toolkit.input import Input
    from prompt_toolkit.key_binding import KeyPress

logger = logging.getLogger(__name__)

# Seconds to wait for the rest of an escape sequence before giving up on it
ESCAPE_SEQUENCE_TIMEOUT = 0.1
ESCAPE_SEQUENCE_MAX_BYTES = 10

# One byte per read so nothing is pulled past the current session's last key
_READ_SIZE = 1

_NAMED_KEYS: dict[Keys, str] = {
    Keys.Up: "Up",
    Keys.Down: "Down",
    Keys.Left: "Left",
    Keys.Right: "Right",
    Keys.Home: "Home",
    Keys.End: "End",
    Keys.Delete: "Delete",
    Keys.Escape: "Escape",
    Keys.Backspace: "Backspace",
}


class ANSI:
    """ANSI escape sequences and helpers for styled terminal text."""

    RESET = "\033[0m"
    CLEAR_LINE = "\033[K"
    CURSOR_UP = "\033[A"
    BACKSPACE = "\b"

    _SGR_PATTERN = re.compile(r"\x1b\[[0-9;?]*[@-~]")

    @staticmethod
    def colors_enabled() -> bool:
        """Return False when the NO_COLOR convention asks for plain output."""
        return not os.environ.get("NO_COLOR")

    @classmethod
    def style(cls, text: str, style: str) -> str:
        """Wrap text in the SGR codes for a rich style definition.

        Example:
            ANSI.style("?", "bold green")
        """
        if not text or not cls.colors_enabled():
            return text
        return Style.parse(style).render(text, color_system=ColorSystem.STANDARD)

    @classmethod
    def strip(cls, text: str) -> str:
        """Remove escape sequences from text."""
        return cls._SGR_PATTERN.sub("", text)

    @classmethod
    def visual_len(cls, text: str) -> int:
        """Number of terminal columns text occupies (wide chars count as 2)."""
        return sum(max(wcwidth(ch), 0) for ch in cls.strip(text))


@runtime_checkable
class InputChannel(Protocol):
    """A text source the prompts read keys from.

    Raw mode is a capability of the channel itself: prompts never check
    whether they are talking to the process's real stdin.
    """

    @property
    def supports_raw_mode(self) -> bool: ...

    def set_raw_mode(self, enabled: bool) -> None: ...

    async def read(self) -> str:
        """Read the next decoded character(s). Empty means end of input."""
        ...


def _is_tty(stream: Any) -> bool:
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError, OSError):
        return False


class StdinChannel:
    """A terminal read through prompt_toolkit's Vt100Input.

    The stream may be text (sys.stdin) or binary (sys.stdin.buffer); only
    its file descriptor is used.
    """

    def __init__(self, stream: IO[Any] | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self._input: Input | None = None
        self._raw_mode_ctx: Any = None

    def fileno(self) -> int:
        return self._stream.fileno()

    def _get_input(self) -> Input:
        if self._input is None:
            stdin = self._stream
            if getattr(stdin, "encoding", None) is None:
                # Vt100Input needs an encoding; share the fd without owning it
                stdin = open(self.fileno(), "r", closefd=False)
            self._input = create_input(stdin)
        return self._input

    @property
    def supports_raw_mode(self) -> bool:
        return _is_tty(self._stream)

    def set_raw_mode(self, enabled: bool) -> None:
        if enabled:
            if self._raw_mode_ctx is None:
                ctx = self._get_input().raw_mode()
                ctx.__enter__()
                self._raw_mode_ctx = ctx
                logger.debug("raw mode enabled on fd %d", self.fileno())
        elif self._raw_mode_ctx is not None:
            ctx, self._raw_mode_ctx = self._raw_mode_ctx, None
            ctx.__exit__(None, None, None)
            logger.debug("raw mode restored on fd %d", self.fileno())

    async def read(self) -> str:
        vt100 = self._get_input()
        loop = asyncio.get_running_loop()

        while not vt100.closed:
            ready: asyncio.Future[None] = loop.create_future()

            def _on_input_ready() -> None:
                if not ready.done():
                    ready.set_result(None)

            try:
                with vt100.attach(_on_input_ready):
                    await ready
            except EOFError:
                return ""
            # Empty while a multi-byte character is still incomplete
            text = vt100.stdin_reader.read(_READ_SIZE)
            if text:
                return text
        return ""


class StreamInputChannel:
    """A file-like object (pipe, BytesIO, StringIO, ...) used as key source.

    Binary streams are decoded incrementally as UTF-8, the way
    prompt_toolkit decodes a terminal's file descriptor.
    """

    def __init__(self, stream: IO[Any]) -> None:
        self._stream = stream
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="surrogateescape")

    @property
    def supports_raw_mode(self) -> bool:
        return False

    def set_raw_mode(self, enabled: bool) -> None:
        pass

    async def read(self) -> str:
        while True:
            data = self._stream.read(_READ_SIZE)
            if isinstance(data, str):
                return data
            if not data:
                return self._decoder.decode(b"", final=True)
            text = self._decoder.decode(data)
            if text:
                return text


def as_input_channel(source: InputChannel | IO[Any] | None) -> InputChannel:
    """Normalize a user-supplied input to an InputChannel.

    Terminals (text or binary) get a StdinChannel so raw mode applies;
    any other stream is read as-is.
    """
    if source is None:
        source = sys.stdin
    if isinstance(source, InputChannel):
        return source
    if _is_tty(source):
        return StdinChannel(source)
    return StreamInputChannel(source)


@contextmanager
def raw_mode(channel: InputChannel) -> Iterator[None]:
    """Hold the channel in raw mode for the duration of the block.

    Cooked mode is restored on every exit path, including interrupts and
    exceptions raised inside the block.
    """
    if not channel.supports_raw_mode:
        yield
        return
    channel.set_raw_mode(True)
    try:
        yield
    finally:
        channel.set_raw_mode(False)


class KeyDecoder:
    """Incremental decoder from terminal text to key events.

    Parsing is done by prompt_toolkit's Vt100Parser. An incomplete escape
    sequence is held until it completes, the length limit is hit, or
    flush() is called by the reader after a timeout.
    """

    def __init__(self) -> None:
        self._parser = Vt100Parser(self._on_key_press)
        self._pending = ""
        self._events: list[InputEvent] = []
        self._after_cr = False

    @property
    def pending(self) -> bool:
        """True while an escape sequence is incomplete."""
        return bool(self._pending)

    def feed(self, data: str) -> list[InputEvent]:
        for ch in data:
            self._pending += ch
            self._parser.feed(ch)
            if len(self._pending) >= ESCAPE_SEQUENCE_MAX_BYTES:
                self._discard()
        return self._take()

    def flush(self) -> list[InputEvent]:
        """Resolve a pending sequence: a lone ESC is Escape, the rest Unknown."""
        if self._pending == "\x1b":
            self._parser.flush()
        elif self._pending:
            self._discard()
        return self._take()

    def _take(self) -> list[InputEvent]:
        events, self._events = self._events, []
        return events

    def _discard(self) -> None:
        self._parser.reset()
        self._pending = ""
        self._after_cr = False
        self._events.append(InputEvent(key="Unknown"))

    def _on_key_press(self, key_press: KeyPress) -> None:
        if key_press.key == Keys.BracketedPaste:
            self._pending = ""
            for ch in key_press.data:
                self._emit(ch)
            return
        self._pending = self._pending[len(key_press.data) :]
        self._emit(key_press.key)

    def _emit(self, key: Keys | str) -> None:
        if key == Keys.Ignore:
            return
        after_cr, self._after_cr = self._after_cr, False
        if key in (Keys.ControlM, "\r"):
            self._after_cr = True
            self._events.append(InputEvent(key="Enter"))
        elif key in (Keys.ControlJ, "\n"):
            # CRLF counts as a single Enter
            if not after_cr:
                self._events.append(InputEvent(key="Enter"))
        else:
            self._events.append(_key_to_event(key))


def _key_to_event(key: Keys | str) -> InputEvent:
    if isinstance(key, Keys):
        if key in _NAMED_KEYS:
            return InputEvent(key=_NAMED_KEYS[key])
        if key == Keys.ControlC:
            return InputEvent(key="Interrupt", char="c", ctrl=True)
        if key == Keys.ControlD:
            return InputEvent(key="Interrupt", char="d", ctrl=True)
        name = key.value
        if name.startswith("c-") and len(name) == 3:
            return InputEvent(key=name[2], char=name[2], ctrl=True)
        # Function keys, shifted arrows, mouse and cursor reports
        return InputEvent(key="Unknown")
    if key.isprintable():
        return InputEvent(key=key, char=key)
    return InputEvent(key="Unknown")


class RawInputReader:
    """Reads key events from an input channel.

    End of input is reported as an Interrupt event (like ctrl-D).
    """

    def __init__(
        self,
        channel: InputChannel,
        escape_timeout: float = ESCAPE_SEQUENCE_TIMEOUT,
    ) -> None:
        self._channel = channel
        self._decoder = KeyDecoder()
        self._events: deque[InputEvent] = deque()
        self._escape_timeout = escape_timeout

    async def read(self) -> InputEvent:
        while not self._events:
            if self._decoder.pending:
                try:
                    data = await asyncio.wait_for(
                        self._channel.read(), self._escape_timeout
                    )
                except asyncio.TimeoutError:
                    self._events.extend(self._decoder.flush())
                    continue
            else:
                data = await self._channel.read()

            if not data:
                self._events.extend(self._decoder.flush())
                self._events.append(InputEvent(key="Interrupt"))
                continue
            self._events.extend(self._decoder.feed(data))
        return self._events.popleft()


class TerminalRegion:
    """A block of lines drawn at the cursor and erased in place.

    draw() leaves the cursor at the end of the last line; clear() walks
    back up, clearing every line, and leaves the cursor at the start of
    the first one so the next draw overwrites the same rows.
    """

    def __init__(self, output: IO[str]) -> None:
        self._output = output
        self._height = 0

    @property
    def height(self) -> int:
        return self._height

    def write(self, text: str) -> None:
        if text:
            self._output.write(text)
            self._output.flush()

    def draw(self, lines: list[str]) -> None:
        self._height = len(lines)
        self.write("\n".join(lines))

    def clear(self) -> None:
        if self._height == 0:
            return
        parts = ["\r" + ANSI.CLEAR_LINE + ANSI.CURSOR_UP] * (self._height - 1)
        parts.append("\r" + ANSI.CLEAR_LINE)
        self._height = 0
        self.write("".join(parts))
