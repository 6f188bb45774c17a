"""Tests for termask/elements/terminal.py.

Covers:
- KeyDecoder text -> key mapping, split escape sequences
- RawInputReader escape timeout and end of input
- Channel selection for terminals and plain streams, UTF-8 assembly
- raw_mode() restore on every exit path
- TerminalRegion draw/clear sequences
- ANSI width and styling helpers
"""

from __future__ import annotations

import asyncio
import io
import os
import pty
import termios

import pytest

from termask.elements.base import InputEvent
from termask.elements.terminal import (
    ANSI,
    ESCAPE_SEQUENCE_MAX_BYTES,
    InputChannel,
    KeyDecoder,
    RawInputReader,
    StdinChannel,
    StreamInputChannel,
    TerminalRegion,
    as_input_channel,
    raw_mode,
)
from termask.options import PasswordOptions
from termask.prompts import PasswordPrompt


def keys_of(events: list[InputEvent]) -> list[str]:
    return [e.key for e in events]


@pytest.fixture
def tty():
    """A pseudo-terminal: (master fd, slave opened as a binary stream)."""
    master, slave = pty.openpty()
    stream = os.fdopen(slave, "rb", buffering=0)
    yield master, stream
    stream.close()
    os.close(master)


class TestKeyDecoder:
    """Tests for KeyDecoder.feed() and flush()."""

    def test_printable_characters(self) -> None:
        """Printable characters become events keyed by the character."""
        events = KeyDecoder().feed("ab ")
        assert events == [
            InputEvent(key="a", char="a"),
            InputEvent(key="b", char="b"),
            InputEvent(key=" ", char=" "),
        ]
        assert all(e.is_printable for e in events)

    def test_wide_characters(self) -> None:
        assert [e.char for e in KeyDecoder().feed("é你")] == ["é", "你"]

    def test_arrow_keys_in_one_read(self) -> None:
        """Complete CSI sequences map to arrow keys."""
        events = KeyDecoder().feed("\x1b[A\x1b[B\x1b[C\x1b[D")
        assert keys_of(events) == ["Up", "Down", "Right", "Left"]

    def test_ss3_arrow_keys(self) -> None:
        """Application-mode arrows (ESC O x) map to the same keys."""
        assert keys_of(KeyDecoder().feed("\x1bOA\x1bOD")) == ["Up", "Left"]

    def test_delete_sequence(self) -> None:
        assert keys_of(KeyDecoder().feed("\x1b[3~")) == ["Delete"]

    def test_home_and_end_variants(self) -> None:
        events = KeyDecoder().feed("\x1b[H\x1b[F\x1b[1~\x1b[4~\x1bOH\x1bOF")
        assert keys_of(events) == ["Home", "End", "Home", "End", "Home", "End"]

    def test_sequence_split_across_feeds(self) -> None:
        """An escape sequence split over several reads is held until complete."""
        decoder = KeyDecoder()
        assert decoder.feed("\x1b") == []
        assert decoder.pending
        assert decoder.feed("[") == []
        assert decoder.feed("3") == []
        assert keys_of(decoder.feed("~")) == ["Delete"]
        assert not decoder.pending

    def test_backspace_bytes(self) -> None:
        """Both BS and DEL are treated as Backspace."""
        assert keys_of(KeyDecoder().feed("\x08\x7f")) == ["Backspace", "Backspace"]

    def test_enter_cr_lf_and_crlf(self) -> None:
        """CR and LF are Enter; CRLF counts once."""
        assert keys_of(KeyDecoder().feed("\r")) == ["Enter"]
        assert keys_of(KeyDecoder().feed("\n")) == ["Enter"]
        assert keys_of(KeyDecoder().feed("\r\n")) == ["Enter"]
        assert keys_of(KeyDecoder().feed("\r\r")) == ["Enter", "Enter"]
        assert keys_of(KeyDecoder().feed("\n\n")) == ["Enter", "Enter"]

    def test_crlf_split_across_feeds(self) -> None:
        decoder = KeyDecoder()
        assert keys_of(decoder.feed("\r")) == ["Enter"]
        assert decoder.feed("\n") == []

    def test_interrupt_bytes(self) -> None:
        """ctrl-C and ctrl-D are both Interrupt."""
        events = KeyDecoder().feed("\x03\x04")
        assert keys_of(events) == ["Interrupt", "Interrupt"]
        assert [e.char for e in events] == ["c", "d"]

    def test_other_control_bytes_are_ctrl_letters(self) -> None:
        event = KeyDecoder().feed("\x01")[0]
        assert event.ctrl
        assert event.char == "a"
        assert not event.is_printable
        assert KeyDecoder().feed("\t") == [InputEvent(key="i", char="i", ctrl=True)]

    def test_unused_keys_are_unknown(self) -> None:
        """Function keys and shift-tab parse but have no meaning here."""
        assert keys_of(KeyDecoder().feed("\x1b[15~\x1b[Z")) == ["Unknown", "Unknown"]

    def test_escape_then_key(self) -> None:
        """ESC followed by a plain key is two events."""
        assert keys_of(KeyDecoder().feed("\x1bx")) == ["Escape", "x"]

    def test_byte_limit(self) -> None:
        """An unterminated sequence is dropped at the length limit."""
        decoder = KeyDecoder()
        data = "\x1b[" + "1" * (ESCAPE_SEQUENCE_MAX_BYTES - 2)
        assert keys_of(decoder.feed(data)) == ["Unknown"]
        assert not decoder.pending
        assert keys_of(decoder.feed("x")) == ["x"]

    def test_flush_lone_escape(self) -> None:
        decoder = KeyDecoder()
        decoder.feed("\x1b")
        assert keys_of(decoder.flush()) == ["Escape"]
        assert not decoder.pending
        assert decoder.flush() == []

    def test_flush_partial_sequence(self) -> None:
        decoder = KeyDecoder()
        decoder.feed("\x1b[")
        assert keys_of(decoder.flush()) == ["Unknown"]
        assert keys_of(decoder.feed("\x1b[A")) == ["Up"]


class _StallingChannel:
    """Returns its chunks, then never produces another character."""

    def __init__(self, *chunks: str) -> None:
        self._chunks = list(chunks)

    @property
    def supports_raw_mode(self) -> bool:
        return False

    def set_raw_mode(self, enabled: bool) -> None:
        pass

    async def read(self) -> str:
        if self._chunks:
            return self._chunks.pop(0)
        await asyncio.Event().wait()
        return ""


class TestRawInputReader:
    """Tests for RawInputReader.read()."""

    @pytest.mark.asyncio
    async def test_sequence_in_single_read(self, keys) -> None:
        reader = RawInputReader(keys.chunked(b"\x1b[A", b"\r"))
        assert (await reader.read()).key == "Up"
        assert (await reader.read()).key == "Enter"

    @pytest.mark.asyncio
    async def test_sequence_in_separate_reads(self, keys) -> None:
        reader = RawInputReader(keys.chunked(b"\x1b", b"[", b"B"))
        assert (await reader.read()).key == "Down"

    @pytest.mark.asyncio
    async def test_lone_escape_after_timeout(self) -> None:
        """A lone ESC with nothing following resolves to Escape."""
        reader = RawInputReader(_StallingChannel("\x1b"), escape_timeout=0.01)
        assert (await reader.read()).key == "Escape"

    @pytest.mark.asyncio
    async def test_end_of_input_is_interrupt(self) -> None:
        reader = RawInputReader(StreamInputChannel(io.BytesIO(b"a")))
        assert (await reader.read()).key == "a"
        assert (await reader.read()).key == "Interrupt"
        assert (await reader.read()).key == "Interrupt"

    @pytest.mark.asyncio
    async def test_reads_one_byte_at_a_time(self) -> None:
        """Bytes after the consumed key stay in the stream."""
        stream = io.BytesIO(b"xyz")
        reader = RawInputReader(StreamInputChannel(stream))
        assert (await reader.read()).key == "x"
        assert stream.read() == b"yz"

    @pytest.mark.asyncio
    async def test_multibyte_utf8_from_binary_stream(self) -> None:
        """UTF-8 characters are assembled from single-byte reads."""
        reader = RawInputReader(StreamInputChannel(io.BytesIO("é你\r".encode())))
        assert [(await reader.read()).char for _ in range(2)] == ["é", "你"]
        assert (await reader.read()).key == "Enter"

    @pytest.mark.asyncio
    async def test_text_stream(self) -> None:
        reader = RawInputReader(as_input_channel(io.StringIO("a你\x1b[A")))
        assert [(await reader.read()).key for _ in range(3)] == ["a", "你", "Up"]
        assert (await reader.read()).key == "Interrupt"


class TestStdinChannel:
    """Tests for terminals read through StdinChannel."""

    def test_binary_tty_stream_gets_raw_mode(self, tty) -> None:
        _, stream = tty
        channel = as_input_channel(stream)
        assert isinstance(channel, StdinChannel)
        assert channel.supports_raw_mode

    def test_text_tty_stream_gets_raw_mode(self, tty) -> None:
        _, stream = tty
        text = open(stream.fileno(), "r", closefd=False)
        try:
            channel = as_input_channel(text)
            assert isinstance(channel, StdinChannel)
            assert channel.supports_raw_mode
        finally:
            text.close()

    def test_raw_mode_restores_terminal(self, tty) -> None:
        _, stream = tty
        channel = StdinChannel(stream)
        before = termios.tcgetattr(stream.fileno())
        with raw_mode(channel):
            attrs = termios.tcgetattr(stream.fileno())
            assert not attrs[3] & termios.ECHO
            assert not attrs[3] & termios.ICANON
        assert termios.tcgetattr(stream.fileno()) == before

    @pytest.mark.asyncio
    async def test_key_after_escape_timeout_is_kept(self, tty) -> None:
        """A read abandoned on the escape timeout does not swallow the next key."""
        master, stream = tty
        channel = StdinChannel(stream)
        reader = RawInputReader(channel, escape_timeout=0.01)
        with raw_mode(channel):
            os.write(master, b"\x1b")
            assert (await reader.read()).key == "Escape"
            os.write(master, "a你".encode())
            assert (await reader.read()).key == "a"
            assert (await reader.read()).key == "你"

    @pytest.mark.asyncio
    async def test_timed_out_read_consumes_nothing(self, tty) -> None:
        master, stream = tty
        channel = StdinChannel(stream)
        with raw_mode(channel):
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(channel.read(), 0.01)
            os.write(master, b"x")
            assert await channel.read() == "x"

    @pytest.mark.asyncio
    async def test_masked_password_over_tty(self, tty, output: io.StringIO) -> None:
        """Typed characters reach the prompt, and only the mask is echoed."""
        master, stream = tty
        before = termios.tcgetattr(stream.fileno())
        asyncio.get_running_loop().call_soon(os.write, master, b"abc\r")
        prompt = PasswordPrompt(
            PasswordOptions(
                name="pw", message="PIN", mask="*", input=stream, output=output
            )
        )
        assert await prompt.ask() == "abc"
        assert output.getvalue().endswith("***\n")
        assert termios.tcgetattr(stream.fileno()) == before


class TestRawMode:
    """Tests for the raw_mode() context manager."""

    def test_enables_and_restores(self, keys) -> None:
        term = keys()
        with raw_mode(term):
            assert term.raw
        assert not term.raw
        assert term.raw_calls == [True, False]

    def test_restores_on_exception(self, keys) -> None:
        term = keys()
        with pytest.raises(ValueError):
            with raw_mode(term):
                raise ValueError("boom")
        assert term.raw_calls == [True, False]

    def test_restores_on_keyboard_interrupt(self, keys) -> None:
        term = keys()
        with pytest.raises(KeyboardInterrupt):
            with raw_mode(term):
                raise KeyboardInterrupt
        assert not term.raw

    def test_skipped_when_unsupported(self) -> None:
        channel = StreamInputChannel(io.BytesIO())
        assert not channel.supports_raw_mode
        with raw_mode(channel):
            pass


class TestAsInputChannel:
    def test_wraps_binary_stream(self) -> None:
        channel = as_input_channel(io.BytesIO(b"a"))
        assert isinstance(channel, StreamInputChannel)

    def test_wraps_text_stream(self) -> None:
        channel = as_input_channel(io.StringIO("a"))
        assert isinstance(channel, StreamInputChannel)
        assert not channel.supports_raw_mode

    def test_passes_channels_through(self, keys) -> None:
        term = keys()
        assert isinstance(term, InputChannel)
        assert as_input_channel(term) is term


class TestTerminalRegion:
    """Tests for TerminalRegion draw/clear output."""

    def test_draw_joins_lines(self, output: io.StringIO) -> None:
        region = TerminalRegion(output)
        region.draw(["one", "two", "three"])
        assert output.getvalue() == "one\ntwo\nthree"
        assert region.height == 3

    def test_clear_walks_up_every_line(self, output: io.StringIO) -> None:
        region = TerminalRegion(output)
        region.draw(["one", "two", "three"])
        output.seek(0)
        output.truncate()
        region.clear()
        step = "\r" + ANSI.CLEAR_LINE + ANSI.CURSOR_UP
        assert output.getvalue() == step * 2 + "\r" + ANSI.CLEAR_LINE
        assert region.height == 0

    def test_clear_without_draw_writes_nothing(self, output: io.StringIO) -> None:
        TerminalRegion(output).clear()
        assert output.getvalue() == ""


class TestANSI:
    """Tests for ANSI helpers."""

    def test_visual_len_ignores_escape_codes(self) -> None:
        assert ANSI.visual_len("\033[31mred\033[0m") == 3

    def test_visual_len_wide_characters(self) -> None:
        assert ANSI.visual_len("你好") == 4
        assert ANSI.visual_len("\033[1mHi你\033[0m") == 4

    def test_style_wraps_in_sgr(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        styled = ANSI.style("?", "green")
        assert styled != "?"
        assert styled.startswith("\x1b[")
        assert ANSI.strip(styled) == "?"

    def test_no_color_disables_styling(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        assert ANSI.style("?", "bold green") == "?"
