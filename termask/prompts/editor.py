"""Prompt that collects text through the user's external editor."""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
import shutil
import tempfile
from pathlib import Path

from ..elements.base import ActiveElement, InputEvent
from ..elements.terminal import ANSI
from ..errors import EditorCancelledError, EditorNotFoundError
from ..options import EditorOptions
from .base import Prompt

logger = logging.getLogger(__name__)

# Probed in order on PATH when neither VISUAL nor EDITOR is set
EDITOR_CANDIDATES = ("code", "subl", "atom", "vim", "emacs", "nano", "pico", "ed")

TEMP_FILE_PREFIX = "ask_"


def get_preferred_editor() -> str | None:
    """Resolve the editor command from VISUAL, EDITOR, then PATH."""
    env = os.environ.get("VISUAL") or os.environ.get("EDITOR")
    if env:
        return env
    for name in EDITOR_CANDIDATES:
        path = shutil.which(name)
        if path:
            return path
    return None


async def edit_in_temp_file(editor: str) -> str:
    """Open an empty temp file in the editor and return what was saved.

    The temp file is removed whether or not the editor could be started.
    """
    fd, path = tempfile.mkstemp(prefix=TEMP_FILE_PREFIX)
    os.close(fd)
    try:
        argv = [*shlex.split(editor), path]
        try:
            process = await asyncio.create_subprocess_exec(*argv)
        except OSError as e:
            raise EditorNotFoundError(
                f"Could not launch editor {editor!r} ({e}). "
                "Set the VISUAL or EDITOR environment variable."
            ) from e
        returncode = await process.wait()
        if returncode != 0:
            logger.debug("editor %r exited with status %d", editor, returncode)
        return Path(path).read_text(encoding="utf-8")
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass


class _LaunchKey(ActiveElement[bool]):
    """Waits for Enter; Interrupt cancels the prompt."""

    def handle_input(self, event: InputEvent) -> tuple[bool, bool | None]:
        if event.key == "Enter":
            return (True, True)
        if event.key == "Interrupt":
            raise EditorCancelledError("Editor prompt was canceled.")
        return (False, None)


class EditorPrompt(Prompt[str]):
    def __init__(self, options: EditorOptions) -> None:
        super().__init__(options)
        self.editor_path = options.editor_path
        self.editor_prompt_message = options.editor_prompt_message

    def get_editor_prompt(self) -> str:
        if self.editor_prompt_message:
            return self.editor_prompt_message
        return (
            ANSI.style("Press ", "bright_black")
            + ANSI.style("<enter>", "blue")
            + ANSI.style(" to launch your preferred editor.", "bright_black")
        )

    async def ask(self) -> str | None:
        prompt = self.get_prompt()
        hint = self.get_editor_prompt()
        self.write(prompt + hint)

        await self._manager.run(_LaunchKey())

        editor = self.editor_path or get_preferred_editor()
        if not editor:
            raise EditorNotFoundError(
                "No preferred editor found. Set the VISUAL or EDITOR environment variable."
            )
        logger.debug("launching editor %r for %s", editor, self.name)
        text = await edit_in_temp_file(editor)

        # Blank out the hint, keeping the question line
        self.write("\r" + prompt + " " * ANSI.visual_len(hint) + "\n")
        return text
