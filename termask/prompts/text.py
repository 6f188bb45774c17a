"""Line-editor prompts and the validate/retry loop."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, TypeVar

from ..elements.line_editor import LineEditor
from ..elements.terminal import ANSI
from ..errors import MaxAttemptsExceededError
from ..options import PromptOptions
from .base import Prompt

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TextPrompt(Prompt[T]):
    """A prompt answered through the line editor.

    ``ask_until_valid()`` keeps asking until the converted answer passes
    validation. Exceptions raised while converting or validating are shown
    to the user as ``>> message`` and count as a failed attempt.
    """

    def __init__(
        self,
        options: PromptOptions,
        mask: str | None = None,
        hidden: bool = False,
    ) -> None:
        super().__init__(options)
        self.mask = mask[0] if mask else None
        self.hidden = hidden
        self.validate = options.validate
        self.max_attempts = options.max_attempts
        self.on_exceeded_attempts = options.on_exceeded_attempts

    def print_error(self, message: str) -> None:
        self.write(f"{ANSI.style('>>', 'red')} {message}\n")

    def default_answer(self) -> str | None:
        """Text substituted for an empty answer."""
        if self.default is None:
            return None
        return str(self.default)

    async def question(self) -> str | None:
        self.write(self.get_prompt())
        return await self._manager.run(LineEditor(mask=self.mask, hidden=self.hidden))

    async def check(self, value: Any) -> bool:
        if self.validate is None:
            return True
        result = self.validate(value)
        if inspect.isawaitable(result):
            result = await result
        return bool(result)

    async def ask_until_valid(
        self, preprocess: Callable[[str], Any] | None = None
    ) -> Any:
        """Ask until the answer is valid; None if the user interrupts."""
        attempts = 0
        while True:
            answer = await self.question()
            if answer is None:
                return None
            if answer == "":
                default = self.default_answer()
                if default is not None:
                    answer = default

            value: Any = answer
            try:
                if preprocess is not None:
                    value = preprocess(answer)
                passed = await self.check(value)
            except Exception as e:
                passed = False
                self.print_error(str(e) or type(e).__name__)

            if passed:
                return value

            attempts += 1
            logger.debug("validation failed for %s (attempt %d)", self.name, attempts)
            if self.max_attempts is not None and attempts >= self.max_attempts:
                return await self._attempts_exceeded(value, preprocess)

    async def _attempts_exceeded(
        self, last_value: Any, preprocess: Callable[[str], Any] | None
    ) -> Any:
        logger.debug("%s: %d attempts exhausted", self.name, self.max_attempts)
        if self.on_exceeded_attempts is None:
            raise MaxAttemptsExceededError(self.name, self.max_attempts or 0, last_value)

        async def retry() -> Any:
            return await self.ask_until_valid(preprocess)

        result = self.on_exceeded_attempts(last_value, retry)
        if inspect.isawaitable(result):
            result = await result
        return result
