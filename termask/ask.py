"""The Ask facade: one coroutine per question type plus batch prompting.

Example:
    ask = Ask(prefix=">")

    answers = await ask.prompt([
        {"type": "input", "name": "name", "message": "What is your name?"},
        {"type": "number", "name": "age", "message": "How old are you?",
         "min": 16, "max": 100},
        {"type": "confirm", "name": "can_drive", "message": "Can you drive?"},
    ])

    answers["name"]       # str (or None if cancelled)
    answers["age"]        # int
    answers["can_drive"]  # bool
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import IO, Any

from .elements.terminal import InputChannel
from .options import GlobalOptions, PromptOptions, options_for, options_from_question
from .prompts import PROMPTS_BY_TYPE, Prompt


class Ask:
    """Builds and runs prompts, applying shared defaults to each question.

    The prefix, suffix and channels given here are used by every question
    that does not set its own.
    """

    def __init__(
        self,
        prefix: str | None = None,
        suffix: str | None = None,
        input: InputChannel | IO[Any] | None = None,
        output: IO[str] | None = None,
    ) -> None:
        self.defaults = GlobalOptions(
            prefix=prefix, suffix=suffix, input=input, output=output
        )

    def build(self, options: PromptOptions) -> Prompt[Any]:
        """Create the prompt for an options object, merged with the defaults."""
        options = options.with_defaults(self.defaults)
        return PROMPTS_BY_TYPE[options.type](options)

    async def _run(self, prompt_type: str, opts: dict[str, Any]) -> dict[str, Any]:
        return await self.build(options_for(prompt_type, **opts)).run()

    async def input(self, **opts: Any) -> dict[str, str | None]:
        """Ask for a line of text."""
        return await self._run("input", opts)

    async def number(self, **opts: Any) -> dict[str, int | float | None]:
        """Ask for a number; ``min``/``max`` bound it, ``number_type`` picks
        integer or float parsing."""
        return await self._run("number", opts)

    async def confirm(self, **opts: Any) -> dict[str, bool | None]:
        """Ask a yes/no question (``accept``/``deny`` default to y/n)."""
        return await self._run("confirm", opts)

    async def password(self, **opts: Any) -> dict[str, str | None]:
        """Ask for a secret, echoed as ``mask`` or not at all."""
        return await self._run("password", opts)

    async def select(self, **opts: Any) -> dict[str, Any]:
        """Let the user pick one of ``choices``."""
        return await self._run("select", opts)

    async def checkbox(self, **opts: Any) -> dict[str, list[Any]]:
        """Let the user pick any number of ``choices``."""
        return await self._run("checkbox", opts)

    async def editor(self, **opts: Any) -> dict[str, str | None]:
        """Collect text by opening the user's external editor."""
        return await self._run("editor", opts)

    async def prompt(
        self, questions: Iterable[PromptOptions | Mapping[str, Any]]
    ) -> dict[str, Any]:
        """Ask each question in order and collect the answers by name.

        Questions are dicts with a ``type`` key (default ``"input"``) and the
        options of that prompt type, or options objects.
        """
        answers: dict[str, Any] = {}
        for question in questions:
            prompt = self.build(options_from_question(question))
            answers.update(await prompt.run())
        return answers
