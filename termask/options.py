"""Prompt options.

Every prompt is built from a frozen options object. ``GlobalOptions`` holds
the defaults an ``Ask`` instance applies to each question; the per-type
subclasses add the settings specific to one prompt type.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import IO, Any, Awaitable, Callable, ClassVar, Union

from .elements.terminal import InputChannel
from .errors import ConfigurationError

Validator = Callable[[Any], Union[bool, Awaitable[bool]]]
RetryFn = Callable[[], Awaitable[Any]]
ExceededHandler = Callable[[Any, RetryFn], Any]
Formatter = Callable[[str], str]

NUMBER_TYPES = ("integer", "float")


@dataclass(frozen=True)
class GlobalOptions:
    """Options shared by every question of an Ask instance."""

    prefix: str | None = None
    suffix: str | None = None
    input: InputChannel | IO[Any] | None = None
    output: IO[str] | None = None


@dataclass(frozen=True)
class PromptOptions(GlobalOptions):
    """Options common to all prompt types.

    Attributes:
        name: Key of the answer in the result dict. Required.
        message: Question text; defaults to the name.
        default: Value used when the answer is empty.
        validate: Predicate (sync or async) the converted answer must pass.
        max_attempts: Failed validations allowed before on_exceeded_attempts.
        on_exceeded_attempts: Called as (last_value, retry) once the
            attempts run out; raising MaxAttemptsExceededError if unset.
    """

    type: ClassVar[str] = ""

    name: str = ""
    message: str | None = None
    default: Any = None
    validate: Validator | None = None
    max_attempts: int | None = None
    on_exceeded_attempts: ExceededHandler | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ConfigurationError("Please provide the name of the prompt.")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ConfigurationError("max_attempts must be at least 1.")

    def with_defaults(self, defaults: GlobalOptions) -> PromptOptions:
        """Fill options left unset here from the global defaults."""
        changes = {
            f.name: getattr(defaults, f.name)
            for f in fields(GlobalOptions)
            if getattr(self, f.name) is None and getattr(defaults, f.name) is not None
        }
        return replace(self, **changes) if changes else self


@dataclass(frozen=True)
class InputOptions(PromptOptions):
    type: ClassVar[str] = "input"


@dataclass(frozen=True)
class NumberOptions(PromptOptions):
    """Number prompt; bounds are inclusive and unbounded when None."""

    type: ClassVar[str] = "number"

    min: float | None = None
    max: float | None = None
    number_type: str = "integer"

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.number_type not in NUMBER_TYPES:
            raise ConfigurationError(
                f"number_type must be one of {', '.join(NUMBER_TYPES)}, "
                f"got {self.number_type!r}"
            )


@dataclass(frozen=True)
class ConfirmOptions(PromptOptions):
    type: ClassVar[str] = "confirm"

    accept: str = "y"
    deny: str = "n"


@dataclass(frozen=True)
class PasswordOptions(PromptOptions):
    """Password prompt; only the first character of mask is used."""

    type: ClassVar[str] = "password"

    mask: str | None = None


@dataclass(frozen=True)
class ListOptions(PromptOptions):
    choices: list[Any] = field(default_factory=list)
    inactive_formatter: Formatter | None = None
    active_formatter: Formatter | None = None
    disabled_formatter: Formatter | None = None


@dataclass(frozen=True)
class SelectOptions(ListOptions):
    type: ClassVar[str] = "select"


@dataclass(frozen=True)
class CheckboxOptions(ListOptions):
    type: ClassVar[str] = "checkbox"

    selected_prefix: str | None = None
    unselected_prefix: str | None = None


@dataclass(frozen=True)
class EditorOptions(PromptOptions):
    type: ClassVar[str] = "editor"

    editor_path: str | None = None
    editor_prompt_message: str | None = None


OPTIONS_BY_TYPE: dict[str, type[PromptOptions]] = {
    cls.type: cls
    for cls in (
        InputOptions,
        NumberOptions,
        ConfirmOptions,
        PasswordOptions,
        SelectOptions,
        CheckboxOptions,
        EditorOptions,
    )
}


def options_for(prompt_type: str, **kwargs: Any) -> PromptOptions:
    """Build the options object for a prompt type from keyword options."""
    try:
        options_cls = OPTIONS_BY_TYPE[prompt_type]
    except KeyError:
        raise ConfigurationError(f"Unknown prompt type: {prompt_type!r}") from None
    try:
        return options_cls(**kwargs)
    except TypeError as e:
        raise ConfigurationError(f"Invalid options for {prompt_type} prompt: {e}") from e


def options_from_question(question: PromptOptions | Mapping[str, Any]) -> PromptOptions:
    """Accept a question as an options object or a dict with a type tag."""
    if isinstance(question, PromptOptions):
        return question
    if not isinstance(question, Mapping):
        raise ConfigurationError(f"Unsupported question: {question!r}")
    kwargs = dict(question)
    prompt_type = kwargs.pop("type", None) or InputOptions.type
    return options_for(prompt_type, **kwargs)
