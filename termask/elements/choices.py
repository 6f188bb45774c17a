"""Entries of a select/checkbox list.

A list is a sequence of ``ListEntry`` values, each either a ``Choice`` or a
``Separator``. The two are unrelated types so navigation code handles them
explicitly rather than through a disabled flag on a shared base class.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from ..errors import ConfigurationError
from .terminal import ANSI

_SEPARATOR_WIDTH = 16


@dataclass(frozen=True)
class Choice:
    """A selectable row. ``value`` defaults to the message."""

    message: str
    value: Any = None
    disabled: bool = False

    def __post_init__(self) -> None:
        if self.value is None:
            object.__setattr__(self, "value", self.message)

    @property
    def selectable(self) -> bool:
        return not self.disabled


@dataclass(frozen=True)
class Separator:
    """A display-only row; never active, never selected."""

    message: str = field(
        default_factory=lambda: ANSI.style(" " + "-" * _SEPARATOR_WIDTH, "bright_black")
    )

    @property
    def selectable(self) -> bool:
        return False


ListEntry = Union[Choice, Separator]


def to_entry(item: ListEntry | Mapping[str, Any] | str) -> ListEntry:
    """Coerce a choice given as an object, a mapping or a plain string."""
    if isinstance(item, (Choice, Separator)):
        return item
    if isinstance(item, str):
        return Choice(message=item)
    if isinstance(item, Mapping):
        if "message" not in item:
            raise ConfigurationError(f"Choice is missing a message: {dict(item)!r}")
        return Choice(
            message=str(item["message"]),
            value=item.get("value"),
            disabled=bool(item.get("disabled", False)),
        )
    raise ConfigurationError(f"Unsupported choice: {item!r}")


def to_entries(items: Iterable[ListEntry | Mapping[str, Any] | str]) -> list[ListEntry]:
    entries = [to_entry(item) for item in items]
    if not entries:
        raise ConfigurationError("A list prompt needs at least one choice.")
    return entries
