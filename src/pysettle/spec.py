"""Declarative settings spec.

A spec tree maps setting names to one of three specifier kinds:

* :class:`Leaf` - a single value with optional hooks
* :class:`Namespace` - a nested group of settings
* :class:`Record` - dynamically keyed entries, each shaped like a namespace

The classes hold no behaviour of their own; :mod:`pysettle.initializer` and
:mod:`pysettle.resolver` dispatch on them.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Fixup:
    """Result of a fixup hook that corrected a value."""

    value: Any
    messages: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Violation:
    """Result of a validator that rejected a value."""

    messages: list[str]


@dataclass(frozen=True)
class FixupInfo:
    """Details handed to fixup notification handlers."""

    name: str
    before: Any
    after: Any
    messages: list[str]
    path: tuple[str, ...] = ()

    def context(self) -> dict[str, Any]:
        return {
            "before": self.before,
            "after": self.after,
            "name": self.name,
            "messages": list(self.messages),
        }


@dataclass(frozen=True)
class Leaf:
    """Specifier for a single setting value.

    ``initial`` must be a zero argument function; it may be omitted when the
    setting is optional, in which case the value starts out as ``None``.
    """

    initial: Callable[[], Any] | None = None
    fixup: Callable[[Any], Fixup | None] | None = None
    validate: Callable[[Any], Violation | None] | None = None
    map_type: Callable[[Any], Any] | None = None


@dataclass(frozen=True)
class Namespace:
    """Specifier for a group of settings addressed as a nested mapping."""

    fields: Mapping[str, Specifier]
    shorthand: Callable[[Any], Mapping[str, Any]] | None = None
    initial: Callable[[], Mapping[str, Any]] | None = None


@dataclass(frozen=True)
class Record:
    """Specifier for a mapping of arbitrary keys to namespace-shaped entries."""

    entry_fields: Mapping[str, Specifier]
    initial: Callable[[], Mapping[str, Mapping[str, Any]]] | None = None


Specifier = Union[Leaf, Namespace, Record]
SpecTree = Mapping[str, Specifier]

__all__ = [
    "Fixup",
    "Violation",
    "FixupInfo",
    "Leaf",
    "Namespace",
    "Record",
    "Specifier",
    "SpecTree",
]
