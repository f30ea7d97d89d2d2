"""Provenance metadata mirroring the settings data tree."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Union

ValueSource = Literal["initial", "set"]


@dataclass
class LeafMetadata:
    """Current value, initial value and provenance of one leaf setting."""

    value: Any
    initial: Any
    source: ValueSource = "initial"
    kind: Literal["leaf"] = field(default="leaf", init=False)


@dataclass
class NamespaceMetadata:
    fields: dict[str, Metadata] = field(default_factory=dict)


@dataclass
class RecordMetadata:
    """Per-entry metadata of a record setting.

    ``initial`` is a deep copy of the entry metadata taken when the record was
    initialized and is never touched afterwards.
    """

    value: dict[str, dict[str, Metadata]] = field(default_factory=dict)
    initial: dict[str, dict[str, Metadata]] = field(default_factory=dict)
    source: ValueSource = "initial"
    kind: Literal["record"] = field(default="record", init=False)

    @classmethod
    def seeded(cls, entries: dict[str, dict[str, Metadata]]) -> RecordMetadata:
        return cls(value=entries, initial=copy.deepcopy(entries))


Metadata = Union[LeafMetadata, NamespaceMetadata, RecordMetadata]


def metadata_to_data(metadata: Mapping[str, Metadata]) -> dict[str, Any]:
    """Project the ``initial`` values of *metadata* into a fresh data tree.

    Leaf values are deep copied so the result never aliases live settings.
    """

    data: dict[str, Any] = {}
    for name, info in metadata.items():
        if isinstance(info, NamespaceMetadata):
            data[name] = metadata_to_data(info.fields)
        elif isinstance(info, RecordMetadata):
            data[name] = {key: metadata_to_data(entry) for key, entry in info.initial.items()}
        else:
            data[name] = copy.deepcopy(info.initial)
    return data


def metadata_to_dict(metadata: Mapping[str, Metadata]) -> dict[str, Any]:
    """Render *metadata* as plain nested dictionaries."""

    out: dict[str, Any] = {}
    for name, info in metadata.items():
        if isinstance(info, NamespaceMetadata):
            out[name] = {"fields": metadata_to_dict(info.fields)}
        elif isinstance(info, RecordMetadata):
            out[name] = {
                "kind": info.kind,
                "source": info.source,
                "value": {k: metadata_to_dict(v) for k, v in info.value.items()},
                "initial": {k: metadata_to_dict(v) for k, v in info.initial.items()},
            }
        else:
            out[name] = {
                "kind": info.kind,
                "source": info.source,
                "value": info.value,
                "initial": info.initial,
            }
    return out


__all__ = [
    "ValueSource",
    "LeafMetadata",
    "NamespaceMetadata",
    "RecordMetadata",
    "Metadata",
    "metadata_to_data",
    "metadata_to_dict",
]
