"""Resolve change input into existing settings data and metadata.

Input is processed through the settings spec: shorthands are expanded,
then each leaf value goes through fixup, validation and type mapping before
being committed.  The input is never mutated; data and metadata are.

A failing call leaves settings committed before the failure in place.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, cast

from .errors import (
    FixupError,
    InputNotAMapping,
    InvalidSpecifier,
    NotANamespace,
    NotARecord,
    ShorthandError,
    ShorthandNotSupported,
    UnknownSetting,
    ValidationFailed,
    ValidationRuntimeError,
)
from .initializer import Notify, initialize, run_type_mapper
from .metadata import LeafMetadata, Metadata, NamespaceMetadata, RecordMetadata, ValueSource
from .spec import FixupInfo, Leaf, Namespace, Record, SpecTree

logger = logging.getLogger(__name__)


def resolve(
    fields: SpecTree,
    input: Mapping[str, Any],
    data: dict[str, Any],
    metadata: dict[str, Metadata],
    source: ValueSource,
    *,
    notify: Notify,
    path: tuple[str, ...] = (),
) -> dict[str, Any]:
    """Resolve *input* against *fields*, committing into *data* and *metadata*.

    Settings are visited in the key order of *input*.
    """

    if not isinstance(input, Mapping):
        raise InputNotAMapping(input)

    for name, value in input.items():
        here = (*path, name)
        specifier = fields.get(name)
        if specifier is None:
            raise UnknownSetting(name, here)

        if isinstance(specifier, Namespace):
            namespace_meta = cast(NamespaceMetadata, metadata[name])
            longhand = _expand_shorthand(specifier, name, value, here)
            resolve(
                specifier.fields, longhand, data[name], namespace_meta.fields, source,
                notify=notify, path=here,
            )
        elif isinstance(specifier, Record):
            record_meta = cast(RecordMetadata, metadata[name])
            _resolve_record(specifier, name, value, data[name], record_meta, source, notify, here)
        elif isinstance(specifier, Leaf):
            if isinstance(value, Mapping):
                raise NotANamespace(name, value, here)
            leaf_meta = cast(LeafMetadata, metadata[name])
            _commit_leaf(specifier, name, value, data, leaf_meta, source, notify, here)
        else:
            raise InvalidSpecifier(name, specifier, here)

    return data


def resolve_entry(
    entry_fields: SpecTree,
    key: str,
    value: Any,
    data: dict[str, Any],
    metadata: dict[str, Metadata],
    source: ValueSource,
    *,
    notify: Notify,
    path: tuple[str, ...],
) -> None:
    """Resolve the input *value* of a single record entry."""

    if not isinstance(value, Mapping):
        raise ShorthandNotSupported(key, value, path)
    resolve(entry_fields, value, data, metadata, source, notify=notify, path=path)


def _expand_shorthand(
    specifier: Namespace, name: str, value: Any, path: tuple[str, ...]
) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    if specifier.shorthand is None:
        raise ShorthandNotSupported(name, value, path)
    logger.debug("expanding shorthand for %s", ".".join(path))
    try:
        longhand = specifier.shorthand(value)
    except Exception as exc:
        raise ShorthandError(name, value, exc, path) from exc
    if not isinstance(longhand, Mapping):
        cause = TypeError(f"shorthand returned {type(longhand).__name__}, expected a mapping")
        raise ShorthandError(name, value, cause, path)
    return longhand


def _resolve_record(
    specifier: Record,
    name: str,
    value: Any,
    entries: dict[str, Any],
    metadata: RecordMetadata,
    source: ValueSource,
    notify: Notify,
    path: tuple[str, ...],
) -> None:
    if not isinstance(value, Mapping):
        raise NotARecord(name, value, path)

    for key, entry_value in value.items():
        entry_path = (*path, key)
        if not isinstance(entry_value, Mapping):
            raise ShorthandNotSupported(key, entry_value, entry_path)
        if key not in entries:
            logger.debug("initializing new record entry %s", ".".join(entry_path))
            entries[key], metadata.value[key] = initialize(
                specifier.entry_fields, notify, entry_path
            )
        resolve_entry(
            specifier.entry_fields, key, entry_value, entries[key], metadata.value[key], source,
            notify=notify, path=entry_path,
        )
        metadata.source = source


def _commit_leaf(
    specifier: Leaf,
    name: str,
    value: Any,
    data: dict[str, Any],
    metadata: LeafMetadata,
    source: ValueSource,
    notify: Notify,
    path: tuple[str, ...],
) -> None:
    resolved = value

    if specifier.fixup is not None:
        try:
            fixed = specifier.fixup(resolved)
        except Exception as exc:
            raise FixupError(name, resolved, exc, path) from exc
        if fixed is not None:
            resolved = fixed.value
            notify(
                FixupInfo(
                    name=name,
                    before=value,
                    after=fixed.value,
                    messages=list(fixed.messages),
                    path=path,
                )
            )

    if specifier.validate is not None:
        try:
            violation = specifier.validate(resolved)
        except Exception as exc:
            raise ValidationRuntimeError(name, resolved, exc, path) from exc
        if violation is not None:
            raise ValidationFailed(name, resolved, violation.messages, path)

    if specifier.map_type is not None:
        resolved = run_type_mapper(specifier.map_type, resolved, name, path)

    logger.debug("committing %s = %r (%s)", ".".join(path), resolved, source)
    data[name] = resolved
    metadata.value = resolved
    metadata.source = source
    if source == "initial":
        metadata.initial = resolved


__all__ = ["resolve", "resolve_entry"]
