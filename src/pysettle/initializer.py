"""Build the initial settings data and metadata from a spec tree."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .errors import (
    InitializerError,
    InvalidInitializerKind,
    InvalidSpecifier,
    NotARecord,
    ShorthandNotSupported,
    TypeMapperError,
    UnknownSetting,
)
from .merge import deep_merge
from .metadata import LeafMetadata, Metadata, NamespaceMetadata, RecordMetadata
from .notify import LoggingSink, fixup_handler
from .spec import FixupInfo, Leaf, Namespace, Record, SpecTree

logger = logging.getLogger(__name__)

Notify = Callable[[FixupInfo], None]


def initialize(
    fields: SpecTree,
    notify: Notify | None = None,
    path: tuple[str, ...] = (),
) -> tuple[dict[str, Any], dict[str, Metadata]]:
    """Run every initializer in *fields* and return ``(data, metadata)``.

    Leaf initial values only pass through the type mapper.  Record seed
    entries are resolved like input (fixups and validators included) and
    tagged as initial; fixups found there are reported via *notify*, which
    defaults to logging a warning.
    """

    if notify is None:
        notify = fixup_handler(LoggingSink())
    return _initialize_fields(fields, {}, notify, path)


def _initialize_fields(
    fields: SpecTree,
    seed: Mapping[str, Any],
    notify: Notify,
    path: tuple[str, ...],
) -> tuple[dict[str, Any], dict[str, Metadata]]:
    for key in seed:
        if key not in fields:
            raise UnknownSetting(key, (*path, key))

    data: dict[str, Any] = {}
    metadata: dict[str, Metadata] = {}
    for name, specifier in fields.items():
        here = (*path, name)
        if isinstance(specifier, (Leaf, Namespace, Record)):
            # checked even when a seed covers the field
            _check_initializer(specifier.initial, name, here)
        if isinstance(specifier, Namespace):
            logger.debug("initializing namespace %s", ".".join(here))
            ns_seed = _require_mapping(_seed_or_empty(specifier.initial, name, here), name, here)
            if name in seed:
                ns_seed = deep_merge(ns_seed, _require_mapping(seed[name], name, here))
            ns_data, ns_meta = _initialize_fields(specifier.fields, ns_seed, notify, here)
            data[name] = ns_data
            metadata[name] = NamespaceMetadata(fields=ns_meta)
        elif isinstance(specifier, Record):
            logger.debug("initializing record %s", ".".join(here))
            if name in seed:
                entries = seed[name]
            else:
                entries = _seed_or_empty(specifier.initial, name, here)
            data[name], metadata[name] = _initialize_record(specifier, name, entries, notify, here)
        elif isinstance(specifier, Leaf):
            if name in seed:
                value = seed[name]
            else:
                value = _run_initializer(specifier.initial, name, here)
            if specifier.map_type is not None:
                value = run_type_mapper(specifier.map_type, value, name, here)
            data[name] = value
            metadata[name] = LeafMetadata(value=value, initial=value)
        else:
            raise InvalidSpecifier(name, specifier, here)
    return data, metadata


def _initialize_record(
    specifier: Record,
    name: str,
    entries: Any,
    notify: Notify,
    path: tuple[str, ...],
) -> tuple[dict[str, Any], RecordMetadata]:
    from .resolver import resolve_entry

    if not isinstance(entries, Mapping):
        raise NotARecord(name, entries, path)

    # seed entries may not cover every entry field, so each one starts from a
    # freshly initialized entry and the seed is applied on top as input
    data: dict[str, Any] = {}
    metadata: dict[str, dict[str, Metadata]] = {}
    for key, raw in entries.items():
        entry_path = (*path, key)
        entry_data, entry_meta = _initialize_fields(specifier.entry_fields, {}, notify, entry_path)
        resolve_entry(
            specifier.entry_fields, key, raw, entry_data, entry_meta, "initial",
            notify=notify, path=entry_path,
        )
        data[key] = entry_data
        metadata[key] = entry_meta
    return data, RecordMetadata.seeded(metadata)


def _require_mapping(value: Any, name: str, path: tuple[str, ...]) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ShorthandNotSupported(name, value, path)
    return value


def _check_initializer(initial: Any, name: str, path: tuple[str, ...]) -> None:
    if initial is not None and not callable(initial):
        raise InvalidInitializerKind(name, initial, path)


def _seed_or_empty(initial: Any, name: str, path: tuple[str, ...]) -> Any:
    seed = _run_initializer(initial, name, path)
    return {} if seed is None else seed


def _run_initializer(initial: Any, name: str, path: tuple[str, ...]) -> Any:
    if initial is None:
        return None
    _check_initializer(initial, name, path)
    logger.debug("running initializer for %s", ".".join(path))
    try:
        return initial()
    except Exception as exc:
        raise InitializerError(name, exc, path) from exc


def run_type_mapper(
    map_type: Callable[[Any], Any], value: Any, name: str, path: tuple[str, ...]
) -> Any:
    logger.debug("running type mapper for %s on %r", ".".join(path), value)
    try:
        return map_type(value)
    except Exception as exc:
        raise TypeMapperError(name, exc, path) from exc


__all__ = ["Notify", "initialize", "run_type_mapper"]
