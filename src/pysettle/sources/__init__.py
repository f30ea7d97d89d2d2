"""Input sources turning files and the environment into change input.

File sources are looked up by suffix; each source class lists the suffixes
it reads and registers itself with :func:`register_source`.
"""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..errors import SourceLoadError
from ..merge import deep_merge
from .base import BaseSource

_SOURCES_BY_SUFFIX: dict[str, type[BaseSource]] = {}


def register_source(source_cls: type[BaseSource]) -> type[BaseSource]:
    _SOURCES_BY_SUFFIX.update(dict.fromkeys(source_cls.suffixes, source_cls))
    return source_cls


def source_for_path(path: Path | str) -> BaseSource:
    """Instantiate the source reading files like *path*."""
    suffix = Path(path).suffix.lower()
    try:
        source_cls = _SOURCES_BY_SUFFIX[suffix]
    except KeyError:
        known = ", ".join(sorted(_SOURCES_BY_SUFFIX))
        raise SourceLoadError(
            f"Cannot read settings input from {path}: unsupported suffix "
            f"{suffix or '(none)'} (known: {known})"
        ) from None
    return source_cls()


def load_input(path: Path | str) -> dict[str, Any]:
    """Read change input from *path* using the source matching its suffix."""
    path = Path(path)
    return source_for_path(path).load(path)


def merge_inputs(*inputs: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge several change inputs; later inputs win."""
    merged: dict[str, Any] = {}
    for item in inputs:
        merged = deep_merge(merged, item)
    return merged


# the file sources register on import
from . import json_source, yaml_source  # noqa: F401,E402
from .env import read_env  # noqa: E402

__all__ = [
    "BaseSource",
    "register_source",
    "source_for_path",
    "load_input",
    "merge_inputs",
    "read_env",
]
