from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from ..errors import SourceLoadError

NESTING = "__"


def read_env(prefix: str, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect variables starting with *prefix* into nested change input.

    ``MYAPP_SERVER__PORT=80`` with prefix ``MYAPP_`` becomes
    ``{"server": {"port": "80"}}``.  Keys are lowercased and values are kept
    as strings.
    """

    environ = os.environ if environ is None else environ
    result: dict[str, Any] = {}
    for key, value in sorted(environ.items()):
        if not key.startswith(prefix) or key == prefix:
            continue
        parts = key[len(prefix):].lower().split(NESTING)
        if any(p == "" for p in parts):
            raise SourceLoadError(f"Malformed environment key '{key}'")
        node = result
        for part in parts[:-1]:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise SourceLoadError(f"Environment key '{key}' conflicts with a plain value")
            node = child
        if isinstance(node.get(parts[-1]), dict):
            raise SourceLoadError(f"Environment key '{key}' conflicts with nested keys")
        node[parts[-1]] = value
    return result
