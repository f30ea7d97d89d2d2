from __future__ import annotations

import os

from .errors import InvalidSpecifier, InvalidTypeMapper
from .spec import Leaf, Namespace, Record, SpecTree

ENV_VAR = "PYSETTLE_ENV"


def is_production() -> bool:
    """Return ``True`` when ``PYSETTLE_ENV`` is set to ``production``."""
    return os.environ.get(ENV_VAR) == "production"


def is_development() -> bool:
    return not is_production()


def validate_spec(fields: SpecTree, path: tuple[str, ...] = ()) -> None:
    """Check *fields* for basic invariants, recursing into nested specs."""

    for name, specifier in fields.items():
        here = (*path, name)
        if isinstance(specifier, Namespace):
            validate_spec(specifier.fields, here)
        elif isinstance(specifier, Record):
            validate_spec(specifier.entry_fields, here)
        elif isinstance(specifier, Leaf):
            if specifier.map_type is not None and not callable(specifier.map_type):
                raise InvalidTypeMapper(name, specifier.map_type, here)
        else:
            raise InvalidSpecifier(name, specifier, here)


__all__ = ["ENV_VAR", "is_production", "is_development", "validate_spec"]
