from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .errors import OnFixupError
from .initializer import initialize
from .metadata import Metadata, metadata_to_data
from .notify import LoggingSink, NotificationSink, fixup_handler
from .resolver import resolve
from .spec import FixupInfo, SpecTree
from .validation import is_development, validate_spec

logger = logging.getLogger(__name__)

FixupHandler = Callable[[FixupInfo], None]
OnFixup = Callable[[FixupInfo, FixupHandler], None]


class Manager:
    """Owns the resolved settings ``data`` and their ``metadata``.

    ``on_fixup`` replaces the default fixup handler, which reports each fixup
    to ``sink`` (a :class:`~pysettle.notify.LoggingSink` unless given).  The
    default handler is passed as the second argument so custom handlers can
    still call it.

    Calls must be serialised by the caller; hooks must not call back into
    the same manager.
    """

    def __init__(
        self,
        fields: SpecTree,
        *,
        on_fixup: OnFixup | None = None,
        sink: NotificationSink | None = None,
    ) -> None:
        if is_development():
            validate_spec(fields)
        self.fields = fields
        self.sink = sink if sink is not None else LoggingSink()
        self._on_fixup = on_fixup
        self._default_fixup = fixup_handler(self.sink)
        self.data: dict[str, Any]
        self.metadata: dict[str, Metadata]
        self.data, self.metadata = initialize(fields, self._notify)

    def _notify(self, info: FixupInfo) -> None:
        if self._on_fixup is None:
            self._default_fixup(info)
            return
        try:
            self._on_fixup(info, self._default_fixup)
        except Exception as exc:
            raise OnFixupError(info.name, exc, info.path) from exc

    def change(self, input: Mapping[str, Any]) -> Manager:
        """Resolve *input* into the current settings and return ``self``."""
        resolve(self.fields, input, self.data, self.metadata, "set", notify=self._notify)
        return self

    def reset(self) -> Manager:
        """Re-run all initializers, replacing ``data`` and ``metadata``."""
        logger.debug("resetting settings")
        self.data, self.metadata = initialize(self.fields, self._notify)
        return self

    def original(self) -> dict[str, Any]:
        """Return a fresh copy of the settings as they were initialized."""
        return metadata_to_data(self.metadata)


def create(
    fields: SpecTree,
    *,
    on_fixup: OnFixup | None = None,
    sink: NotificationSink | None = None,
) -> Manager:
    return Manager(fields, on_fixup=on_fixup, sink=sink)


__all__ = ["FixupHandler", "OnFixup", "Manager", "create"]
