"""Notification sinks for fixup diagnostics."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from .spec import FixupInfo

FIXUP_EVENT = (
    "One of your setting values was invalid. We were able to automatically fix "
    "it up now but please update your code."
)


class NotificationSink(Protocol):
    """Receives structured notification events."""

    def emit(self, event: str, context: Mapping[str, Any]) -> None:
        ...


class LoggingSink:
    """Sink writing each event to a :mod:`logging` logger.

    The context mapping is attached to the record as ``record.context`` and
    appended to the message.
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.WARNING) -> None:
        self.logger = logger or logging.getLogger("pysettle")
        self.level = level

    def emit(self, event: str, context: Mapping[str, Any]) -> None:
        self.logger.log(self.level, "%s %r", event, dict(context), extra={"context": dict(context)})


class NullSink:
    """Sink discarding every event."""

    def emit(self, event: str, context: Mapping[str, Any]) -> None:  # pragma: no cover - trivial
        return None


def fixup_handler(sink: NotificationSink) -> Callable[[FixupInfo], None]:
    """Return the default fixup handler, reporting each fixup to *sink*."""

    def handle(info: FixupInfo) -> None:
        sink.emit(FIXUP_EVENT, info.context())

    return handle


__all__ = ["FIXUP_EVENT", "NotificationSink", "LoggingSink", "NullSink", "fixup_handler"]
