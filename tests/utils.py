from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def c(value: Any):
    """Return a constant initializer for *value*."""
    return lambda: value


class RecordingSink:
    """Notification sink remembering every emitted event."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event: str, context: Mapping[str, Any]) -> None:
        self.events.append((event, dict(context)))
