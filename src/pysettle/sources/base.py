from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..errors import SourceLoadError


class BaseSource(ABC):
    """Abstract file source producing nested change input."""

    suffixes: tuple[str, ...] = ()
    label: str = "input"

    def load(self, path: Path) -> dict[str, Any]:
        path = Path(path)
        if not path.is_file():
            raise SourceLoadError(f"Input file not found: {path}")
        raw = path.read_text(encoding="utf-8")
        if raw.strip() == "":
            return {}
        try:
            data = self.parse(raw, path)
        except Exception as exc:
            raise SourceLoadError(f"{path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SourceLoadError(f"Root of {self.label} input {path} must be a mapping")
        return data

    @abstractmethod
    def parse(self, text: str, path: Path) -> Any:
        pass
