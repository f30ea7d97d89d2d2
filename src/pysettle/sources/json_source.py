from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pyjson5

from . import register_source
from .base import BaseSource


@register_source
class JsonSource(BaseSource):
    """JSON file source; ``.json5`` files are read with the relaxed parser."""

    suffixes = (".json", ".json5")
    label = "JSON"

    def parse(self, text: str, path: Path) -> Any:
        if path.suffix.lower() == ".json5":
            return pyjson5.decode(text)
        return json.loads(text)
