from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from . import register_source
from .base import BaseSource


@register_source
class YamlSource(BaseSource):
    """YAML file source."""

    suffixes = (".yaml", ".yml")
    label = "YAML"

    def parse(self, text: str, path: Path) -> Any:
        return yaml.safe_load(text)
