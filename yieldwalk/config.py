from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import yaml

from .adapters import DuckTypedAdapter
from .logging_utils import VerbosityLevel
from .settings import DEFAULT_TAG_FIELD


@dataclass
class WalkerConfig:
    tag_field: str = DEFAULT_TAG_FIELD
    skip_fields: List[str] = field(default_factory=list)
    verbosity: VerbosityLevel = VerbosityLevel.QUIET

    def build_adapter(self) -> DuckTypedAdapter:
        """Adapter for dict/object trees tagged by ``tag_field``."""
        return DuckTypedAdapter(tag_field=self.tag_field, skip_fields=self.skip_fields)


def load_config(path: str | Path) -> WalkerConfig:
    """Load walker configuration from YAML or JSON file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path, "r", encoding="utf-8") as f:
        if config_path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f) or {}
        elif config_path.suffix == ".json":
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {config_path.suffix}")

    verbosity = data.get("verbosity", VerbosityLevel.QUIET.value)
    try:
        verbosity_level = VerbosityLevel(str(verbosity).lower())
    except ValueError as exc:
        raise ValueError(f"Invalid verbosity in {path}: {verbosity!r}") from exc

    tag_field = data.get("tag_field", DEFAULT_TAG_FIELD)
    if not isinstance(tag_field, str) or not tag_field:
        raise ValueError(f"Invalid tag_field in {path}: {tag_field!r}")

    skip_fields = data.get("skip_fields") or []
    if isinstance(skip_fields, str):
        skip_fields = [skip_fields]
    if not isinstance(skip_fields, list) or not all(isinstance(name, str) for name in skip_fields):
        raise ValueError(f"Invalid skip_fields in {path}: {skip_fields!r}")

    return WalkerConfig(
        tag_field=tag_field,
        skip_fields=skip_fields,
        verbosity=verbosity_level,
    )
