from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class TreeFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"
    PYTHON = "python"


DEFAULT_TAG_FIELD = "type"

TREE_SUFFIXES = {
    ".json": TreeFormat.JSON,
    ".yaml": TreeFormat.YAML,
    ".yml": TreeFormat.YAML,
    ".py": TreeFormat.PYTHON,
}
