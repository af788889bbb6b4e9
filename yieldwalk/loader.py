"""
Tree loader: reads tree documents from disk and pairs each root with an adapter.

JSON and YAML documents are dumps of dict-shaped trees (for example Babel or
ESTree output); Python sources are parsed with the standard ``ast`` module.
"""

from __future__ import annotations

import ast
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

from .adapters import DuckTypedAdapter, NodeAdapter, PythonAstAdapter
from .exceptions import TreeLoadError
from .settings import DEFAULT_TAG_FIELD, TREE_SUFFIXES, TreeFormat


@dataclass
class LoadedTree:
    path: Path
    format: TreeFormat
    root: Any
    adapter: NodeAdapter


def detect_format(path: Path) -> TreeFormat:
    tree_format = TREE_SUFFIXES.get(path.suffix.lower())
    if tree_format is None:
        raise ValueError(f"Unsupported tree format: {path.suffix}")
    return tree_format


def load_tree(
    path: str | Path,
    tag_field: str = DEFAULT_TAG_FIELD,
    skip_fields: Iterable[str] = (),
    adapter: Optional[NodeAdapter] = None,
) -> LoadedTree:
    """
    Load a tree document.

    Args:
        path: JSON, YAML or Python source file.
        tag_field: Discriminant field for JSON/YAML trees.
        skip_fields: Fields the adapter should not descend into.
        adapter: Explicit adapter, overriding the one picked for the format.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        ValueError: The file suffix is not a known tree format.
        TreeLoadError: The file could not be parsed, or its root is not a node.
    """
    tree_path = Path(path)
    if not tree_path.exists():
        raise FileNotFoundError(f"Tree file not found: {path}")
    tree_format = detect_format(tree_path)

    with open(tree_path, "r", encoding="utf-8") as handle:
        content = handle.read()

    if tree_format is TreeFormat.PYTHON:
        try:
            root = ast.parse(content, filename=str(tree_path))
        except SyntaxError as exc:
            raise TreeLoadError(str(tree_path), f"line {exc.lineno}: {exc.msg}") from exc
        adapter = adapter or PythonAstAdapter(skip_fields=skip_fields)
    else:
        try:
            if tree_format is TreeFormat.JSON:
                root = json.loads(content)
            else:
                root = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise TreeLoadError(str(tree_path), str(exc)) from exc
        adapter = adapter or DuckTypedAdapter(tag_field=tag_field, skip_fields=skip_fields)

    if not adapter.is_node(root):
        raise TreeLoadError(str(tree_path), "root is not a tree node")
    return LoadedTree(path=tree_path, format=tree_format, root=root, adapter=adapter)
