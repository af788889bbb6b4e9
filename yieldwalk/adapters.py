"""
Node adapters: decide what counts as a tree node and enumerate its fields.

The traversal engine knows nothing about concrete tree schemas. It asks an
adapter whether a value is a node (by looking for a string discriminant) and
which fields a node has, in a stable order.
"""

from __future__ import annotations

import abc
import ast
import dataclasses
from collections.abc import Mapping
from typing import Any, Iterable, Iterator, Optional, Tuple

from .settings import DEFAULT_TAG_FIELD

# Values that can never carry child-bearing fields
_ATOMIC_TYPES = (str, bytes, bytearray, int, float, complex, bool)
_SEQUENCE_TYPES = (list, tuple, set, frozenset)

Field = Tuple[str, Any]


class NodeAdapter(abc.ABC):
    """Structural view over one family of tree nodes."""

    def __init__(self, skip_fields: Iterable[str] = ()) -> None:
        self.skip_fields = frozenset(skip_fields)

    @abc.abstractmethod
    def kind_of(self, value: Any) -> Optional[str]:
        """Return the node's discriminant, or None if ``value`` is not a node."""
        ...

    @abc.abstractmethod
    def _raw_fields(self, node: Any) -> Iterable[Field]:
        ...

    def is_node(self, value: Any) -> bool:
        return self.kind_of(value) is not None

    def iter_fields(self, node: Any) -> Iterator[Field]:
        """Yield ``(name, value)`` pairs of a node, honouring ``skip_fields``."""
        for name, value in self._raw_fields(node):
            if name in self.skip_fields:
                continue
            yield name, value


class DuckTypedAdapter(NodeAdapter):
    """
    Recognises any mapping or object carrying a string tag field.

    Works for JSON dumps of ESTree/Babel trees (``{"type": "Identifier", ...}``)
    as well as dataclass or plain-object trees exposing the tag as an attribute.
    """

    def __init__(self, tag_field: str = DEFAULT_TAG_FIELD, skip_fields: Iterable[str] = ()) -> None:
        super().__init__(skip_fields)
        self.tag_field = tag_field

    def kind_of(self, value: Any) -> Optional[str]:
        if value is None or isinstance(value, _ATOMIC_TYPES + _SEQUENCE_TYPES):
            return None
        if isinstance(value, Mapping):
            tag = value.get(self.tag_field)
        else:
            tag = getattr(value, self.tag_field, None)
        return tag if isinstance(tag, str) else None

    def _raw_fields(self, node: Any) -> Iterable[Field]:
        if isinstance(node, Mapping):
            return node.items()
        if dataclasses.is_dataclass(node):
            return [(f.name, getattr(node, f.name)) for f in dataclasses.fields(node)]
        attrs = getattr(node, "__dict__", None)
        if attrs is None:
            return ()
        return [(name, value) for name, value in attrs.items() if not name.startswith("_")]


class PythonAstAdapter(NodeAdapter):
    """Adapter for trees produced by the standard library ``ast`` module."""

    def kind_of(self, value: Any) -> Optional[str]:
        if isinstance(value, ast.AST):
            return type(value).__name__
        return None

    def _raw_fields(self, node: Any) -> Iterable[Field]:
        return ast.iter_fields(node)


def adapter_for(root: Any) -> NodeAdapter:
    """Pick a default adapter from the type of the root node."""
    if isinstance(root, ast.AST):
        return PythonAstAdapter()
    return DuckTypedAdapter()
