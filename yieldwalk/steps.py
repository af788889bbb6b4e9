"""
Ready-made step functions for common traversals.

Each step follows the ``(node, acc, context)`` contract of
:func:`yieldwalk.engine.traverse` and reads node kinds through the context, so
it works with any adapter.
"""

from __future__ import annotations

import ast
import operator
import re
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from .engine import Context, iter_child_results

BINARY_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}

_PY_OPERATORS = {
    ast.Add: "+",
    ast.Sub: "-",
    ast.Mult: "*",
    ast.Div: "/",
}

_LITERAL_KINDS = {"NumericLiteral", "Literal", "Constant"}
_BINARY_KINDS = {"BinaryExpression", "BinOp"}


def collect_kinds(node: Any, acc: List[str], context: Context) -> List[str]:
    """Append every node's kind to ``acc`` in pre-order."""
    acc.append(context.kind_of(node))
    return acc


def count_kinds(node: Any, acc: Any, context: Context):
    """Count nodes per kind, merging children's counters after they are visited."""
    children = yield
    counts: Counter = Counter({context.kind_of(node): 1})
    for child in iter_child_results(children):
        counts.update(child)
    return counts


def max_depth(node: Any, acc: Any, context: Context):
    """Depth of the subtree rooted at ``node``; a leaf has depth 1."""
    children = yield
    return 1 + max(iter_child_results(children), default=0)


def _field(node: Any, name: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(name)
    return getattr(node, name, None)


def _literal_value(node: Any) -> Any:
    value = _field(node, "value")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _operator_symbol(node: Any) -> Optional[str]:
    op = _field(node, "operator")
    if isinstance(op, str):
        return op
    return _PY_OPERATORS.get(type(_field(node, "op")))


def fold_binary(
    operators: Iterable[str] = ("+",),
    on_result: Optional[Callable[[Any], None]] = None,
):
    """
    Build a step that evaluates numeric binary expressions bottom-up.

    Numeric literals (``NumericLiteral``, ESTree ``Literal``, Python
    ``Constant``) evaluate to their value; binary expressions whose operator is
    in ``operators`` combine their operands after the operands are visited and
    report the combined value to ``on_result``. Any other node evaluates to
    None.

    Raises:
        ValueError: An operator in ``operators`` is not supported, or a folded
            expression has an operand that is not numeric.
    """
    selected = set(operators)
    unknown = selected - set(BINARY_OPERATORS)
    if unknown:
        raise ValueError(f"Unsupported operators: {', '.join(sorted(unknown))}")

    def step(node: Any, acc: Any, context: Context):
        kind = context.kind_of(node)
        if kind in _LITERAL_KINDS:
            return _literal_value(node)
        if kind not in _BINARY_KINDS:
            return None
        symbol = _operator_symbol(node)
        if symbol not in selected:
            return None

        children = yield
        left, right = children.get("left"), children.get("right")
        if left is None or right is None:
            raise ValueError(f"Non-numeric operand in {kind} at {context.describe()}")
        value = BINARY_OPERATORS[symbol](left, right)
        if on_result is not None:
            on_result(value)
        return value

    return step


@dataclass(eq=False)
class Scope:
    """A lexical scope with the declarations made directly inside it."""

    parent: Optional["Scope"] = None
    decl: List[Any] = field(default_factory=list)
    children: List["Scope"] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.parent is not None:
            self.parent.children.append(self)

    def add_declaration(self, node: Any) -> None:
        self.decl.append(node)


_DECLARATION = re.compile(r"(?:Function|Class)Declaration")
_FUNCTION = re.compile(r"Function")
_LOOP = re.compile(r"For(?:In|Of)?Statement")


def collect_scopes(node: Any, scope: Scope, context: Context):
    """
    Build the scope tree of an ESTree/Babel program.

    Functions, ``for`` loops, catch clauses and blocks other than a function
    declaration's body open a new scope; ``var``/``let``/``const`` declarators
    and function/class declarations are recorded in the enclosing scope.
    """
    kind = context.kind_of(node) or ""
    if _DECLARATION.search(kind):
        scope.add_declaration(node)
    if kind == "VariableDeclaration":
        for declaration in _field(node, "declarations") or ():
            scope.add_declaration(declaration)

    inner = scope
    if _FUNCTION.search(kind):
        inner = Scope(scope)
        if kind == "FunctionExpression" and _field(node, "id"):
            inner.add_declaration(node)
    if _LOOP.search(kind) or kind == "CatchClause":
        inner = Scope(scope)
    if kind == "BlockStatement" and context.kind_of(context.parent) != "FunctionDeclaration":
        inner = Scope(scope)

    yield inner
    return scope
