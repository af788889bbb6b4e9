"""
Depth-first traversal engine with two-phase (pre-order / post-order) steps.

A step is called once per node as ``step(node, acc, context)``. When it is a
generator function, the code before its ``yield`` runs before the node's
children are visited and the yielded value becomes the accumulator handed to
every child. The children's results are then sent back into the generator,
and the generator's return value is the node's result::

    def evaluate(node, acc, context):
        if node["type"] == "NumericLiteral":
            return node["value"]
        children = yield
        return children["left"] + children["right"]

A step that returns without yielding, or a plain function, finishes in the
pre-order phase: its return value is the node's result and, unless it is
None, also the accumulator for the node's children.

Two-phase stepping is decided by the value the step returns, not by how the
step is defined: a plain function or ``functools.partial`` that returns a
generator object is driven as a two-phase step. Return a list or tuple
instead of a lazy generator when the sequence itself is the result.
"""

from __future__ import annotations

import inspect
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Type

from .adapters import NodeAdapter, adapter_for
from .exceptions import MalformedStepError, MissingResultError, TraversalError
from .logging_utils import WalkLogger


class SequenceResults(Dict[int, Any]):
    """Results of a sequence field, keyed by index. Only node positions are present."""


# Field name -> child result, or field name -> SequenceResults for sequence
# fields. Fields without node content are absent.
ChildResults = Dict[str, Any]


@dataclass(frozen=True)
class PathEntry:
    """One ancestor on the way from the root to the node being visited."""

    node: Any
    prop: str
    index: Optional[int] = None


@dataclass
class Context:
    """Ancestor path of the node currently being visited."""

    path: List[PathEntry] = field(default_factory=list)
    adapter: Optional[NodeAdapter] = None

    @property
    def parent(self) -> Any:
        return self.path[-1].node if self.path else None

    @property
    def depth(self) -> int:
        return len(self.path)

    def kind_of(self, node: Any) -> Optional[str]:
        adapter = self.adapter or adapter_for(node)
        return adapter.kind_of(node)

    @contextmanager
    def descend(self, node: Any, prop: str, index: Optional[int] = None) -> Iterator[PathEntry]:
        """Push a path entry for the duration of one child visit."""
        entry = PathEntry(node=node, prop=prop, index=index)
        self.path.append(entry)
        try:
            yield entry
        finally:
            self.path.pop()

    def describe(self) -> str:
        """Render the path as ``Program.body[0].declarations[0]``."""
        if not self.path:
            return "<root>"
        parts = [self.kind_of(self.path[0].node) or "<root>"]
        for entry in self.path:
            parts.append(f".{entry.prop}")
            if entry.index is not None:
                parts.append(f"[{entry.index}]")
        return "".join(parts)


Step = Callable[[Any, Any, Context], Any]


def iter_child_results(children: ChildResults) -> Iterator[Any]:
    """Yield every child result in field and index order, flattening sequences."""
    for value in children.values():
        if isinstance(value, SequenceResults):
            yield from value.values()
        else:
            yield value


class _Walker:
    def __init__(self, step: Step, adapter: NodeAdapter, logger: Optional[WalkLogger]) -> None:
        self.step = step
        self.adapter = adapter
        self.logger = logger

    def visit(self, node: Any, acc: Any, context: Context) -> Any:
        kind = self.adapter.kind_of(node)
        if self.logger is not None and self.logger.is_verbose:
            self.logger.debug(f"enter {kind} at {context.describe()}")

        outcome = self.step(node, acc, context)
        generator = outcome if inspect.isgenerator(outcome) else None
        suspended = False
        early = outcome
        if generator is not None:
            try:
                yielded = next(generator)
            except StopIteration as stop:
                early = stop.value
            else:
                suspended = True
                early = None
                child_acc = acc if yielded is None else yielded
        if not suspended:
            child_acc = acc if early is None else early

        results = self._visit_children(node, child_acc, context)
        if not suspended:
            return early

        try:
            generator.send(results)
        except StopIteration as stop:
            value = stop.value
        else:
            generator.close()
            raise self._fail(MalformedStepError, kind, context)
        if value is None:
            raise self._fail(MissingResultError, kind, context)
        return value

    def _visit_children(self, node: Any, acc: Any, context: Context) -> ChildResults:
        results: ChildResults = {}
        for prop, value in self.adapter.iter_fields(node):
            if self.adapter.is_node(value):
                with context.descend(node, prop):
                    results[prop] = self.visit(value, acc, context)
            elif isinstance(value, (list, tuple)):
                for index, item in enumerate(value):
                    if not self.adapter.is_node(item):
                        continue
                    with context.descend(node, prop, index):
                        result = self.visit(item, acc, context)
                    results.setdefault(prop, SequenceResults())[index] = result
        return results

    def _fail(self, error_cls: Type[TraversalError], kind: Optional[str], context: Context) -> TraversalError:
        error = error_cls(kind=kind, location=context.describe())
        if self.logger is not None:
            self.logger.error(str(error))
        return error


def traverse(
    root: Any,
    step: Step,
    init: Any,
    *,
    adapter: Optional[NodeAdapter] = None,
    logger: Optional[WalkLogger] = None,
) -> Any:
    """
    Walk ``root`` depth-first, running ``step`` on every node.

    Args:
        root: Root node of the tree.
        step: Step function or generator function ``(node, acc, context)``.
        init: Accumulator handed to the root's step.
        adapter: Node adapter; picked from the root's type when omitted.
        logger: Optional logger; node entries are logged at verbose level.

    Returns:
        The root step's result.

    Raises:
        MissingResultError: A step suspended and then returned None.
        MalformedStepError: A step suspended more than once.
    """
    adapter = adapter or adapter_for(root)
    walker = _Walker(step, adapter, logger)
    return walker.visit(root, init, Context(adapter=adapter))
