"""
Two-phase depth-first tree traversal.
"""

from .adapters import DuckTypedAdapter, NodeAdapter, PythonAstAdapter
from .engine import Context, PathEntry, SequenceResults, iter_child_results, traverse
from .exceptions import MalformedStepError, MissingResultError, TraversalError, TreeLoadError

__all__ = [
    "Context",
    "DuckTypedAdapter",
    "MalformedStepError",
    "MissingResultError",
    "NodeAdapter",
    "PathEntry",
    "PythonAstAdapter",
    "SequenceResults",
    "TraversalError",
    "TreeLoadError",
    "iter_child_results",
    "traverse",
]
