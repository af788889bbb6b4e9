"""
Exception hierarchy for traversal and tree loading failures.
"""

from __future__ import annotations

from typing import Optional


class TraversalError(Exception):
    """Base class for errors raised by the traversal engine."""

    def __init__(self, message: str, kind: Optional[str] = None, location: str = "") -> None:
        self.kind = kind
        self.location = location
        detail = message
        if kind:
            detail = f"{detail} (node {kind!r}"
            detail += f" at {location})" if location else ")"
        super().__init__(detail)


class MissingResultError(TraversalError):
    """Raised when a step suspended but produced no result after resuming."""

    def __init__(self, kind: Optional[str] = None, location: str = "") -> None:
        super().__init__("Step function must return a value", kind=kind, location=location)


class MalformedStepError(TraversalError):
    """Raised when a step suspends more than once for a single node."""

    def __init__(self, kind: Optional[str] = None, location: str = "") -> None:
        super().__init__(
            "Step function may suspend only once per node", kind=kind, location=location
        )


class TreeLoadError(Exception):
    """Raised when a tree document cannot be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load tree from {path}: {reason}")
