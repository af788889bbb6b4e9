"""
Summaries of a loaded tree, built from the ready-made steps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .engine import traverse
from .loader import LoadedTree
from .logging_utils import WalkLogger
from .steps import collect_kinds, count_kinds, max_depth


@dataclass
class WalkSummary:
    source: str
    kinds: List[str] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)
    max_depth: int = 0


def summarize_tree(tree: LoadedTree, logger: Optional[WalkLogger] = None) -> WalkSummary:
    """Run the kind listing, kind counts and depth traversals over one tree."""
    if logger is not None:
        logger.info(f"Walking {tree.path} ({tree.format.value})")

    kinds = traverse(tree.root, collect_kinds, [], adapter=tree.adapter, logger=logger)
    counts = traverse(tree.root, count_kinds, None, adapter=tree.adapter)
    depth = traverse(tree.root, max_depth, None, adapter=tree.adapter)

    if logger is not None:
        logger.info(f"Visited {len(kinds)} nodes, max depth {depth}")
    return WalkSummary(
        source=str(tree.path),
        kinds=kinds,
        counts=dict(counts.most_common()),
        max_depth=depth,
    )
