from __future__ import annotations

from typing import Mapping, Optional

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from ..steps import Scope


def render_counts(counts: Mapping[str, int], console: Optional[Console] = None) -> None:
    console = console or Console()
    table = Table(title="Node Kinds")
    table.add_column("Kind", overflow="fold")
    table.add_column("Count", justify="right")

    for kind, count in counts.items():
        table.add_row(kind, str(count))

    if len(table.rows) == 0:
        console.print("[yellow]No nodes found.[/yellow]")
        return

    console.print(table)


def _scope_label(scope: Scope, kind_of) -> str:
    names = [kind_of(node) or "?" for node in scope.decl]
    return ", ".join(names) if names else "[dim]no declarations[/dim]"


def render_scopes(root: Scope, kind_of, console: Optional[Console] = None) -> None:
    console = console or Console()
    tree = Tree(f"scope: {_scope_label(root, kind_of)}")
    pending = [(root, tree)]
    while pending:
        scope, branch = pending.pop()
        for child in scope.children:
            pending.append((child, branch.add(f"scope: {_scope_label(child, kind_of)}")))
    console.print(tree)
