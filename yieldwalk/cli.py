"""
Typer-based CLI for listing node kinds, printing tree statistics, and showing scopes.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from .config import WalkerConfig, load_config
from .engine import traverse
from .exceptions import TraversalError, TreeLoadError
from .loader import LoadedTree, load_tree
from .logging_utils import VerbosityLevel, WalkLogger
from .reporting.console import render_counts, render_scopes
from .reporting.json_report import write_json
from .settings import OutputFormat, TreeFormat
from .steps import Scope, collect_kinds, collect_scopes
from .summary import summarize_tree

app = typer.Typer(help="Two-phase depth-first tree walker")
console = Console()


def _parse_verbosity(value: str) -> VerbosityLevel:
    try:
        return VerbosityLevel(value.lower())
    except ValueError as exc:
        raise typer.BadParameter(
            "Verbosity must be one of quiet, normal, verbose."
        ) from exc


def _parse_output(value: str) -> OutputFormat:
    try:
        return OutputFormat(value.lower())
    except ValueError as exc:
        raise typer.BadParameter("Output must be one of console, json.") from exc


def _resolve_config(
    config: Optional[Path],
    tag_field: Optional[str],
    skip_fields: List[str],
    verbosity: Optional[str],
) -> WalkerConfig:
    walker_config = WalkerConfig()
    if config:
        try:
            walker_config = load_config(config)
        except Exception as e:
            console.print(f"[red]Error loading config: {e}[/red]")
            raise typer.Exit(code=1)

    if tag_field:
        walker_config.tag_field = tag_field
    if skip_fields:
        walker_config.skip_fields = [*walker_config.skip_fields, *skip_fields]
    if verbosity:
        walker_config.verbosity = _parse_verbosity(verbosity)
    return walker_config


def _make_logger(walker_config: WalkerConfig) -> WalkLogger:
    # Log prefixes such as [info] are literal text, not rich markup
    def emit(message: str) -> None:
        console.print(message, markup=False, highlight=False)

    return WalkLogger(verbosity=walker_config.verbosity, emit=emit)


def _load(path: Path, walker_config: WalkerConfig, logger: WalkLogger) -> LoadedTree:
    try:
        tree = load_tree(
            path,
            tag_field=walker_config.tag_field,
            skip_fields=walker_config.skip_fields,
        )
    except (TreeLoadError, ValueError) as e:
        console.print(f"[red]Error loading tree: {e}[/red]")
        raise typer.Exit(code=1)
    logger.debug(f"Loaded {tree.path} as {tree.format.value}")
    return tree


ConfigOption = typer.Option(
    None,
    "--config",
    help="Path to walker configuration file (YAML or JSON).",
)
TagFieldOption = typer.Option(
    None,
    "--tag-field",
    help="Field holding the node kind in JSON/YAML trees (default: type).",
)
SkipFieldOption = typer.Option(
    [],
    "--skip-field",
    help="Field to leave out of the walk. Repeatable.",
)
VerbosityOption = typer.Option(
    None,
    "--verbosity",
    "-v",
    help="Verbosity level: quiet (default), normal, verbose.",
)


@app.command()
def kinds(
    path: Path = typer.Argument(..., help="Tree document (.json, .yaml, .py).", exists=True),
    config: Optional[Path] = ConfigOption,
    tag_field: Optional[str] = TagFieldOption,
    skip_field: List[str] = SkipFieldOption,
    verbosity: Optional[str] = VerbosityOption,
) -> None:
    """Print node kinds in depth-first pre-order."""
    walker_config = _resolve_config(config, tag_field, skip_field, verbosity)
    logger = _make_logger(walker_config)
    tree = _load(path, walker_config, logger)
    try:
        listing = traverse(tree.root, collect_kinds, [], adapter=tree.adapter, logger=logger)
    except TraversalError as e:
        console.print(f"[red]Traversal failed: {e}[/red]")
        raise typer.Exit(code=1)
    for kind in listing:
        console.print(kind, highlight=False)


@app.command()
def stats(
    path: Path = typer.Argument(..., help="Tree document (.json, .yaml, .py).", exists=True),
    output_format: str = typer.Option(
        OutputFormat.CONSOLE.value,
        "--output",
        "-o",
        help="Output format: console, json.",
    ),
    config: Optional[Path] = ConfigOption,
    tag_field: Optional[str] = TagFieldOption,
    skip_field: List[str] = SkipFieldOption,
    verbosity: Optional[str] = VerbosityOption,
) -> None:
    """Print node counts per kind and the maximum depth of a tree."""
    output = _parse_output(output_format)
    walker_config = _resolve_config(config, tag_field, skip_field, verbosity)
    logger = _make_logger(walker_config)
    tree = _load(path, walker_config, logger)
    try:
        summary = summarize_tree(tree, logger=logger)
    except TraversalError as e:
        console.print(f"[red]Traversal failed: {e}[/red]")
        raise typer.Exit(code=1)

    if output is OutputFormat.JSON:
        write_json(summary, sys.stdout)
        return
    render_counts(summary.counts, console=console)
    console.print(f"Max depth: {summary.max_depth}")


@app.command()
def scopes(
    path: Path = typer.Argument(..., help="ESTree/Babel tree document (.json, .yaml).", exists=True),
    config: Optional[Path] = ConfigOption,
    tag_field: Optional[str] = TagFieldOption,
    skip_field: List[str] = SkipFieldOption,
    verbosity: Optional[str] = VerbosityOption,
) -> None:
    """Print the lexical scope tree of an ESTree/Babel program."""
    walker_config = _resolve_config(config, tag_field, skip_field, verbosity)
    logger = _make_logger(walker_config)
    tree = _load(path, walker_config, logger)
    if tree.format is TreeFormat.PYTHON:
        logger.warning(f"{tree.path} is Python source; scopes are collected from ESTree/Babel kinds only")
    try:
        root = traverse(tree.root, collect_scopes, Scope(), adapter=tree.adapter, logger=logger)
    except TraversalError as e:
        console.print(f"[red]Traversal failed: {e}[/red]")
        raise typer.Exit(code=1)
    render_scopes(root, tree.adapter.kind_of, console=console)


def run() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    run()
