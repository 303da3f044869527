"""CLI for outline-tree (inspect and normalize tab-indented outlines)."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from outline_tree.core.tree.navigation import depth_counts, flatten, iter_nodes, max_depth
from outline_tree.core.tree.parser import parse_text, serialize_tree
from outline_tree.logging_config import configure_logging
from outline_tree.models.node import Forest

app = typer.Typer(help="Outline tree: inspect and normalize tab-indented outlines.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
) -> None:
    configure_logging(verbose=verbose, quiet=quiet)


def _read_outline(path: Path) -> Forest:
    """Parse an outline file, exiting if it cannot be read."""
    if not path.is_file():
        logger.error("Outline file not found: {}", path)
        raise typer.Exit(1)
    forest = parse_text(path.read_text(encoding="utf-8"))
    logger.debug("Parsed {} root(s) from {}", len(forest), path)
    return forest


@app.command()
def show(
    path: Path = typer.Argument(..., help="Tab-indented outline file"),
    collapse_below: Annotated[
        int | None,
        typer.Option("--collapse-below", "-c", help="Hide nodes deeper than this depth"),
    ] = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Print the visible rows of an outline."""
    forest = _read_outline(path)
    expanded_ids: set[str] | None = None
    if collapse_below is not None:
        expanded_ids = {n.id for n in iter_nodes(forest) if n.depth < collapse_below}
    flat = flatten(forest, expanded_ids)

    if output_json:
        rows = [
            {
                "index": e.index,
                "depth": e.depth,
                "text": e.node.text,
                "has_children": e.has_children,
                "expanded": e.is_expanded,
            }
            for e in flat
        ]
        typer.echo(json.dumps(rows, indent=2, ensure_ascii=False))
        return

    for entry in flat:
        marker = "+" if entry.has_children and not entry.is_expanded else "-"
        typer.echo(f"{'  ' * entry.depth}{marker} {entry.node.text}")


@app.command()
def normalize(
    path: Path = typer.Argument(..., help="Tab-indented outline file"),
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write here instead of stdout"),
    ] = None,
) -> None:
    """Drop blank lines and fix over-indented lines."""
    text = serialize_tree(_read_outline(path))
    if output is None:
        typer.echo(text)
        return
    output.write_text(text + "\n", encoding="utf-8")
    logger.info("Wrote normalized outline to {}", output)


@app.command()
def stats(
    path: Path = typer.Argument(..., help="Tab-indented outline file"),
) -> None:
    """Print node counts for an outline."""
    forest = _read_outline(path)
    flat = flatten(forest)
    typer.echo(f"Nodes: {sum(1 for _ in iter_nodes(forest))}")
    typer.echo(f"Roots: {len(forest)}")
    typer.echo(f"Max depth: {max_depth(flat)}")
    for depth, count in depth_counts(flat).items():
        typer.echo(f"  depth {depth}: {count}")
