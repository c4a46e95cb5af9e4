"""Outline commands: outline, check."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.tree import Tree

from mindgraph.cli._format import print_json, print_lines, print_table
from mindgraph.cli.render_cmd import read_document
from mindgraph.debug import TreeDebugger
from mindgraph.outline import build_tree, extract_headings

if TYPE_CHECKING:
    from mindgraph.model import Node


def _rich_tree(node: Node, branch: Tree | None = None) -> Tree:
    label = node.name or "[dim](untitled)[/dim]"
    if node.line is not None:
        label = f"{label} [dim]:{node.line + 1}[/dim]"
    tree = Tree(label) if branch is None else branch.add(label)
    for child in node.children:
        _rich_tree(child, tree)
    return tree


def register_commands(app: typer.Typer) -> None:
    """Register `outline` and `check` as top-level commands on the app."""

    @app.command("outline")
    def outline_cmd(
        file: Annotated[Path, typer.Argument(help="Markdown document")],
        as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
        output: Annotated[str | None, typer.Option("--output", help="Write JSON to file")] = None,
    ):
        """Show the heading outline of a document."""
        headings = extract_headings(read_document(file))

        if as_json:
            data = {
                "headings": [
                    {
                        "depth": h.depth,
                        "line": h.line,
                        "name": h.name,
                        "rules": [rule.type for rule in h.rules or []],
                    }
                    for h in headings
                ],
            }
            print_json("outline", data, output)
            return

        if not headings:
            print(f"\n  No headings in {file}.")
            return

        Console().print(_rich_tree(build_tree(headings, title=file.stem)))

    @app.command("check")
    def check_cmd(
        file: Annotated[Path, typer.Argument(help="Markdown document")],
        as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    ):
        """Validate the tree built from a document."""
        root = build_tree(extract_headings(read_document(file)), title=file.stem)
        debugger = TreeDebugger(root)
        result = debugger.validate()
        stats = debugger.stats()

        if as_json:
            print_json(
                "check",
                {"valid": result.valid, "errors": result.errors, "warnings": result.warnings, "stats": stats},
            )
        else:
            print(f"\nTree: {root.name or file.name} | {stats['nodes']} nodes | depth {stats['depth']}\n")
            print_lines(print_table(["Metric", "Value"], [[k, str(v)] for k, v in stats.items()]))
            for error in result.errors:
                print(f"  ERROR    {error}")
            for warning in result.warnings:
                print(f"  warning  {warning}")

        if not result.valid:
            raise typer.Exit(1)
