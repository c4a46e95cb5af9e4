"""Diagnostics for mind-map trees.

The engine assumes a well-formed tree and does not check it. Use these
helpers to spot structural problems before rendering.

Usage:
    from mindgraph.debug import TreeDebugger

    debugger = TreeDebugger(root)
    result = debugger.validate()
    if not result.valid:
        print("Issues found:", result.errors)

    print(debugger.stats())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

import networkx as nx

if TYPE_CHECKING:
    from mindgraph.model import Node


@dataclass
class ValidationResult:
    """Result of tree validation."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _label(node: Node) -> str:
    return node.name or f"<unnamed line={node.line}>"


class TreeDebugger:
    """Debug helper for a mind-map tree.

    Builds a ``networkx`` graph of every parent -> child edge, visible and
    hidden. Edges carry ``hidden=True`` when they come from
    ``hidden_children``.
    """

    def __init__(self, root: Node):
        self.root = root
        self._graph: Optional[nx.DiGraph] = None

    @property
    def graph(self) -> nx.DiGraph:
        """Lazily build and cache the structure graph."""
        if self._graph is None:
            self._graph = self._build_graph()
        return self._graph

    def invalidate_cache(self) -> None:
        """Clear the cached graph (call if the tree changed)."""
        self._graph = None

    def _build_graph(self) -> nx.DiGraph:
        G = nx.DiGraph()
        G.add_node(self.root)
        stack = [self.root]
        seen = {id(self.root)}
        while stack:
            node = stack.pop()
            for hidden, kids in ((False, node.children), (True, node.hidden_children)):
                for child in kids:
                    G.add_edge(node, child, hidden=hidden)
                    if id(child) not in seen:
                        seen.add(id(child))
                        stack.append(child)
        return G

    def validate(self) -> ValidationResult:
        """Validate the tree structure.

        Checks for:
        - Cycles (a node reachable from itself)
        - Shared children (a node with more than one parent)
        - Nodes with both visible and hidden children

        Warns about leaves that carry no inline content.
        """
        errors: list[str] = []
        warnings: list[str] = []
        G = self.graph

        for cycle in nx.simple_cycles(G):
            path = " -> ".join(_label(n) for n in [*cycle, cycle[0]])
            errors.append(f"Cycle detected: {path}")

        for node in G.nodes:
            parents = list(G.predecessors(node))
            if len(parents) > 1:
                names = ", ".join(f"'{_label(p)}'" for p in parents)
                errors.append(f"Node '{_label(node)}' is shared by {len(parents)} parents: {names}")
            if node.children and node.hidden_children:
                errors.append(f"Node '{_label(node)}' has both visible and hidden children")
            if not node.has_children and not node.rules and node is not self.root:
                warnings.append(f"Leaf '{_label(node)}' has no inline content")

        return ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)

    def stats(self) -> dict[str, Any]:
        """Summary counts for the tree."""
        G = self.graph
        hidden = sum(1 for _, _, data in G.edges(data=True) if data["hidden"])
        depth = 0
        if nx.is_directed_acyclic_graph(G):
            depth = nx.dag_longest_path_length(G)
        return {
            "nodes": G.number_of_nodes(),
            "edges": G.number_of_edges(),
            "hidden_edges": hidden,
            "leaves": sum(1 for n in G.nodes if G.out_degree(n) == 0),
            "depth": depth,
        }


def validate_tree(root: Node) -> ValidationResult:
    """Shortcut for ``TreeDebugger(root).validate()``."""
    return TreeDebugger(root).validate()
