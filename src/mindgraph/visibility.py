"""Collapse/expand bookkeeping.

A node is either expanded (children visible, ``hidden_children`` empty) or
collapsed (children moved to ``hidden_children``). Nodes are only ever moved
between the two lists, never destroyed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mindgraph.model import Node


def is_collapsed(node: Node) -> bool:
    """True if the node has children set aside."""
    return bool(node.hidden_children)


def collapse(node: Node) -> None:
    """Move visible children into the hidden set."""
    if node.children:
        node.hidden_children = node.children
        node.children = []


def expand(node: Node) -> None:
    """Restore hidden children into the visible set."""
    if node.hidden_children:
        node.children = node.hidden_children
        node.hidden_children = []


def toggle(node: Node) -> bool:
    """Flip a node between expanded and collapsed.

    Returns:
        False for a leaf (no state change), True otherwise
    """
    if node.children:
        collapse(node)
        return True
    if node.hidden_children:
        expand(node)
        return True
    return False


def collapse_to_depth(root: Node, depth: int) -> None:
    """Collapse every node whose level is at or beyond ``depth``.

    Levels are 1-based like Markdown heading levels (the root is level 1),
    so ``depth=2`` leaves tree depths 0-1 visible. Descent stops at the
    first collapsed node; its whole subtree moves into ``hidden_children``.
    The root itself is never collapsed.
    """
    _collapse_children(root.children, depth, level=2)


def _collapse_children(nodes: list[Node], depth: int, level: int) -> None:
    for node in nodes:
        if level >= depth:
            collapse(node)
            continue
        _collapse_children(node.children, depth, level + 1)


def expand_all(root: Node) -> None:
    """Recursively restore every hidden subtree below (and at) ``root``."""
    expand(root)
    for child in root.children:
        expand_all(child)


def visible_nodes(root: Node) -> list[Node]:
    """Nodes reachable through ``children`` only, in pre-order."""
    return list(root.walk())
