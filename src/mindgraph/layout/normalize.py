"""Normalization of raw layout coordinates.

Raw strategies place siblings in abstract units. These helpers rescale the
perpendicular axis so the tightest sibling pair is exactly
``node_height + spacing_vertical`` apart, translate it so the node that
triggered the update keeps its anchor, and put the depth axis on a fixed
per-level stride.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from mindgraph.model import Point

if TYPE_CHECKING:
    from mindgraph.config import MindmapConfig
    from mindgraph.model import Node


# =============================================================================
# Branch ids
# =============================================================================


def assign_branches(root: Node) -> None:
    """Tag every descendant with its top-level ancestor's sibling index.

    Hidden subtrees are tagged too, so expanding them later keeps colours
    stable. Depths are refreshed on the way down.
    """
    root.branch = None
    root.depth = 0
    for index, child in enumerate(root.children + root.hidden_children):
        _propagate(child, index, 1)


def _propagate(node: Node, branch: int, depth: int) -> None:
    node.branch = branch
    node.depth = depth
    for child in node.children + node.hidden_children:
        _propagate(child, branch, depth + 1)


# =============================================================================
# Spacing ratio
# =============================================================================


def min_distance(node: Node) -> float:
    """Tightest raw gap between adjacent visible siblings anywhere below ``node``.

    A leaf yields ``inf``.
    """
    value = math.inf
    for child in node.children:
        value = min(value, min_distance(child))
    for left, right in zip(node.children, node.children[1:]):
        value = min(value, abs(right.raw_breadth - left.raw_breadth))
    return value


def normalization_ratio(root: Node, config: MindmapConfig) -> float:
    """Scale factor from raw units to diagram units.

    Falls back to 1 when no node has two visible children (``inf``) or when
    siblings coincide (``0``).
    """
    distance = min_distance(root)
    if math.isinf(distance) or distance <= 0:
        return 1.0
    return (config.node_height + config.spacing_vertical) / distance


def anchor_of(node: Node) -> float:
    """Perpendicular coordinate the node should keep through a pass."""
    if node.position is not None:
        return node.position.y
    if node.previous_position is not None:
        return node.previous_position.y
    return 0.0


def normalize(nodes: list[Node], root: Node, anchor: Node, config: MindmapConfig) -> float:
    """Rescale raw coordinates into ``position`` for every visible node.

    Args:
        nodes: Visible nodes produced by the raw pass
        root: Root of the tree (the ratio is computed over the whole tree)
        anchor: Node whose perpendicular coordinate must stay put
        config: Resolved configuration

    Returns:
        The ratio that was applied
    """
    ratio = normalization_ratio(root, config)
    offset = anchor_of(anchor) - anchor.raw_breadth * ratio
    stride = config.node_width + config.spacing_horizontal
    for node in nodes:
        node.position = Point(node.depth * stride, node.raw_breadth * ratio + offset)
    return ratio


# =============================================================================
# Label continuation
# =============================================================================


def label_width(node: Node, config: MindmapConfig) -> float:
    """Estimated rendered width of a node's label."""
    return len(node.name) * config.label_char_width


def adjust_label_widths(node: Node, config: MindmapConfig, offset: float = 0.0) -> None:
    """Push nameless continuation children right of their parent's label.

    A named node whose only visible child is nameless is drawn as one long
    label; the child (and everything below it) is shifted along the depth
    axis by the parent's estimated label width.
    """
    if node.position is None:
        return
    node.position = Point(node.position.x + offset, node.position.y)
    if node.name and len(node.children) == 1 and node.children[0].name == "":
        child = node.children[0]
        if child.position is not None:
            offset = node.position.x + label_width(node, config) - child.position.x
    for child in node.children:
        adjust_label_widths(child, config, offset)
