"""Layout pass: raw placement followed by normalization."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mindgraph.layout.normalize import adjust_label_widths, normalize

if TYPE_CHECKING:
    from mindgraph.config import MindmapConfig
    from mindgraph.layout.strategies import LayoutResult, LayoutStrategy
    from mindgraph.model import Node

logger = logging.getLogger(__name__)


def compute_layout(
    root: Node,
    anchor: Node,
    strategy: LayoutStrategy,
    config: MindmapConfig,
) -> LayoutResult:
    """Lay out the visible tree and normalize it around ``anchor``.

    The raw pass always covers the whole visible tree from ``root``;
    ``anchor`` (the node that triggered the update) only decides which
    perpendicular coordinate stays fixed.
    """
    result = strategy.compute(root)
    ratio = normalize(result.nodes, root, anchor, config)
    if config.label_width_adjust:
        adjust_label_widths(root, config)
    logger.debug(
        "Laid out %d nodes, %d links (ratio=%.3f, anchor=%r)",
        len(result.nodes),
        len(result.links),
        ratio,
        anchor,
    )
    return result
