"""Zoom/pan state, clamping and auto-fit."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Iterable

from mindgraph.model import Box, Point

if TYPE_CHECKING:
    from mindgraph.model import Node, ViewportState
    from mindgraph.render.scene import Surface

logger = logging.getLogger(__name__)


def content_box(nodes: Iterable[Node]) -> Box | None:
    """Bounding box of node positions, or None if nothing is positioned."""
    points = [n.position for n in nodes if n.position is not None]
    if not points:
        return None
    return Box(
        min_x=min(p.x for p in points),
        min_y=min(p.y for p in points),
        max_x=max(p.x for p in points),
        max_y=max(p.y for p in points),
    )


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def _fit_ratio(available: float, extent: float) -> float:
    return math.inf if extent <= 0 else available / extent


class ViewportController:
    """Owns a :class:`~mindgraph.model.ViewportState`.

    Args:
        state: Viewport state to mutate in place
        surface: Surface receiving view transform updates
        horizontal_slack: Extra pan allowed past the leading horizontal edge
            when the diagram is wider than the container
    """

    def __init__(self, state: ViewportState, surface: Surface, horizontal_slack: float = 300) -> None:
        self.state = state
        self.surface = surface
        self.horizontal_slack = horizontal_slack
        self.box: Box | None = None

    def track(self, nodes: Iterable[Node]) -> Box | None:
        """Remember the content box used for clamping."""
        self.box = content_box(nodes)
        return self.box

    def clamp(self, translate: Point, scale: float) -> Point:
        """Keep the diagram from being dragged out of view.

        Works on the scaled content box in screen space. An axis where the
        content is smaller than the container keeps it fully inside; an axis
        where it is larger keeps the container covered, with
        ``horizontal_slack`` extra room on the leading horizontal edge.
        """
        if self.box is None:
            return translate
        width, height = self.state.width, self.state.height
        rendered_w = self.box.width * scale
        rendered_h = self.box.height * scale
        left = translate.x + self.box.min_x * scale
        top = translate.y + self.box.min_y * scale

        if rendered_h < height:
            top = _clamp(top, 0, height - rendered_h)
        else:
            top = _clamp(top, height - rendered_h, 0)

        if rendered_w < width:
            left = _clamp(left, 0, width - rendered_w)
        else:
            left = _clamp(left, width - rendered_w - self.horizontal_slack, 0)

        return Point(left - self.box.min_x * scale, top - self.box.min_y * scale)

    def set_zoom(self, translate: Point | tuple[float, float], scale: float) -> Point:
        """Apply a clamped translate and ``scale`` immediately.

        ``scale`` is taken as given; bounding it to the configured range is
        the caller's job.
        """
        if not isinstance(translate, Point):
            translate = Point(*translate)
        clamped = self.clamp(translate, scale)
        self.state.zoom_translate = clamped
        self.state.zoom_scale = scale
        self.surface.set_transform(clamped.as_tuple(), scale)
        return clamped

    def fit(self, box: Box) -> tuple[Point, float]:
        """Scale and translate that centre ``box`` in the container."""
        width, height = self.state.width, self.state.height
        scale = min(_fit_ratio(height, box.height), _fit_ratio(width, box.width), 1.0)
        translate = Point(
            (width - box.width * scale) / 2 - box.min_x * scale,
            (height - box.height * scale) / 2 - box.min_y * scale,
        )
        return translate, scale

    def auto_fit(self, nodes: Iterable[Node]) -> Point | None:
        """Fit all visible nodes into the container."""
        box = self.track(nodes)
        if box is None:
            return None
        translate, scale = self.fit(box)
        logger.debug("Auto-fit %s -> translate=%s scale=%.3f", box, translate, scale)
        return self.set_zoom(translate, scale)
