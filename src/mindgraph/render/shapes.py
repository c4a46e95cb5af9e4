"""Link path shapes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from mindgraph.registry import Registry
from mindgraph.render._format import format_number as _n

if TYPE_CHECKING:
    from mindgraph.model import Point


class LinkShape(Protocol):
    def path(self, source: Point, target: Point) -> str:
        """SVG path data from ``source`` to ``target``."""
        ...


class DiagonalShape:
    """Cubic curve leaving and entering horizontally.

    Both control points sit on the depth-axis midpoint.
    """

    def path(self, source: Point, target: Point) -> str:
        mid = (source.x + target.x) / 2
        return (
            f"M{_n(source.x)},{_n(source.y)}"
            f"C{_n(mid)},{_n(source.y)} {_n(mid)},{_n(target.y)} {_n(target.x)},{_n(target.y)}"
        )


class BracketShape:
    """Vertical run at the source, then horizontal into the target."""

    def path(self, source: Point, target: Point) -> str:
        return f"M{_n(source.x)},{_n(source.y)}V{_n(target.y)}H{_n(target.x)}"


LINK_SHAPES: Registry[LinkShape] = Registry("link shape")
LINK_SHAPES.register("diagonal", DiagonalShape)
LINK_SHAPES.register("bracket", BracketShape)
