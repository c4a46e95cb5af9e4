"""Data model for mind-map trees.

Screen convention used throughout the package: ``x`` runs along tree depth
(left to right) and ``y`` is the perpendicular axis siblings spread along.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union


@dataclass(frozen=True)
class Point:
    """Immutable 2D point.

    Example:
        >>> Point(1, 2) + Point(3, 4)
        Point(x=4, y=6)
    """

    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> Point:
        """Return the point multiplied by ``factor`` on both axes."""
        return Point(self.x * factor, self.y * factor)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Box:
    """Axis-aligned bounding box in diagram coordinates."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


# =============================================================================
# Inline content
# =============================================================================


@dataclass(frozen=True)
class TextRule:
    """Static text shown next to a node."""

    content: str
    type: str = field(default="text", init=False)


@dataclass(frozen=True)
class LinkRule:
    """Clickable text pointing at ``href``."""

    href: str
    content: str
    type: str = field(default="link", init=False)


@dataclass(frozen=True)
class ImageRule:
    """Icon rendered above the node bar."""

    src: str
    type: str = field(default="image", init=False)


Rule = Union[TextRule, LinkRule, ImageRule]


# =============================================================================
# Tree
# =============================================================================


@dataclass(eq=False)
class Node:
    """One vertex of the mind-map tree.

    Nodes compare and hash by identity, so they can be used directly as
    graph nodes and dictionary keys.

    Attributes:
        name: Display text (used for structure; labels come from ``rules``)
        children: Visible children, owned by this node
        hidden_children: Children set aside while the node is collapsed
        rules: Inline content items rendered next to the node
        line: Source line of the heading, when built from an outline
        depth: Distance from the root, refreshed on every layout pass
        branch: Index of the top-level ancestor among the root's children
        id: Render identity, assigned lazily by the engine
        position: Current layout coordinates
        previous_position: Coordinates before the most recent pass
        raw_breadth: Perpendicular coordinate written by the layout strategy
    """

    name: str = ""
    children: list[Node] = field(default_factory=list)
    hidden_children: list[Node] = field(default_factory=list)
    rules: list[Rule] = field(default_factory=list)
    line: int | None = None
    depth: int = 0
    branch: int | None = None
    id: int | None = None
    position: Point | None = None
    previous_position: Point | None = None
    raw_breadth: float = 0.0

    def __post_init__(self) -> None:
        # Tolerate explicit None for optional collections
        if self.children is None:
            self.children = []
        if self.hidden_children is None:
            self.hidden_children = []
        if self.rules is None:
            self.rules = []

    def __repr__(self) -> str:
        return f"Node(name={self.name!r}, id={self.id}, depth={self.depth})"

    @property
    def has_children(self) -> bool:
        """True if the node has children, visible or hidden."""
        return bool(self.children or self.hidden_children)

    def walk(self, include_hidden: bool = False) -> Iterator[Node]:
        """Yield this node and its descendants in pre-order."""
        yield self
        kids = self.children + self.hidden_children if include_hidden else self.children
        for child in kids:
            yield from child.walk(include_hidden)


@dataclass(frozen=True)
class Link:
    """Directed parent -> child edge of the visible tree."""

    source: Node
    target: Node

    @property
    def key(self) -> int | None:
        """Links are keyed by their target's render id."""
        return self.target.id


@dataclass
class ViewportState:
    """Zoom and pan state owned by one engine instance.

    ``width`` and ``height`` are the container's logical size, measured once
    at initialization.
    """

    width: float
    height: float
    zoom_scale: float = 1.0
    zoom_translate: Point = field(default_factory=lambda: Point(0.0, 0.0))
    auto_fit: bool = True
