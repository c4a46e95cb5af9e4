"""Plain and boxed renderers.

Both share one reconciliation core (:meth:`PlainRenderer.render`) that
turns a node/link :class:`~mindgraph.render.reconcile.Diff` into surface
operations. The boxed variant only adds decoration on top.

Element keys:
    ("node", id)                    group, positioned with ``translate``
    ("node", id, "rect")            bar (plain) / rounded box (boxed)
    ("node", id, "circle")          toggle indicator
    ("node", id, "rule", i)         inline content item ``i``
    ("node", id, "rule", i, "text") label inside a link item
    ("link", target_id)             edge path
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from mindgraph.model import ImageRule, LinkRule, Point, TextRule
from mindgraph.registry import Registry
from mindgraph.render.colors import brighter
from mindgraph.visibility import is_collapsed

if TYPE_CHECKING:
    from mindgraph.config import MindmapConfig
    from mindgraph.model import Link, Node
    from mindgraph.render.colors import ColorStrategy
    from mindgraph.render.reconcile import Diff
    from mindgraph.render.scene import ElementKey, Surface
    from mindgraph.render.shapes import LinkShape

# Starting radius and opacity of entering elements
EPSILON = 1e-6
CIRCLE_RADIUS = 4.5
ICON_X = 10
TEXT_X = 10
ICON_TEXT_X = 45


@dataclass
class RenderContext:
    """Collaborators a renderer needs for one pass."""

    surface: Surface
    config: MindmapConfig
    color: ColorStrategy
    link_shape: LinkShape
    click_handler: Callable[[Node], Callable[[], None]]


# =============================================================================
# Node geometry helpers
# =============================================================================


def is_label_continuation(node: Node) -> bool:
    """A named node whose only visible child is nameless."""
    return bool(node.name) and len(node.children) == 1 and node.children[0].name == ""


def bar_width(node: Node) -> float:
    """Stroke thickness of a node's bar and incoming link."""
    depth = node.depth + 1 if is_label_continuation(node) else node.depth
    return max(6 - 2 * depth, 1.5)


def text_x(node: Node, has_icon: bool, config: MindmapConfig) -> float:
    """Horizontal indent of a text item."""
    if not has_icon:
        return TEXT_X
    if node.depth > 2:
        return config.text_indent
    return ICON_TEXT_X


def icon_y(node: Node) -> float:
    return -18 if node.depth > 2 else -30


def rule_layout(node: Node) -> list[tuple[int, object, bool]]:
    """(index, rule, has_icon) for each inline item.

    ``has_icon`` is true once an image item has appeared earlier in the list
    (or is the item itself).
    """
    has_icon = False
    items = []
    for index, rule in enumerate(node.rules):
        if isinstance(rule, ImageRule):
            has_icon = True
        items.append((index, rule, has_icon))
    return items


def node_key(node: Node) -> ElementKey:
    return ("node", node.id)


def link_key(link: Link) -> ElementKey:
    return ("link", link.target.id)


def _text_keys(node: Node) -> list[tuple[ElementKey, bool]]:
    keys = []
    for index, rule, has_icon in rule_layout(node):
        if isinstance(rule, LinkRule):
            keys.append(((*node_key(node), "rule", index, "text"), has_icon))
        elif isinstance(rule, TextRule):
            keys.append(((*node_key(node), "rule", index), has_icon))
    return keys


# =============================================================================
# Renderers
# =============================================================================


class PlainRenderer:
    """Thin bar per node, toggle circle, curved links."""

    def render(self, ctx: RenderContext, source: Node, nodes: Diff[Node], links: Diff[Link]) -> None:
        origin = source.previous_position or source.position or Point(0.0, 0.0)
        target = source.position or origin

        for node in nodes.entered:
            self._enter_node(ctx, node, origin)
        for node in nodes.current:
            self._update_node(ctx, node)
        for node in nodes.exited:
            self._exit_node(ctx, node, target)

        for link in links.entered:
            self._enter_link(ctx, link, origin)
        for link in links.current:
            self._update_link(ctx, link)
        for link in links.exited:
            self._exit_link(ctx, link, target)

    # -- nodes ----------------------------------------------------------------

    def _enter_node(self, ctx: RenderContext, node: Node, origin: Point) -> None:
        surface, config = ctx.surface, ctx.config
        key = node_key(node)
        color = ctx.color(node.branch)
        width = bar_width(node)

        surface.create(
            key,
            "g",
            {"translate": origin.as_tuple(), "class": f"markmap-node markmap-depth-{node.depth}"},
        )
        surface.on_click(key, ctx.click_handler(node))
        surface.create(
            (*key, "rect"),
            "rect",
            {"class": "markmap-node-rect", "x": config.node_width, "y": -width / 2, "width": 0, "height": width, "fill": color},
            parent=key,
        )
        surface.create(
            (*key, "circle"),
            "circle",
            {
                "class": "markmap-node-circle",
                "cx": config.node_width,
                "r": EPSILON,
                "stroke": color,
                "fill": color if is_collapsed(node) else "",
            },
            parent=key,
        )

        for index, rule, has_icon in rule_layout(node):
            rule_key = (*key, "rule", index)
            text_attrs = {
                "class": "markmap-node-text",
                "x": config.node_width,
                "dy": "-0.5em",
                "text-anchor": "start",
                "fill-opacity": EPSILON,
            }
            if isinstance(rule, ImageRule):
                surface.create(
                    rule_key,
                    "image",
                    {"class": "href", "x": ICON_X, "y": icon_y(node), "href": rule.src},
                    parent=key,
                )
            elif isinstance(rule, LinkRule):
                surface.create(rule_key, "a", {"class": "markmap-node-text", "href": rule.href, "target": "_blank"}, parent=key)
                surface.create((*rule_key, "text"), "text", text_attrs, parent=rule_key, text=rule.content)
            else:
                surface.create(rule_key, "text", text_attrs, parent=key, text=rule.content)

    def _update_node(self, ctx: RenderContext, node: Node) -> None:
        surface, config = ctx.surface, ctx.config
        key = node_key(node)
        duration = config.duration
        color = ctx.color(node.branch)

        surface.animate(key, {"translate": node.position.as_tuple()}, duration)
        surface.animate((*key, "rect"), {"x": -1, "width": config.node_width + 2}, duration)
        surface.animate(
            (*key, "circle"),
            {
                "r": CIRCLE_RADIUS,
                "fill": color if is_collapsed(node) else "",
                "display": "inline" if node.has_children else "none",
            },
            duration,
        )
        for text_key, has_icon in _text_keys(node):
            surface.animate(text_key, {"x": text_x(node, has_icon, config), "fill-opacity": 1}, duration)

    def _exit_node(self, ctx: RenderContext, node: Node, target: Point) -> None:
        surface, config = ctx.surface, ctx.config
        key = node_key(node)
        duration = config.duration

        surface.animate((*key, "rect"), {"x": config.node_width, "width": 0}, duration)
        surface.animate((*key, "circle"), {"r": EPSILON}, duration)
        for text_key, _ in _text_keys(node):
            surface.animate(text_key, {"fill-opacity": EPSILON, "x": config.node_width}, duration)
        surface.animate(key, {"translate": target.as_tuple()}, duration, remove=True)

    # -- links ----------------------------------------------------------------

    def _anchor(self, ctx: RenderContext, point: Point) -> Point:
        """Trailing edge of a node's bar, where outgoing links start."""
        return Point(point.x + ctx.config.node_width, point.y)

    def _enter_link(self, ctx: RenderContext, link: Link, origin: Point) -> None:
        o = self._anchor(ctx, origin)
        ctx.surface.create(
            link_key(link),
            "path",
            {
                "class": "markmap-link",
                "fill": "none",
                "stroke": ctx.color(link.target.branch),
                "stroke-width": bar_width(link.target),
                "d": ctx.link_shape.path(o, o),
            },
        )

    def _update_link(self, ctx: RenderContext, link: Link) -> None:
        start = self._anchor(ctx, link.source.position)
        ctx.surface.animate(
            link_key(link),
            {"d": ctx.link_shape.path(start, link.target.position)},
            ctx.config.duration,
        )

    def _exit_link(self, ctx: RenderContext, link: Link, target: Point) -> None:
        o = self._anchor(ctx, target)
        ctx.surface.animate(link_key(link), {"d": ctx.link_shape.path(o, o)}, ctx.config.duration, remove=True)


class BoxedRenderer(PlainRenderer):
    """Plain rendering plus a rounded box in each node's branch colour."""

    corner_radius = 10
    box_brightness = 1.2

    def render(self, ctx: RenderContext, source: Node, nodes: Diff[Node], links: Diff[Link]) -> None:
        super().render(ctx, source, nodes, links)
        surface, config = ctx.surface, ctx.config

        for node in nodes.current + nodes.exited:
            key = node_key(node)
            if not surface.has(key):
                continue
            color = ctx.color(node.branch)
            surface.set(
                (*key, "rect"),
                {
                    "y": -config.node_height / 2,
                    "rx": self.corner_radius,
                    "ry": self.corner_radius,
                    "height": config.node_height,
                    "fill": brighter(color, self.box_brightness),
                    "stroke": color,
                    "stroke-width": 1,
                },
            )
            for text_key, _ in _text_keys(node):
                surface.set(text_key, {"dy": ".3em"})

        for link in links.current + links.exited:
            if surface.has(link_key(link)):
                surface.set(link_key(link), {"stroke-width": 1})


RENDERERS: Registry[PlainRenderer] = Registry("renderer")
RENDERERS.register("plain", PlainRenderer)
RENDERERS.register("boxed", BoxedRenderer)
