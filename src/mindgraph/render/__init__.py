"""Rendering: keyed scene surface, reconciliation and the two renderers."""

from mindgraph.render.colors import COLORS, ColorStrategy, ConstantColor, OrdinalColor, brighter
from mindgraph.render.reconcile import Diff, RenderPass, reconcile
from mindgraph.render.renderers import RENDERERS, BoxedRenderer, PlainRenderer, RenderContext, bar_width
from mindgraph.render.scene import Element, SceneGraph, Surface, Transition
from mindgraph.render.shapes import LINK_SHAPES, BracketShape, DiagonalShape, LinkShape
from mindgraph.render.svg import to_svg

__all__ = [
    "COLORS",
    "LINK_SHAPES",
    "RENDERERS",
    "BoxedRenderer",
    "BracketShape",
    "ColorStrategy",
    "ConstantColor",
    "DiagonalShape",
    "Diff",
    "Element",
    "LinkShape",
    "OrdinalColor",
    "PlainRenderer",
    "RenderContext",
    "RenderPass",
    "SceneGraph",
    "Surface",
    "Transition",
    "bar_width",
    "brighter",
    "reconcile",
    "to_svg",
]
