"""Mindgraph - interactive, collapsible mind maps of content trees."""

from mindgraph.config import PRESETS, MindmapConfig, resolve_config
from mindgraph.debug import TreeDebugger, ValidationResult, validate_tree
from mindgraph.engine import Mindmap
from mindgraph.events import (
    BaseEvent,
    ClickKind,
    Event,
    EventDispatcher,
    EventProcessor,
    NodeClickEvent,
    RenderEvent,
    TypedEventProcessor,
    ViewportEvent,
)
from mindgraph.exceptions import MindmapConfigError, UnknownStrategyError
from mindgraph.model import Box, ImageRule, Link, LinkRule, Node, Point, TextRule, ViewportState
from mindgraph.outline import Heading, build_tree, extract_headings, parse_markdown
from mindgraph.render import SceneGraph, Surface, to_svg

__all__ = [
    # Engine
    "Mindmap",
    "MindmapConfig",
    "PRESETS",
    "resolve_config",
    # Model
    "Node",
    "Link",
    "Point",
    "Box",
    "TextRule",
    "LinkRule",
    "ImageRule",
    "ViewportState",
    # Outline
    "Heading",
    "extract_headings",
    "build_tree",
    "parse_markdown",
    # Rendering
    "Surface",
    "SceneGraph",
    "to_svg",
    # Diagnostics
    "TreeDebugger",
    "ValidationResult",
    "validate_tree",
    # Errors
    "MindmapConfigError",
    "UnknownStrategyError",
    # Events
    "BaseEvent",
    "ClickKind",
    "Event",
    "EventDispatcher",
    "EventProcessor",
    "TypedEventProcessor",
    "NodeClickEvent",
    "RenderEvent",
    "ViewportEvent",
]
