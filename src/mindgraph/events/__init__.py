"""Engine events: explicit event objects, processors and dispatch."""

from mindgraph.events.dispatcher import EventDispatcher
from mindgraph.events.processor import EventProcessor, TypedEventProcessor
from mindgraph.events.types import (
    BaseEvent,
    ClickKind,
    Event,
    NodeClickEvent,
    RenderEvent,
    ViewportEvent,
)

__all__ = [
    "BaseEvent",
    "ClickKind",
    "Event",
    "EventDispatcher",
    "EventProcessor",
    "NodeClickEvent",
    "RenderEvent",
    "TypedEventProcessor",
    "ViewportEvent",
]
