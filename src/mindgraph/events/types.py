"""Event types emitted by a mind-map engine."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum


class ClickKind(Enum):
    """What a click on a node asks for.

    Values:
        TOGGLE: Collapse or expand the node.
    """

    TOGGLE = "toggle"


def _now() -> float:
    """Current timestamp."""
    return time.time()


@dataclass(frozen=True)
class BaseEvent:
    """Base class for all engine events.

    Attributes:
        timestamp: Unix timestamp when the event was created.
    """

    timestamp: float = field(default_factory=_now, kw_only=True)


@dataclass(frozen=True)
class NodeClickEvent(BaseEvent):
    """A node element was clicked.

    Carries the node's render id rather than the node itself, so handlers
    bound to visual elements never hold on to engine state.

    Attributes:
        node_id: Render id of the clicked node.
        kind: Requested action.
    """

    node_id: int
    kind: ClickKind = ClickKind.TOGGLE

    def __post_init__(self) -> None:
        # Coerce string kinds to ClickKind enum
        if isinstance(self.kind, str):
            object.__setattr__(self, "kind", ClickKind(self.kind))


@dataclass(frozen=True)
class RenderEvent(BaseEvent):
    """Emitted after every update cycle.

    Attributes:
        source_id: Render id of the node that triggered the pass.
        entered: Number of nodes that entered.
        updated: Number of nodes that stayed.
        exited: Number of nodes that exited.
    """

    source_id: int | None = None
    entered: int = 0
    updated: int = 0
    exited: int = 0


@dataclass(frozen=True)
class ViewportEvent(BaseEvent):
    """Emitted whenever the view transform changes.

    Attributes:
        translate: New (x, y) translation.
        scale: New zoom scale.
        auto_fit: True if the change came from auto-fit.
    """

    translate: tuple[float, float] = (0.0, 0.0)
    scale: float = 1.0
    auto_fit: bool = False


Event = NodeClickEvent | RenderEvent | ViewportEvent
