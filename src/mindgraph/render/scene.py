"""Keyed scene-graph surface.

The engine never draws directly. It talks to a :class:`Surface`: create,
update or remove an element by key, animate attributes towards a target
over a duration, bind a click handler and set the view transform.

:class:`SceneGraph` is the in-memory implementation. It keeps elements in
insertion order, runs transitions on an explicit clock (``tick`` /
``flush``) and dispatches clicks, which makes it usable both headless
(export, tests) and as the backing model of a real canvas.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Protocol

ElementKey = tuple

_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class Surface(Protocol):
    """What the engine needs from a drawing surface."""

    @property
    def width(self) -> float: ...

    @property
    def height(self) -> float: ...

    def create(
        self,
        key: ElementKey,
        tag: str,
        attrs: dict[str, Any] | None = None,
        *,
        parent: ElementKey | None = None,
        text: str | None = None,
    ) -> None: ...

    def set(self, key: ElementKey, attrs: dict[str, Any]) -> None: ...

    def animate(
        self,
        key: ElementKey,
        attrs: dict[str, Any],
        duration: float,
        *,
        remove: bool = False,
    ) -> None: ...

    def remove(self, key: ElementKey) -> None: ...

    def on_click(self, key: ElementKey, handler: Callable[[], None]) -> None: ...

    def set_transform(self, translate: tuple[float, float], scale: float) -> None: ...

    def has(self, key: ElementKey) -> bool: ...


@dataclass
class Element:
    """One visual element."""

    key: ElementKey
    tag: str
    attrs: dict[str, Any] = field(default_factory=dict)
    parent: ElementKey | None = None
    text: str | None = None
    handler: Callable[[], None] | None = None


@dataclass
class Transition:
    """Attribute interpolation in flight for one element."""

    start: dict[str, Any]
    end: dict[str, Any]
    duration: float
    elapsed: float = 0.0
    remove: bool = False

    @property
    def remaining(self) -> float:
        return max(0.0, self.duration - self.elapsed)


# =============================================================================
# Interpolation
# =============================================================================


def ease_cubic_in_out(t: float) -> float:
    if t <= 0:
        return 0.0
    if t >= 1:
        return 1.0
    t2 = t * t
    t3 = t2 * t
    return 4 * (t3 if t < 0.5 else 3 * (t - t2) + t3 - 0.75)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _interpolate_hex(a: str, b: str, t: float) -> str:
    from mindgraph.render.colors import parse_hex, to_hex

    ca, cb = parse_hex(a), parse_hex(b)
    return to_hex(tuple(round(_lerp(x, y, t)) for x, y in zip(ca, cb)))


def _interpolate_string(a: str, b: str, t: float) -> str:
    from mindgraph.render._format import format_number

    numbers_a = _NUMBER_RE.findall(a)
    numbers_b = _NUMBER_RE.findall(b)
    if not numbers_b or len(numbers_a) != len(numbers_b):
        return b
    values = iter(_lerp(float(x), float(y), t) for x, y in zip(numbers_a, numbers_b))
    return _NUMBER_RE.sub(lambda _: format_number(next(values)), b)


def interpolate(a: Any, b: Any, t: float) -> Any:
    """Value between ``a`` and ``b`` at eased time ``t``.

    Numbers, numeric tuples, hex colours and strings with embedded numbers
    (path data) interpolate. Anything else jumps straight to ``b``.
    """
    if t >= 1 or a is None:
        return b
    if _is_number(a) and _is_number(b):
        return _lerp(a, b, t)
    if isinstance(a, tuple) and isinstance(b, tuple) and len(a) == len(b):
        if all(_is_number(x) for x in a + b):
            return tuple(_lerp(x, y, t) for x, y in zip(a, b))
        return b
    if isinstance(a, str) and isinstance(b, str):
        if _HEX_RE.match(a) and _HEX_RE.match(b):
            return _interpolate_hex(a, b, t)
        return _interpolate_string(a, b, t)
    return b


# =============================================================================
# SceneGraph
# =============================================================================


class SceneGraph:
    """In-memory :class:`Surface` with a manual transition clock.

    Args:
        width: Logical width of the drawing surface
        height: Logical height of the drawing surface

    Example:
        >>> scene = SceneGraph(800, 600)
        >>> scene.create(("dot",), "circle", {"r": 0})
        >>> scene.animate(("dot",), {"r": 10}, duration=100)
        >>> scene.tick(50)
        >>> scene.get(("dot",), "r")
        5.0
    """

    def __init__(self, width: float = 800, height: float = 600) -> None:
        self._width = width
        self._height = height
        self._elements: dict[ElementKey, Element] = {}
        self._transitions: dict[ElementKey, Transition] = {}
        self.translate: tuple[float, float] = (0.0, 0.0)
        self.scale: float = 1.0
        self.transform_updates = 0

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    # -- Surface protocol -----------------------------------------------------

    def create(
        self,
        key: ElementKey,
        tag: str,
        attrs: dict[str, Any] | None = None,
        *,
        parent: ElementKey | None = None,
        text: str | None = None,
    ) -> None:
        """Create an element, or revive it if it is still present.

        Reviving cancels any pending (e.g. exit) transition on the element,
        so a node that comes back mid-exit is retargeted rather than
        duplicated.
        """
        if parent is not None and parent not in self._elements:
            raise KeyError(f"Parent element {parent!r} does not exist")
        element = self._elements.get(key)
        if element is None:
            self._elements[key] = Element(key, tag, dict(attrs or {}), parent, text)
            return
        self._transitions.pop(key, None)
        element.tag = tag
        element.attrs.update(attrs or {})
        element.parent = parent
        if text is not None:
            element.text = text

    def set(self, key: ElementKey, attrs: dict[str, Any]) -> None:
        """Set attributes immediately, overriding any in-flight target."""
        element = self._elements[key]
        element.attrs.update(attrs)
        transition = self._transitions.get(key)
        if transition is not None:
            for name in attrs:
                transition.start.pop(name, None)
                transition.end.pop(name, None)

    def animate(
        self,
        key: ElementKey,
        attrs: dict[str, Any],
        duration: float,
        *,
        remove: bool = False,
    ) -> None:
        """Start (or retarget) a transition towards ``attrs``.

        A transition already in flight for ``key`` is superseded: the new
        one starts from the current interpolated values and the latest
        target wins.
        """
        element = self._elements[key]
        previous = self._transitions.pop(key, None)
        end = {**previous.end, **attrs} if previous is not None else dict(attrs)
        if duration <= 0:
            element.attrs.update(end)
            if remove:
                self.remove(key)
            return
        start = {name: element.attrs.get(name) for name in end}
        self._transitions[key] = Transition(start, end, duration, remove=remove)

    def remove(self, key: ElementKey) -> None:
        """Remove an element and all of its descendants."""
        for child in self.children(key):
            self.remove(child.key)
        self._elements.pop(key, None)
        self._transitions.pop(key, None)

    def on_click(self, key: ElementKey, handler: Callable[[], None]) -> None:
        self._elements[key].handler = handler

    def set_transform(self, translate: tuple[float, float], scale: float) -> None:
        self.translate = (translate[0], translate[1])
        self.scale = scale
        self.transform_updates += 1

    def has(self, key: ElementKey) -> bool:
        return key in self._elements

    # -- Clock ----------------------------------------------------------------

    def tick(self, ms: float) -> None:
        """Advance every in-flight transition by ``ms`` milliseconds."""
        for key in list(self._transitions):
            transition = self._transitions.get(key)
            if transition is None:
                continue
            transition.elapsed += ms
            t = min(1.0, transition.elapsed / transition.duration)
            eased = ease_cubic_in_out(t)
            element = self._elements[key]
            for name, target in transition.end.items():
                element.attrs[name] = interpolate(transition.start.get(name), target, eased)
            if t >= 1.0:
                del self._transitions[key]
                if transition.remove:
                    self.remove(key)

    def flush(self) -> None:
        """Run every transition to completion."""
        while self._transitions:
            self.tick(max(t.remaining for t in self._transitions.values()) or 1.0)

    @property
    def animating(self) -> bool:
        return bool(self._transitions)

    def transition(self, key: ElementKey) -> Transition | None:
        return self._transitions.get(key)

    # -- Queries --------------------------------------------------------------

    def element(self, key: ElementKey) -> Element:
        return self._elements[key]

    def get(self, key: ElementKey, attr: str, default: Any = None) -> Any:
        return self._elements[key].attrs.get(attr, default)

    def children(self, key: ElementKey) -> list[Element]:
        return [e for e in self._elements.values() if e.parent == key]

    def roots(self) -> list[Element]:
        return [e for e in self._elements.values() if e.parent is None]

    def keys(self, prefix: ElementKey = ()) -> list[ElementKey]:
        """Element keys starting with ``prefix``."""
        size = len(prefix)
        return [key for key in self._elements if key[:size] == prefix]

    def click(self, key: ElementKey) -> bool:
        """Simulate a click, bubbling up to the nearest handler.

        Returns:
            True if a handler was found and called
        """
        current: ElementKey | None = key
        while current is not None:
            element = self._elements.get(current)
            if element is None:
                return False
            if element.handler is not None:
                element.handler()
                return True
            current = element.parent
        return False

    def __iter__(self) -> Iterator[Element]:
        return iter(list(self._elements.values()))

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, key: object) -> bool:
        return key in self._elements
