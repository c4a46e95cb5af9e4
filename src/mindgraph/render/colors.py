"""Branch colour strategies.

Every strategy is a callable mapping a branch id to a CSS hex colour.
Ordinal scales assign colours in first-lookup order and remember the
assignment, so one scale instance must live as long as its name is
configured.
"""

from __future__ import annotations

from typing import Hashable, Protocol

from mindgraph.registry import Registry

CATEGORY10 = (
    "#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd",
    "#8c564b", "#e377c2", "#7f7f7f", "#bcbd22", "#17becf",
)

CATEGORY20 = (
    "#1f77b4", "#aec7e8", "#ff7f0e", "#ffbb78", "#2ca02c",
    "#98df8a", "#d62728", "#ff9896", "#9467bd", "#c5b0d5",
    "#8c564b", "#c49c94", "#e377c2", "#f7b6d2", "#7f7f7f",
    "#c7c7c7", "#bcbd22", "#dbdb8d", "#17becf", "#9edae5",
)

CATEGORY20B = (
    "#393b79", "#5254a3", "#6b6ecf", "#9c9ede", "#637939",
    "#8ca252", "#b5cf6b", "#cedb9c", "#8c6d31", "#bd9e39",
    "#e7ba52", "#e7cb94", "#843c39", "#ad494a", "#d6616b",
    "#e7969c", "#7b4173", "#a55194", "#ce6dbd", "#de9ed6",
)

CATEGORY20C = (
    "#3182bd", "#6baed6", "#9ecae1", "#c6dbef", "#e6550d",
    "#fd8d3c", "#fdae6b", "#fdd0a2", "#31a354", "#74c476",
    "#a1d99b", "#c7e9c0", "#756bb1", "#9e9ac8", "#bcbddc",
    "#dadaeb", "#636363", "#969696", "#bdbdbd", "#d9d9d9",
)

GRAY = "#929292"


class ColorStrategy(Protocol):
    def __call__(self, branch: Hashable) -> str: ...


class ConstantColor:
    """Same colour for every branch."""

    def __init__(self, color: str) -> None:
        self.color = color

    def __call__(self, branch: Hashable) -> str:
        return self.color


class OrdinalColor:
    """Ordinal scale with an implicit domain.

    Example:
        >>> scale = OrdinalColor(("#111111", "#222222"))
        >>> scale(5), scale(0), scale(5)
        ('#111111', '#222222', '#111111')
    """

    def __init__(self, palette: tuple[str, ...]) -> None:
        self.palette = palette
        self._index: dict[Hashable, int] = {}

    def __call__(self, branch: Hashable) -> str:
        if branch not in self._index:
            self._index[branch] = len(self._index)
        return self.palette[self._index[branch] % len(self.palette)]

    @property
    def domain(self) -> list[Hashable]:
        return list(self._index)


def parse_hex(color: str) -> tuple[int, int, int]:
    """Parse ``#rgb`` or ``#rrggbb`` into an RGB triple."""
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        raise ValueError(f"Not a hex colour: '{color}'")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def to_hex(rgb: tuple[float, float, float]) -> str:
    return "#" + "".join(f"{max(0, min(255, int(c))):02x}" for c in rgb)


def brighter(color: str, k: float = 1.0) -> str:
    """Brighten a colour by ``(1/0.7) ** k``.

    Pure black becomes a dark gray, and channels below 30 are lifted to 30
    first so dark colours still brighten visibly.
    """
    factor = 0.7**k
    floor = 30
    r, g, b = parse_hex(color)
    if not r and not g and not b:
        return to_hex((floor, floor, floor))
    r, g, b = (floor if 0 < c < floor else c for c in (r, g, b))
    return to_hex((min(255, r / factor), min(255, g / factor), min(255, b / factor)))


COLORS: Registry[ColorStrategy] = Registry("color")
COLORS.register("gray", lambda: ConstantColor(GRAY))
COLORS.register("category10", lambda: OrdinalColor(CATEGORY10))
COLORS.register("category20", lambda: OrdinalColor(CATEGORY20))
COLORS.register("category20b", lambda: OrdinalColor(CATEGORY20B))
COLORS.register("category20c", lambda: OrdinalColor(CATEGORY20C))
