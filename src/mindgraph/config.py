"""Configuration and preset resolution.

A configuration is an immutable :class:`MindmapConfig`. New configurations
are produced by merging option layers left to right (defaults, then a named
preset, then caller overrides) with :func:`resolve_config`. Strategy names
are validated at that point so typos fail fast.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from mindgraph.exceptions import MindmapConfigError, UnknownStrategyError
from mindgraph.layout.strategies import LAYOUTS
from mindgraph.render.colors import COLORS
from mindgraph.render.renderers import RENDERERS
from mindgraph.render.shapes import LINK_SHAPES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MindmapConfig:
    """Resolved rendering options.

    Attributes:
        node_height: Height of a node box; with ``spacing_vertical`` sets the
            minimum gap between neighbouring nodes
        node_width: Length of a node bar along the depth axis
        spacing_vertical: Extra perpendicular gap between neighbours
        spacing_horizontal: Gap between depth levels
        duration: Transition duration in milliseconds
        layout: Name of the raw layout strategy
        link_shape: Name of the link path shape
        color: Name of the branch colour strategy
        renderer: "plain" or "boxed"
        text_indent: Text indent for deep nodes that carry an icon
        scale_range: (min, max) zoom scale accepted from gestures
        collapse_depth: 1-based level at which nodes start collapsed
        auto_fit: True to fit after every pass, False never, None to fit
            the initial render only
        horizontal_slack: Extra leading-edge pan allowed for wide diagrams
        label_width_adjust: Enable the label-continuation shift pass
        label_char_width: Estimated width of one label character
    """

    node_height: float = 20
    node_width: float = 200
    spacing_vertical: float = 10
    spacing_horizontal: float = 120
    duration: float = 750
    layout: str = "tree"
    link_shape: str = "diagonal"
    color: str = "gray"
    renderer: str = "boxed"
    text_indent: float = 40
    scale_range: tuple[float, float] = (0.5, 1.0)
    collapse_depth: int | None = None
    auto_fit: bool | None = None
    horizontal_slack: float = 300
    label_width_adjust: bool = False
    label_char_width: float = 5

    def replace(self, **changes: Any) -> MindmapConfig:
        """Return a new config with ``changes`` merged in and validated."""
        return resolve_config(overrides=changes, base=self)


DEFAULTS = MindmapConfig()

PRESETS: dict[str, dict[str, Any]] = {
    "default": {},
    "colorful": {"node_height": 10, "renderer": "plain", "color": "category20"},
}

# Fields that select a registered strategy
STRATEGY_FIELDS = {
    "layout": LAYOUTS,
    "link_shape": LINK_SHAPES,
    "color": COLORS,
    "renderer": RENDERERS,
}

_POSITIVE_FIELDS = ("node_height", "node_width")
_NON_NEGATIVE_FIELDS = ("spacing_vertical", "spacing_horizontal", "duration", "horizontal_slack", "label_char_width")


def option_names() -> list[str]:
    return [f.name for f in dataclasses.fields(MindmapConfig)]


def merge_options(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge option mappings left to right, ignoring ``None`` values."""
    merged: dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if value is not None:
                merged[key] = value
    return merged


def resolve_config(
    preset: str | None = None,
    overrides: Mapping[str, Any] | None = None,
    *,
    base: MindmapConfig | None = None,
) -> MindmapConfig:
    """Build a validated configuration.

    Layers are applied left to right: ``base`` (defaults when omitted), the
    named ``preset``, then ``overrides``. An override may itself carry a
    ``preset`` key, which is expanded in place before the other overrides.

    Raises:
        UnknownStrategyError: A preset or strategy name is not registered
        MindmapConfigError: An option key is unknown or a value is invalid
    """
    overrides = dict(overrides or {})
    preset = overrides.pop("preset", None) or preset

    preset_options: dict[str, Any] = {}
    if preset is not None:
        if preset not in PRESETS:
            raise UnknownStrategyError("preset", preset, list(PRESETS))
        preset_options = PRESETS[preset]

    unknown = sorted(set(overrides) - set(option_names()))
    if unknown:
        raise MindmapConfigError(f"Unknown option(s): {', '.join(unknown)}")

    # auto_fit and collapse_depth may be reset to None explicitly
    explicit_none = {k: None for k, v in overrides.items() if v is None and k in ("auto_fit", "collapse_depth")}
    options = merge_options(preset_options, overrides)
    options.update(explicit_none)
    if "scale_range" in options:
        options["scale_range"] = tuple(options["scale_range"])

    config = dataclasses.replace(base or DEFAULTS, **options)
    validate_config(config)
    logger.debug("Resolved config (preset=%s): %s", preset, options)
    return config


def validate_config(config: MindmapConfig) -> None:
    """Check strategy names and numeric ranges."""
    for name, registry in STRATEGY_FIELDS.items():
        registry.validate(getattr(config, name))

    for name in _POSITIVE_FIELDS:
        if getattr(config, name) <= 0:
            raise MindmapConfigError(f"{name} must be positive, got {getattr(config, name)}")
    for name in _NON_NEGATIVE_FIELDS:
        if getattr(config, name) < 0:
            raise MindmapConfigError(f"{name} must not be negative, got {getattr(config, name)}")

    if len(config.scale_range) != 2:
        raise MindmapConfigError(f"scale_range must be a (min, max) pair, got {config.scale_range}")
    low, high = config.scale_range
    if low <= 0 or low > high:
        raise MindmapConfigError(f"scale_range must satisfy 0 < min <= max, got {config.scale_range}")

    if config.collapse_depth is not None and config.collapse_depth < 1:
        raise MindmapConfigError(f"collapse_depth must be >= 1, got {config.collapse_depth}")


class Strategies:
    """Strategy instances for a configuration.

    :meth:`refresh` only re-creates a strategy when its configured name
    changed, so stateful strategies (ordinal colour scales) keep their
    assignments across unrelated option changes.
    """

    def __init__(self) -> None:
        self._names: dict[str, str] = {}
        self.layout = None
        self.link_shape = None
        self.color = None
        self.renderer = None

    def refresh(self, config: MindmapConfig) -> list[str]:
        """Resolve strategies for ``config``.

        Returns:
            Names of the fields whose strategy was (re)created
        """
        changed = []
        for field_name, registry in STRATEGY_FIELDS.items():
            name = getattr(config, field_name)
            if self._names.get(field_name) == name:
                continue
            setattr(self, field_name, registry.create(name))
            self._names[field_name] = name
            changed.append(field_name)
        if changed:
            logger.debug("Resolved strategies: %s", ", ".join(changed))
        return changed
