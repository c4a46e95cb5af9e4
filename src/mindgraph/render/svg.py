"""Serialize a :class:`~mindgraph.render.scene.SceneGraph` to SVG."""

from __future__ import annotations

import html as html_module
from typing import TYPE_CHECKING, Any

from mindgraph.render._format import format_number, format_translate

if TYPE_CHECKING:
    from mindgraph.render.scene import Element, SceneGraph

_STYLE = """<style>
    .markmap-node-text { font: 10px sans-serif; fill: #000; }
    .markmap-link { fill: none; }
  </style>"""

# Empty circle fill means "hollow"
_HOLLOW_FILL = "#fff"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def _attributes(element: Element) -> str:
    parts = []
    for name, value in element.attrs.items():
        if value is None or value == "":
            continue
        if name == "translate":
            parts.append(f'transform="{format_translate(*value)}"')
            continue
        parts.append(f'{name}="{html_module.escape(_format_value(value), quote=True)}"')
    if element.tag == "circle" and not element.attrs.get("fill"):
        parts.append(f'fill="{_HOLLOW_FILL}"')
    return " ".join(parts)


def _render(scene: SceneGraph, element: Element, indent: int) -> list[str]:
    pad = "  " * indent
    attrs = _attributes(element)
    opening = f"<{element.tag} {attrs}" if attrs else f"<{element.tag}"
    children = scene.children(element.key)
    if not children and element.text is None:
        return [f"{pad}{opening}/>"]
    lines = [f"{pad}{opening}>"]
    if element.text is not None:
        lines.append(f"{pad}  {html_module.escape(element.text)}")
    for child in children:
        lines.extend(_render(scene, child, indent + 1))
    lines.append(f"{pad}</{element.tag}>")
    return lines


def to_svg(scene: SceneGraph) -> str:
    """Render the scene's current state as a standalone SVG document.

    Links are drawn below nodes. Run ``scene.flush()`` first to export the
    settled diagram rather than a frame mid-transition.
    """
    tx, ty = scene.translate
    roots = scene.roots()
    ordered = [e for e in roots if e.key[0] == "link"] + [e for e in roots if e.key[0] != "link"]

    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{format_number(scene.width)}" '
        f'height="{format_number(scene.height)}">',
        f"  {_STYLE}",
        f'  <g transform="{format_translate(tx, ty)} scale({format_number(scene.scale)})">',
    ]
    for element in ordered:
        lines.extend(_render(scene, element, 2))
    lines.append("  </g>")
    lines.append("</svg>")
    return "\n".join(lines) + "\n"
