"""Render command: Markdown document to a settled mind-map diagram."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer

from mindgraph.cli._config import load_config
from mindgraph.cli._format import print_json
from mindgraph.config import merge_options
from mindgraph.engine import Mindmap
from mindgraph.exceptions import MindmapConfigError
from mindgraph.outline import parse_markdown
from mindgraph.render.scene import SceneGraph
from mindgraph.render.svg import to_svg


def read_document(file: Path) -> str:
    """Read a Markdown document, exiting with status 1 if it is unreadable."""
    try:
        return file.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: Could not read '{file}': {e}")
        raise typer.Exit(1) from e


def layout_data(mindmap: Mindmap) -> dict[str, Any]:
    """Laid-out nodes, links and viewport of a settled engine."""
    state = mindmap.state
    return {
        "nodes": [
            {
                "id": node.id,
                "name": node.name,
                "depth": node.depth,
                "branch": node.branch,
                "x": node.position.x,
                "y": node.position.y,
                "collapsed": bool(node.hidden_children),
            }
            for node in mindmap.nodes
        ],
        "links": [{"source": link.source.id, "target": link.target.id} for link in mindmap.links],
        "viewport": {
            "width": state.width,
            "height": state.height,
            "translate": list(state.zoom_translate.as_tuple()),
            "scale": state.zoom_scale,
        },
    }


def register_commands(app: typer.Typer) -> None:
    """Register `render` as a top-level command on the app."""

    @app.command("render")
    def render_cmd(
        file: Annotated[Path, typer.Argument(help="Markdown document")],
        output: Annotated[str | None, typer.Option("--output", "-o", help="Write SVG (or JSON) to file")] = None,
        preset: Annotated[str | None, typer.Option("--preset", help="'default' or 'colorful'")] = None,
        renderer: Annotated[str | None, typer.Option("--renderer", help="'plain' or 'boxed'")] = None,
        layout: Annotated[str | None, typer.Option("--layout", help="'tree' or 'cluster'")] = None,
        link_shape: Annotated[str | None, typer.Option("--link-shape", help="'diagonal' or 'bracket'")] = None,
        color: Annotated[str | None, typer.Option("--color", help="Colour scheme, e.g. 'category10'")] = None,
        depth: Annotated[
            int | None,
            typer.Option("--depth", help="Tree level (root = 1) at which nodes start collapsed"),
        ] = None,
        width: Annotated[float | None, typer.Option("--width", help="Container width")] = None,
        height: Annotated[float | None, typer.Option("--height", help="Container height")] = None,
        expand_all: Annotated[bool, typer.Option("--expand-all", help="Expand every collapsed node")] = False,
        as_json: Annotated[bool, typer.Option("--json", help="Output laid-out nodes as JSON")] = False,
    ):
        """Lay out a Markdown outline and write the diagram as SVG."""
        project = load_config()
        root = parse_markdown(read_document(file), title=file.stem)

        project_options = dict(project.options)
        project_preset = project_options.pop("preset", None)
        options = merge_options(
            {"auto_fit": True},
            project_options,
            {
                "renderer": renderer,
                "layout": layout,
                "link_shape": link_shape,
                "color": color,
                "collapse_depth": depth,
            },
        )
        scene = SceneGraph(width or project.width, height or project.height)
        try:
            mindmap = Mindmap(scene, root, preset=preset or project_preset or project.preset, **options)
        except MindmapConfigError as e:
            print(f"Error: {e}")
            raise typer.Exit(1) from e

        if expand_all:
            mindmap.expand_all()
        scene.flush()

        if as_json:
            print_json("render", layout_data(mindmap), output)
            return

        svg = to_svg(scene)
        if output:
            Path(output).write_text(svg, encoding="utf-8")
            print(f"Wrote {len(mindmap.nodes)} nodes to {output}")
        else:
            print(svg, end="")
