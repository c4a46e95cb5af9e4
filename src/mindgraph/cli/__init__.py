"""Mindgraph CLI - render Markdown outlines as mind maps.

Entry point for the `mindgraph` command. Requires ``pip install mindgraph[cli]``.

Commands:
    render      Lay out a document and write the settled diagram as SVG
    outline     Show the heading outline of a document
    check       Validate the tree built from a document
"""

from __future__ import annotations


def _require_typer():
    """Check that typer is available."""
    try:
        import typer  # noqa: F401
    except ImportError:
        import sys

        print("Error: typer is required for the CLI. Install with: pip install mindgraph[cli]", file=sys.stderr)
        raise SystemExit(1) from None


def create_app():
    """Create the Typer app with all commands."""
    _require_typer()

    import typer

    from mindgraph.cli.outline_cmd import register_commands as register_outline
    from mindgraph.cli.render_cmd import register_commands as register_render

    app = typer.Typer(
        name="mindgraph",
        help="Render Markdown outlines as interactive mind maps.",
        no_args_is_help=True,
    )
    register_render(app)
    register_outline(app)

    return app


def main():
    """CLI entry point."""
    app = create_app()
    app()
