"""Tests for the render, outline and check commands."""

from __future__ import annotations

import json
import re
import textwrap

import pytest

typer = pytest.importorskip("typer")

from typer.testing import CliRunner  # noqa: E402

from mindgraph.cli import create_app  # noqa: E402
from mindgraph.cli._config import ProjectConfig, find_pyproject, load_config  # noqa: E402
from mindgraph.debug import ValidationResult  # noqa: E402

runner_cli = CliRunner()

DOC = textwrap.dedent("""\
    # Project

    ## Design
    ### Layout
    ### Rendering

    ## Usage
    ### CLI
    """)


@pytest.fixture
def doc(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "notes.md"
    path.write_text(DOC)
    return path


@pytest.fixture
def app():
    return create_app()


# ---------------------------------------------------------------------------
# Config tests
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_find_pyproject_walks_up(self, tmp_path):
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")
        child = tmp_path / "docs" / "notes"
        child.mkdir(parents=True)
        assert find_pyproject(child) == pyproject

    def test_defaults_without_section(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'test'\n")
        assert load_config(tmp_path) == ProjectConfig()

    def test_reads_section(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            textwrap.dedent("""\
            [tool.mindgraph]
            preset = "colorful"
            width = 1000

            [tool.mindgraph.options]
            collapse_depth = 3
            """)
        )
        config = load_config(tmp_path)
        assert config.preset == "colorful"
        assert config.width == 1000
        assert config.height == 600
        assert config.options == {"collapse_depth": 3}


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


class TestRenderCommand:
    def test_svg_to_stdout(self, app, doc):
        result = runner_cli.invoke(app, ["render", str(doc)])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("<svg")
        assert "Rendering" in result.output

    def test_svg_to_file(self, app, doc, tmp_path):
        out = tmp_path / "map.svg"
        result = runner_cli.invoke(app, ["render", str(doc), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "Wrote 6 nodes" in result.output
        assert out.read_text().startswith("<svg")

    def test_json_layout(self, app, doc):
        result = runner_cli.invoke(app, ["render", str(doc), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert [n["name"] for n in data["nodes"]] == ["Project", "Design", "Layout", "Rendering", "Usage", "CLI"]
        assert len(data["links"]) == 5
        assert data["viewport"]["width"] == 800

    def test_depth_collapses(self, app, doc):
        result = runner_cli.invoke(app, ["render", str(doc), "--json", "--depth", "2"])
        data = json.loads(result.output)["data"]
        assert {n["depth"] for n in data["nodes"]} == {0, 1}
        assert all(n["collapsed"] for n in data["nodes"] if n["depth"] == 1)

    def test_expand_all_overrides_depth(self, app, doc):
        result = runner_cli.invoke(app, ["render", str(doc), "--json", "--depth", "2", "--expand-all"])
        assert len(json.loads(result.output)["data"]["nodes"]) == 6

    def test_strategy_options(self, app, doc):
        result = runner_cli.invoke(
            app, ["render", str(doc), "--renderer", "plain", "--link-shape", "bracket", "--layout", "cluster"]
        )
        assert result.exit_code == 0, result.output
        assert 'rx="10"' not in result.output
        assert re.search(r'd="M[-\d.]+,[-\d.]+V[-\d.]+H[-\d.]+"', result.output)

    def test_unknown_strategy(self, app, doc):
        result = runner_cli.invoke(app, ["render", str(doc), "--renderer", "fancy"])
        assert result.exit_code == 1
        assert "Unknown renderer strategy: 'fancy'" in result.output

    def test_missing_file(self, app, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner_cli.invoke(app, ["render", str(tmp_path / "nope.md")])
        assert result.exit_code == 1
        assert "Could not read" in result.output

    def test_project_defaults(self, app, doc, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.mindgraph]\nwidth = 1000\nheight = 500\n")
        result = runner_cli.invoke(app, ["render", str(doc), "--json"])
        viewport = json.loads(result.output)["data"]["viewport"]
        assert (viewport["width"], viewport["height"]) == (1000, 500)

    def test_preset_in_project_options(self, app, doc, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[tool.mindgraph.options]\npreset = "colorful"\n')
        result = runner_cli.invoke(app, ["render", str(doc)])
        assert result.exit_code == 0, result.output
        assert 'rx="10"' not in result.output

    def test_unknown_preset_in_project_options(self, app, doc, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[tool.mindgraph.options]\npreset = "neon"\n')
        result = runner_cli.invoke(app, ["render", str(doc)])
        assert result.exit_code == 1
        assert "neon" in result.output

    def test_depth_help_counts_tree_levels(self, app):
        command = typer.main.get_command(app).commands["render"]
        depth = next(p for p in command.params if p.name == "depth")
        assert depth.help.startswith("Tree level (root = 1)")

    def test_size_flags_win(self, app, doc, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.mindgraph]\nwidth = 1000\n")
        result = runner_cli.invoke(app, ["render", str(doc), "--json", "--width", "640"])
        assert json.loads(result.output)["data"]["viewport"]["width"] == 640


# ---------------------------------------------------------------------------
# outline / check
# ---------------------------------------------------------------------------


class TestOutlineCommand:
    def test_tree_output(self, app, doc):
        result = runner_cli.invoke(app, ["outline", str(doc)])
        assert result.exit_code == 0, result.output
        for name in ("Project", "Design", "Layout", "CLI"):
            assert name in result.output

    def test_json(self, app, doc):
        result = runner_cli.invoke(app, ["outline", str(doc), "--json"])
        headings = json.loads(result.output)["data"]["headings"]
        assert [h["depth"] for h in headings] == [1, 2, 3, 3, 2, 3]
        assert headings[0] == {"depth": 1, "line": 0, "name": "Project", "rules": ["text"]}

    def test_no_headings(self, app, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "plain.md"
        path.write_text("no headings here\n")
        result = runner_cli.invoke(app, ["outline", str(path)])
        assert result.exit_code == 0
        assert "No headings" in result.output


class TestCheckCommand:
    def test_valid(self, app, doc):
        result = runner_cli.invoke(app, ["check", str(doc)])
        assert result.exit_code == 0, result.output
        assert "6 nodes" in result.output

    def test_json(self, app, doc):
        result = runner_cli.invoke(app, ["check", str(doc), "--json"])
        data = json.loads(result.output)["data"]
        assert data["valid"] is True
        assert data["stats"]["depth"] == 2

    def test_invalid_exits_nonzero(self, app, doc, monkeypatch):
        monkeypatch.setattr(
            "mindgraph.cli.outline_cmd.TreeDebugger.validate",
            lambda self: ValidationResult(valid=False, errors=["broken"]),
        )
        result = runner_cli.invoke(app, ["check", str(doc)])
        assert result.exit_code == 1
        assert "ERROR    broken" in result.output
