"""Tests for branch propagation and coordinate normalization."""

import math
import types

import pytest

from mindgraph.config import DEFAULTS
from mindgraph.layout.engine import compute_layout
from mindgraph.layout.normalize import (
    adjust_label_widths,
    anchor_of,
    assign_branches,
    label_width,
    min_distance,
    normalization_ratio,
    normalize,
)
from mindgraph.layout.strategies import TreeLayout
from mindgraph.model import Node, Point
from mindgraph.visibility import toggle


class TestAssignBranches:
    def test_branch_is_top_level_index(self, abc_tree, find):
        assign_branches(abc_tree)
        assert abc_tree.branch is None
        assert [c.branch for c in abc_tree.children] == [0, 1, 2]
        assert find(abc_tree, "A1").branch == 0
        assert find(abc_tree, "A2").branch == 0

    def test_hidden_subtrees_are_tagged(self, abc_tree, find):
        toggle(find(abc_tree, "A"))
        assign_branches(abc_tree)
        assert find(abc_tree, "A2").branch == 0
        assert find(abc_tree, "A2").depth == 2

    def test_depths(self, deep_tree, find):
        assign_branches(deep_tree)
        assert find(deep_tree, "R1").depth == 1
        assert find(deep_tree, "R1.2").depth == 2
        assert find(deep_tree, "R1.2.x").depth == 3
        assert find(deep_tree, "R1.2.x").branch == 1


class TestMinDistance:
    def test_leaf_is_infinite(self):
        assert math.isinf(min_distance(Node(name="leaf")))

    def test_tightest_sibling_pair(self, abc_tree, find):
        TreeLayout().compute(abc_tree)
        a = find(abc_tree, "A")
        expected = abs(a.children[0].raw_breadth - a.children[1].raw_breadth)
        assert min_distance(abc_tree) == pytest.approx(expected)
        assert min_distance(abc_tree) == pytest.approx(1.0)

    def test_considers_every_adjacent_pair(self):
        root = Node(name="r", children=[Node(name=n) for n in "xyz"])
        for node, value in zip(root.children, (0.0, 2.0, 2.5)):
            node.raw_breadth = value
        assert min_distance(root) == pytest.approx(0.5)

    def test_ignores_hidden_children(self, abc_tree, find):
        toggle(find(abc_tree, "A"))
        for node, value in zip(abc_tree.children, (0.0, 4.0, 9.0)):
            node.raw_breadth = value
        find(abc_tree, "A1").raw_breadth = 100.0
        find(abc_tree, "A2").raw_breadth = 100.0
        assert min_distance(abc_tree) == pytest.approx(4.0)


class TestNormalizationRatio:
    def test_ratio(self, abc_tree):
        TreeLayout().compute(abc_tree)
        assert normalization_ratio(abc_tree, DEFAULTS) == pytest.approx(30.0)

    def test_chain_without_siblings(self):
        chain = Node(name="a", children=[Node(name="b", children=[Node(name="c")])])
        TreeLayout().compute(chain)
        assert normalization_ratio(chain, DEFAULTS) == 1.0

    def test_coincident_siblings(self):
        root = Node(name="r", children=[Node(name="x"), Node(name="y")])
        assert normalization_ratio(root, DEFAULTS) == 1.0


class TestNormalize:
    def test_anchor_keeps_current_coordinate(self, abc_tree, find):
        result = TreeLayout().compute(abc_tree)
        a = find(abc_tree, "A")
        a.position = Point(320, 123.0)
        normalize(result.nodes, abc_tree, a, DEFAULTS)
        assert a.position.y == pytest.approx(123.0)

    def test_anchor_falls_back_to_previous_position(self, abc_tree):
        result = TreeLayout().compute(abc_tree)
        abc_tree.previous_position = Point(0, 300)
        normalize(result.nodes, abc_tree, abc_tree, DEFAULTS)
        assert abc_tree.position == Point(0, 300)

    def test_anchor_of_defaults_to_zero(self):
        assert anchor_of(Node(name="x")) == 0.0

    def test_depth_axis_stride(self, abc_tree, find):
        result = TreeLayout().compute(abc_tree)
        normalize(result.nodes, abc_tree, abc_tree, DEFAULTS)
        stride = DEFAULTS.node_width + DEFAULTS.spacing_horizontal
        for node in result.nodes:
            assert node.position.x == pytest.approx(node.depth * stride)
        assert find(abc_tree, "A1").position.x == pytest.approx(640)

    def test_scenario_positions(self, abc_tree, find):
        abc_tree.previous_position = Point(0, 300)
        result = TreeLayout().compute(abc_tree)
        normalize(result.nodes, abc_tree, abc_tree, DEFAULTS)
        ys = {n.name: n.position.y for n in result.nodes}
        assert ys == pytest.approx({"root": 300, "A": 270, "A1": 255, "A2": 285, "B": 300, "C": 330})


class TestLabelWidths:
    def test_label_width(self):
        assert label_width(Node(name="Hello"), DEFAULTS) == 25

    def test_continuation_child_shifted(self):
        grandchild = Node(name="g", position=Point(640, 0))
        child = Node(name="", children=[grandchild], position=Point(320, 0))
        parent = Node(name="Hello", children=[child], position=Point(0, 0))

        adjust_label_widths(parent, DEFAULTS)

        assert parent.position == Point(0, 0)
        assert child.position.x == pytest.approx(25)
        assert grandchild.position.x == pytest.approx(345)

    def test_named_children_untouched(self, abc_tree):
        result = TreeLayout().compute(abc_tree)
        normalize(result.nodes, abc_tree, abc_tree, DEFAULTS)
        before = [n.position for n in result.nodes]
        adjust_label_widths(abc_tree, DEFAULTS)
        assert [n.position for n in result.nodes] == before

    def test_pass_runs_only_when_enabled(self):
        child = Node(name="")
        root = Node(name="Long label", children=[child])
        config = DEFAULTS.replace(label_width_adjust=True)

        compute_layout(root, root, TreeLayout(), DEFAULTS)
        assert child.position.x == pytest.approx(320)

        compute_layout(root, root, TreeLayout(), config)
        assert child.position.x == pytest.approx(50)


class TestPackageExports:
    def test_normalize_submodule_is_importable(self):
        import mindgraph.layout.normalize as module

        assert isinstance(module, types.ModuleType)
        assert module.normalize is normalize
