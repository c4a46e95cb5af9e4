"""Tests for the tree data model."""

from mindgraph.model import Box, ImageRule, Link, LinkRule, Node, Point, TextRule, ViewportState


class TestPoint:
    def test_arithmetic(self):
        assert Point(1, 2) + Point(3, 4) == Point(4, 6)
        assert Point(5, 5) - Point(2, 3) == Point(3, 2)

    def test_scaled(self):
        assert Point(2, -3).scaled(2) == Point(4, -6)

    def test_as_tuple(self):
        assert Point(1.5, 2.5).as_tuple() == (1.5, 2.5)


class TestBox:
    def test_extent(self):
        box = Box(min_x=10, min_y=-5, max_x=30, max_y=15)
        assert box.width == 20
        assert box.height == 20


class TestRules:
    def test_type_tags(self):
        assert TextRule("hi").type == "text"
        assert LinkRule(href="https://example.com", content="site").type == "link"
        assert ImageRule(src="icon.png").type == "image"


class TestNode:
    def test_missing_collections_default_to_empty(self):
        node = Node(name="x", children=None, hidden_children=None, rules=None)
        assert node.children == []
        assert node.hidden_children == []
        assert node.rules == []

    def test_identity_equality(self):
        a, b = Node(name="same"), Node(name="same")
        assert a != b
        assert len({a, b}) == 2

    def test_has_children_counts_hidden(self):
        node = Node(name="p", hidden_children=[Node(name="c")])
        assert node.has_children
        assert not Node(name="leaf").has_children

    def test_walk_visible_only(self, abc_tree, find):
        find(abc_tree, "A").hidden_children = find(abc_tree, "A").children
        find(abc_tree, "A").children = []
        names = [n.name for n in abc_tree.walk()]
        assert names == ["root", "A", "B", "C"]

    def test_walk_include_hidden(self, abc_tree, find):
        a = find(abc_tree, "A")
        a.hidden_children, a.children = a.children, []
        names = [n.name for n in abc_tree.walk(include_hidden=True)]
        assert names == ["root", "A", "A1", "A2", "B", "C"]


class TestLink:
    def test_keyed_by_target_id(self):
        source, target = Node(name="s", id=1), Node(name="t", id=7)
        assert Link(source, target).key == 7


class TestViewportState:
    def test_defaults(self):
        state = ViewportState(width=800, height=600)
        assert state.zoom_scale == 1.0
        assert state.zoom_translate == Point(0.0, 0.0)
        assert state.auto_fit is True
