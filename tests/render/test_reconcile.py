"""Tests for keyed enter/update/exit diffing."""

from mindgraph.model import Node
from mindgraph.render.reconcile import Diff, RenderPass, reconcile


class TestReconcile:
    def test_partition(self):
        diff = reconcile({1: "a", 2: "b"}, {2: "b", 3: "c"})
        assert diff.entered == ["c"]
        assert diff.updated == ["b"]
        assert diff.exited == ["a"]

    def test_orders(self):
        diff = reconcile({5: "e", 1: "a", 9: "i"}, {7: "g", 3: "c", 5: "e"})
        assert diff.entered == ["g", "c"]
        assert diff.exited == ["a", "i"]

    def test_identical_sets_have_no_changes(self):
        items = {1: "a", 2: "b"}
        diff = reconcile(items, dict(items))
        assert not diff.has_changes
        assert diff.current == ["a", "b"]

    def test_from_empty(self):
        diff = reconcile({}, {1: "a"})
        assert diff.entered == ["a"]
        assert diff.has_changes

    def test_current_is_entered_then_updated(self):
        diff = Diff(entered=["x"], updated=["y"], exited=["z"])
        assert diff.current == ["x", "y"]


class TestRenderPass:
    def test_has_changes_from_links(self):
        source = Node(name="s")
        render_pass = RenderPass(source=source, nodes=Diff(updated=[source]), links=Diff(exited=["l"]))
        assert render_pass.has_changes

    def test_no_changes(self):
        source = Node(name="s")
        assert not RenderPass(source=source, nodes=Diff(updated=[source]), links=Diff()).has_changes
