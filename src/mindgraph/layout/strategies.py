"""Raw layout strategies.

A strategy assigns ``depth`` and a raw perpendicular coordinate
(``raw_breadth``) to every visible node and returns the visible nodes plus
the parent -> child links. Raw units are arbitrary: adjacent siblings sit
one unit apart and adjacent cousins two units apart. The normalizer rescales
them afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import networkx as nx

from mindgraph.model import Link, Node
from mindgraph.registry import Registry


@dataclass
class LayoutResult:
    """Visible nodes (pre-order) and the links between them."""

    nodes: list[Node] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)


class LayoutStrategy(Protocol):
    """Capability interface for raw placement."""

    def compute(self, root: Node) -> LayoutResult:
        """Write ``depth`` and ``raw_breadth`` on visible nodes."""
        ...


def visible_graph(root: Node) -> nx.DiGraph:
    """Build a DiGraph of the visible tree, nodes inserted in pre-order.

    Hidden children are never added. Each node carries its depth as the
    ``depth`` attribute.
    """
    graph = nx.DiGraph()
    graph.add_node(root, depth=0)
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        node.depth = depth
        for child in node.children:
            graph.add_node(child, depth=depth + 1)
            graph.add_edge(node, child)
        stack.extend((child, depth + 1) for child in reversed(node.children))
    return graph


def build_result(root: Node, graph: nx.DiGraph) -> LayoutResult:
    """Collect nodes and links from a visible graph."""
    nodes = list(nx.dfs_preorder_nodes(graph, root))
    links = [Link(source, target) for source, target in nx.dfs_edges(graph, root)]
    return LayoutResult(nodes=nodes, links=links)


# =============================================================================
# Tidy tree
# =============================================================================


class _Wrapped:
    """Per-pass bookkeeping for the tidy tree walk."""

    __slots__ = ("node", "parent", "children", "index", "prelim", "mod", "change", "shift", "thread", "ancestor", "apportion_ancestor")

    def __init__(self, node: Node | None, parent: _Wrapped | None, index: int) -> None:
        self.node = node
        self.parent = parent
        self.children: list[_Wrapped] = []
        self.index = index
        self.prelim = 0.0
        self.mod = 0.0
        self.change = 0.0
        self.shift = 0.0
        self.thread: _Wrapped | None = None
        self.ancestor: _Wrapped = self
        self.apportion_ancestor: _Wrapped | None = None


def _separation(a: _Wrapped, b: _Wrapped) -> float:
    return 1.0 if a.parent is b.parent else 2.0


def _next_left(v: _Wrapped) -> _Wrapped | None:
    return v.children[0] if v.children else v.thread


def _next_right(v: _Wrapped) -> _Wrapped | None:
    return v.children[-1] if v.children else v.thread


class TreeLayout:
    """Tidy tree placement (Walker's algorithm in Buchheim's linear form).

    Parents are centred over their children and subtrees are packed as
    tightly as the separation rule allows.
    """

    def compute(self, root: Node) -> LayoutResult:
        graph = visible_graph(root)
        holder = _Wrapped(None, None, 0)
        top = self._wrap(root, holder)
        holder.children = [top]

        for v in self._post_order(top):
            self._first_walk(v)
        holder.mod = -top.prelim
        for v in self._pre_order(top):
            v.node.raw_breadth = v.prelim + v.parent.mod
            v.mod += v.parent.mod

        return build_result(root, graph)

    def _wrap(self, root: Node, holder: _Wrapped) -> _Wrapped:
        top = _Wrapped(root, holder, 0)
        stack = [top]
        while stack:
            w = stack.pop()
            w.children = [_Wrapped(child, w, i) for i, child in enumerate(w.node.children)]
            stack.extend(w.children)
        return top

    def _post_order(self, top: _Wrapped) -> list[_Wrapped]:
        order: list[_Wrapped] = []

        def visit(v: _Wrapped) -> None:
            for child in v.children:
                visit(child)
            order.append(v)

        visit(top)
        return order

    def _pre_order(self, top: _Wrapped) -> list[_Wrapped]:
        order: list[_Wrapped] = []
        stack = [top]
        while stack:
            v = stack.pop()
            order.append(v)
            stack.extend(reversed(v.children))
        return order

    def _first_walk(self, v: _Wrapped) -> None:
        siblings = v.parent.children
        w = siblings[v.index - 1] if v.index else None
        if v.children:
            self._execute_shifts(v)
            midpoint = (v.children[0].prelim + v.children[-1].prelim) / 2
            if w is not None:
                v.prelim = w.prelim + _separation(v, w)
                v.mod = v.prelim - midpoint
            else:
                v.prelim = midpoint
        elif w is not None:
            v.prelim = w.prelim + _separation(v, w)
        v.parent.apportion_ancestor = self._apportion(v, w, v.parent.apportion_ancestor or siblings[0])

    def _apportion(self, v: _Wrapped, w: _Wrapped | None, ancestor: _Wrapped) -> _Wrapped:
        if w is None:
            return ancestor
        v_in_right = v_out_right = v
        v_in_left = w
        v_out_left = v.parent.children[0]
        s_in_right = v_in_right.mod
        s_out_right = v_out_right.mod
        s_in_left = v_in_left.mod
        s_out_left = v_out_left.mod

        while True:
            v_in_left = _next_right(v_in_left)
            v_in_right = _next_left(v_in_right)
            if v_in_left is None or v_in_right is None:
                break
            v_out_left = _next_left(v_out_left)
            v_out_right = _next_right(v_out_right)
            v_out_right.ancestor = v
            shift = (v_in_left.prelim + s_in_left) - (v_in_right.prelim + s_in_right) + _separation(v_in_left, v_in_right)
            if shift > 0:
                self._move_subtree(self._ancestor(v_in_left, v, ancestor), v, shift)
                s_in_right += shift
                s_out_right += shift
            s_in_left += v_in_left.mod
            s_in_right += v_in_right.mod
            s_out_left += v_out_left.mod
            s_out_right += v_out_right.mod

        if v_in_left is not None and _next_right(v_out_right) is None:
            v_out_right.thread = v_in_left
            v_out_right.mod += s_in_left - s_out_right
        if v_in_right is not None and _next_left(v_out_left) is None:
            v_out_left.thread = v_in_right
            v_out_left.mod += s_in_right - s_out_left
            ancestor = v
        return ancestor

    @staticmethod
    def _ancestor(v_in_left: _Wrapped, v: _Wrapped, default: _Wrapped) -> _Wrapped:
        return v_in_left.ancestor if v_in_left.ancestor.parent is v.parent else default

    @staticmethod
    def _move_subtree(wm: _Wrapped, wp: _Wrapped, shift: float) -> None:
        change = shift / (wp.index - wm.index)
        wp.change -= change
        wp.shift += shift
        wm.change += change
        wp.prelim += shift
        wp.mod += shift

    @staticmethod
    def _execute_shifts(v: _Wrapped) -> None:
        shift = 0.0
        change = 0.0
        for w in reversed(v.children):
            w.prelim += shift
            w.mod += shift
            change += w.change
            shift += w.shift + change


# =============================================================================
# Cluster (dendrogram)
# =============================================================================


class ClusterLayout:
    """Leaves on consecutive slots, parents centred over their children."""

    def compute(self, root: Node) -> LayoutResult:
        graph = visible_graph(root)
        previous: Node | None = None
        parent_of = {child: parent for parent, child in graph.edges}
        cursor = 0.0

        for node in nx.dfs_postorder_nodes(graph, root):
            if node.children:
                node.raw_breadth = sum(c.raw_breadth for c in node.children) / len(node.children)
                continue
            if previous is not None:
                same_parent = parent_of.get(node) is parent_of.get(previous)
                cursor += 1.0 if same_parent else 2.0
            node.raw_breadth = cursor
            previous = node

        return build_result(root, graph)


LAYOUTS: Registry[LayoutStrategy] = Registry("layout")
LAYOUTS.register("tree", TreeLayout)
LAYOUTS.register("cluster", ClusterLayout)
