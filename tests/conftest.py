"""Shared tree builders for mindgraph tests.

Trees:
    abc_tree    root -> A (A1, A2), B, C
    deep_tree   four levels: root -> 2 children -> 2 grandchildren -> 1 leaf each
    flat_tree   root -> 5 leaves
"""

import pytest

from mindgraph.model import Node, TextRule
from mindgraph.render.scene import SceneGraph


def make_node(name: str, *children: Node) -> Node:
    """Named node with a single text item."""
    return Node(name=name, children=list(children), rules=[TextRule(name)] if name else [])


def find_node(root: Node, name: str) -> Node:
    """Look up a node by name, including collapsed subtrees."""
    for node in root.walk(include_hidden=True):
        if node.name == name:
            return node
    raise KeyError(name)


@pytest.fixture
def abc_tree() -> Node:
    return make_node(
        "root",
        make_node("A", make_node("A1"), make_node("A2")),
        make_node("B"),
        make_node("C"),
    )


@pytest.fixture
def deep_tree() -> Node:
    def leaf_pair(prefix: str) -> list[Node]:
        return [make_node(f"{prefix}.{i}", make_node(f"{prefix}.{i}.x")) for i in (1, 2)]

    return make_node(
        "root",
        make_node("L1", *leaf_pair("L1")),
        make_node("R1", *leaf_pair("R1")),
    )


@pytest.fixture
def flat_tree() -> Node:
    return make_node("root", *(make_node(f"n{i}") for i in range(5)))


@pytest.fixture
def find():
    return find_node


@pytest.fixture
def node_factory():
    return make_node


@pytest.fixture
def scene() -> SceneGraph:
    return SceneGraph(800, 600)
