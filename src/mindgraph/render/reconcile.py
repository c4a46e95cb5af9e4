"""Keyed enter/update/exit diffing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, Hashable, Mapping, TypeVar

if TYPE_CHECKING:
    from mindgraph.model import Link, Node

T = TypeVar("T")


@dataclass
class Diff(Generic[T]):
    """Result of reconciling two keyed sets.

    Attributes:
        entered: Present now, absent before (current order)
        updated: Present in both (current order)
        exited: Present before, absent now (previous order)
    """

    entered: list[T] = field(default_factory=list)
    updated: list[T] = field(default_factory=list)
    exited: list[T] = field(default_factory=list)

    @property
    def current(self) -> list[T]:
        """Everything that remains rendered after the pass."""
        return self.entered + self.updated

    @property
    def has_changes(self) -> bool:
        """True if anything entered or exited."""
        return bool(self.entered or self.exited)


def reconcile(previous: Mapping[Hashable, T], current: Mapping[Hashable, T]) -> Diff[T]:
    """Diff two keyed sets.

    Example:
        >>> d = reconcile({1: "a", 2: "b"}, {2: "b", 3: "c"})
        >>> d.entered, d.updated, d.exited
        (['c'], ['b'], ['a'])
    """
    diff: Diff[T] = Diff()
    for key, item in current.items():
        if key in previous:
            diff.updated.append(item)
        else:
            diff.entered.append(item)
    for key, item in previous.items():
        if key not in current:
            diff.exited.append(item)
    return diff


@dataclass
class RenderPass:
    """Everything one update cycle changed.

    Attributes:
        source: Node that triggered the pass
        nodes: Node diff keyed by node id
        links: Link diff keyed by target node id
    """

    source: Node
    nodes: Diff[Node]
    links: Diff[Link]

    @property
    def has_changes(self) -> bool:
        return self.nodes.has_changes or self.links.has_changes
