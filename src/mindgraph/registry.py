"""Typed name -> factory registries for pluggable strategies."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

from mindgraph.exceptions import UnknownStrategyError

T = TypeVar("T")


class Registry(Generic[T]):
    """Closed table of named strategy factories.

    Example:
        >>> shapes = Registry("link shape")
        >>> shapes.register("bracket", BracketShape)
        >>> shapes.create("bracket")
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._factories: dict[str, Callable[[], T]] = {}

    def register(self, name: str, factory: Callable[[], T]) -> Callable[[], T]:
        self._factories[name] = factory
        return factory

    def names(self) -> list[str]:
        return sorted(self._factories)

    def validate(self, name: str) -> None:
        """Raise UnknownStrategyError if ``name`` is not registered."""
        if name not in self._factories:
            raise UnknownStrategyError(self.kind, name, self.names())

    def create(self, name: str) -> T:
        self.validate(name)
        return self._factories[name]()

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())
