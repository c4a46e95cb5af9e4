"""Exceptions raised while resolving mind-map configuration."""

from __future__ import annotations


class MindmapConfigError(Exception):
    """Raised when a configuration value or option key is invalid."""

    pass


class UnknownStrategyError(MindmapConfigError):
    """A configuration names a strategy that is not registered.

    Raised at configuration-resolution time rather than silently falling
    back to a default, so a typo in a layout, link shape, colour, renderer
    or preset name surfaces immediately.

    Attributes:
        kind: Registry the name was looked up in (e.g. "layout")
        name: The unknown name
        available: Registered names for that kind
        message: Human-readable error message
    """

    def __init__(
        self,
        kind: str,
        name: str,
        available: list[str] | None = None,
        message: str | None = None,
    ) -> None:
        self.kind = kind
        self.name = name
        self.available = sorted(available or [])
        self.message = message or self._default_message()
        super().__init__(self.message)

    def _default_message(self) -> str:
        msg = f"Unknown {self.kind} strategy: '{self.name}'"
        if self.available:
            options = ", ".join(f"'{a}'" for a in self.available)
            msg += f"\nAvailable: {options}"
        return msg
