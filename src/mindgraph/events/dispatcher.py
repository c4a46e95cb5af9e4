"""Fan-out of engine events to processors and per-type listeners."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from mindgraph.events.processor import EventProcessor
    from mindgraph.events.types import Event

logger = logging.getLogger(__name__)

Listener = Callable[["Event"], None]


class EventDispatcher:
    """Delivers engine events.

    Two kinds of consumers are supported: :class:`EventProcessor` objects
    receive every event, and plain callables subscribed with
    :meth:`subscribe` receive events of one type.

    Delivery is best-effort: a consumer that raises is logged and skipped,
    so a broken listener never interrupts a render pass. With
    ``strict=True`` the exception propagates instead.
    """

    def __init__(
        self,
        processors: list[EventProcessor] | None = None,
        *,
        strict: bool = False,
    ) -> None:
        self._processors: list[EventProcessor] = list(processors or [])
        self._listeners: dict[type, list[Listener]] = defaultdict(list)
        self._strict = strict

    @property
    def active(self) -> bool:
        """True if anyone is listening."""
        return bool(self._processors) or any(self._listeners.values())

    def add(self, processor: EventProcessor) -> None:
        self._processors.append(processor)

    def subscribe(self, event_type: type, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` for every event of ``event_type``.

        Returns:
            A function that removes the subscription
        """
        self._listeners[event_type].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[event_type]:
                self._listeners[event_type].remove(listener)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Deliver ``event`` to processors, then to its type's listeners."""
        name = type(event).__name__
        for processor in self._processors:
            self._deliver(processor.on_event, event, f"EventProcessor {processor!r} failed on {name}")
        for listener in list(self._listeners.get(type(event), ())):
            self._deliver(listener, event, f"Listener {listener!r} failed on {name}")

    def _deliver(self, callback: Listener, event: Event, failure: str) -> None:
        try:
            callback(event)
        except Exception:
            if self._strict:
                raise
            logger.warning(failure, exc_info=True)

    def shutdown(self) -> None:
        """Shut down every processor.

        All processors get the call even if one fails. In strict mode the
        first failure is re-raised once everyone has been shut down.
        """
        errors: list[Exception] = []
        for processor in self._processors:
            try:
                processor.shutdown()
            except Exception as e:
                if not self._strict:
                    logger.warning("EventProcessor %r failed during shutdown", processor, exc_info=True)
                errors.append(e)
        self._listeners.clear()
        if self._strict and errors:
            raise errors[0]
