"""Tests for event types, processors and the dispatcher."""

import logging

import pytest

from mindgraph.events import (
    ClickKind,
    EventDispatcher,
    EventProcessor,
    NodeClickEvent,
    RenderEvent,
    TypedEventProcessor,
    ViewportEvent,
)


class ListProcessor(EventProcessor):
    """Collects all events for assertion."""

    def __init__(self):
        self.events: list = []
        self.shutdown_called = False

    def on_event(self, event):
        self.events.append(event)

    def shutdown(self):
        self.shutdown_called = True


class FailingProcessor(EventProcessor):
    def on_event(self, event):
        raise ValueError("boom")

    def shutdown(self):
        raise ValueError("shutdown boom")


class TestEventTypes:
    def test_click_kind_coerced_from_string(self):
        event = NodeClickEvent(node_id=3, kind="toggle")
        assert event.kind is ClickKind.TOGGLE

    def test_timestamp_defaults(self):
        assert NodeClickEvent(node_id=1).timestamp > 0

    def test_frozen(self):
        event = RenderEvent(source_id=1)
        with pytest.raises(AttributeError):
            event.entered = 5


class TestEventDispatcher:
    def test_inactive_without_processors(self):
        assert not EventDispatcher().active

    def test_emit_to_all(self):
        a, b = ListProcessor(), ListProcessor()
        dispatcher = EventDispatcher([a])
        dispatcher.add(b)
        event = ViewportEvent(translate=(1.0, 2.0), scale=0.5)
        dispatcher.emit(event)
        assert a.events == [event]
        assert b.events == [event]

    def test_best_effort_logs_failures(self, caplog):
        survivor = ListProcessor()
        dispatcher = EventDispatcher([FailingProcessor(), survivor])
        with caplog.at_level(logging.WARNING, logger="mindgraph.events.dispatcher"):
            dispatcher.emit(RenderEvent())
        assert len(survivor.events) == 1
        assert "failed on RenderEvent" in caplog.text

    def test_strict_propagates(self):
        dispatcher = EventDispatcher([FailingProcessor()], strict=True)
        with pytest.raises(ValueError, match="boom"):
            dispatcher.emit(RenderEvent())

    def test_shutdown_best_effort(self):
        survivor = ListProcessor()
        EventDispatcher([FailingProcessor(), survivor]).shutdown()
        assert survivor.shutdown_called

    def test_shutdown_strict_raises_after_all(self):
        survivor = ListProcessor()
        dispatcher = EventDispatcher([FailingProcessor(), survivor], strict=True)
        with pytest.raises(ValueError, match="shutdown boom"):
            dispatcher.shutdown()
        assert survivor.shutdown_called


class TestTypedEventProcessor:
    def test_routes_by_type(self):
        seen = []

        class Clicks(TypedEventProcessor):
            def on_node_click(self, event):
                seen.append(event.node_id)

        processor = Clicks()
        processor.on_event(NodeClickEvent(node_id=4))
        processor.on_event(RenderEvent())
        assert seen == [4]


class TestSubscribe:
    def test_listener_receives_its_type_only(self):
        dispatcher = EventDispatcher()
        seen = []
        dispatcher.subscribe(RenderEvent, seen.append)
        assert dispatcher.active
        dispatcher.emit(ViewportEvent())
        dispatcher.emit(RenderEvent(entered=2))
        assert [e.entered for e in seen] == [2]

    def test_unsubscribe(self):
        dispatcher = EventDispatcher()
        seen = []
        unsubscribe = dispatcher.subscribe(RenderEvent, seen.append)
        unsubscribe()
        dispatcher.emit(RenderEvent())
        assert seen == []
        assert not dispatcher.active

    def test_failing_listener_is_skipped(self, caplog):
        dispatcher = EventDispatcher()
        seen = []

        def broken(event):
            raise RuntimeError("nope")

        dispatcher.subscribe(RenderEvent, broken)
        dispatcher.subscribe(RenderEvent, seen.append)
        with caplog.at_level(logging.WARNING, logger="mindgraph.events.dispatcher"):
            dispatcher.emit(RenderEvent())
        assert len(seen) == 1
        assert "failed on RenderEvent" in caplog.text
