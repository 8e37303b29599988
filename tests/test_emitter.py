"""
Tests for the event emitter callback registry.
"""

import pytest

from metronome.core import TriggerEvent
from metronome.emitter import EventEmitter


def make_event() -> TriggerEvent:
    return TriggerEvent(source_id="Test", sender_id="Test", info="info")


class TestEventEmitter:
    """Tests for EventEmitter."""

    def test_emit_calls_subscribers_in_order(self) -> None:
        """Test that callbacks run in registration order."""
        emitter = EventEmitter()
        calls: list[str] = []

        emitter.subscribe(lambda event: calls.append("first"))
        emitter.subscribe(lambda event: calls.append("second"))
        emitter.subscribe(lambda event: calls.append("third"))

        emitter.emit(make_event())

        assert calls == ["first", "second", "third"]

    def test_emit_passes_event(self) -> None:
        """Test that callbacks receive the emitted event."""
        emitter = EventEmitter()
        received: list[TriggerEvent] = []
        emitter.subscribe(received.append)

        event = make_event()
        emitter.emit(event)

        assert received == [event]

    def test_emit_without_subscribers(self) -> None:
        """Test that emitting with nobody listening is fine."""
        EventEmitter().emit(make_event())

    def test_duplicate_subscription_kept_once(self) -> None:
        """Test that subscribing twice does not double deliveries."""
        emitter = EventEmitter()
        received: list[TriggerEvent] = []

        emitter.subscribe(received.append)
        emitter.subscribe(received.append)
        emitter.emit(make_event())

        assert len(emitter) == 1
        assert len(received) == 1

    def test_unsubscribe_removes_only_given_callback(self) -> None:
        """Test that subscribers are removed individually."""
        emitter = EventEmitter()
        first: list[TriggerEvent] = []
        second: list[TriggerEvent] = []
        emitter.subscribe(first.append)
        emitter.subscribe(second.append)

        emitter.unsubscribe(first.append)
        emitter.emit(make_event())

        assert first == []
        assert len(second) == 1

    def test_unsubscribe_unknown_callback_is_noop(self) -> None:
        """Test that removing an unknown callback does not raise."""
        emitter = EventEmitter()
        emitter.unsubscribe(lambda event: None)
        assert len(emitter) == 0

    def test_callback_may_unsubscribe_during_emit(self) -> None:
        """Test that emit iterates a snapshot of the registry."""
        emitter = EventEmitter()
        calls: list[str] = []

        def once(event: TriggerEvent) -> None:
            calls.append("once")
            emitter.unsubscribe(once)

        emitter.subscribe(once)
        emitter.subscribe(lambda event: calls.append("always"))

        emitter.emit(make_event())
        emitter.emit(make_event())

        assert calls == ["once", "always", "always"]

    def test_callback_exception_propagates(self) -> None:
        """Test that the emitter does not swallow callback errors."""
        emitter = EventEmitter()
        later: list[TriggerEvent] = []

        def broken(event: TriggerEvent) -> None:
            raise RuntimeError("boom")

        emitter.subscribe(broken)
        emitter.subscribe(later.append)

        with pytest.raises(RuntimeError, match="boom"):
            emitter.emit(make_event())
        assert later == []

    def test_subscribers_snapshot(self) -> None:
        """Test that subscribers returns a copy."""
        emitter = EventEmitter()
        emitter.subscribe(print)

        snapshot = emitter.subscribers
        snapshot.clear()

        assert emitter.subscribers == [print]
