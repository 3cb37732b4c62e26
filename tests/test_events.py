"""
Tests for the EventEmitter bus.
"""

import logging
from unittest.mock import Mock

from pushclient.core.events import EventEmitter


class TestEventEmitter:
    def test_subscribers_called_in_order(self):
        emitter = EventEmitter()
        calls = []
        emitter.on("evt", lambda payload: calls.append(("first", payload)))
        emitter.on("evt", lambda payload: calls.append(("second", payload)))

        emitter.emit("evt", 1)

        assert calls == [("first", 1), ("second", 1)]

    def test_once_unsubscribes_after_first_delivery(self):
        emitter = EventEmitter()
        handler = Mock()
        emitter.once("evt", handler)

        emitter.emit("evt", "a")
        emitter.emit("evt", "b")

        handler.assert_called_once_with("a")
        assert emitter.listener_count("evt") == 0

    def test_once_subscribed_during_emit_waits_for_next_emit(self):
        emitter = EventEmitter()
        late = Mock()
        emitter.on("evt", lambda payload: emitter.once("evt", late))

        emitter.emit("evt", 1)
        late.assert_not_called()

        emitter.emit("evt", 2)
        late.assert_called_once_with(2)

    def test_off_removes_handler(self):
        emitter = EventEmitter()
        handler = Mock()
        emitter.on("evt", handler)

        emitter.off("evt", handler)
        emitter.emit("evt")

        handler.assert_not_called()

    def test_failing_handler_does_not_block_others(self, caplog):
        emitter = EventEmitter()
        survivor = Mock()
        emitter.on("evt", Mock(side_effect=RuntimeError("boom")))
        emitter.on("evt", survivor)

        emitter.emit("evt", "x")

        survivor.assert_called_once_with("x")
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_emit_without_subscribers_is_noop(self):
        EventEmitter().emit("nothing", {})
