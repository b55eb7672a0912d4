"""Tests for EventBus."""

import logging

import pytest

from hookfx import EventBus, WILDCARD
from hookfx.events import trace


class TestOn:
    def test_handler_receives_event(self):
        bus = EventBus()
        received = []
        bus.on("ping", lambda e: received.append(e))
        bus.emit("ping", 1)
        assert received == [1]

    def test_newest_first(self):
        bus = EventBus()
        order = []
        bus.on("ping", lambda e: order.append("first"))
        bus.on("ping", lambda e: order.append("second"))
        bus.emit("ping")
        assert order == ["second", "first"]

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        unsub = bus.on("ping", lambda e: received.append(e))
        bus.emit("ping", 1)
        unsub()
        bus.emit("ping", 2)
        assert received == [1]

    def test_unsubscribe_idempotent(self):
        bus = EventBus()
        unsub = bus.on("ping", lambda e: None)
        unsub()
        unsub()  # should not raise

    def test_unsubscribe_removes_only_its_handler(self):
        bus = EventBus()
        a, b = [], []
        unsub_a = bus.on("ping", lambda e: a.append(e))
        bus.on("ping", lambda e: b.append(e))
        unsub_a()
        bus.emit("ping", 1)
        assert a == []
        assert b == [1]

    def test_symbol_like_types(self):
        bus = EventBus()
        token = object()
        received = []
        bus.on(token, lambda e: received.append(e))
        bus.emit(token, "x")
        bus.emit("other", "y")
        assert received == ["x"]


class TestOnce:
    def test_fires_once_with_first_event(self):
        bus = EventBus()
        received = []
        bus.once("ping", lambda e: received.append(e))
        bus.emit("ping", "e1")
        bus.emit("ping", "e2")
        assert received == ["e1"]

    def test_unsubscribe_before_emit(self):
        bus = EventBus()
        received = []
        unsub = bus.once("ping", lambda e: received.append(e))
        unsub()
        bus.emit("ping", "e1")
        assert received == []
        assert bus.handler_count("ping") == 0

    def test_removes_itself(self):
        bus = EventBus()
        bus.once("ping", lambda e: None)
        assert bus.handler_count("ping") == 1
        bus.emit("ping")
        assert bus.handler_count("ping") == 0

    def test_raising_handler_still_removed(self):
        bus = EventBus()
        calls = []

        def boom(e):
            calls.append(e)
            raise RuntimeError("boom")

        bus.once("ping", boom)
        with pytest.raises(RuntimeError):
            bus.emit("ping", 1)
        bus.emit("ping", 2)
        assert calls == [1]
        assert bus.handler_count("ping") == 0

    def test_wildcard_once(self):
        bus = EventBus()
        received = []
        bus.once(WILDCARD, lambda t, e: received.append((t, e)))
        bus.emit("a", 1)
        bus.emit("b", 2)
        assert received == [("a", 1)]


class TestOff:
    def test_removes_first_occurrence_only(self):
        bus = EventBus()
        received = []

        def handler(e):
            received.append(e)

        bus.on("ping", handler)
        bus.on("ping", handler)
        bus.off("ping", handler)
        bus.emit("ping", 1)
        assert received == [1]

    def test_removes_once_registration_by_original(self):
        bus = EventBus()
        received = []

        def handler(e):
            received.append(e)

        bus.once("ping", handler)
        bus.off("ping", handler)
        bus.emit("ping", 1)
        assert received == []
        assert bus.handler_count("ping") == 0

    def test_missing_handler_is_noop(self):
        bus = EventBus()
        bus.on("ping", lambda e: None)
        bus.off("ping", lambda e: None)
        bus.off("nope", lambda e: None)
        assert bus.handler_count("ping") == 1


class TestEmit:
    def test_no_handlers(self):
        EventBus().emit("nothing", 1)  # no-op

    def test_off_during_emit_does_not_skip_snapshot(self):
        bus = EventBus()
        log = []

        def later(e):
            log.append("later")

        def earlier(e):
            log.append("earlier")
            bus.off("ping", later)

        bus.on("ping", later)
        bus.on("ping", earlier)  # newest first: runs before later
        bus.emit("ping")
        assert log == ["earlier", "later"]

        log.clear()
        bus.emit("ping")
        assert log == ["earlier"]

    def test_on_during_emit_waits_for_next_emit(self):
        bus = EventBus()
        log = []

        def adder(e):
            log.append("adder")
            bus.on("ping", lambda e: log.append("added"))

        bus.on("ping", adder)
        bus.emit("ping")
        assert log == ["adder"]

    def test_wildcard_after_specific(self):
        bus = EventBus()
        log = []
        bus.on(WILDCARD, lambda t, e: log.append(("*", t, e)))
        bus.on("ping", lambda e: log.append(("ping", e)))
        bus.emit("ping", 7)
        bus.emit("pong", 8)
        assert log == [("ping", 7), ("*", "ping", 7), ("*", "pong", 8)]

    def test_handler_error_propagates(self):
        bus = EventBus()
        log = []
        bus.on("ping", lambda e: log.append("never"))

        def boom(e):
            raise RuntimeError("boom")

        bus.on("ping", boom)
        with pytest.raises(RuntimeError, match="boom"):
            bus.emit("ping")
        assert log == []

    def test_handler_error_skips_wildcard_pass(self):
        bus = EventBus()
        seen = []
        bus.on(WILDCARD, lambda t, e: seen.append(t))

        def boom(e):
            raise RuntimeError("boom")

        bus.on("ping", boom)
        with pytest.raises(RuntimeError):
            bus.emit("ping")
        assert seen == []

    def test_shared_handler_map(self):
        shared = {}
        a, b = EventBus(shared), EventBus(shared)
        received = []
        a.on("ping", lambda e: received.append(e))
        b.emit("ping", 1)
        assert received == [1]


class TestClear:
    def test_clear_drops_everything(self):
        bus = EventBus()
        received = []
        bus.on("ping", lambda e: received.append(e))
        bus.on(WILDCARD, lambda t, e: received.append(t))
        bus.clear()
        bus.emit("ping", 1)
        assert received == []


class TestTrace:
    def test_logs_every_emission(self, caplog):
        bus = EventBus()
        stop = trace(bus)
        with caplog.at_level(logging.DEBUG, logger="hookfx.events"):
            bus.emit("ping", 1)
            stop()
            bus.emit("pong", 2)
        assert "'ping'" in caplog.text
        assert "'pong'" not in caplog.text
