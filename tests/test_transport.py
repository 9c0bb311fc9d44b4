"""Tests for the in-process Emitter transport."""

from __future__ import annotations

import pytest

from logevents.transport import Emitter


@pytest.fixture
def emitter() -> Emitter:
    return Emitter()


class TestEmitter:
    def test_delivery_in_subscription_order(self, emitter):
        calls = []
        emitter.subscribe("info", lambda d: calls.append(("first", d)))
        emitter.subscribe("info", lambda d: calls.append(("second", d)))
        emitter.publish("info", 1)
        assert calls == [("first", 1), ("second", 1)]

    def test_publish_without_listeners_is_noop(self, emitter):
        emitter.publish("nothing", 1, 2)

    def test_wildcard_is_not_implicit(self, emitter):
        calls = []
        emitter.subscribe("*", lambda *a: calls.append(a))
        emitter.publish("info", 1)
        assert calls == []

    def test_unsubscribe_callback(self, emitter):
        calls = []
        fn = calls.append
        emitter.subscribe("info", fn)
        emitter.unsubscribe("info", fn)
        emitter.publish("info", 1)
        assert calls == []
        assert not emitter.has_listeners("info")

    def test_unsubscribe_removes_first_match_only(self, emitter):
        calls = []
        fn = calls.append
        emitter.subscribe("info", fn)
        emitter.subscribe("info", fn)
        emitter.unsubscribe("info", fn)
        emitter.publish("info", 1)
        assert calls == [1]

    def test_unsubscribe_topic(self, emitter):
        emitter.subscribe("info", print)
        emitter.subscribe("warn", print)
        emitter.unsubscribe("info")
        assert not emitter.has_listeners("info")
        assert emitter.has_listeners("warn")

    def test_unsubscribe_all(self, emitter):
        emitter.subscribe("info", print)
        emitter.subscribe("warn", print)
        emitter.unsubscribe()
        assert emitter.listeners("info") == []
        assert emitter.listeners("warn") == []

    def test_once(self, emitter):
        calls = []
        emitter.once("info", calls.append)
        emitter.publish("info", 1)
        emitter.publish("info", 2)
        assert calls == [1]

    def test_unsubscribe_once_by_original_callback(self, emitter):
        calls = []
        emitter.once("info", calls.append)
        emitter.unsubscribe("info", calls.append)
        emitter.publish("info", 1)
        assert calls == []

    def test_listener_errors_propagate(self, emitter):
        def boom(_):
            raise ValueError("listener failed")

        emitter.subscribe("info", boom)
        with pytest.raises(ValueError, match="listener failed"):
            emitter.publish("info", 1)
