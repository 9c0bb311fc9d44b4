"""Synchronous publish/subscribe transport.

Listeners are called in subscription order, on the caller's stack.
Exceptions raised by a listener propagate to the publisher.  There is no
implicit wildcard fan-out: publishers that want ``*`` listeners to see an
event publish to ``*`` themselves.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

WILDCARD = "*"

Listener = Callable[..., Any]


# ---------------------------------------------------------------------------
# Transport protocol -- anything the facade can publish through
# ---------------------------------------------------------------------------


class Transport(Protocol):
    """Protocol for the event transport consumed by ``Logger``."""

    def subscribe(self, topic: str, callback: Listener) -> Any:
        """Register *callback* for *topic*."""
        ...

    def unsubscribe(self, topic: str | None = None, callback: Listener | None = None) -> Any:
        """Remove one listener, every listener of a topic, or everything."""
        ...

    def publish(self, topic: str, *args: Any) -> Any:
        """Deliver *args* to every listener of *topic*."""
        ...

    def once(self, topic: str, callback: Listener) -> Any:
        """Register *callback* for a single delivery on *topic*."""
        ...

    def listeners(self, topic: str) -> list[Listener]:
        """Return the listeners of *topic* in delivery order."""
        ...

    def has_listeners(self, topic: str) -> bool:
        """Check whether *topic* has any listener."""
        ...


# ---------------------------------------------------------------------------
# Default in-process implementation
# ---------------------------------------------------------------------------


class _Once:
    """Wrapper that removes itself from the emitter after its first call."""

    def __init__(self, emitter: Emitter, topic: str, fn: Listener) -> None:
        self.emitter = emitter
        self.topic = topic
        self.fn = fn

    def __call__(self, *args: Any) -> Any:
        self.emitter.unsubscribe(self.topic, self)
        return self.fn(*args)


class Emitter:
    """In-process topic emitter."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def subscribe(self, topic: str, callback: Listener) -> Emitter:
        self._listeners.setdefault(topic, []).append(callback)
        return self

    def once(self, topic: str, callback: Listener) -> Emitter:
        """Subscribe *callback* for a single delivery."""
        return self.subscribe(topic, _Once(self, topic, callback))

    def unsubscribe(
        self,
        topic: str | None = None,
        callback: Listener | None = None,
    ) -> Emitter:
        """Remove listeners.

        With no arguments every listener is removed.  With only *topic*,
        all listeners of that topic are removed.  Otherwise the first
        listener matching *callback* (or a ``once`` wrapper around it) is
        removed.
        """
        if topic is None:
            self._listeners.clear()
            return self
        if callback is None:
            self._listeners.pop(topic, None)
            return self

        callbacks = self._listeners.get(topic)
        if not callbacks:
            return self
        for i, cb in enumerate(callbacks):
            if cb == callback or getattr(cb, "fn", None) == callback:
                del callbacks[i]
                break
        if not callbacks:
            del self._listeners[topic]
        return self

    def publish(self, topic: str, *args: Any) -> Emitter:
        callbacks = self._listeners.get(topic)
        if not callbacks:
            return self
        # Copy so once-wrappers can unsubscribe during delivery
        for cb in list(callbacks):
            cb(*args)
        return self

    def listeners(self, topic: str) -> list[Listener]:
        return list(self._listeners.get(topic, []))

    def has_listeners(self, topic: str) -> bool:
        return bool(self._listeners.get(topic))
