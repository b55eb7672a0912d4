"""EventBus — tiny typed publish/subscribe registry.

Handlers are kept per event type, newest first. emit() walks a snapshot of
the list, so handlers may subscribe or unsubscribe while an emission is in
flight without changing who gets called this time round.

Handlers registered for WILDCARD are called after the type-specific ones,
with (type, event). Emitting WILDCARD yourself is not supported.

The bus does not isolate handler failures: an exception aborts the rest of
that pass and propagates out of emit().
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable

WILDCARD = "*"

Handler = Callable[[Any], None]
WildcardHandler = Callable[[Hashable, Any], None]
Unsubscribe = Callable[[], None]


class EventBus:
    """Publish/subscribe registry keyed by event type."""

    def __init__(self, handlers: dict[Hashable, list] | None = None) -> None:
        # Callers may pass a shared map so several buses see the same registry.
        self._handlers = handlers if handlers is not None else {}

    def on(self, type: Hashable, handler: Callable) -> Unsubscribe:
        """Register handler for type. Returns a function that removes it."""
        handlers = self._handlers.get(type)
        if handlers:
            handlers.insert(0, handler)
        else:
            self._handlers[type] = [handler]

        def _unsubscribe() -> None:
            self.off(type, handler)

        return _unsubscribe

    def once(self, type: Hashable, handler: Callable) -> Unsubscribe:
        """Like on(), but the handler removes itself after its first call."""

        def _once(*args: Any) -> None:
            self.off(type, _once)
            handler(*args)

        _once.handler = handler
        return self.on(type, _once)

    def off(self, type: Hashable, handler: Callable) -> None:
        """Remove the first registration of handler for type. Missing is a no-op.

        A handler registered with once() can be removed by passing the
        original handler.
        """
        handlers = self._handlers.get(type)
        if not handlers:
            return
        for index, registered in enumerate(handlers):
            if registered is handler or getattr(registered, "handler", None) is handler:
                del handlers[index]
                return

    def clear(self) -> None:
        """Drop every registration for every type."""
        self._handlers.clear()

    def emit(self, type: Hashable, event: Any = None) -> None:
        """Call type's handlers with (event), then wildcard handlers with (type, event)."""
        for handler in list(self._handlers.get(type) or []):
            handler(event)
        for handler in list(self._handlers.get(WILDCARD) or []):
            handler(type, event)

    def handler_count(self, type: Hashable) -> int:
        """Number of handlers currently registered for type. Useful for testing."""
        return len(self._handlers.get(type) or [])

    def __repr__(self) -> str:
        return f"EventBus({len(self._handlers)} types)"


def trace(bus: EventBus, logger: logging.Logger | None = None) -> Unsubscribe:
    """Log every emission on bus at DEBUG. Returns the unsubscribe."""
    log = logger or logging.getLogger("hookfx.events")

    def _trace(type: Hashable, event: Any) -> None:
        log.debug("emit %r: %r", type, event)

    return bus.on(WILDCARD, _trace)
