"""Ref — a reactive reference cell.

A Ref holds one value. set() notifies subscribers with (new, old) when the
value actually changes. There is no dependency tracking: readers that need
to react subscribe explicitly (see hookfx.effect).

Live state sits in _anchor — instances are thin handles holding an _id.
Change notifications ride on the shared bus, keyed by the ref's id.
dispose() takes the ref out of the anchor; the handle keeps the last value.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from hookfx import _anchor
from hookfx.events import Unsubscribe

T = TypeVar("T")

logger = logging.getLogger("hookfx.ref")


def _noop() -> None:
    pass


class Ref(Generic[T]):
    """A single mutable value with change notification."""

    __slots__ = ("_id", "_final")

    def __init__(self, value: T) -> None:
        self._id = _anchor.new_id()
        _anchor.values[self._id] = value

    def get(self) -> T:
        try:
            return _anchor.values[self._id]
        except KeyError:
            return self._final

    def set(self, value: T) -> None:
        """Write a new value. Subscribers only hear about real changes."""
        if self.disposed:
            logger.debug("Ignoring write to disposed %r", self)
            return
        old = _anchor.values[self._id]
        if old is not value and old != value:
            _anchor.values[self._id] = value
            _anchor.bus.emit(self._id, (value, old))

    def subscribe(self, handler: Callable[[T, T], None]) -> Unsubscribe:
        """Call handler(new, old) on every change. Returns the unsubscribe."""
        if self.disposed:
            return _noop

        def _on_change(change: tuple) -> None:
            handler(*change)

        return _anchor.bus.on(self._id, _on_change)

    @property
    def disposed(self) -> bool:
        return self._id not in _anchor.values

    def dispose(self) -> None:
        """Drop all subscribers. The last value stays readable; writes are ignored."""
        if self.disposed:
            return
        self._final = _anchor.values.pop(self._id)
        _anchor.handlers.pop(self._id, None)

    def __repr__(self) -> str:
        return f"Ref({self.get()!r})"


def use_ref(value: T) -> Ref[T]:
    """Create a Ref.

    Usage:
        count = use_ref(0)
        count.set(count.get() + 1)
    """
    return Ref(value)
