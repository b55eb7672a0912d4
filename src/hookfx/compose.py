"""Lifecycle composition — merge several callbacks into one dispatch point.

Every callback is guarded on its own: if one raises, the error is logged
and the rest still run. The instance is passed explicitly as the first
argument to every callback.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

logger = logging.getLogger("hookfx.compose")

Callback = Callable[..., Any]


def run_all(callbacks: Iterable[Callback], instance: Any, *args: Any, **kwargs: Any) -> list:
    """Call each callback with (instance, *args, **kwargs). Returns their results.

    A callback that raises contributes None to the result list.
    """
    results = []
    for callback in callbacks:
        try:
            results.append(callback(instance, *args, **kwargs))
        except Exception:
            logger.exception("Lifecycle callback %s failed", _name(callback))
            results.append(None)
    return results


def compose(*callbacks: Callback | None) -> Callable[..., None]:
    """Merge callbacks into one dispatcher. None entries are skipped.

    Usage:
        dispatch = compose(log_visit, None, refresh)
        dispatch(instance, "arg")  # log_visit(instance, "arg"); refresh(instance, "arg")
    """
    present = [cb for cb in callbacks if cb is not None]

    def dispatch(instance: Any, *args: Any, **kwargs: Any) -> None:
        run_all(present, instance, *args, **kwargs)

    return dispatch


def compose_last(*callbacks: Callback | None) -> Callable[..., Any]:
    """Like compose(), but the dispatcher returns the last non-None result."""
    present = [cb for cb in callbacks if cb is not None]

    def dispatch(instance: Any, *args: Any, **kwargs: Any) -> Any:
        last = None
        for result in run_all(present, instance, *args, **kwargs):
            if result is not None:
                last = result
        return last

    return dispatch


def _name(callback: Callback) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)
