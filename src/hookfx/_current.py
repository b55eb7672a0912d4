"""Current-instance resolution.

While a setup function runs, the instance being attached is bound in a
contextvar. Hook registration (on_show, use_effect, ...) reads it to find
the registry the hook belongs to.
"""

from __future__ import annotations

import contextvars
import functools
from contextlib import contextmanager
from typing import Any, Callable, Iterator

current_instance: contextvars.ContextVar[Any | None] = contextvars.ContextVar(
    "current_instance", default=None
)


@contextmanager
def bound(instance: Any) -> Iterator[Any]:
    """Bind instance as current for the duration of the block. Nests."""
    token = current_instance.set(instance)
    try:
        yield instance
    finally:
        current_instance.reset(token)


def over_instance(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap a lifecycle callback so its instance argument is bound as current."""

    @functools.wraps(fn)
    def wrapper(instance: Any, *args: Any, **kwargs: Any) -> Any:
        with bound(instance):
            return fn(instance, *args, **kwargs)

    return wrapper


def get_current_instance() -> Any | None:
    """The instance whose setup is running, or None outside setup."""
    return current_instance.get()
