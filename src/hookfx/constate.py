"""create_constate() — one shared value for every live instance that uses it.

The factory runs the first time any setup asks for the value. Every other
instance gets the cached result. When the last instance that used it
detaches, the cache is dropped and the next user runs the factory again.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from hookfx import _anchor
from hookfx._current import get_current_instance
from hookfx.instance import detached_signal

T = TypeVar("T")

_UNSET = object()


def create_constate(factory: Callable[..., T]) -> Callable[..., T]:
    """Wrap factory so its result is shared while any dependent instance lives.

    Call the returned function during setup:

        use_session = create_constate(lambda: {"user": use_ref(None)})

        def setup(props, context):
            session = use_session()
            ...
    """
    cached: Any = _UNSET
    users: set[int] = set()

    def release(instance: Any) -> None:
        nonlocal cached
        users.discard(id(instance))
        if not users:
            cached = _UNSET

    def use(*args: Any, **kwargs: Any) -> T:
        nonlocal cached
        if cached is _UNSET:
            cached = factory(*args, **kwargs)
        instance = get_current_instance()
        if instance is not None and id(instance) not in users:
            users.add(id(instance))
            _anchor.bus.once(detached_signal(instance), release)
        return cached

    return use
