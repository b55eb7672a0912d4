"""use_effect — run a callback whenever any of a list of refs changes.

Dependencies are explicit: the effect subscribes to exactly the refs it is
given. Called during setup, the teardown is also registered on the
instance so detach releases the subscriptions.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from hookfx._current import get_current_instance
from hookfx.events import Unsubscribe
from hookfx.lifecycle import ExtendLifecycle, inject_hook
from hookfx.ref import Ref


def use_effect(callback: Callable[[Any, Any], Any], refs: Iterable[Ref]) -> Unsubscribe:
    """Call callback(new, old) when any ref in refs changes. Returns the teardown.

    Usage:
        def setup(props, context):
            count = props["count"]
            use_effect(lambda new, old: context.set_data({"label": f"#{new}"}), [count])
            return {"label": f"#{count.get()}"}
    """
    unsubscribers = [ref.subscribe(callback) for ref in refs]
    stopped = False

    def teardown() -> None:
        nonlocal stopped
        if stopped:
            return
        stopped = True
        for unsubscribe in unsubscribers:
            unsubscribe()

    instance = get_current_instance()
    if instance is not None:

        def _release(_instance: Any) -> None:
            teardown()

        inject_hook(instance, ExtendLifecycle.EFFECT, _release)
    return teardown
