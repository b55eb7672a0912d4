"""define_component() — turn a setup function into host lifecycle options.

The host calls the produced options with the instance as first argument:

    options["attached"](instance)
    options["methods"]["on_show"](instance)
    options["properties"]["count"]["observer"](instance, 9)
    options["detached"](instance)

On attach, setup(props, context) runs exactly once, synchronously. Its
returned bindings are committed with context.set_data(). Hooks registered
during setup (on_show, use_effect, ...) are merged with the user's own
lifecycle options into single dispatchers; each callback is guarded so one
failure never stops its siblings or reaches the host.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Union

from hookfx import _anchor
from hookfx._current import over_instance
from hookfx.compose import compose, compose_last
from hookfx.context import Context
from hookfx.instance import (
    InstanceState,
    announce,
    close_record,
    detached_signal,
    get_record,
    open_record,
    receive_link,
)
from hookfx.lifecycle import (
    CommonLifecycle,
    ComponentLifecycle,
    ExtendLifecycle,
    PageLifecycle,
    conduct_hook,
    hooks_for,
)
from hookfx.properties import (
    create_property_cells,
    dispose_property_cells,
    normalize_properties,
)

logger = logging.getLogger("hookfx.component")

LINK_METHOD = "$"


# ─── Host registration ──────────────────────────────────────────────────────


def _identity(options: dict) -> dict:
    return options


_host: Callable[[dict], Any] = _identity


def set_host(register: Callable[[dict], Any] | None) -> None:
    """Set the host's registration call. define_component() returns its result.

    Call once at startup:
        hookfx.set_host(framework.Component)

    Passing None restores the default, which returns the options unchanged.
    """
    global _host
    _host = register if register is not None else _identity


# ─── Setup results ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Immediate:
    """Setup returned its bindings synchronously."""

    value: Any


@dataclass(frozen=True)
class Deferred:
    """Setup returned something still pending (coroutine, future, ...)."""

    pending: Any


SetupResult = Union[Immediate, Deferred]


def classify(result: Any) -> SetupResult:
    if inspect.isawaitable(result):
        return Deferred(result)
    return Immediate(result)


def _reject(outcome: Deferred) -> None:
    logger.error(
        "setup() must return its bindings synchronously, got %s; bindings not applied",
        type(outcome.pending).__name__,
    )
    if inspect.iscoroutine(outcome.pending):
        outcome.pending.close()


# ─── Lifecycle dispatchers ──────────────────────────────────────────────────


def create_lifecycle_method(
    category: str,
    declared: Callable[..., Any] | None = None,
    *,
    last_result: bool = False,
) -> Callable[..., Any]:
    """Dispatcher over the hooks registered under category, then declared.

    Hooks are looked up per call, since they are only registered once setup
    has run. With last_result, the dispatcher returns the last non-None
    result instead of None.
    """
    merge = compose_last if last_result else compose

    def lifecycle_method(instance: Any, *args: Any, **kwargs: Any) -> Any:
        return merge(*hooks_for(instance, category), declared)(instance, *args, **kwargs)

    lifecycle_method.__qualname__ = f"lifecycle_{getattr(category, 'value', category)}"
    return lifecycle_method


def _announce(instance: Any, *args: Any) -> None:
    announce(instance)


def define_component(options: Mapping[str, Any] | Callable[..., Any]) -> Any:
    """Build host options from a setup function or an options mapping.

    Usage:
        def setup(props, context):
            on_show(lambda instance: print("shown"))
            return {"doubled": props["count"].get() * 2}

        define_component({"properties": {"count": int}, "setup": setup})
        define_component(setup)  # no properties
    """
    if callable(options) and not isinstance(options, Mapping):
        setup_fn = options
        opts: dict[str, Any] = {}
    else:
        opts = dict(options)
        props = opts.pop("props", None)
        opts["properties"] = props or opts.get("properties") or {}
        setup_fn = opts.pop("setup", None)
        if setup_fn is None:
            return _host(opts)

    declared = normalize_properties(opts.get("properties"))
    opts["properties"] = declared

    def run_setup(instance: Any, *args: Any) -> None:
        record = get_record(instance)
        context = Context(instance)
        record.context = context
        cells = create_property_cells(instance, record, declared)
        outcome = classify(setup_fn(cells, context))
        if isinstance(outcome, Deferred):
            _reject(outcome)
            return
        bindings = outcome.value
        if bindings is None:
            return
        if not isinstance(bindings, Mapping):
            logger.error(
                "setup() must return a mapping of bindings, got %s", type(bindings).__name__
            )
            return
        context.set_data(bindings)

    attach_chain = over_instance(
        compose(
            _announce,
            run_setup,
            create_lifecycle_method(
                CommonLifecycle.ON_LOAD, opts.get(ComponentLifecycle.ATTACHED.value)
            ),
        )
    )

    def attached(instance: Any, *args: Any) -> None:
        if get_record(instance) is not None:
            logger.warning("%r is already attached; ignoring repeated attach", instance)
            return
        record = open_record(instance)
        attach_chain(instance, *args)
        record.state = InstanceState.ATTACHED

    def release_effects(instance: Any, *args: Any) -> None:
        conduct_hook(instance, ExtendLifecycle.EFFECT)

    def signal_detached(instance: Any, *args: Any) -> None:
        signal = detached_signal(instance)
        try:
            _anchor.bus.emit(signal, instance)
        finally:
            _anchor.handlers.pop(signal, None)

    detach_chain = compose(
        release_effects,
        signal_detached,
        create_lifecycle_method(
            CommonLifecycle.ON_UNLOAD, opts.get(ComponentLifecycle.DETACHED.value)
        ),
    )

    def detached(instance: Any, *args: Any) -> None:
        record = get_record(instance)
        if record is None:
            logger.warning("%r detached without being attached", instance)
            return
        detach_chain(instance, *args)
        dispose_property_cells(record)
        close_record(instance)

    opts[ComponentLifecycle.ATTACHED.value] = attached
    opts[ComponentLifecycle.READY.value] = create_lifecycle_method(
        CommonLifecycle.ON_READY, opts.get(ComponentLifecycle.READY.value)
    )
    opts[ComponentLifecycle.DETACHED.value] = detached

    methods = dict(opts.get("methods") or {})
    methods[LINK_METHOD] = receive_link
    for page_event in PageLifecycle:
        methods[page_event.value] = create_lifecycle_method(
            page_event,
            opts.get(page_event.value) or methods.get(page_event.value),
            last_result=page_event is PageLifecycle.ON_SHARE_APP_MESSAGE,
        )
    opts["methods"] = methods

    return _host(opts)
