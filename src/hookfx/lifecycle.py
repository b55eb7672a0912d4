"""Lifecycle vocabulary and the per-instance hook registry.

Hooks are registered while setup runs (the instance is bound as current)
and consumed when the host reaches the matching lifecycle point. Every hook
receives the instance explicitly: hook(instance, *args).
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable

from hookfx._current import get_current_instance
from hookfx.compose import run_all
from hookfx.instance import get_record

logger = logging.getLogger("hookfx.lifecycle")


class ComponentLifecycle(str, enum.Enum):
    """Options keys the host calls on every component."""

    ATTACHED = "attached"
    READY = "ready"
    DETACHED = "detached"


class PageLifecycle(str, enum.Enum):
    """Page-level methods the host calls on pages."""

    ON_SHOW = "on_show"
    ON_HIDE = "on_hide"
    ON_PULL_DOWN_REFRESH = "on_pull_down_refresh"
    ON_REACH_BOTTOM = "on_reach_bottom"
    ON_PAGE_SCROLL = "on_page_scroll"
    ON_SHARE_APP_MESSAGE = "on_share_app_message"


class CommonLifecycle(str, enum.Enum):
    """Hook categories shared by pages and components."""

    ON_LOAD = "on_load"
    ON_READY = "on_ready"
    ON_UNLOAD = "on_unload"


class ExtendLifecycle(str, enum.Enum):
    """Categories hookfx uses internally."""

    EFFECT = "effect"


def inject_hook(instance: Any, category: str, hook: Callable[..., Any]) -> bool:
    """Append hook under category for a live instance. False if not attached."""
    record = get_record(instance)
    if record is None:
        return False
    record.hooks.setdefault(_key(category), []).append(hook)
    return True


def hooks_for(instance: Any, category: str) -> list[Callable[..., Any]]:
    """Snapshot of the hooks registered under category, in registration order."""
    record = get_record(instance)
    if record is None:
        return []
    return list(record.hooks.get(_key(category), []))


def conduct_hook(instance: Any, category: str, *args: Any) -> list:
    """Run every hook under category, each guarded. Returns their results."""
    return run_all(hooks_for(instance, category), instance, *args)


def _key(category: str) -> str:
    return category.value if isinstance(category, enum.Enum) else category


def _register(category: str, hook: Callable[..., Any]) -> Callable[..., Any]:
    instance = get_current_instance()
    if instance is None or not inject_hook(instance, category, hook):
        logger.warning(
            "%s hook registered outside setup; it will never run", _key(category)
        )
    return hook


# --- Registration, callable during setup. Each returns the hook so it works as a decorator. ---


def on_load(hook: Callable[..., Any]) -> Callable[..., Any]:
    return _register(CommonLifecycle.ON_LOAD, hook)


def on_ready(hook: Callable[..., Any]) -> Callable[..., Any]:
    return _register(CommonLifecycle.ON_READY, hook)


def on_unload(hook: Callable[..., Any]) -> Callable[..., Any]:
    return _register(CommonLifecycle.ON_UNLOAD, hook)


def on_show(hook: Callable[..., Any]) -> Callable[..., Any]:
    return _register(PageLifecycle.ON_SHOW, hook)


def on_hide(hook: Callable[..., Any]) -> Callable[..., Any]:
    return _register(PageLifecycle.ON_HIDE, hook)


def on_pull_down_refresh(hook: Callable[..., Any]) -> Callable[..., Any]:
    return _register(PageLifecycle.ON_PULL_DOWN_REFRESH, hook)


def on_reach_bottom(hook: Callable[..., Any]) -> Callable[..., Any]:
    return _register(PageLifecycle.ON_REACH_BOTTOM, hook)


def on_page_scroll(hook: Callable[..., Any]) -> Callable[..., Any]:
    return _register(PageLifecycle.ON_PAGE_SCROLL, hook)


def on_share_app_message(hook: Callable[..., Any]) -> Callable[..., Any]:
    """Register a share handler. The last non-None result across all handlers wins."""
    return _register(PageLifecycle.ON_SHARE_APP_MESSAGE, hook)
