"""hookfx: setup-style reactive components for host UI frameworks."""

from importlib.metadata import version as _version

__version__ = _version("hookfx")

from hookfx.events import EventBus, WILDCARD
from hookfx.compose import compose, compose_last
from hookfx.ref import Ref, use_ref
from hookfx.effect import use_effect
from hookfx.context import Context
from hookfx.instance import InstanceState, get_parent, state_of
from hookfx.lifecycle import (
    on_load,
    on_ready,
    on_unload,
    on_show,
    on_hide,
    on_pull_down_refresh,
    on_reach_bottom,
    on_page_scroll,
    on_share_app_message,
)
from hookfx.component import define_component, set_host, Immediate, Deferred
from hookfx.constate import create_constate
# textual NOT auto-imported — opt-in only

__all__ = [
    "EventBus",
    "WILDCARD",
    "compose",
    "compose_last",
    "Ref",
    "use_ref",
    "use_effect",
    "Context",
    "InstanceState",
    "get_parent",
    "state_of",
    "on_load",
    "on_ready",
    "on_unload",
    "on_show",
    "on_hide",
    "on_pull_down_refresh",
    "on_reach_bottom",
    "on_page_scroll",
    "on_share_app_message",
    "define_component",
    "set_host",
    "Immediate",
    "Deferred",
    "create_constate",
]
