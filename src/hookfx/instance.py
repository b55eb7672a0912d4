"""Per-instance records and the parent/child link handshake.

hookfx never stores anything on a host instance. Everything it needs for a
live instance sits in an InstanceRecord in _anchor.records, keyed by
id(instance). The record is created when attach starts and removed when
detach finishes, so a host that pools instances or reuses ids starts from
a clean record every time.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable

from hookfx import _anchor

# Event a child triggers for hosts that route events instead of exposing
# select_owner_component().
LINK_EVENT = "component"


class InstanceState(str, enum.Enum):
    UNATTACHED = "unattached"
    ATTACHING = "attaching"
    ATTACHED = "attached"
    DETACHED = "detached"


@dataclass
class InstanceRecord:
    """Everything hookfx tracks for one attached instance."""

    state: InstanceState = InstanceState.ATTACHING
    cells: dict[str, Any] = field(default_factory=dict)
    watchers: dict[str, Callable[[Any], None]] = field(default_factory=dict)
    hooks: dict[str, list[Callable]] = field(default_factory=dict)
    parent: Any = None
    context: Any = None


def get_record(instance: Any) -> InstanceRecord | None:
    return _anchor.records.get(id(instance))


def open_record(instance: Any) -> InstanceRecord:
    record = InstanceRecord()
    _anchor.records[id(instance)] = record
    return record


def close_record(instance: Any) -> InstanceRecord | None:
    record = _anchor.records.pop(id(instance), None)
    if record is not None:
        record.state = InstanceState.DETACHED
    return record


def state_of(instance: Any) -> InstanceState:
    record = get_record(instance)
    return record.state if record is not None else InstanceState.UNATTACHED


def detached_signal(instance: Any) -> tuple:
    """Bus event type emitted once when this instance detaches."""
    return ("detached", id(instance))


# --- Link protocol ---


def link(parent: Any, child: Any) -> None:
    """Record parent as child's declaring ancestor."""
    record = get_record(child)
    if record is not None:
        record.parent = parent


def announce(child: Any) -> None:
    """Let the nearest declaring ancestor claim child.

    Hosts with tree traversal are asked for the owner directly. Hosts that
    only route events get a LINK_EVENT carrying the child; the owner's "$"
    method answers it (see receive_link).
    """
    select_owner = getattr(child, "select_owner_component", None)
    if select_owner is not None:
        owner = select_owner()
        if owner is not None:
            link(owner, child)
        return
    trigger = getattr(child, "trigger_event", None)
    if trigger is not None:
        trigger(LINK_EVENT, child)


def receive_link(parent: Any, event: dict) -> None:
    """Owner-side "$" method: event is {"detail": child}."""
    link(parent, event["detail"])


def get_parent(instance: Any) -> Any | None:
    """The ancestor that claimed instance during attach, if any."""
    record = get_record(instance)
    return record.parent if record is not None else None
