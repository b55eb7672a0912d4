"""Data anchor — plain Python structures that hold all per-process state.

Ref values and the change-notification registry live here, as do the
per-instance records keyed by id(instance). Behavior modules hold thin
handles (an id) and look their data up here.
"""

import itertools

from hookfx.events import EventBus

# Ref state: live refs only, dispose() removes the entry.
values: dict[int, object] = {}

# Shared notification registry: ref ids and per-instance signals -> handlers.
handlers: dict = {}
bus = EventBus(handlers)

# Instance state: id(instance) -> InstanceRecord, present only while attached.
records: dict[int, object] = {}

# ID generation — itertools.count is thread-safe (C-level GIL atomic)
_id_counter = itertools.count(1)


def new_id() -> int:
    return next(_id_counter)
