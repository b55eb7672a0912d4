"""Property reactivity bridge.

At definition time every declared property is normalized to
{"type", "value", "observer"}, with hookfx's own observer installed. At
attach time each property gets a Ref seeded from the instance, and the
observer forwards host-driven property changes into that Ref.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from hookfx.instance import InstanceRecord, get_record
from hookfx.ref import Ref

logger = logging.getLogger("hookfx.properties")


def normalize_properties(declared: Mapping[str, Any] | None) -> dict[str, dict]:
    """Return a new declaration dict with hookfx observers installed.

    Bare declarations (a type, or None) become {"type": t, "value": None}.
    Dict declarations are copied; a user-supplied observer is replaced.
    """
    normalized = {}
    for key, prop in (declared or {}).items():
        if prop is None or isinstance(prop, type):
            prop = {"type": prop, "value": None}
        elif isinstance(prop, Mapping):
            prop = dict(prop)
        else:
            raise TypeError(
                f"Property {key!r} must be a type, None or a mapping, got {type(prop).__name__}"
            )
        prop["observer"] = _observer_for(key)
        normalized[key] = prop
    return normalized


def _observer_for(key: str):
    def observer(instance: Any, new_value: Any, old_value: Any = None) -> None:
        record = get_record(instance)
        if record is None:
            logger.debug("Property %r changed on an unattached instance; ignored", key)
            return
        watcher = record.watchers.get(key)
        if watcher is None:
            return
        try:
            watcher(new_value)
        except Exception:
            logger.exception("Updating property %r failed", key)

    observer.__qualname__ = f"observe_{key}"
    return observer


def create_property_cells(
    instance: Any, record: InstanceRecord, declared: Mapping[str, dict]
) -> dict[str, Ref]:
    """One Ref per declared property, kept current by the property observer."""
    current = getattr(instance, "properties", None) or {}
    cells: dict[str, Ref] = {}
    for key, prop in declared.items():
        cell = Ref(current.get(key, prop.get("value")))
        cells[key] = cell
        record.watchers[key] = cell.set
    record.cells = cells
    return cells


def dispose_property_cells(record: InstanceRecord) -> None:
    for cell in record.cells.values():
        cell.dispose()
    record.watchers.clear()
