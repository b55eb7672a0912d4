"""Textual integration for hookfx. Opt-in — requires textual.

Mounts a define_component() result on a Textual widget. The widget plays
the host: bindings from setup are rendered into child widgets whose id
matches the binding name, and the owner lookup for the link handshake
walks the widget tree.

// Textual coupling stays in this module; core hookfx stays host-agnostic.
"""

from __future__ import annotations

from typing import Any, Mapping

from textual.css.query import NoMatches

# Mounted instances keyed by id(widget), so children can find their owner.
_mounted: dict[int, "WidgetInstance"] = {}


class WidgetInstance:
    """Host instance backed by a Textual widget."""

    def __init__(self, widget: Any, options: Mapping[str, Any], properties: Mapping[str, Any]) -> None:
        self.widget = widget
        self.options = options
        self.properties = {
            key: prop.get("value") if isinstance(prop, Mapping) else None
            for key, prop in (options.get("properties") or {}).items()
        }
        self.properties.update(properties)
        self.data: dict[str, Any] = dict(options.get("data") or {})

    def set_data(self, bindings: Mapping[str, Any]) -> None:
        self.data.update(bindings)
        for name, value in bindings.items():
            try:
                target = self.widget.query_one(f"#{name}")
            except NoMatches:
                continue
            update = getattr(target, "update", None)
            if update is not None:
                update(str(value))

    def select_owner_component(self) -> "WidgetInstance | None":
        node = getattr(self.widget, "parent", None)
        while node is not None:
            owner = _mounted.get(id(node))
            if owner is not None:
                return owner
            node = getattr(node, "parent", None)
        return None

    def set_property(self, name: str, value: Any) -> None:
        """Change a property the way the host would, firing its observer."""
        old = self.properties.get(name)
        self.properties[name] = value
        prop = (self.options.get("properties") or {}).get(name)
        observer = prop.get("observer") if isinstance(prop, Mapping) else None
        if observer is not None:
            observer(self, value, old)

    def call(self, name: str, *args: Any) -> Any:
        return self.options["methods"][name](self, *args)

    def unmount(self) -> None:
        _mounted.pop(id(self.widget), None)
        detached = self.options.get("detached")
        if detached is not None:
            detached(self)

    def __repr__(self) -> str:
        return f"WidgetInstance({self.widget!r})"


def mount(widget: Any, options: Mapping[str, Any], **properties: Any) -> WidgetInstance:
    """Attach options to widget. Call .unmount() from the widget's on_unmount."""
    instance = WidgetInstance(widget, options, properties)
    _mounted[id(widget)] = instance
    for name in ("attached", "ready"):
        lifecycle = options.get(name)
        if lifecycle is not None:
            lifecycle(instance)
    return instance
