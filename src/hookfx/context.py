"""Context handle passed to setup as its second argument."""

from __future__ import annotations

from typing import Any, Mapping


class Context:
    """Thin handle bound to one instance."""

    __slots__ = ("_instance",)

    def __init__(self, instance: Any) -> None:
        self._instance = instance

    @property
    def instance(self) -> Any:
        return self._instance

    def set_data(self, bindings: Mapping[str, Any] | None) -> None:
        """Commit name -> value bindings into the instance's view data."""
        if not bindings:
            return
        self._instance.set_data(dict(bindings))

    def trigger_event(self, name: str, detail: Any = None) -> None:
        """Fire a component event through the host, if it routes events."""
        trigger = getattr(self._instance, "trigger_event", None)
        if trigger is None:
            raise AttributeError(f"{type(self._instance).__name__} cannot trigger events")
        trigger(name, detail)

    def __repr__(self) -> str:
        return f"Context({self._instance!r})"
