"""Shared fixtures: a minimal fake host that drives define_component() options."""

import pytest

from hookfx import _anchor, set_host


class _HostInstance:
    """Plays the host framework's instance: properties, view data, lifecycle calls."""

    def __init__(self, options, owner=None, **properties):
        self.options = options
        self.owner = owner
        self.properties = {
            key: prop.get("value") for key, prop in options.get("properties", {}).items()
        }
        self.properties.update(properties)
        self.data = dict(options.get("data") or {})
        self.set_data_calls = []

    def set_data(self, bindings):
        self.set_data_calls.append(bindings)
        self.data.update(bindings)

    def attach(self):
        self.options["attached"](self)
        self.options["ready"](self)
        return self

    def detach(self):
        self.options["detached"](self)

    def update_property(self, name, value):
        old = self.properties.get(name)
        self.properties[name] = value
        self.options["properties"][name]["observer"](self, value, old)

    def call(self, name, *args):
        return self.options["methods"][name](self, *args)


class FakeInstance(_HostInstance):
    """Host exposing tree traversal for the link handshake."""

    def select_owner_component(self):
        return self.owner


class EventInstance(_HostInstance):
    """Host that only routes component events to the owner's methods."""

    def __init__(self, options, owner=None, **properties):
        super().__init__(options, owner, **properties)
        self.events = []

    def trigger_event(self, name, detail=None):
        self.events.append((name, detail))
        if self.owner is not None:
            self.owner.call("$", {"detail": detail})


@pytest.fixture
def mount():
    """mount(options, owner=None, **properties) -> attached FakeInstance."""

    def _mount(options, owner=None, **properties):
        return FakeInstance(options, owner, **properties).attach()

    return _mount


@pytest.fixture
def event_instance():
    return EventInstance


@pytest.fixture(autouse=True)
def _reset_hookfx():
    yield
    set_host(None)
    _anchor.records.clear()
