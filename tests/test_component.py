import pytest

from paradox.component import Behavior, Component
from paradox.transform import Transform


class _Owner:
    def __init__(self):
        self.transform = Transform()


class _Engine:
    def __init__(self):
        self.registered = []


def test_transform_comes_from_parent():
    owner = _Owner()
    component = Component()
    component.set_parent(owner)
    assert component.parent is owner
    assert component.transform is owner.transform


def test_transform_without_parent_raises():
    with pytest.raises(LookupError):
        Component().transform


def test_behavior_attaches_like_component():
    owner = _Owner()
    behavior = Behavior()
    behavior.set_parent(owner)
    behavior.update(0.5)
    assert isinstance(behavior, Component)
    assert behavior.transform is owner.transform


def test_default_add_to_engine_leaves_engine_untouched():
    engine = _Engine()
    Component().add_to_engine(engine)
    assert engine.registered == []


def test_reparenting_switches_transform():
    first, second = _Owner(), _Owner()
    component = Component()
    component.set_parent(first)
    component.set_parent(second)
    assert component.transform is second.transform