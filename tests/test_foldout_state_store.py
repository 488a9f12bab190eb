"""Tests for persisted foldout state."""

from pyqt_attrinspect.protocols import InspectorConfig, set_inspector_config
from pyqt_attrinspect.state import (
    FoldoutKey, FoldoutStateStore, InMemoryBoolStore, identity_token
)


class Target:
    pass


class NamedTarget:
    def __init__(self, identity):
        self.inspector_identity = identity


class CountingStore(InMemoryBoolStore):
    def __init__(self):
        super().__init__()
        self.saves = 0

    def save(self, key, value):
        self.saves += 1
        super().save(key, value)


def test_first_read_creates_collapsed_entry(settings):
    store = FoldoutStateStore(settings)
    key = FoldoutKey.for_group(Target(), "Advanced")

    assert key not in store
    assert store.get(key) is False
    assert key in store
    assert len(store) == 1


def test_write_visible_to_next_read(settings):
    store = FoldoutStateStore(settings)
    key = FoldoutKey.for_group(Target(), "Advanced")
    store.set(key, True)
    assert store.get(key) is True


def test_state_survives_a_new_store_over_same_settings(settings):
    target = Target()
    key = FoldoutKey.for_group(target, "Advanced")
    FoldoutStateStore(settings).set(key, True)

    assert str(key) in settings
    assert FoldoutStateStore(settings).get(key) is True


def test_keys_do_not_collide():
    first, second = Target(), Target()
    keys = {
        FoldoutKey.for_group(first, "Advanced"),
        FoldoutKey.for_group(second, "Advanced"),
        FoldoutKey.for_group(first, "Debug"),
        FoldoutKey.for_field(first, "Advanced"),
    }
    assert len(keys) == 4
    assert len({str(k) for k in keys}) == 4


def test_key_format():
    key = FoldoutKey.for_field(NamedTarget("enemy-7"), "movement.limits")
    assert str(key) == "enemy-7.field.movement.limits"
    assert str(FoldoutKey.for_group(NamedTarget("enemy-7"), "Stats")) == "enemy-7.group.Stats"


def test_identity_token():
    assert identity_token(NamedTarget("abc")) == "abc"
    assert identity_token(NamedTarget(lambda: "from-callable")) == "from-callable"

    target = Target()
    assert identity_token(target) == identity_token(target)
    assert identity_token(target) != identity_token(Target())
    assert identity_token(target).startswith("Target@")


def test_explicit_default_expanded(settings):
    store = FoldoutStateStore(settings, default_expanded=True)
    assert store.get(FoldoutKey.for_group(Target(), "G")) is True


def test_config_default_expanded(settings):
    set_inspector_config(InspectorConfig(default_foldout_expanded=True))
    store = FoldoutStateStore(settings)
    assert store.get(FoldoutKey.for_group(Target(), "G")) is True


def test_writes_through_only_on_change():
    settings = CountingStore()
    store = FoldoutStateStore(settings)
    key = FoldoutKey.for_group(Target(), "G")

    store.set(key, False)
    assert settings.saves == 0
    store.set(key, True)
    store.set(key, True)
    assert settings.saves == 1


def test_clear_releases_handles_not_values(settings):
    store = FoldoutStateStore(settings)
    key = FoldoutKey.for_group(Target(), "G")
    store.set(key, True)
    store.clear()

    assert len(store) == 0
    assert store.get(key) is True
