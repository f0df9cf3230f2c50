"""Tests for the behavior registry."""

import pytest

from ormgen.behaviors.base import Behavior
from ormgen.behaviors.timestampable import TimestampableBehavior
from ormgen.registry import (
    BehaviorRegistry,
    RegistryError,
    create_behavior,
    get_behavior_info,
    list_behaviors,
)


class SluggableBehavior(Behavior):
    name = "sluggable"
    default_parameters = {"slug_column": "slug"}

    def augment_schema(self, table):
        pass


@pytest.fixture
def registry():
    registry = BehaviorRegistry()
    registry.register("timestampable", TimestampableBehavior, aliases=["timestamps"])
    return registry


class TestBehaviorRegistry:
    def test_lookup_by_name_and_alias(self, registry):
        assert registry.get_behavior_class("Timestampable") is TimestampableBehavior
        assert registry.get_behavior_class("timestamps") is TimestampableBehavior
        assert registry.is_supported("TIMESTAMPS")
        assert not registry.is_supported("sluggable")

    def test_unknown_behavior_lists_available(self, registry):
        with pytest.raises(RegistryError, match="Available: timestampable"):
            registry.get_behavior_class("sluggable")

    def test_rejects_non_behavior_class(self, registry):
        with pytest.raises(RegistryError):
            registry.register("bogus", dict)

    def test_alias_conflicts(self, registry):
        with pytest.raises(RegistryError, match="conflicts"):
            registry.register("sluggable", SluggableBehavior, aliases=["timestampable"])
        with pytest.raises(RegistryError, match="already points"):
            registry.register("slugs", SluggableBehavior, aliases=["timestamps"])

    def test_register_existing_without_replace_is_skipped(self, registry):
        registry.register("timestampable", SluggableBehavior)

        assert registry.get_behavior_class("timestampable") is TimestampableBehavior

    def test_unregister_removes_aliases(self, registry):
        registry.unregister("timestampable")

        assert registry.list_behaviors() == []
        assert not registry.is_supported("timestamps")

    def test_create_behavior(self, registry):
        behavior = registry.create_behavior("timestamps", {"date_type": "INTEGER"})

        assert isinstance(behavior, TimestampableBehavior)
        assert behavior.table is None
        assert behavior.parameters["date_type"] == "INTEGER"
        assert behavior.parameters["create_column"] == "created_at"

    def test_behavior_info(self, registry):
        info = registry.get_behavior_info("timestamps")

        assert info["name"] == "timestampable"
        assert info["class"] == "TimestampableBehavior"
        assert info["aliases"] == ["timestamps"]
        assert info["parameters"]["enable_high_precision"] == "false"


class TestGlobalRegistry:
    def test_builtin_behaviors(self):
        assert "timestampable" in list_behaviors()
        assert get_behavior_info("timestamps")["name"] == "timestampable"

    def test_instances_are_independent(self):
        first = create_behavior("timestampable")
        second = create_behavior("timestampable", {"disable_updated_at": "true"})

        assert first is not second
        assert first.parameters["disable_updated_at"] == "false"
