"""Tests for DefaultedConfigMap and lookup()."""

from featurespine.adapters.config_map import DefaultedConfigMap, lookup
from featurespine.core.gates import default_config


class TestDefaultedConfigMap:
    def test_present_key(self):
        configs = DefaultedConfigMap({"a": {"boolean": True}})
        assert configs["a"] == {"boolean": True}

    def test_missing_key_yields_default(self):
        configs = DefaultedConfigMap({})
        assert configs["missing"] == default_config()

    def test_default_is_materialized_once(self):
        configs = DefaultedConfigMap({})
        first = configs["missing"]
        assert configs["missing"] is first
        assert "missing" in configs
        assert len(configs) == 1

    def test_defaults_are_independent(self):
        configs = DefaultedConfigMap({})
        configs["x"]["actors"].add("user:1")
        assert configs["y"]["actors"] == set()

    def test_contains_and_len_see_only_real_keys(self):
        configs = DefaultedConfigMap({"a": {}, "b": {}})
        assert "c" not in configs
        assert len(configs) == 2
        assert sorted(configs) == ["a", "b"]

    def test_get_never_returns_fallback(self):
        configs = DefaultedConfigMap({})
        assert configs.get("missing", "fallback") == default_config()

    def test_custom_default_factory(self):
        configs = DefaultedConfigMap({}, default_factory=lambda: "off")
        assert configs["anything"] == "off"

    def test_equality_with_dict(self):
        assert DefaultedConfigMap({"a": {"boolean": True}}) == {"a": {"boolean": True}}

    def test_copies_input(self):
        source = {"a": {}}
        configs = DefaultedConfigMap(source)
        configs["b"]
        assert "b" not in source

    def test_repr(self):
        assert repr(DefaultedConfigMap({"a": 1})) == "DefaultedConfigMap({'a': 1})"


class TestLookup:
    def test_plain_mapping_hit(self):
        assert lookup({"a": {"boolean": True}}, "a") == {"boolean": True}

    def test_plain_mapping_miss(self):
        source = {}
        assert lookup(source, "a") == default_config()
        assert source == {}

    def test_defaulted_map_materializes(self):
        configs = DefaultedConfigMap({})
        value = lookup(configs, "a")
        assert configs["a"] is value
