"""Tests for property resolution and entry point style selection."""

import pytest

from k8s_deployer.core.entry_point import determine_entry_point_style
from k8s_deployer.core.merge import merge_by_name
from k8s_deployer.core.properties import PropertyResolver, split_list_property, to_attribute_name
from k8s_deployer.models.container_spec import EnvVar
from k8s_deployer.models.deployer_properties import DeployerProperties
from k8s_deployer.models.entry_point_style import EntryPointStyle

STYLE_KEY = "spring.cloud.deployer.kubernetes.entryPointStyle"


class TestPropertyResolver:
    def test_deployment_value_wins_over_deployer_default(self, properties):
        resolver = PropertyResolver(properties, {"spring.cloud.deployer.kubernetes.namespace": "prod"})
        assert resolver.get("namespace") == "prod"

    def test_falls_back_to_deployer_default(self):
        resolver = PropertyResolver(DeployerProperties(namespace="staging"), {})
        assert resolver.get("namespace") == "staging"

    def test_missing_key_returns_absolute_default(self, properties):
        resolver = PropertyResolver(properties, {})
        assert resolver.get("doesNotExist") == ""
        assert resolver.get("doesNotExist", "fallback") == "fallback"

    def test_get_bool(self, properties):
        resolver = PropertyResolver(properties, {"spring.cloud.deployer.kubernetes.hostNetwork": "TRUE"})
        assert resolver.get_bool("hostNetwork") is True
        assert resolver.get_bool("createLoadBalancer") is False

    def test_attribute_name_conversion(self):
        assert to_attribute_name("entryPointStyle") == "entry_point_style"
        assert to_attribute_name("namespace") == "namespace"

    @pytest.mark.parametrize("raw,expected", [
        ("a,b", ["a", "b"]),
        ("a,b,", ["a", "b"]),
        ("a,,", ["a"]),
        ("a,,b", ["a", "", "b"]),
        (",a", ["", "a"]),
        ("", []),
    ])
    def test_split_list_drops_trailing_empty_values(self, raw, expected):
        assert split_list_property(raw) == expected


class TestEntryPointStyle:
    @pytest.mark.parametrize("value,expected", [
        ("exec", EntryPointStyle.exec),
        ("BOOT", EntryPointStyle.boot),
        (" Shell ", EntryPointStyle.shell),
        ("docker", None),
        ("", None),
        (None, None),
    ])
    def test_parse(self, value, expected):
        assert EntryPointStyle.parse(value) == expected

    @pytest.mark.parametrize("default", list(EntryPointStyle))
    def test_missing_selector_uses_deployer_default(self, default):
        resolver = PropertyResolver(DeployerProperties(entry_point_style=default), {"other": "value"})
        assert determine_entry_point_style(resolver) == default

    def test_deployment_selector_overrides_default(self):
        resolver = PropertyResolver(DeployerProperties(entry_point_style=EntryPointStyle.exec), {STYLE_KEY: "shell"})
        assert determine_entry_point_style(resolver) == EntryPointStyle.shell

    def test_unrecognized_selector_is_ignored(self):
        resolver = PropertyResolver(DeployerProperties(entry_point_style=EntryPointStyle.boot), {STYLE_KEY: "bogus"})
        assert determine_entry_point_style(resolver) == EntryPointStyle.boot


class TestMergeByName:
    def test_later_layer_overrides_in_place(self):
        merged = merge_by_name(
            [EnvVar(name="A", value="1"), EnvVar(name="B", value="2")],
            [EnvVar(name="A", value="3")]
        )
        assert merged == [EnvVar(name="A", value="3"), EnvVar(name="B", value="2")]

    def test_first_wins(self):
        merged = merge_by_name(
            [EnvVar(name="A", value="1")],
            [EnvVar(name="A", value="2"), EnvVar(name="C", value="3")],
            first_wins=True
        )
        assert merged == [EnvVar(name="A", value="1"), EnvVar(name="C", value="3")]
