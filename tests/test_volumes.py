"""Tests for volume mount parsing and merging."""

import pytest

from k8s_deployer.core.exceptions import RequestValidationError
from k8s_deployer.core.properties import PropertyResolver
from k8s_deployer.core.volumes import get_volume_mounts, parse_volume_mounts
from k8s_deployer.models.container_spec import VolumeMount
from k8s_deployer.models.deployer_properties import DeployerProperties

MOUNTS_KEY = "spring.cloud.deployer.kubernetes.volumeMounts"


class TestParseVolumeMounts:
    def test_parses_flow_list(self):
        mounts = parse_volume_mounts(
            "[{name: 'testhostpath', mountPath: '/test/hostPath'}, "
            "{name: 'testpvc', mountPath: '/test/pvc', readOnly: true, subPath: 'data'}]"
        )
        assert mounts == [
            VolumeMount(name="testhostpath", mount_path="/test/hostPath"),
            VolumeMount(name="testpvc", mount_path="/test/pvc", read_only=True, sub_path="data"),
        ]

    @pytest.mark.parametrize("raw", [
        "[{name: 'a', mountPath: '/a'",
        "{name: 'a', mountPath: '/a'}",
        "[{name: 'a'}]",
        "[{mountPath: '/a'}]",
        "[{name: 'a', mountPath: '/a', readOnly: 'maybe'}]",
        "[{name: 'a', mountPath: '/a', unknown: 1}]",
        "['just-a-string']",
    ])
    def test_malformed_declarations_carry_raw_text(self, raw):
        with pytest.raises(RequestValidationError) as exc_info:
            parse_volume_mounts(raw)
        assert exc_info.value.raw_value == raw
        assert raw in str(exc_info.value)


class TestGetVolumeMounts:
    def test_deployer_defaults_only(self):
        default = VolumeMount(name="mount", mount_path="/a")
        resolver = PropertyResolver(DeployerProperties(volume_mounts=[default]), {})
        assert get_volume_mounts(resolver) == [default]

    def test_deployment_mount_overrides_default_with_same_name(self):
        properties = DeployerProperties(volume_mounts=[VolumeMount(name="mount", mount_path="/a")])
        resolver = PropertyResolver(properties, {MOUNTS_KEY: "[{name: 'mount', mountPath: '/b'}]"})
        mounts = get_volume_mounts(resolver)
        assert len(mounts) == 1
        assert mounts[0].name == "mount"
        assert mounts[0].mount_path == "/b"

    def test_deployment_mounts_come_first(self):
        properties = DeployerProperties(volume_mounts=[
            VolumeMount(name="shared", mount_path="/shared"),
            VolumeMount(name="logs", mount_path="/logs"),
        ])
        resolver = PropertyResolver(properties, {
            MOUNTS_KEY: "[{name: 'data', mountPath: '/data'}, {name: 'logs', mountPath: '/var/logs'}]"
        })
        mounts = get_volume_mounts(resolver)
        assert [(m.name, m.mount_path) for m in mounts] == [
            ("data", "/data"),
            ("logs", "/var/logs"),
            ("shared", "/shared"),
        ]

    def test_blank_declaration_is_ignored(self, properties):
        resolver = PropertyResolver(properties, {MOUNTS_KEY: "  "})
        assert get_volume_mounts(resolver) == []

    def test_duplicate_name_keeps_first_declaration(self, properties):
        resolver = PropertyResolver(properties, {MOUNTS_KEY: "[{name: a, mountPath: /x}, {name: a, mountPath: /y}]"})
        assert [(m.name, m.mount_path) for m in get_volume_mounts(resolver)] == [("a", "/x")]

    def test_duplicate_default_name_keeps_first_declaration(self):
        properties = DeployerProperties(volume_mounts=[
            VolumeMount(name="a", mount_path="/x"),
            VolumeMount(name="a", mount_path="/y"),
        ])
        resolver = PropertyResolver(properties, {})
        assert [(m.name, m.mount_path) for m in get_volume_mounts(resolver)] == [("a", "/x")]
