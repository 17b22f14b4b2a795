"""Tests for pod state mapping, status aggregation and the status poller."""

import pytest

from k8s_deployer.models.deployer_properties import DeployerProperties
from k8s_deployer.models.deployment_state import AppInstanceStatus, AppStatus, DeploymentState
from k8s_deployer.services.status_service import build_app_status, map_pod_state, wait_for_state

from tests.conftest import running_pod


class TestMapPodState:
    @pytest.mark.parametrize("phase,expected", [
        ("Pending", DeploymentState.deploying),
        ("Failed", DeploymentState.failed),
        ("Unknown", DeploymentState.unknown),
        ("Succeeded", DeploymentState.unknown),
    ])
    def test_phases(self, properties, phase, expected):
        assert map_pod_state({"phase": phase}, properties) == expected

    def test_ready_container_is_deployed(self, properties):
        assert map_pod_state(running_pod("p"), properties) == DeploymentState.deployed

    def test_not_ready_container_is_deploying(self, properties):
        assert map_pod_state(running_pod("p", ready=False), properties) == DeploymentState.deploying

    def test_crash_loop_beyond_threshold_is_failed(self):
        properties = DeployerProperties(max_crash_loop_back_off_restarts=1)
        pod = running_pod("p", ready=False, restart_count=2, waiting_reason="CrashLoopBackOff")
        assert map_pod_state(pod, properties) == DeploymentState.failed

    def test_crash_loop_within_threshold_is_deploying(self):
        properties = DeployerProperties(max_crash_loop_back_off_restarts=4)
        pod = running_pod("p", ready=False, restart_count=2, waiting_reason="CrashLoopBackOff")
        assert map_pod_state(pod, properties) == DeploymentState.deploying

    def test_terminated_with_error_beyond_threshold_is_failed(self):
        properties = DeployerProperties(max_terminated_error_restarts=1)
        pod = running_pod("p", ready=False, restart_count=2, last_exit_code=137)
        assert map_pod_state(pod, properties) == DeploymentState.failed


class TestAppStatus:
    def _status(self, *states):
        return AppStatus(
            deployment_id="app",
            instances=[AppInstanceStatus(id=f"app-{i}", state=s) for i, s in enumerate(states)]
        )

    def test_no_instances_is_unknown(self):
        assert self._status().state == DeploymentState.unknown

    @pytest.mark.parametrize("states,expected", [
        ((DeploymentState.deployed, DeploymentState.deployed), DeploymentState.deployed),
        ((DeploymentState.deployed, DeploymentState.deploying), DeploymentState.deploying),
        ((DeploymentState.deployed, DeploymentState.failed), DeploymentState.partial),
        ((DeploymentState.failed, DeploymentState.unknown), DeploymentState.failed),
        ((DeploymentState.error, DeploymentState.deployed), DeploymentState.error),
    ])
    def test_aggregation(self, states, expected):
        assert self._status(*states).state == expected

    def test_build_app_status_attributes(self, properties):
        status = build_app_status("app", [running_pod("app-abc", restart_count=1)], properties)
        instance = status.instances[0]
        assert instance.id == "app-abc"
        assert instance.state == DeploymentState.deployed
        assert instance.attributes["pod.ip"] == "172.17.0.4"
        assert instance.attributes["container.restartCount"] == "1"


class SequenceDeployer:
    def __init__(self, states):
        self.states = list(states)
        self.calls = 0

    def status(self, deployment_id):
        state = self.states[min(self.calls, len(self.states) - 1)]
        self.calls += 1
        return AppStatus(deployment_id=deployment_id, instances=[AppInstanceStatus(id="i", state=state)])


@pytest.mark.asyncio
async def test_wait_for_state_returns_when_expected():
    deployer = SequenceDeployer([DeploymentState.deploying, DeploymentState.deploying, DeploymentState.deployed])
    state = await wait_for_state(deployer, "app", {DeploymentState.deployed}, max_attempts=5, pause=0)
    assert state == DeploymentState.deployed
    assert deployer.calls == 3


@pytest.mark.asyncio
async def test_wait_for_state_timeout_is_not_an_error():
    deployer = SequenceDeployer([DeploymentState.deploying])
    state = await wait_for_state(deployer, "app", {DeploymentState.deployed}, max_attempts=3, pause=0)
    assert state == DeploymentState.deploying
    assert deployer.calls == 3
