"""Shared fixtures: deployer defaults, requests and an in-memory Kubernetes client."""

from typing import Any, Dict, List

import pytest

from k8s_deployer.models.deployer_properties import DeployerProperties
from k8s_deployer.models.deployment_request import DeploymentRequest


class FakeK8sClient:
    """Records every call and serves pods from a dict keyed by deployment id."""

    def __init__(self):
        self.created_deployments = []
        self.created_services = []
        self.deleted_selectors = []
        self.pods: Dict[str, List[Dict[str, Any]]] = {}

    def create_deployment(self, namespace, body):
        self.created_deployments.append((namespace, body))
        return body.metadata.name

    def create_service(self, namespace, body):
        self.created_services.append((namespace, body))
        return body.metadata.name

    def delete_deployments(self, namespace, selector):
        self.deleted_selectors.append(("deployment", namespace, selector))
        return [body.metadata.name for _, body in self.created_deployments]

    def delete_services(self, namespace, selector):
        self.deleted_selectors.append(("service", namespace, selector))
        return [body.metadata.name for _, body in self.created_services]

    def list_pods(self, namespace, selector):
        return self.pods.get(selector.get("spring-app-id"), [])


def running_pod(name: str, ready: bool = True, restart_count: int = 0,
                waiting_reason: str = None, last_exit_code: int = None) -> Dict[str, Any]:
    return {
        "name": name,
        "namespace": "default",
        "phase": "Running",
        "host_ip": "10.0.0.1",
        "pod_ip": "172.17.0.4",
        "labels": {},
        "containers": [{
            "name": name,
            "ready": ready,
            "restart_count": restart_count,
            "waiting_reason": waiting_reason,
            "last_exit_code": last_exit_code,
        }],
    }


@pytest.fixture
def properties():
    return DeployerProperties()


@pytest.fixture
def k8s_client():
    return FakeK8sClient()


@pytest.fixture
def make_request():
    def _make(**overrides):
        values = {
            "app_id": "app-test",
            "resource": "docker:springcloud/spring-cloud-deployer-spi-test-app:latest",
        }
        values.update(overrides)
        return DeploymentRequest(**values)
    return _make
