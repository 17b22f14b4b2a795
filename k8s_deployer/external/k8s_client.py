from kubernetes import client, config
import logging
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


def to_label_selector(selector: Dict[str, str]) -> str:
    return ",".join(f"{key}={value}" for key, value in sorted(selector.items()))


class K8sClient:
    def __init__(self):
        try:
            config.load_incluster_config()
        except config.ConfigException:
            try:
                config.load_kube_config()
            except Exception as e:
                logger.error(f"Impossible de charger la configuration Kubernetes: {e}")
                raise

        self.v1 = client.CoreV1Api()
        self.apps_v1 = client.AppsV1Api()

    def create_deployment(self, namespace: str, body: client.V1Deployment) -> str:
        """Crée un deployment et retourne son nom"""
        deployment = self.apps_v1.create_namespaced_deployment(namespace, body)
        logger.info(f"Deployment {deployment.metadata.name} créé dans le namespace {namespace}")
        return deployment.metadata.name

    def create_service(self, namespace: str, body: client.V1Service) -> str:
        """Crée un service et retourne son nom"""
        service = self.v1.create_namespaced_service(namespace, body)
        logger.info(f"Service {service.metadata.name} créé dans le namespace {namespace}")
        return service.metadata.name

    def delete_deployments(self, namespace: str, selector: Dict[str, str]) -> List[str]:
        """Supprime les deployments correspondant au sélecteur"""
        deployments = self.apps_v1.list_namespaced_deployment(
            namespace, label_selector=to_label_selector(selector)
        )
        deleted = []
        for deployment in deployments.items:
            self.apps_v1.delete_namespaced_deployment(
                deployment.metadata.name,
                namespace,
                body=client.V1DeleteOptions(propagation_policy="Background")
            )
            deleted.append(deployment.metadata.name)
        logger.info(f"Suppression de {len(deleted)} deployments ({selector})")
        return deleted

    def delete_services(self, namespace: str, selector: Dict[str, str]) -> List[str]:
        """Supprime les services correspondant au sélecteur"""
        services = self.v1.list_namespaced_service(namespace, label_selector=to_label_selector(selector))
        deleted = []
        for service in services.items:
            self.v1.delete_namespaced_service(service.metadata.name, namespace)
            deleted.append(service.metadata.name)
        logger.info(f"Suppression de {len(deleted)} services ({selector})")
        return deleted

    def list_pods(self, namespace: str, selector: Dict[str, str]) -> List[Dict[str, Any]]:
        """Récupère les pods correspondant au sélecteur avec l'état de leurs conteneurs"""
        pods = self.v1.list_namespaced_pod(namespace, label_selector=to_label_selector(selector))
        return [
            {
                "name": pod.metadata.name,
                "namespace": pod.metadata.namespace,
                "phase": pod.status.phase,
                "host_ip": pod.status.host_ip,
                "pod_ip": pod.status.pod_ip,
                "labels": pod.metadata.labels or {},
                "containers": [
                    self._container_status(cs)
                    for cs in (pod.status.container_statuses or [])
                ]
            }
            for pod in pods.items
        ]

    @staticmethod
    def _container_status(container_status: client.V1ContainerStatus) -> Dict[str, Any]:
        state = container_status.state
        last_state = container_status.last_state
        waiting = state.waiting if state else None
        last_terminated = last_state.terminated if last_state else None
        return {
            "name": container_status.name,
            "ready": bool(container_status.ready),
            "restart_count": container_status.restart_count or 0,
            "waiting_reason": waiting.reason if waiting else None,
            "last_exit_code": last_terminated.exit_code if last_terminated else None
        }
