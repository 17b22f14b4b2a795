import logging
from typing import Dict, List, Optional, Tuple

from kubernetes import client
from kubernetes.client.rest import ApiException

from k8s_deployer.core.container_factory import ContainerFactory
from k8s_deployer.core.exceptions import AppAlreadyDeployedError, RequestValidationError
from k8s_deployer.core.properties import (
    PropertyResolver,
    COUNT_PROPERTY_KEY,
    CPU_PROPERTY_KEY,
    CREATE_LOAD_BALANCER,
    GROUP_PROPERTY_KEY,
    HOST_NETWORK,
    INDEXED_PROPERTY_KEY,
    MEMORY_PROPERTY_KEY,
    SERVER_PORT_KEY
)
from k8s_deployer.external.k8s_client import K8sClient
from k8s_deployer.models.container_spec import ContainerSpec
from k8s_deployer.models.deployer_properties import DeployerProperties
from k8s_deployer.models.deployment_request import DeploymentRequest
from k8s_deployer.models.deployment_state import AppStatus, DeploymentState
from k8s_deployer.services.status_service import build_app_status

logger = logging.getLogger(__name__)

SPRING_APP_KEY = "spring-app-id"
SPRING_DEPLOYMENT_KEY = "spring-deployment-id"
SPRING_GROUP_KEY = "spring-group-id"
SPRING_MARKER_KEY = "role"
SPRING_MARKER_VALUE = "spring-app"
APP_INSTANCE_INDEX_KEY = "spring-application-instance-index"

DEFAULT_PORT = 8080


class KubernetesAppDeployer:
    def __init__(self, properties: DeployerProperties, k8s_client: K8sClient,
                 container_factory: Optional[ContainerFactory] = None):
        self.properties = properties
        self.k8s_client = k8s_client
        self.container_factory = container_factory or ContainerFactory(properties)

    @staticmethod
    def create_deployment_id(request: DeploymentRequest) -> str:
        group = request.deployment_properties.get(GROUP_PROPERTY_KEY)
        deployment_id = request.app_id if group is None else f"{group}-{request.app_id}"
        return deployment_id.replace(".", "-").lower()

    def deploy(self, request: DeploymentRequest) -> str:
        """Déploie l'application et retourne l'identifiant du déploiement"""
        deployment_id = self.create_deployment_id(request)
        current = self.status(deployment_id)
        if current.state != DeploymentState.unknown:
            raise AppAlreadyDeployedError(deployment_id, current.state.value)

        resolver = PropertyResolver(self.properties, request.deployment_properties)
        port = self.configure_external_port(request)
        host_network = resolver.get_bool(HOST_NETWORK)
        labels = self.create_id_map(deployment_id, request)

        # Toutes les spécifications sont compilées avant le premier appel au cluster
        workloads = self._compile_workloads(deployment_id, request, port, host_network)

        logger.info(f"Déploiement de {deployment_id} ({len(workloads)} workload(s))")
        namespace = self.properties.namespace
        resources = self.create_resources(request)
        try:
            self.k8s_client.create_service(
                namespace, self.create_service(deployment_id, labels, port, resolver.get_bool(CREATE_LOAD_BALANCER))
            )
            for name, replicas, index, spec in workloads:
                workload_labels = dict(labels)
                workload_labels[SPRING_DEPLOYMENT_KEY] = name
                if index is not None:
                    workload_labels[APP_INSTANCE_INDEX_KEY] = str(index)
                body = self.create_deployment(name, workload_labels, replicas, spec, resources, host_network)
                self.k8s_client.create_deployment(namespace, body)
        except ApiException as e:
            logger.error(f"Échec du déploiement de {deployment_id}: {e.status} {e.reason}, nettoyage")
            self._cleanup(deployment_id)
            raise

        return deployment_id

    def undeploy(self, deployment_id: str) -> None:
        """Supprime les services et deployments d'une application"""
        selector = {SPRING_APP_KEY: deployment_id}
        namespace = self.properties.namespace
        services = self.k8s_client.delete_services(namespace, selector)
        deployments = self.k8s_client.delete_deployments(namespace, selector)
        if not services and not deployments:
            logger.warning(f"Aucune ressource trouvée pour {deployment_id}")
        else:
            logger.info(f"Suppression de {deployment_id}: {len(deployments)} deployments, {len(services)} services")

    def _cleanup(self, deployment_id: str) -> None:
        """Supprime ce qui a déjà été créé pour un déploiement en échec"""
        try:
            self.undeploy(deployment_id)
        except ApiException as e:
            logger.error(f"Nettoyage de {deployment_id} impossible: {e.status} {e.reason}")

    def status(self, deployment_id: str) -> AppStatus:
        pods = self.k8s_client.list_pods(self.properties.namespace, {SPRING_APP_KEY: deployment_id})
        return build_app_status(deployment_id, pods, self.properties)

    def _compile_workloads(self, deployment_id: str, request: DeploymentRequest, port: int,
                           host_network: bool) -> List[Tuple[str, int, Optional[int], ContainerSpec]]:
        count = self.get_count(request)
        # Le nom du conteneur doit être un label DNS valide, comme celui du deployment
        request = request.model_copy(update={"app_id": deployment_id})
        indexed = request.deployment_properties.get(INDEXED_PROPERTY_KEY, "false").strip().lower() == "true"
        if not indexed:
            spec = self.container_factory.create(request, port, host_network)
            return [(deployment_id, count, None, spec)]

        workloads = []
        for index in range(count):
            spec = self.container_factory.create(request.with_instance_index(index), port, host_network)
            workloads.append((f"{deployment_id}-{index}", 1, index, spec))
        return workloads

    @staticmethod
    def get_count(request: DeploymentRequest) -> int:
        raw = request.deployment_properties.get(COUNT_PROPERTY_KEY, "1")
        try:
            count = int(raw)
        except ValueError as e:
            raise RequestValidationError(f"Invalid instance count '{raw}'", raw_value=raw) from e
        if count < 1:
            raise RequestValidationError(f"Invalid instance count '{raw}'", raw_value=raw)
        return count

    @staticmethod
    def configure_external_port(request: DeploymentRequest) -> int:
        raw = request.properties.get(SERVER_PORT_KEY)
        if raw is None:
            return DEFAULT_PORT
        try:
            return int(raw)
        except ValueError as e:
            raise RequestValidationError(f"Invalid {SERVER_PORT_KEY} '{raw}'", raw_value=raw) from e

    @staticmethod
    def create_id_map(deployment_id: str, request: DeploymentRequest) -> Dict[str, str]:
        labels = {
            SPRING_APP_KEY: deployment_id,
            SPRING_MARKER_KEY: SPRING_MARKER_VALUE,
        }
        group = request.deployment_properties.get(GROUP_PROPERTY_KEY)
        if group is not None:
            labels[SPRING_GROUP_KEY] = group
        return labels

    def create_resources(self, request: DeploymentRequest) -> client.V1ResourceRequirements:
        memory = request.deployment_properties.get(MEMORY_PROPERTY_KEY, self.properties.memory)
        cpu = request.deployment_properties.get(CPU_PROPERTY_KEY, self.properties.cpu)
        return client.V1ResourceRequirements(limits={"memory": memory, "cpu": cpu})

    def create_deployment(self, name: str, labels: Dict[str, str], replicas: int, spec: ContainerSpec,
                          resources: client.V1ResourceRequirements, host_network: bool) -> client.V1Deployment:
        container = spec.to_v1_container(resources=resources, image_pull_policy=self.properties.image_pull_policy)
        pod_spec = client.V1PodSpec(
            containers=[container],
            host_network=host_network,
            # Volumes bruts du déployeur, sérialisés tels quels par le client
            volumes=list(self.properties.volumes) or None
        )
        return client.V1Deployment(
            api_version="apps/v1",
            kind="Deployment",
            metadata=client.V1ObjectMeta(name=name, labels=labels),
            spec=client.V1DeploymentSpec(
                replicas=replicas,
                selector=client.V1LabelSelector(match_labels={SPRING_DEPLOYMENT_KEY: name}),
                template=client.V1PodTemplateSpec(
                    metadata=client.V1ObjectMeta(labels=labels),
                    spec=pod_spec
                )
            )
        )

    @staticmethod
    def create_service(deployment_id: str, labels: Dict[str, str], port: int,
                       create_load_balancer: bool) -> client.V1Service:
        return client.V1Service(
            api_version="v1",
            kind="Service",
            metadata=client.V1ObjectMeta(name=deployment_id, labels=labels),
            spec=client.V1ServiceSpec(
                type="LoadBalancer" if create_load_balancer else "ClusterIP",
                selector={SPRING_APP_KEY: deployment_id},
                ports=[client.V1ServicePort(port=port, target_port=port, name="port")]
            )
        )
