from functools import lru_cache

from k8s_deployer.core.container_factory import ContainerFactory
from k8s_deployer.external.k8s_client import K8sClient
from k8s_deployer.models.deployer_properties import DeployerProperties
from k8s_deployer.services.app_deployer import KubernetesAppDeployer


# === CONFIGURATION ===
@lru_cache()
def get_deployer_properties() -> DeployerProperties:
    return DeployerProperties()


# === CLIENTS EXTERNES ===
@lru_cache()
def get_k8s_client() -> K8sClient:
    return K8sClient()


# === SERVICES ===
@lru_cache()
def get_container_factory() -> ContainerFactory:
    return ContainerFactory(get_deployer_properties())


@lru_cache()
def get_app_deployer() -> KubernetesAppDeployer:
    """Factory pour le déployeur, partagé par toutes les requêtes"""
    return KubernetesAppDeployer(
        properties=get_deployer_properties(),
        k8s_client=get_k8s_client(),
        container_factory=get_container_factory()
    )
