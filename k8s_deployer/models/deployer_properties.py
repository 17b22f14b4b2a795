from pydantic_settings import BaseSettings
from typing import Any, Dict, List

from k8s_deployer.models.entry_point_style import EntryPointStyle
from k8s_deployer.models.container_spec import VolumeMount


class DeployerProperties(BaseSettings):
    """
    Valeurs par défaut du déployeur, partagées par tous les déploiements.

    Chargées depuis les variables SPRING_CLOUD_DEPLOYER_KUBERNETES_* (les listes
    sont attendues au format JSON), puis en lecture seule.
    """

    namespace: str = "default"

    # Déclarations NAME=VALUE injectées dans chaque conteneur
    environment_variables: List[str] = []
    entry_point_style: EntryPointStyle = EntryPointStyle.exec

    # Volumes au format Kubernetes brut, ex: {"name": "data", "hostPath": {"path": "/data"}}
    volumes: List[Dict[str, Any]] = []
    volume_mounts: List[VolumeMount] = []

    liveness_probe_path: str = "/health"
    liveness_probe_timeout: int = 2
    liveness_probe_delay: int = 10
    liveness_probe_period: int = 60

    readiness_probe_path: str = "/health"
    readiness_probe_timeout: int = 2
    readiness_probe_delay: int = 10
    readiness_probe_period: int = 10

    host_network: bool = False
    create_load_balancer: bool = False
    image_pull_policy: str = "IfNotPresent"

    # Ressources
    memory: str = "512Mi"
    cpu: str = "500m"

    # Seuils de redémarrage avant de considérer une instance en échec
    max_terminated_error_restarts: int = 2
    max_crash_loop_back_off_restarts: int = 4

    class Config:
        env_prefix = "SPRING_CLOUD_DEPLOYER_KUBERNETES_"
        env_file = ".env"
        env_file_encoding = 'utf-8'
        extra = "ignore"
        frozen = True
