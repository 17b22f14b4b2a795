import re
from typing import Any, List, Mapping, Optional

from k8s_deployer.models.deployer_properties import DeployerProperties
from k8s_deployer.models.deployment_request import GROUP_PROPERTY_KEY

DEPLOYER_PROPERTY_PREFIX = "spring.cloud.deployer."
KUBERNETES_PROPERTY_PREFIX = DEPLOYER_PROPERTY_PREFIX + "kubernetes."

# Clés génériques du déployeur
INDEXED_PROPERTY_KEY = DEPLOYER_PROPERTY_PREFIX + "indexed"
COUNT_PROPERTY_KEY = DEPLOYER_PROPERTY_PREFIX + "count"
MEMORY_PROPERTY_KEY = DEPLOYER_PROPERTY_PREFIX + "memory"
CPU_PROPERTY_KEY = DEPLOYER_PROPERTY_PREFIX + "cpu"
INSTANCE_INDEX_PROPERTY_KEY = "INSTANCE_INDEX"

# Propriété applicative portant le port principal
SERVER_PORT_KEY = "server.port"

# Clés propres à Kubernetes (sans le préfixe)
ENTRY_POINT_STYLE = "entryPointStyle"
VOLUME_MOUNTS = "volumeMounts"
CONTAINER_COMMAND = "containerCommand"
CONTAINER_PORTS = "containerPorts"
ENVIRONMENT_VARIABLES = "environmentVariables"
HOST_NETWORK = "hostNetwork"
CREATE_LOAD_BALANCER = "createLoadBalancer"

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_attribute_name(name: str) -> str:
    """entryPointStyle -> entry_point_style"""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class PropertyResolver:
    """
    Résout une option pour un déploiement : d'abord les propriétés de déploiement
    (préfixe spring.cloud.deployer.kubernetes.), puis la valeur par défaut du
    déployeur, puis la valeur par défaut absolue. Une clé absente n'est jamais une erreur.
    """

    def __init__(self, properties: DeployerProperties, deployment_properties: Mapping[str, str]):
        self.properties = properties
        self.deployment_properties = deployment_properties

    def deployment_value(self, name: str) -> Optional[str]:
        return self.deployment_properties.get(KUBERNETES_PROPERTY_PREFIX + name)

    def get(self, name: str, default: Any = "") -> Any:
        value = self.deployment_value(name)
        if value is not None:
            return value
        value = getattr(self.properties, to_attribute_name(name), None)
        if value is not None:
            return value
        return default

    def get_bool(self, name: str, default: bool = False) -> bool:
        value = self.get(name, default)
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() == "true"


def split_list_property(raw: str) -> List[str]:
    """Découpe une liste séparée par des virgules en ignorant les segments vides finaux ('8081,')"""
    values = raw.split(",")
    while values and values[-1] == "":
        values.pop()
    return values
