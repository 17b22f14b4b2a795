import logging
from typing import List, Optional

from k8s_deployer.core.exceptions import RequestValidationError
from k8s_deployer.core.properties import PropertyResolver, CONTAINER_PORTS, split_list_property
from k8s_deployer.models.container_spec import ContainerPort, HttpProbe

logger = logging.getLogger(__name__)


def parse_container_ports(raw: Optional[str]) -> List[int]:
    """Ports additionnels déclarés sous la forme '8081, 8082'"""
    if raw is None:
        return []
    ports = []
    for value in split_list_property(raw):
        logger.debug(f"Ajout du port de conteneur du déploiement: {value}")
        try:
            ports.append(int(value.strip()))
        except ValueError as e:
            raise RequestValidationError(f"Invalid container port '{value}' in '{raw}'", raw_value=raw) from e
    return ports


def _container_port(port: int, host_network: bool) -> ContainerPort:
    return ContainerPort(container_port=port, host_port=port if host_network else None)


def build_ports(resolver: PropertyResolver, port: Optional[int], host_network: bool) -> List[ContainerPort]:
    """Le port principal, s'il existe, est toujours en première position"""
    ports = []
    if port is not None:
        ports.append(_container_port(port, host_network))
    for additional_port in parse_container_ports(resolver.deployment_value(CONTAINER_PORTS)):
        ports.append(_container_port(additional_port, host_network))
    return ports


def create_liveness_probe(resolver: PropertyResolver, port: Optional[int]) -> Optional[HttpProbe]:
    if port is None:
        return None
    properties = resolver.properties
    return HttpProbe(
        path=properties.liveness_probe_path,
        port=port,
        timeout_seconds=properties.liveness_probe_timeout,
        initial_delay_seconds=properties.liveness_probe_delay,
        period_seconds=properties.liveness_probe_period
    )


def create_readiness_probe(resolver: PropertyResolver, port: Optional[int]) -> Optional[HttpProbe]:
    if port is None:
        return None
    properties = resolver.properties
    return HttpProbe(
        path=properties.readiness_probe_path,
        port=port,
        timeout_seconds=properties.readiness_probe_timeout,
        initial_delay_seconds=properties.readiness_probe_delay,
        period_seconds=properties.readiness_probe_period
    )
