import logging
import shlex
from typing import List, Optional

from k8s_deployer.core.entry_point import determine_entry_point_style, create_command_args
from k8s_deployer.core.environment import build_environment
from k8s_deployer.core.exceptions import RequestValidationError, ResourceResolutionError
from k8s_deployer.core.ports import build_ports, create_liveness_probe, create_readiness_probe
from k8s_deployer.core.properties import PropertyResolver, CONTAINER_COMMAND
from k8s_deployer.core.volumes import get_volume_mounts
from k8s_deployer.models.container_spec import ContainerSpec
from k8s_deployer.models.deployer_properties import DeployerProperties
from k8s_deployer.models.deployment_request import DeploymentRequest
from k8s_deployer.models.entry_point_style import EntryPointStyle

logger = logging.getLogger(__name__)

DOCKER_SCHEME = "docker:"


class ContainerFactoryListener:
    """Observateur appelé de manière synchrone pendant la construction d'un conteneur"""

    def image_resolved(self, app_id: str, image: str) -> None:
        pass

    def entry_point_style_selected(self, app_id: str, style: EntryPointStyle) -> None:
        pass

    def command_args_computed(self, app_id: str, args: List[str]) -> None:
        pass


class LoggingListener(ContainerFactoryListener):
    def image_resolved(self, app_id: str, image: str) -> None:
        logger.info(f"Utilisation de l'image Docker {image} pour {app_id}")

    def entry_point_style_selected(self, app_id: str, style: EntryPointStyle) -> None:
        logger.info(f"Style de point d'entrée pour {app_id}: {style.value}")

    def command_args_computed(self, app_id: str, args: List[str]) -> None:
        logger.debug(f"Arguments de commande pour {app_id}: {args}")


def resolve_image(resource: str) -> str:
    """docker:springcloud/app:latest -> springcloud/app:latest"""
    if not resource or not resource.startswith(DOCKER_SCHEME):
        raise ResourceResolutionError(resource)
    image = resource[len(DOCKER_SCHEME):]
    if image.startswith("//"):
        image = image[2:]
    if not image.strip():
        raise ResourceResolutionError(resource)
    return image


def get_container_command(resolver: PropertyResolver) -> Optional[List[str]]:
    raw = resolver.deployment_value(CONTAINER_COMMAND)
    if not raw:
        return None
    try:
        command = shlex.split(raw)
    except ValueError as e:
        raise RequestValidationError(f"Invalid container command '{raw}': {e}", raw_value=raw) from e
    return command or None


class ContainerFactory:
    """
    Compile une demande de déploiement en spécification de conteneur.

    Aucun appel réseau : la même demande produit toujours la même spécification,
    et toute erreur est levée avant le moindre appel au cluster.
    """

    def __init__(self, properties: DeployerProperties, listener: Optional[ContainerFactoryListener] = None):
        self.properties = properties
        self.listener = listener or LoggingListener()

    def create(self, request: DeploymentRequest, port: Optional[int] = None,
               host_network: bool = False) -> ContainerSpec:
        resolver = PropertyResolver(self.properties, request.deployment_properties)

        image = resolve_image(request.resource)
        self.listener.image_resolved(request.app_id, image)

        style = determine_entry_point_style(resolver)
        self.listener.entry_point_style_selected(request.app_id, style)

        args: List[str] = []
        if style == EntryPointStyle.exec:
            args = create_command_args(request)
            self.listener.command_args_computed(request.app_id, args)

        env = build_environment(request, resolver, style)

        if request.instance_index is None:
            name = request.app_id
        else:
            name = f"{request.app_id}-{request.instance_index}"

        return ContainerSpec(
            name=name,
            image=image,
            env=env,
            args=args,
            ports=build_ports(resolver, port, host_network),
            liveness_probe=create_liveness_probe(resolver, port),
            readiness_probe=create_readiness_probe(resolver, port),
            volume_mounts=get_volume_mounts(resolver),
            command=get_container_command(resolver)
        )
