import logging
from typing import Dict, Iterable, List

from k8s_deployer.core.entry_point import create_boot_environment, create_shell_environment
from k8s_deployer.core.exceptions import ConfigurationError
from k8s_deployer.core.merge import merge_by_name
from k8s_deployer.core.properties import (
    PropertyResolver,
    ENVIRONMENT_VARIABLES,
    INSTANCE_INDEX_PROPERTY_KEY,
    split_list_property
)
from k8s_deployer.models.container_spec import EnvVar
from k8s_deployer.models.deployment_request import DeploymentRequest
from k8s_deployer.models.entry_point_style import EntryPointStyle

logger = logging.getLogger(__name__)

APPLICATION_GUID_ENV = "SPRING_CLOUD_APPLICATION_GUID"
APPLICATION_INDEX_ENV = "SPRING_APPLICATION_INDEX"
APPLICATION_GROUP_ENV = "SPRING_CLOUD_APPLICATION_GROUP"
# Résolu par le conteneur au lancement, pas à la compilation
HOSTNAME_PLACEHOLDER = "${HOSTNAME}"


def parse_environment_variable(declaration: str) -> EnvVar:
    parts = declaration.split("=", 1)
    if len(parts) != 2 or not parts[0].strip():
        raise ConfigurationError(f"Invalid environment variable declared: {declaration}")
    return EnvVar(name=parts[0].strip(), value=parts[1])


def parse_environment_variables(declarations: Iterable[str]) -> List[EnvVar]:
    return [parse_environment_variable(declaration) for declaration in declarations]


def get_app_environment_variables(resolver: PropertyResolver) -> List[EnvVar]:
    """Variables déclarées au niveau du déploiement, ex: JAVA_OPTS=-Xmx1g,FOO=bar"""
    raw = resolver.deployment_value(ENVIRONMENT_VARIABLES)
    if not raw:
        return []
    env_vars = []
    for declaration in split_list_property(raw):
        logger.debug(f"Ajout de la variable d'environnement du déploiement: {declaration}")
        env_vars.append(parse_environment_variable(declaration.strip()))
    return env_vars


def _as_env_vars(values: Dict[str, str]) -> List[EnvVar]:
    return [EnvVar(name=name, value=value) for name, value in values.items()]


def build_environment(request: DeploymentRequest, resolver: PropertyResolver,
                      entry_point_style: EntryPointStyle) -> List[EnvVar]:
    """
    Construit l'environnement d'une instance par couches successives, chaque couche
    écrasant les variables de même nom des précédentes :

    1. variables globales du déployeur
    2. variables du déploiement
    3. variables du style d'entrée (boot / shell)
    4. identifiant de l'hôte
    5. index d'instance
    6. groupe
    """
    deployer_env = parse_environment_variables(resolver.properties.environment_variables)
    app_env = get_app_environment_variables(resolver)
    configured = {e.name: e.value for e in merge_by_name(deployer_env, app_env)}

    style_env: Dict[str, str] = {}
    if entry_point_style == EntryPointStyle.boot:
        style_env = create_boot_environment(request, configured)
    elif entry_point_style == EntryPointStyle.shell:
        style_env = create_shell_environment(request)

    identity_env = {APPLICATION_GUID_ENV: HOSTNAME_PLACEHOLDER}

    index_env: Dict[str, str] = {}
    if request.instance_index is not None:
        index_env[INSTANCE_INDEX_PROPERTY_KEY] = str(request.instance_index)
        index_env[APPLICATION_INDEX_ENV] = str(request.instance_index)

    group_env: Dict[str, str] = {}
    if request.group is not None:
        group_env[APPLICATION_GROUP_ENV] = request.group

    return merge_by_name(
        deployer_env,
        app_env,
        _as_env_vars(style_env),
        _as_env_vars(identity_env),
        _as_env_vars(index_env),
        _as_env_vars(group_env)
    )
