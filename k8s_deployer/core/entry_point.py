import json
from typing import Dict, List, Mapping

from k8s_deployer.core.exceptions import ConfigurationError
from k8s_deployer.core.properties import PropertyResolver, ENTRY_POINT_STYLE
from k8s_deployer.models.deployment_request import DeploymentRequest
from k8s_deployer.models.entry_point_style import EntryPointStyle

SPRING_APPLICATION_JSON = "SPRING_APPLICATION_JSON"


def determine_entry_point_style(resolver: PropertyResolver) -> EntryPointStyle:
    """Style demandé par le déploiement s'il est reconnu, sinon celui du déployeur"""
    style = EntryPointStyle.parse(resolver.deployment_value(ENTRY_POINT_STYLE))
    if style is None:
        # Valeur absente ou inconnue : on retombe silencieusement sur le défaut
        style = resolver.properties.entry_point_style
    return style


def create_command_args(request: DeploymentRequest) -> List[str]:
    """Style exec : chaque propriété devient --clé=valeur, suivie des arguments bruts"""
    args = [f"--{key}={value}" for key, value in request.properties.items()]
    args.extend(request.command_line_args)
    return args


def create_boot_environment(request: DeploymentRequest, environment: Mapping[str, str]) -> Dict[str, str]:
    """Style boot : toutes les propriétés sérialisées dans SPRING_APPLICATION_JSON"""
    if SPRING_APPLICATION_JSON in environment:
        raise ConfigurationError(
            "You can't use boot entry point style and also set SPRING_APPLICATION_JSON for the app"
        )
    try:
        payload = json.dumps(request.properties, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Unable to create {SPRING_APPLICATION_JSON}: {e}") from e
    return {SPRING_APPLICATION_JSON: payload}


def create_shell_environment(request: DeploymentRequest) -> Dict[str, str]:
    """Style shell : logging.file -> LOGGING_FILE"""
    return {
        key.replace(".", "_").upper(): value
        for key, value in request.properties.items()
    }
