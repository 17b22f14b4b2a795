import logging
from typing import List

import yaml
from pydantic import TypeAdapter, ValidationError

from k8s_deployer.core.exceptions import RequestValidationError
from k8s_deployer.core.merge import merge_by_name
from k8s_deployer.core.properties import PropertyResolver, VOLUME_MOUNTS
from k8s_deployer.models.container_spec import VolumeMount

logger = logging.getLogger(__name__)

_volume_mounts_adapter = TypeAdapter(List[VolumeMount])


def parse_volume_mounts(raw: str) -> List[VolumeMount]:
    """
    Lit une liste YAML de points de montage, par exemple :

        [{name: 'testhostpath', mountPath: '/test/hostPath'},
         {name: 'testpvc', mountPath: '/test/pvc', readOnly: true}]

    Toute entrée invalide lève une RequestValidationError avec le texte brut.
    """
    try:
        declarations = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise RequestValidationError(f"Invalid volume mount '{raw}': {e}", raw_value=raw) from e

    if declarations is None:
        return []
    if not isinstance(declarations, list):
        raise RequestValidationError(f"Invalid volume mount '{raw}': expected a list", raw_value=raw)

    try:
        return _volume_mounts_adapter.validate_python(declarations)
    except ValidationError as e:
        raise RequestValidationError(f"Invalid volume mount '{raw}': {e}", raw_value=raw) from e


def get_volume_mounts(resolver: PropertyResolver) -> List[VolumeMount]:
    """
    Points de montage du déploiement suivis de ceux du déployeur non redéfinis.
    À nom égal, la déclaration du déploiement l'emporte.
    """
    raw = resolver.deployment_value(VOLUME_MOUNTS)
    deployment_mounts = parse_volume_mounts(raw) if raw and raw.strip() else []
    if deployment_mounts:
        logger.debug(f"Points de montage du déploiement: {[vm.name for vm in deployment_mounts]}")
    return merge_by_name(deployment_mounts, resolver.properties.volume_mounts, first_wins=True)
