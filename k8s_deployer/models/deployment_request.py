from pydantic import BaseModel
from typing import Dict, List, Optional

GROUP_PROPERTY_KEY = "spring.cloud.deployer.group"


class DeploymentRequest(BaseModel):
    """Demande de déploiement d'une application, indépendante de la plateforme"""
    app_id: str
    # Localisation de l'artefact, ex: docker:springcloud/app:latest
    resource: str
    properties: Dict[str, str] = {}
    deployment_properties: Dict[str, str] = {}
    command_line_args: List[str] = []
    instance_index: Optional[int] = None

    class Config:
        frozen = True

    @property
    def group(self) -> Optional[str]:
        return self.deployment_properties.get(GROUP_PROPERTY_KEY)

    def with_instance_index(self, instance_index: Optional[int]) -> "DeploymentRequest":
        return self.model_copy(update={"instance_index": instance_index})
