from pydantic import BaseModel
from typing import Dict, List, Optional

from k8s_deployer.models.deployment_state import DeploymentState


class DeployRequest(BaseModel):
    app_id: str
    resource: str
    properties: Dict[str, str] = {}
    deployment_properties: Dict[str, str] = {}
    command_line_args: List[str] = []


class PreviewRequest(DeployRequest):
    port: Optional[int] = None
    host_network: bool = False
    instance_index: Optional[int] = None


class DeployResponse(BaseModel):
    deployment_id: str
    state: DeploymentState


class InstanceStatusResponse(BaseModel):
    id: str
    state: DeploymentState
    attributes: Dict[str, str]


class AppStatusResponse(BaseModel):
    deployment_id: str
    state: DeploymentState
    instances: List[InstanceStatusResponse]


class UndeployResponse(BaseModel):
    deployment_id: str
    message: str
