from enum import Enum
from pydantic import BaseModel
from typing import Dict, List


class DeploymentState(str, Enum):
    deploying = "deploying"
    deployed = "deployed"
    undeploying = "undeploying"
    undeployed = "undeployed"
    partial = "partial"
    failed = "failed"
    error = "error"
    unknown = "unknown"


class AppInstanceStatus(BaseModel):
    id: str
    state: DeploymentState
    attributes: Dict[str, str] = {}


class AppStatus(BaseModel):
    deployment_id: str
    instances: List[AppInstanceStatus] = []

    @property
    def state(self) -> DeploymentState:
        """Agrège l'état des instances en un état global"""
        if not self.instances:
            return DeploymentState.unknown

        states = {instance.state for instance in self.instances}
        if len(states) == 1:
            return next(iter(states))
        if DeploymentState.error in states:
            return DeploymentState.error
        if DeploymentState.deploying in states:
            return DeploymentState.deploying
        if DeploymentState.deployed in states or DeploymentState.partial in states:
            return DeploymentState.partial
        if DeploymentState.failed in states:
            return DeploymentState.failed
        return DeploymentState.partial
