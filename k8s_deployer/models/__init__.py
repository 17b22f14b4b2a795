from .container_spec import ContainerSpec, ContainerPort, EnvVar, HttpProbe, VolumeMount
from .entry_point_style import EntryPointStyle
from .deployer_properties import DeployerProperties
from .deployment_request import DeploymentRequest
from .deployment_state import DeploymentState, AppInstanceStatus, AppStatus

__all__ = [
    "ContainerSpec", "ContainerPort", "EnvVar", "HttpProbe", "VolumeMount",
    "EntryPointStyle", "DeployerProperties", "DeploymentRequest",
    "DeploymentState", "AppInstanceStatus", "AppStatus"
]
