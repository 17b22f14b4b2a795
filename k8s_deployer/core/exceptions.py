from typing import Optional


class DeployerError(Exception):
    """Erreur de base du déployeur"""


class ConfigurationError(DeployerError):
    """Configuration du déployeur invalide ou incohérente"""


class RequestValidationError(DeployerError):
    """Déclaration invalide dans une demande de déploiement"""

    def __init__(self, message: str, raw_value: Optional[str] = None):
        super().__init__(message)
        self.raw_value = raw_value


class ResourceResolutionError(DeployerError):
    """L'artefact de la demande ne peut pas être résolu en image"""

    def __init__(self, resource: str):
        super().__init__(f"Unable to resolve image reference for resource '{resource}'")
        self.resource = resource


class AppAlreadyDeployedError(DeployerError):
    def __init__(self, deployment_id: str, state: str):
        super().__init__(f"App '{deployment_id}' is already deployed with state '{state}'")
        self.deployment_id = deployment_id
        self.state = state
