import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from kubernetes.client.rest import ApiException

from k8s_deployer.core.exceptions import (
    AppAlreadyDeployedError,
    ConfigurationError,
    RequestValidationError,
    ResourceResolutionError
)

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:
    """Traduit les erreurs du déployeur en réponses HTTP"""

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.error(f"Erreur de configuration: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "configuration_error", "detail": str(exc)}
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Demande de déploiement invalide: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "invalid_request", "detail": str(exc), "raw_value": exc.raw_value}
        )

    @app.exception_handler(ResourceResolutionError)
    async def resource_resolution_error_handler(request: Request, exc: ResourceResolutionError):
        logger.warning(f"Ressource non résolue: {exc.resource}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "unresolvable_resource", "detail": str(exc), "resource": exc.resource}
        )

    @app.exception_handler(AppAlreadyDeployedError)
    async def already_deployed_handler(request: Request, exc: AppAlreadyDeployedError):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"error": "already_deployed", "detail": str(exc)}
        )

    @app.exception_handler(ApiException)
    async def kubernetes_error_handler(request: Request, exc: ApiException):
        logger.error(f"Erreur de l'API Kubernetes: {exc.status} {exc.reason}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"error": "kubernetes_error", "detail": f"{exc.status} {exc.reason}"}
        )
