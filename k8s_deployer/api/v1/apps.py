from fastapi import APIRouter, Depends, status
from starlette.concurrency import run_in_threadpool

from k8s_deployer.api.schemas.apps import (
    AppStatusResponse,
    DeployRequest,
    DeployResponse,
    PreviewRequest,
    UndeployResponse
)
from k8s_deployer.config import settings
from k8s_deployer.core.container_factory import ContainerFactory
from k8s_deployer.dependencies import get_app_deployer, get_container_factory
from k8s_deployer.models.container_spec import ContainerSpec
from k8s_deployer.models.deployment_request import DeploymentRequest
from k8s_deployer.models.deployment_state import DeploymentState
from k8s_deployer.services.app_deployer import KubernetesAppDeployer
from k8s_deployer.services.status_service import wait_for_state

router = APIRouter(prefix="/apps", tags=["apps"])

TERMINAL_STATES = {DeploymentState.deployed, DeploymentState.failed, DeploymentState.error}


@router.post("", response_model=DeployResponse, status_code=status.HTTP_201_CREATED)
async def deploy(
    payload: DeployRequest,
    wait: bool = False,
    deployer: KubernetesAppDeployer = Depends(get_app_deployer)
):
    """Déploie une application, en attendant éventuellement un état stable"""
    request = DeploymentRequest(**payload.model_dump())
    deployment_id = await run_in_threadpool(deployer.deploy, request)
    if wait:
        state = await wait_for_state(
            deployer,
            deployment_id,
            TERMINAL_STATES,
            max_attempts=settings.STATUS_MAX_ATTEMPTS,
            pause=settings.STATUS_PAUSE_SECONDS
        )
    else:
        state = DeploymentState.deploying
    return DeployResponse(deployment_id=deployment_id, state=state)


@router.post("/preview", response_model=ContainerSpec, response_model_by_alias=False)
async def preview(
    payload: PreviewRequest,
    factory: ContainerFactory = Depends(get_container_factory)
):
    """Compile la demande sans rien créer dans le cluster"""
    request = DeploymentRequest(**payload.model_dump(exclude={"port", "host_network"}))
    return factory.create(request, payload.port, payload.host_network)


@router.get("/{deployment_id}/status", response_model=AppStatusResponse)
async def get_status(
    deployment_id: str,
    deployer: KubernetesAppDeployer = Depends(get_app_deployer)
):
    """Récupère l'état agrégé d'un déploiement et de ses instances"""
    app_status = await run_in_threadpool(deployer.status, deployment_id)
    return AppStatusResponse(
        deployment_id=app_status.deployment_id,
        state=app_status.state,
        instances=[instance.model_dump() for instance in app_status.instances]
    )


@router.delete("/{deployment_id}", response_model=UndeployResponse)
async def undeploy(
    deployment_id: str,
    deployer: KubernetesAppDeployer = Depends(get_app_deployer)
):
    """Supprime un déploiement"""
    await run_in_threadpool(deployer.undeploy, deployment_id)
    return UndeployResponse(deployment_id=deployment_id, message="Undeploy requested")
