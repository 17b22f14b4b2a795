import asyncio
import logging
from typing import Any, Dict, Iterable

from k8s_deployer.models.deployer_properties import DeployerProperties
from k8s_deployer.models.deployment_state import AppInstanceStatus, AppStatus, DeploymentState

logger = logging.getLogger(__name__)

CRASH_LOOP_BACK_OFF = "CrashLoopBackOff"


def map_pod_state(pod: Dict[str, Any], properties: DeployerProperties) -> DeploymentState:
    """Traduit la phase d'un pod et l'état de ses conteneurs en état de déploiement"""
    phase = pod.get("phase")
    if phase == "Pending":
        return DeploymentState.deploying
    if phase == "Failed":
        return DeploymentState.failed
    if phase != "Running":
        return DeploymentState.unknown

    containers = pod.get("containers", [])
    if not containers:
        return DeploymentState.deploying

    # Un seul conteneur applicatif par pod
    container = containers[0]
    if container.get("ready"):
        return DeploymentState.deployed

    restart_count = container.get("restart_count", 0)
    if (container.get("waiting_reason") == CRASH_LOOP_BACK_OFF
            and restart_count > properties.max_crash_loop_back_off_restarts):
        return DeploymentState.failed

    exit_code = container.get("last_exit_code")
    if exit_code not in (None, 0) and restart_count > properties.max_terminated_error_restarts:
        return DeploymentState.failed

    return DeploymentState.deploying


def build_app_status(deployment_id: str, pods: Iterable[Dict[str, Any]],
                     properties: DeployerProperties) -> AppStatus:
    instances = []
    for pod in pods:
        containers = pod.get("containers", [])
        attributes = {
            "pod.name": pod.get("name", ""),
            "pod.phase": str(pod.get("phase")),
        }
        if pod.get("host_ip"):
            attributes["host.ip"] = pod["host_ip"]
        if pod.get("pod_ip"):
            attributes["pod.ip"] = pod["pod_ip"]
        if containers:
            attributes["container.restartCount"] = str(containers[0].get("restart_count", 0))
        instances.append(AppInstanceStatus(
            id=pod.get("name", ""),
            state=map_pod_state(pod, properties),
            attributes=attributes
        ))
    return AppStatus(deployment_id=deployment_id, instances=instances)


async def wait_for_state(deployer, deployment_id: str, expected: Iterable[DeploymentState],
                         max_attempts: int = 60, pause: float = 10.0) -> DeploymentState:
    """
    Interroge le statut jusqu'à obtenir un des états attendus.

    Après max_attempts, retourne le dernier état observé sans lever d'erreur :
    le statut reste simplement non résolu.
    """
    expected = set(expected)
    state = DeploymentState.unknown
    for attempt in range(1, max_attempts + 1):
        status = await asyncio.to_thread(deployer.status, deployment_id)
        state = status.state
        if state in expected:
            logger.info(f"{deployment_id} dans l'état {state.value} après {attempt} tentative(s)")
            return state
        if attempt < max_attempts:
            await asyncio.sleep(pause)

    logger.warning(
        f"{deployment_id} toujours dans l'état {state.value} après {max_attempts} tentatives"
    )
    return state
