from fastapi import FastAPI
import logging
import uvicorn
from contextlib import asynccontextmanager

from k8s_deployer.api.errors import setup_exception_handlers
from k8s_deployer.api.router import router
from k8s_deployer.config import settings
from k8s_deployer.core.logging import setup_logging_from_settings

setup_logging_from_settings(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Démarrage de {settings.APP_NAME}...")
    yield
    logger.info("Application arrêtée proprement")

app = FastAPI(
    title=settings.APP_NAME,
    description="API de déploiement d'applications sur Kubernetes",
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan
)

setup_exception_handlers(app)
app.include_router(router)


if __name__ == "__main__":
    uvicorn.run("k8s_deployer.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
