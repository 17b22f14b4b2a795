from fastapi import APIRouter
from k8s_deployer.api.v1 import apps
from k8s_deployer.config import settings

router = APIRouter()

router.include_router(apps.router, prefix="/api/v1")

@router.get("/")
async def root():
    return {
        "message": settings.APP_NAME,
        "version": "0.1.0",
        "docs": "/docs",
        "apps": "/api/v1/apps"
    }

@router.get("/health")
async def health():
    return {"status": "healthy"}
