from pydantic_settings import BaseSettings
from dotenv import load_dotenv
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

root_dir = Path(__file__).parent.parent
env_path = root_dir / ".env"
load_dotenv(env_path)

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Kubernetes App Deployer"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Attente du statut après un déploiement
    STATUS_MAX_ATTEMPTS: int = 60
    STATUS_PAUSE_SECONDS: float = 10.0

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'
        extra = "ignore"
        case_sensitive = True

try:
    settings = Settings()
except Exception as e:
    logger.error(f"Impossible de charger la configuration: {e}")
    raise
