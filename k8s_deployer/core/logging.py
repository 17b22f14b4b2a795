import logging
import sys
from typing import List, Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers tiers ramenés à un niveau fixe, quel que soit le niveau racine
QUIET_LOGGERS = {
    "kubernetes": logging.WARNING,
    "urllib3": logging.WARNING,
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.INFO,
}

# Marqueur posé sur les handlers installés ici, pour pouvoir les remplacer
_HANDLER_MARKER = "_k8s_deployer_handler"


def _installed_handlers(logger: logging.Logger) -> List[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, _HANDLER_MARKER, False)]


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    log_file: Optional[str] = None
) -> None:
    """
    Configure le logging du déployeur sur le logger racine.

    Peut être appelée plusieurs fois (rechargement, tests) : les handlers posés
    par un appel précédent sont retirés avant d'installer les nouveaux.

    Args:
        level: Niveau de log (DEBUG, INFO, WARNING, ERROR, CRITICAL), inconnu -> INFO
        format_string: Format personnalisé pour les logs
        log_file: Fichier de log optionnel, en plus de la sortie standard
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers(root_logger):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARKER, True)
        root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name, logger_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(logger_level)


def setup_logging_from_settings(settings) -> None:
    """Raccourci utilisé au démarrage de l'API"""
    setup_logging(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
