import logging
import os
from dotenv import load_dotenv

# charge immédiatement le .env
load_dotenv()

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level() -> str:
    """EBIRD_LOG_LEVEL prime sur LOG_LEVEL ; un niveau inconnu retombe sur INFO."""
    level = (os.getenv("EBIRD_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level


def get_logger(name: str) -> logging.Logger:
    """
    Retourne le logger du module, configuré une seule fois :
    sortie console au format 'date | niveau | module | message'.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    log_level = _resolve_level()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(log_level)

    logger.debug(f"Logger eBird initialisé pour '{name}' (level={log_level})")
    return logger
