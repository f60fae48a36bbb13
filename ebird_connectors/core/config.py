# ebird_connectors/core/config.py

from dotenv import load_dotenv
import os

load_dotenv()

DEFAULT_EBIRD_BASE_URL = "http://ebird.org/ws1.1/data"
DEFAULT_HTTP_TIMEOUT = 10.0


def get_ebird_base_url() -> str:
    """URL de base du service eBird (sans slash final)."""
    return os.getenv("EBIRD_BASE_URL", DEFAULT_EBIRD_BASE_URL).rstrip("/")


def get_http_timeout() -> float:
    raw = os.getenv("EBIRD_HTTP_TIMEOUT")
    if raw is None or raw.strip() == "":
        return DEFAULT_HTTP_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise RuntimeError(f"EBIRD_HTTP_TIMEOUT invalide : '{raw}' (nombre de secondes attendu).")
    if timeout <= 0:
        raise RuntimeError(f"EBIRD_HTTP_TIMEOUT invalide : {timeout} (doit être strictement positif).")
    return timeout
