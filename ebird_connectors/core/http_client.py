import requests
from typing import Optional
from .config import get_http_timeout
from .exceptions import NetworkOrServerError
from .logger import get_logger

logger = get_logger(__name__)


class HTTPClient:
    """Transport HTTP bloquant basé sur requests. Retourne le corps brut, quel que soit le statut."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else get_http_timeout()

    def get(self, url: str) -> str:
        logger.debug(f"➡️ GET {url}")
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Requests Error on {url}: {e}")
            raise NetworkOrServerError(f"Erreur de transport: {e}") from e

        logger.debug(f"⬅️ Response {response.status_code}: {response.text[:300]}")
        return response.text
