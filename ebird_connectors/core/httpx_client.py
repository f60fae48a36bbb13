import httpx
from typing import Optional
from .config import get_http_timeout
from .exceptions import NetworkOrServerError
from .logger import get_logger

logger = get_logger(__name__)


class AsyncHTTPClient:
    """Client HTTP asynchrone basé sur httpx pour les appels au service eBird."""

    def __init__(self, timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout if timeout is not None else get_http_timeout()
        # transport injectable (httpx.MockTransport dans les tests)
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def get(self, url: str) -> str:
        logger.debug(f"➡️ GET {url}")

        try:
            response = await self._client.get(url)

        except httpx.HTTPError as e:
            # Erreurs de connexion/timeout de httpx
            logger.error(f"HTTPX Error on {url}: {e}")
            raise NetworkOrServerError(f"Erreur HTTPX: {e}") from e

        # Pas de traitement particulier des statuts 4xx / 5xx : le corps est classé par le dispatcher
        logger.debug(f"⬅️ Response {response.status_code}: {response.text[:300]}")
        return response.text

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        """Ouverture du client pour le context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Fermeture propre de la connexion."""
        await self.aclose()
