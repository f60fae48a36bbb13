import os
from typing import List

import httpx
import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock

from ebird_connectors.core.http_client import HTTPClient
from ebird_connectors.core.httpx_client import AsyncHTTPClient
from ebird_connectors.ebird.api_client import AsyncEBirdClient
from ebird_connectors.ebird.api_server import app, get_ebird_client

TEST_BASE_URL = "http://ebird.test/ws1.1/data"
TEST_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "test_data")


def load_text(filename: str) -> str:
    """Charge un fichier de réponse brute depuis tests/ebird/test_data/"""
    with open(os.path.join(TEST_DATA_DIR, filename), "r", encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def observations_body() -> str:
    return load_text("recent_nearby_bangalore.json")


@pytest.fixture
def error_body() -> str:
    return load_text("error_bad_request.json")


@pytest.fixture
def mock_http():
    """Transport bloquant simulé : http.get(url) -> corps brut."""
    return Mock(spec=HTTPClient)


# --- Transport httpx simulé (client asynchrone / façade FastAPI) ---

class FakeEBird:
    """
    Simule le service eBird derrière un httpx.MockTransport.
    `body` / `status_code` sont retournés tels quels ; `error` est levée à la place.
    """

    def __init__(self):
        self.body = "[]"
        self.status_code = 200
        self.error = None
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error("Simulated network loss", request=request)
        return httpx.Response(self.status_code, text=self.body)

    def client(self) -> AsyncEBirdClient:
        transport = httpx.MockTransport(self.handler)
        return AsyncEBirdClient(base_url=TEST_BASE_URL, http_client=AsyncHTTPClient(transport=transport))


@pytest.fixture
def fake_ebird() -> FakeEBird:
    return FakeEBird()


@pytest.fixture
def client(fake_ebird):
    """
    Client synchrone pour l'application FastAPI, avec la dépendance
    get_ebird_client remplacée par un client branché sur FakeEBird.
    """
    async def override_get_ebird_client():
        async with fake_ebird.client() as ebird:
            yield ebird

    app.dependency_overrides[get_ebird_client] = override_get_ebird_client

    yield TestClient(app)

    # Rétablit l'original
    app.dependency_overrides.pop(get_ebird_client)
