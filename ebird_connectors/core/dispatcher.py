# ebird_connectors/core/dispatcher.py

import json
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from ebird_connectors.core.config import get_ebird_base_url
from ebird_connectors.core.exceptions import NetworkOrServerError
from ebird_connectors.core.http_client import HTTPClient
from ebird_connectors.core.httpx_client import AsyncHTTPClient
from ebird_connectors.core.logger import get_logger
from ebird_connectors.core.outcome import (
    ApiError,
    ErrorItemModel,
    MalformedResponse,
    RequestOutcome,
    Success,
    TransportFailure,
)
from ebird_connectors.core.utils import build_query_string, compose_url

logger = get_logger(__name__)

OUTPUT_FORMAT = "json"
ERROR_MARKER = "errormsg"
MALFORMED_RESPONSE = "malformed_response"


def classify_response(body: str) -> RequestOutcome:
    """
    Classe le corps brut d'une réponse :
     - contient 'errorMsg' (insensible à la casse) -> ApiError, ou MalformedResponse si illisible
     - sinon -> Success avec le corps intact

    La détection est une simple recherche de sous-chaîne : une observation valide
    dont un champ contient 'errorMsg' est aussi traitée comme une enveloppe d'erreur.
    """
    if ERROR_MARKER not in body.lower():
        return Success(payload=body)

    try:
        errors = json.loads(body)
    except (ValueError, RecursionError) as e:
        return MalformedResponse(message=f"Enveloppe d'erreur non JSON: {e}", body=body)

    if not isinstance(errors, list) or len(errors) == 0:
        return MalformedResponse(message="Enveloppe d'erreur invalide : tableau non vide attendu.", body=body)

    try:
        first = ErrorItemModel.model_validate(errors[0])
    except ValidationError as e:
        return MalformedResponse(message=f"Enveloppe d'erreur invalide : {e.error_count()} champ(s) en erreur.", body=body)

    return ApiError(code=first.error_code, message=first.error_msg)


class DispatcherState:
    """
    Dernière erreur observée par un dispatcher.

    Etat partagé non synchronisé : à lire juste après un appel, et jamais
    depuis plusieurs threads / tâches. Le résultat retourné par dispatch()
    reste la source fiable.
    """

    def __init__(self):
        self.last_error: Optional[str] = None
        self.last_error_message: str = ""

    def record(self, outcome: RequestOutcome):
        if isinstance(outcome, TransportFailure):
            # le message n'est pas modifié sur une erreur de transport
            self.last_error = outcome.message
        elif isinstance(outcome, ApiError):
            self.last_error = outcome.code
            self.last_error_message = outcome.message
        elif isinstance(outcome, MalformedResponse):
            self.last_error = MALFORMED_RESPONSE
            self.last_error_message = outcome.message
        else:
            self.last_error = None
            self.last_error_message = ""


class BaseDispatcher:
    """Construction des URL et suivi de l'état, communs aux dispatchers bloquant et asynchrone."""

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or get_ebird_base_url()).rstrip("/")
        self.state = DispatcherState()

    def build_url(self, path: str, options: Optional[Mapping[str, Any]] = None) -> str:
        # copie : le mapping de l'appelant n'est jamais modifié
        params: Dict[str, Any] = dict(options or {})
        params["fmt"] = OUTPUT_FORMAT
        return compose_url(self.base_url, path, build_query_string(params))

    def _transport_failure(self, error: NetworkOrServerError) -> RequestOutcome:
        outcome = TransportFailure(message=str(error))
        self.state.record(outcome)
        return outcome

    def _classify(self, url: str, body: str) -> RequestOutcome:
        outcome = classify_response(body)
        if isinstance(outcome, ApiError):
            logger.warning(f"eBird error on {url}: {outcome.code} {outcome.message}")
        elif isinstance(outcome, MalformedResponse):
            logger.warning(f"Réponse eBird illisible on {url}: {outcome.message}")
        self.state.record(outcome)
        return outcome


class RequestDispatcher(BaseDispatcher):
    """
    Appel bloquant du service eBird.

    dispatch(path, options) ajoute fmt=json, sérialise les options, compose
    l'URL, effectue le GET et retourne un RequestOutcome. Aucune exception
    n'est levée pour les erreurs de transport ou de service.
    """

    def __init__(self, base_url: Optional[str] = None, http_client: Optional[HTTPClient] = None):
        super().__init__(base_url)
        # HTTPClient wrapper (testable / injectable)
        self.http = http_client if http_client is not None else HTTPClient()

    def dispatch(self, path: str, options: Optional[Mapping[str, Any]] = None) -> RequestOutcome:
        url = self.build_url(path, options)
        try:
            body = self.http.get(url)
        except NetworkOrServerError as e:
            return self._transport_failure(e)
        return self._classify(url, body)


class AsyncRequestDispatcher(BaseDispatcher):
    """Même contrat que RequestDispatcher, sous forme de coroutine (httpx)."""

    def __init__(self, base_url: Optional[str] = None, http_client: Optional[AsyncHTTPClient] = None):
        super().__init__(base_url)
        self.http = http_client if http_client is not None else AsyncHTTPClient()

    async def dispatch(self, path: str, options: Optional[Mapping[str, Any]] = None) -> RequestOutcome:
        url = self.build_url(path, options)
        try:
            body = await self.http.get(url)
        except NetworkOrServerError as e:
            return self._transport_failure(e)
        return self._classify(url, body)

    async def aclose(self):
        await self.http.aclose()
