# ebird_connectors/core/outcome.py

import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ebird_connectors.core.exceptions import (
    MalformedResponseError,
    NetworkOrServerError,
    ServiceError,
)


# --- Enveloppe d'erreur eBird : [{"errorCode": ..., "errorMsg": ...}, ...] ---

class ErrorItemModel(BaseModel):
    """Premier élément d'une enveloppe d'erreur retournée par eBird."""
    error_code: str = Field(..., alias="errorCode")
    error_msg: str = Field(..., alias="errorMsg")

    # errorCode arrive parfois sous forme d'entier
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


# --- Résultats d'un appel au service ---
# Chaque appel retourne une de ces valeurs : les erreurs ne sont pas levées
# par le dispatcher, c'est à l'appelant de choisir (ok / unwrap).


class Success(BaseModel):
    """Réponse valide : le corps brut, sans aucune transformation."""
    kind: Literal["success"] = "success"
    payload: str = Field(..., description="Corps brut de la réponse (JSON non décodé)")

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> str:
        return self.payload

    def decode(self) -> Any:
        """Décode le payload JSON."""
        return json.loads(self.payload)


class TransportFailure(BaseModel):
    """Echec du transport HTTP (connexion, DNS, timeout, TLS)."""
    kind: Literal["transport_failure"] = "transport_failure"
    message: str = Field(..., description="Description de l'erreur du transport")

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> str:
        raise NetworkOrServerError(self.message)


class ApiError(BaseModel):
    """Le service a répondu avec une enveloppe d'erreur. Jamais de payload."""
    kind: Literal["api_error"] = "api_error"
    code: str = Field(..., description="errorCode retourné par eBird")
    message: str = Field(..., description="errorMsg retourné par eBird")
    payload: None = None

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> str:
        raise ServiceError(self.code, self.message)


class MalformedResponse(BaseModel):
    """Le corps contient 'errorMsg' mais n'est pas une enveloppe d'erreur lisible."""
    kind: Literal["malformed_response"] = "malformed_response"
    message: str = Field(..., description="Raison de l'échec du parsing")
    body: str = Field(..., description="Corps brut reçu")

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> str:
        raise MalformedResponseError(self.message)


RequestOutcome = Annotated[
    Union[Success, TransportFailure, ApiError, MalformedResponse],
    Field(discriminator="kind"),
]
