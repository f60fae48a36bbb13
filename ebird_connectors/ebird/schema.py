from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List


# --- Schéma d'une observation eBird 1.1 ---
# Les clés JSON (camelCase) sont mappées par alias ; les champs inconnus
# (subID, obsID, ... selon detail=full) sont conservés tels quels.

class ObservationModel(BaseModel):
    """Une observation d'espèce retournée par le service eBird."""
    common_name: str                = Field(..., alias="comName", description="Nom commun de l'espèce")
    scientific_name: str            = Field(..., alias="sciName", description="Nom scientifique de l'espèce")
    location_id: str                = Field(..., alias="locID", description="Identifiant du lieu (ex: L99381)")
    location_name: str              = Field(..., alias="locName", description="Nom du lieu")
    observation_date: str           = Field(..., alias="obsDt", description="Date de l'observation (AAAA-MM-JJ HH:MM)")
    how_many: Optional[int]         = Field(None, alias="howMany", description="Nombre d'individus (absent si 'X')")
    lat: float                      = Field(..., description="latitude")
    lng: float                      = Field(..., description="longitude")
    valid: Optional[bool]           = Field(None, alias="obsValid", description="Observation validée")
    reviewed: Optional[bool]        = Field(None, alias="obsReviewed", description="Observation revue par un modérateur")
    location_private: Optional[bool] = Field(None, alias="locationPrivate", description="Lieu privé (non hotspot)")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ObservationListModel(BaseModel):
    """Réponse de la façade HTTP."""
    count: int                          = Field(..., description="Nombre d'observations")
    observations: List[ObservationModel] = Field(..., description="Observations retournées par eBird")
