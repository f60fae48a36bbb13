# Fichier: ebird_connectors/ebird/api_server.py

from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Depends, HTTPException, Query, status

from ebird_connectors.core.exceptions import MalformedResponseError, NetworkOrServerError, ServiceError
from ebird_connectors.core.logger import get_logger
from ebird_connectors.core.outcome import RequestOutcome
from ebird_connectors.ebird.api_client import AsyncEBirdClient
from ebird_connectors.ebird.schema import ObservationListModel
from ebird_connectors.ebird.service import ObservationService

log = get_logger(__name__)


# --- Initialisation de l'application FastAPI ---

app = FastAPI(
    title="eBird Connectors - Observation Service",
    description="Façade HTTP pour les observations récentes de l'API eBird 1.1.",
    version="0.1.0",
)


async def get_ebird_client() -> AsyncGenerator[AsyncEBirdClient, None]:
    """Fournit un client eBird asynchrone, fermé à la fin de la requête."""
    async with AsyncEBirdClient() as client:
        yield client


def _to_response(outcome: RequestOutcome) -> ObservationListModel:
    """Traduit un RequestOutcome en réponse HTTP (ou HTTPException)."""
    try:
        observations = ObservationService.observations_from_outcome(outcome)

    except NetworkOrServerError as e:
        log.warning(f"Connection error to eBird API: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Service eBird non disponible. Message: {e}"
        )

    except ServiceError as e:
        log.warning(f"eBird error {e.code}: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": e.code, "message": e.message}
        )

    except MalformedResponseError as e:
        log.error(f"Réponse eBird illisible: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Réponse eBird illisible: {e}"
        )

    return ObservationListModel(count=len(observations), observations=observations)


def _invalid_arguments(e: ValueError) -> HTTPException:
    log.info(f"Paramètres invalides: {e}")
    return HTTPException(status_code=422, detail=str(e))


# --- Observations autour d'un point ---

@app.get("/observations/recent", response_model=ObservationListModel,
         summary="Observations récentes autour d'un point.")
async def recent_nearby_observations(
        lat: float = Query(..., description="Latitude en degrés décimaux"),
        lng: float = Query(..., description="Longitude en degrés décimaux"),
        back: Optional[int] = Query(None, description="Nombre de jours (1-30)"),
        max_results: Optional[int] = Query(None, alias="maxResults", description="Nombre maximum de résultats"),
        client: AsyncEBirdClient = Depends(get_ebird_client),
):
    try:
        outcome = await client.recent_nearby_observations(lat, lng, back=back, maxResults=max_results)
    except ValueError as e:
        raise _invalid_arguments(e)
    return _to_response(outcome)


@app.get("/observations/species/recent", response_model=ObservationListModel,
         summary="Observations récentes d'une espèce autour d'un point.")
async def recent_nearby_observations_of_species(
        lat: float = Query(..., description="Latitude en degrés décimaux"),
        lng: float = Query(..., description="Longitude en degrés décimaux"),
        sci: str = Query(..., description="Nom scientifique (ex: 'Columba livia')"),
        back: Optional[int] = Query(None, description="Nombre de jours (1-30)"),
        max_results: Optional[int] = Query(None, alias="maxResults", description="Nombre maximum de résultats"),
        client: AsyncEBirdClient = Depends(get_ebird_client),
):
    try:
        outcome = await client.recent_nearby_observations_of_species(lat, lng, sci, back=back,
                                                                     maxResults=max_results)
    except ValueError as e:
        raise _invalid_arguments(e)
    return _to_response(outcome)


@app.get("/notable/recent", response_model=ObservationListModel,
         summary="Observations remarquables autour d'un point.")
async def recent_nearby_notable_observations(
        lat: float = Query(..., description="Latitude en degrés décimaux"),
        lng: float = Query(..., description="Longitude en degrés décimaux"),
        back: Optional[int] = Query(None, description="Nombre de jours (1-30)"),
        max_results: Optional[int] = Query(None, alias="maxResults", description="Nombre maximum de résultats"),
        client: AsyncEBirdClient = Depends(get_ebird_client),
):
    try:
        outcome = await client.recent_nearby_notable_observations(lat, lng, back=back, maxResults=max_results)
    except ValueError as e:
        raise _invalid_arguments(e)
    return _to_response(outcome)


@app.get("/nearest/species", response_model=ObservationListModel,
         summary="Lieux les plus proches avec observations d'une espèce.")
async def nearest_locations_with_species(
        lat: float = Query(..., description="Latitude en degrés décimaux"),
        lng: float = Query(..., description="Longitude en degrés décimaux"),
        sci: str = Query(..., description="Nom scientifique (ex: 'Columba livia')"),
        back: Optional[int] = Query(None, description="Nombre de jours (1-30)"),
        max_results: Optional[int] = Query(None, alias="maxResults", description="Nombre de lieux retournés"),
        client: AsyncEBirdClient = Depends(get_ebird_client),
):
    try:
        outcome = await client.nearest_locations_with_species(lat, lng, sci, back=back, maxResults=max_results)
    except ValueError as e:
        raise _invalid_arguments(e)
    return _to_response(outcome)


# --- Observations par région / hotspot ---

@app.get("/observations/region/{region_id}/recent", response_model=ObservationListModel,
         summary="Observations récentes dans une région (ex: US-NY).")
async def recent_observations_in_region(
        region_id: str,
        back: Optional[int] = Query(None, description="Nombre de jours (1-30)"),
        max_results: Optional[int] = Query(None, alias="maxResults", description="Nombre maximum de résultats"),
        client: AsyncEBirdClient = Depends(get_ebird_client),
):
    outcome = await client.recent_observations_in_region(region_id, back=back, maxResults=max_results)
    return _to_response(outcome)


@app.get("/observations/hotspot/{hotspot_id}/recent", response_model=ObservationListModel,
         summary="Observations récentes sur un hotspot (ex: L99381).")
async def recent_observations_at_hotspot(
        hotspot_id: str,
        back: Optional[int] = Query(None, description="Nombre de jours (1-30)"),
        max_results: Optional[int] = Query(None, alias="maxResults", description="Nombre maximum de résultats"),
        client: AsyncEBirdClient = Depends(get_ebird_client),
):
    outcome = await client.recent_observations_at_hotspot(hotspot_id, back=back, maxResults=max_results)
    return _to_response(outcome)


@app.get("/observations/location/{location_id}/recent", response_model=ObservationListModel,
         summary="Observations récentes sur un lieu (ex: L2424578).")
async def recent_observations_at_location(
        location_id: str,
        back: Optional[int] = Query(None, description="Nombre de jours (1-30)"),
        max_results: Optional[int] = Query(None, alias="maxResults", description="Nombre maximum de résultats"),
        client: AsyncEBirdClient = Depends(get_ebird_client),
):
    outcome = await client.recent_observations_at_location(location_id, back=back, maxResults=max_results)
    return _to_response(outcome)


# --- Observations d'une espèce par région / hotspot / lieu ---

@app.get("/observations/region/{region_id}/species/recent", response_model=ObservationListModel,
         summary="Observations récentes d'une espèce dans une région.")
async def recent_observations_of_species_in_region(
        region_id: str,
        sci: str = Query(..., description="Nom scientifique (ex: 'Columba livia')"),
        back: Optional[int] = Query(None, description="Nombre de jours (1-30)"),
        max_results: Optional[int] = Query(None, alias="maxResults", description="Nombre maximum de résultats"),
        client: AsyncEBirdClient = Depends(get_ebird_client),
):
    outcome = await client.recent_observations_of_species_in_region(region_id, sci, back=back,
                                                                    maxResults=max_results)
    return _to_response(outcome)


@app.get("/observations/hotspot/{hotspot_id}/species/recent", response_model=ObservationListModel,
         summary="Observations récentes d'une espèce sur un hotspot.")
async def recent_observations_of_species_at_hotspot(
        hotspot_id: str,
        sci: str = Query(..., description="Nom scientifique (ex: 'Columba livia')"),
        back: Optional[int] = Query(None, description="Nombre de jours (1-30)"),
        max_results: Optional[int] = Query(None, alias="maxResults", description="Nombre maximum de résultats"),
        client: AsyncEBirdClient = Depends(get_ebird_client),
):
    outcome = await client.recent_observations_of_species_at_hotspot(hotspot_id, sci, back=back,
                                                                     maxResults=max_results)
    return _to_response(outcome)


@app.get("/observations/location/{location_id}/species/recent", response_model=ObservationListModel,
         summary="Observations récentes d'une espèce sur un lieu.")
async def recent_observations_of_species_at_location(
        location_id: str,
        sci: str = Query(..., description="Nom scientifique (ex: 'Columba livia')"),
        back: Optional[int] = Query(None, description="Nombre de jours (1-30)"),
        max_results: Optional[int] = Query(None, alias="maxResults", description="Nombre maximum de résultats"),
        client: AsyncEBirdClient = Depends(get_ebird_client),
):
    outcome = await client.recent_observations_of_species_at_location(location_id, sci, back=back,
                                                                      maxResults=max_results)
    return _to_response(outcome)


# --- Observations remarquables par région / hotspot / lieu ---

@app.get("/notable/region/{region_id}/recent", response_model=ObservationListModel,
         summary="Observations remarquables dans une région.")
async def recent_notable_observations_in_region(
        region_id: str,
        back: Optional[int] = Query(None, description="Nombre de jours (1-30)"),
        max_results: Optional[int] = Query(None, alias="maxResults", description="Nombre maximum de résultats"),
        client: AsyncEBirdClient = Depends(get_ebird_client),
):
    outcome = await client.recent_notable_observations_in_region(region_id, back=back, maxResults=max_results)
    return _to_response(outcome)


@app.get("/notable/hotspot/{hotspot_id}/recent", response_model=ObservationListModel,
         summary="Observations remarquables sur un hotspot.")
async def recent_notable_observations_at_hotspot(
        hotspot_id: str,
        back: Optional[int] = Query(None, description="Nombre de jours (1-30)"),
        max_results: Optional[int] = Query(None, alias="maxResults", description="Nombre maximum de résultats"),
        client: AsyncEBirdClient = Depends(get_ebird_client),
):
    outcome = await client.recent_notable_observations_at_hotspot(hotspot_id, back=back, maxResults=max_results)
    return _to_response(outcome)


@app.get("/notable/location/{location_id}/recent", response_model=ObservationListModel,
         summary="Observations remarquables sur un lieu.")
async def recent_notable_observations_at_location(
        location_id: str,
        back: Optional[int] = Query(None, description="Nombre de jours (1-30)"),
        max_results: Optional[int] = Query(None, alias="maxResults", description="Nombre maximum de résultats"),
        client: AsyncEBirdClient = Depends(get_ebird_client),
):
    outcome = await client.recent_notable_observations_at_location(location_id, back=back, maxResults=max_results)
    return _to_response(outcome)
