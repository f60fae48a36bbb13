# ebird_connectors/ebird/api_client.py

from typing import Any, Dict, Mapping, Optional

from ebird_connectors.core.dispatcher import AsyncRequestDispatcher, RequestDispatcher
from ebird_connectors.core.http_client import HTTPClient
from ebird_connectors.core.httpx_client import AsyncHTTPClient
from ebird_connectors.core.logger import get_logger

logger = get_logger(__name__)

Options = Optional[Mapping[str, Any]]


class _EBirdEndpoints:
    """
    Points d'accès de l'API eBird 1.1 (données d'observation).

    Chaque méthode fixe le chemin et les paramètres obligatoires, fusionne
    les options de l'appelant (mapping `options` et/ou keywords, ex: back=7,
    maxResults=10) puis délègue au dispatcher. Le retour est celui du
    dispatcher : un RequestOutcome (ou une coroutine pour le client asynchrone).

    Documentation : https://confluence.cornell.edu/display/CLOISAPI/eBird+API+1.1
    """

    dispatcher = None

    # ---------------- Etat de la dernière erreur ----------------
    @property
    def last_error(self) -> Optional[str]:
        return self.dispatcher.state.last_error

    @property
    def last_error_message(self) -> str:
        return self.dispatcher.state.last_error_message

    # ---------------- Validation utilitaires ----------------
    @staticmethod
    def _validate_coordinates_values(lat: float, lng: float):
        if not (-90.0 <= lat <= 90.0):
            raise ValueError(f"Latitude invalide : {lat} (doit être entre -90 et 90).")
        if not (-180.0 <= lng <= 180.0):
            raise ValueError(f"Longitude invalide : {lng} (doit être entre -180 et 180).")

    def _call(self, path: str, options: Options, extra: Dict[str, Any], **required):
        params = dict(options or {})
        params.update(extra)
        # les paramètres obligatoires de l'endpoint priment sur les options
        params.update(required)
        logger.debug("eBird %s | params=%s", path, params)
        return self.dispatcher.dispatch(path, params)

    # ---------------- Observations récentes ----------------
    def recent_nearby_observations(self, lat: float, lng: float, options: Options = None, **extra):
        """Dernière observation de chaque espèce autour d'un point (lat/lng)."""
        self._validate_coordinates_values(lat, lng)
        return self._call("/obs/geo/recent", options, extra, lat=lat, lng=lng)

    def recent_nearby_observations_of_species(self, lat: float, lng: float, species: str,
                                              options: Options = None, **extra):
        """Dernières observations d'une espèce (nom scientifique) autour d'un point."""
        self._validate_coordinates_values(lat, lng)
        return self._call("/obs/geo_spp/recent", options, extra, lat=lat, lng=lng, sci=species)

    def recent_observations_at_hotspot(self, hotspot_id: str, options: Options = None, **extra):
        return self._call("/obs/hotspot/recent", options, extra, r=hotspot_id)

    def recent_observations_of_species_at_hotspot(self, hotspot_id: str, species: str,
                                                  options: Options = None, **extra):
        return self._call("/obs/hotspot_spp/recent", options, extra, r=hotspot_id, sci=species)

    def recent_observations_at_location(self, location_id: str, options: Options = None, **extra):
        return self._call("/obs/loc/recent", options, extra, r=location_id)

    def recent_observations_of_species_at_location(self, location_id: str, species: str,
                                                   options: Options = None, **extra):
        return self._call("/obs/loc_spp/recent", options, extra, r=location_id, sci=species)

    def recent_observations_in_region(self, region_id: str, options: Options = None, **extra):
        """Toutes les espèces vues dans une région (ex: 'US-NY', 'IN-KA')."""
        return self._call("/obs/region/recent", options, extra, r=region_id)

    def recent_observations_of_species_in_region(self, region_id: str, species: str,
                                                 options: Options = None, **extra):
        return self._call("/obs/region_spp/recent", options, extra, r=region_id, sci=species)

    # ---------------- Observations remarquables ----------------
    def recent_nearby_notable_observations(self, lat: float, lng: float, options: Options = None, **extra):
        """Espèces rares / inhabituelles observées autour d'un point."""
        self._validate_coordinates_values(lat, lng)
        return self._call("/notable/geo/recent", options, extra, lat=lat, lng=lng)

    def recent_notable_observations_at_hotspot(self, hotspot_id: str, options: Options = None, **extra):
        return self._call("/notable/hotspot/recent", options, extra, r=hotspot_id)

    def recent_notable_observations_at_location(self, location_id: str, options: Options = None, **extra):
        return self._call("/notable/loc/recent", options, extra, r=location_id)

    def recent_notable_observations_in_region(self, region_id: str, options: Options = None, **extra):
        return self._call("/notable/region/recent", options, extra, r=region_id)

    # ---------------- Lieux les plus proches ----------------
    def nearest_locations_with_species(self, lat: float, lng: float, species: str,
                                       options: Options = None, **extra):
        """Les N lieux les plus proches où l'espèce a été vue (N = maxResults)."""
        self._validate_coordinates_values(lat, lng)
        return self._call("/nearest/geo_spp/recent", options, extra, lat=lat, lng=lng, sci=species)


class EBirdClient(_EBirdEndpoints):
    """
    Client bloquant pour l'API eBird 1.1.

    Exemple:
        client = EBirdClient()
        outcome = client.recent_nearby_observations(12.97, 77.59, back=7)
        if outcome.ok:
            print(outcome.payload)
    """

    def __init__(self, base_url: Optional[str] = None, http_client: Optional[HTTPClient] = None,
                 dispatcher: Optional[RequestDispatcher] = None):
        self.dispatcher = dispatcher if dispatcher is not None else RequestDispatcher(
            base_url=base_url, http_client=http_client
        )


class AsyncEBirdClient(_EBirdEndpoints):
    """Client asynchrone (httpx) : chaque méthode retourne une coroutine à awaiter."""

    def __init__(self, base_url: Optional[str] = None, http_client: Optional[AsyncHTTPClient] = None,
                 dispatcher: Optional[AsyncRequestDispatcher] = None):
        self.dispatcher = dispatcher if dispatcher is not None else AsyncRequestDispatcher(
            base_url=base_url, http_client=http_client
        )

    async def aclose(self):
        await self.dispatcher.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
