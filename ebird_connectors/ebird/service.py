import json
from typing import List

from pydantic import TypeAdapter, ValidationError

from ebird_connectors.core.exceptions import MalformedResponseError
from ebird_connectors.core.logger import get_logger
from ebird_connectors.core.outcome import RequestOutcome
from ebird_connectors.ebird.schema import ObservationModel


log = get_logger(__name__)

_observations_adapter = TypeAdapter(List[ObservationModel])


class ObservationService:
    """
    Décodage des réponses eBird, au-dessus des RequestOutcome :
    le dispatcher retourne le JSON brut, ce service le valide avec les schémas Pydantic.
    """

    @staticmethod
    def parse_observations(payload: str) -> List[ObservationModel]:
        """
        Décode un payload de succès en liste d'observations.
        :param payload: corps brut retourné par Success
        :return: les observations validées
        """
        try:
            return _observations_adapter.validate_json(payload)
        except ValidationError as e:
            log.error(f"Erreur de mapping des observations eBird: {e}")
            raise MalformedResponseError(f"Erreur lors du mapping des données eBird: {e.error_count()} erreur(s)")

    @staticmethod
    def observations_from_outcome(outcome: RequestOutcome) -> List[ObservationModel]:
        """
        Retourne les observations d'un appel réussi.
        Lève NetworkOrServerError, ServiceError ou MalformedResponseError sinon (via unwrap).
        """
        payload = outcome.unwrap()
        observations = ObservationService.parse_observations(payload)
        log.debug(f"{len(observations)} observation(s) décodée(s)")
        return observations

    @staticmethod
    def pretty(observations: List[ObservationModel]) -> str:
        """Rendu JSON lisible (clés eBird d'origine)."""
        data = [o.model_dump(by_alias=True) for o in observations]
        return json.dumps(data, indent=2, ensure_ascii=False)
