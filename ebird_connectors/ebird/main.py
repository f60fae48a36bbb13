from ebird_connectors.core.exceptions import ConnectorError
from ebird_connectors.ebird.api_client import EBirdClient
from ebird_connectors.ebird.service import ObservationService


def show(client: EBirdClient, outcome):
    """Affiche les observations décodées, ou l'erreur de l'appel."""
    try:
        observations = ObservationService.observations_from_outcome(outcome)
    except ConnectorError as e:
        print(f"❌ {outcome.kind}: {type(e).__name__}: {e} (last_error={client.last_error})")
        return
    print(ObservationService.pretty(observations))


def main():

# Main pour tester les appels au service eBird

## Via les coordonnées lat et lng

    lat = 12.97
    lng = 77.59
    print(f"\n⏳ Récupération des observations récentes pour {lat}/{lng} (Bangalore)...\n")

    client = EBirdClient()
    show(client, client.recent_nearby_observations(lat, lng, back=7, maxResults=10))


## Via une région

    region = input("🌍 Entrez le code de la région (ex: US-NY, IN-KA) [IN-KA par défaut] : ").strip() or "IN-KA"

    print(f"\n⏳ Récupération des observations remarquables pour {region}...\n")

    show(client, client.recent_notable_observations_in_region(region, back=7))


if __name__ == "__main__":
    main()
