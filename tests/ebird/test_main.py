from unittest.mock import patch

from ebird_connectors.core.outcome import ApiError, Success
from ebird_connectors.ebird import main as demo


def test_main_reports_unmappable_payload(capsys):
    """Un payload de succès non conforme au schéma est affiché comme erreur."""
    with patch.object(demo, "EBirdClient") as MockClient, patch("builtins.input", return_value=""):
        instance = MockClient.return_value
        instance.last_error = None
        instance.recent_nearby_observations.return_value = Success(payload='[{"comName": "Rock Pigeon"}]')
        instance.recent_notable_observations_in_region.return_value = ApiError(code="400", message="Bad request")

        demo.main()

    out = capsys.readouterr().out
    assert "MalformedResponseError" in out
    assert "ServiceError" in out
    instance.recent_notable_observations_in_region.assert_called_once_with("IN-KA", back=7)


def test_main_prints_observations(capsys, observations_body):
    with patch.object(demo, "EBirdClient") as MockClient, patch("builtins.input", return_value="US-NY"):
        instance = MockClient.return_value
        instance.recent_nearby_observations.return_value = Success(payload=observations_body)
        instance.recent_notable_observations_in_region.return_value = Success(payload="[]")

        demo.main()

    assert '"comName": "Rock Pigeon"' in capsys.readouterr().out
    instance.recent_notable_observations_in_region.assert_called_once_with("US-NY", back=7)
