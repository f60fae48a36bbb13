# ebird_connectors/core/exceptions.py
class ConnectorError(Exception):
    """Erreur lors de l'appel du service eBird"""
    pass


class NetworkOrServerError(ConnectorError):
    """Echec du transport HTTP (connexion, DNS, timeout, TLS)."""
    pass


class ServiceError(ConnectorError):
    """Le service a répondu, mais le corps de la réponse décrit une erreur."""

    def __init__(self, code: str, message: str):
        super().__init__(f"eBird error {code}: {message}")
        self.code = code
        self.message = message


class MalformedResponseError(ConnectorError):
    """Enveloppe d'erreur illisible (JSON invalide ou forme inattendue)."""
    pass
