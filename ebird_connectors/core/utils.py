from typing import Any, Mapping
from urllib.parse import urlencode

# --- Fonctions utilitaires de construction des requêtes ---


def build_query_string(options: Mapping[str, Any]) -> str:
    """
    Sérialise les options en query string (application/x-www-form-urlencoded).
    Les valeurs None sont ignorées, les booléens envoyés en 'true' / 'false'.
    """
    pairs = []
    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        pairs.append((key, value))

    return urlencode(pairs)


def compose_url(base_url: str, path: str, query: str) -> str:
    """Retourne '<base_url><path>?<query>'."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}?{query}"
