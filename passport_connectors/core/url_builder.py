# passport_connectors/core/url_builder.py

from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote, urlencode

from passport_connectors.core.utils import format_parameter_value

_MULTI_VALUE_TYPES = (list, tuple, set, frozenset)


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def join_path(base_url: str, uri: Optional[str] = None, segments: Iterable[Any] = ()) -> str:
    """
    Assemble base + uri + segments.

    Le template `uri` (ex: '/api/user/action') est ajouté tel quel, chaque segment
    est encodé indépendamment. Les segments absents (None ou '') sont ignorés,
    on ne produit donc jamais de '//' ni de '/' final parasite.
    """
    url = base_url.rstrip("/")

    if uri:
        template = uri.strip("/")
        if template:
            url = f"{url}/{template}"

    for segment in segments:
        if _is_absent(segment):
            continue
        url = f"{url}/{quote(format_parameter_value(segment), safe='')}"

    return url


def query_pairs(parameters: Dict[str, Any]) -> List[Tuple[str, str]]:
    """
    Aplatit les paramètres en paires (nom, valeur).
    Une séquence répète la clé dans l'ordre d'insertion, les valeurs absentes sont omises.
    """
    pairs: List[Tuple[str, str]] = []
    for name, value in parameters.items():
        values = value if isinstance(value, _MULTI_VALUE_TYPES) else [value]
        for item in values:
            if _is_absent(item):
                continue
            pairs.append((name, format_parameter_value(item)))
    return pairs


def build_url(base_url: str, uri: Optional[str] = None, segments: Iterable[Any] = (),
              parameters: Optional[Dict[str, Any]] = None) -> str:
    """Construit l'URL complète envoyée sur le fil."""
    url = join_path(base_url, uri, segments)
    pairs = query_pairs(parameters or {})
    if pairs:
        url = f"{url}?{urlencode(pairs)}"
    return url
