# passport_connectors/core/handlers.py

import json
from typing import Any, Optional

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from passport_connectors.core.exceptions import DecodingError, EncodingError

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"


class JSONBodyHandler:
    """
    Encodeur du corps de requête en JSON.

    Accepte une structure (dict / list / scalaire) ou un modèle pydantic.
    L'encodage est fait au moment du dispatch, pas à la construction.
    """

    content_type = JSON_CONTENT_TYPE

    def __init__(self, value: Any):
        self.value = value

    def encode(self) -> bytes:
        value = self.value
        try:
            if isinstance(value, BaseModel):
                value = value.model_dump(mode="json", by_alias=True, exclude_none=True)
            # allow_nan=False : NaN / Infinity ne sont pas du JSON valide
            document = json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError, PydanticSerializationError, RecursionError) as e:
            raise EncodingError(f"Corps de requête non sérialisable en JSON: {e}") from e
        return document.encode("utf-8")


class JSONResponseHandler:
    """Décodeur JSON utilisé aussi bien pour les réponses de succès que d'erreur."""

    @staticmethod
    def is_json_content_type(content_type: Optional[str]) -> bool:
        # Pas de content-type : on tente quand même le parsing
        if not content_type:
            return True
        media_type = content_type.split(";")[0].strip().lower()
        return media_type in ("application/json", "text/json") or media_type.endswith("+json")

    def decode(self, body: bytes, content_type: Optional[str] = None, status: Optional[int] = None) -> Any:
        """
        Retourne la structure décodée, ou None si le corps est vide.
        Lève DecodingError si le corps n'est pas du JSON valide.
        """
        if body is None or not body.strip():
            return None

        if not self.is_json_content_type(content_type):
            raise DecodingError(f"Content-Type non supporté: {content_type}", status=status)

        try:
            return json.loads(body.decode("utf-8"))
        except ValueError as e:
            raise DecodingError(f"Réponse JSON invalide (HTTP {status}): {e}", status=status) from e
