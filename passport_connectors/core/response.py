# passport_connectors/core/response.py

from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from passport_connectors.core.exceptions import DecodingError, PassportError, TransportError
from passport_connectors.core.http_client import RawResponse
from passport_connectors.core.logger import get_logger

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class ResponseOutcome(str, Enum):
    """Issue terminale d'un appel (une seule par dispatch)."""
    SUCCESS = "success"
    APPLICATION_ERROR = "application_error"
    TRANSPORT_EXCEPTION = "transport_exception"
    DECODING_EXCEPTION = "decoding_exception"


class ClientResponse(BaseModel):
    """
    Enveloppe unique retournée par chaque appel au client.

    Au plus un des champs success_response / error_response / exception est renseigné.
    Le statut est absent si Passport n'a jamais répondu (TransportError).
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    outcome: ResponseOutcome                = Field(..., description="Classification de l'appel")
    status: Optional[int]                   = Field(None, description="Code HTTP si une réponse a été reçue")
    headers: Dict[str, str]                 = Field(default_factory=dict, description="En-têtes de la réponse")
    success_response: Any                   = Field(None, description="Corps décodé d'une réponse 2xx")
    error_response: Any                     = Field(None, description="Corps décodé d'une réponse non-2xx")
    exception: Optional[PassportError]      = Field(None, description="Erreur de transport ou de décodage")

    def was_successful(self) -> bool:
        return self.outcome == ResponseOutcome.SUCCESS

    # ---------------- Vues typées optionnelles ----------------
    def success_as(self, model: Type[M]) -> Optional[M]:
        """Valide le corps de succès dans un modèle pydantic (None si absent)."""
        if self.success_response is None:
            return None
        return model.model_validate(self.success_response)

    def error_as(self, model: Type[M]) -> Optional[M]:
        if self.error_response is None:
            return None
        return model.model_validate(self.error_response)

    # ---------------- Constructeurs ----------------
    @classmethod
    def from_exception(cls, exception: PassportError, status: Optional[int] = None,
                       headers: Optional[Dict[str, str]] = None) -> "ClientResponse":
        # Encodage et décodage sont classés ensemble, seul le transport est distinct
        if isinstance(exception, TransportError):
            outcome = ResponseOutcome.TRANSPORT_EXCEPTION
        else:
            outcome = ResponseOutcome.DECODING_EXCEPTION
        return cls(outcome=outcome, status=status, headers=headers or {}, exception=exception)


def is_success_status(status: int) -> bool:
    return 200 <= status <= 299


def classify(raw: RawResponse, success_handler, error_handler) -> ClientResponse:
    """
    Classe une réponse brute :
      - 2xx     -> décodage succès  -> SUCCESS ou DECODING_EXCEPTION
      - non-2xx -> décodage erreur  -> APPLICATION_ERROR ou DECODING_EXCEPTION
    Le code HTTP fait foi, la forme du corps est secondaire (un 3xx est une erreur).
    """
    success = is_success_status(raw.status)
    handler = success_handler if success else error_handler

    try:
        payload = handler.decode(raw.body, raw.content_type, raw.status)
    except DecodingError as e:
        logger.warning(f"Réponse HTTP {raw.status} illisible: {e}")
        return ClientResponse.from_exception(e, status=raw.status, headers=raw.headers)

    if success:
        logger.debug("HTTP %s -> %s", raw.status, ResponseOutcome.SUCCESS.value)
        return ClientResponse(outcome=ResponseOutcome.SUCCESS, status=raw.status,
                              headers=raw.headers, success_response=payload)

    logger.debug("HTTP %s -> %s", raw.status, ResponseOutcome.APPLICATION_ERROR.value)
    return ClientResponse(outcome=ResponseOutcome.APPLICATION_ERROR, status=raw.status,
                          headers=raw.headers, error_response=payload)
