# passport_connectors/core/http_client.py

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests

from .exceptions import TransportError
from .logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class WireRequest:
    """Requête entièrement assemblée, prête à partir sur le réseau."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    connect_timeout: int = 2000   # ms
    read_timeout: int = 2000      # ms


@dataclass(frozen=True)
class RawResponse:
    """Réponse brute : statut, en-têtes et corps non décodé."""
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def content_type(self) -> Optional[str]:
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                return value
        return None


def loggable_headers(headers: Dict[str, str]) -> Dict[str, str]:
    # La clé d'API ou le JWT ne doivent jamais apparaître dans les logs
    return {k: ("***" if k.lower() == "authorization" else v) for k, v in headers.items()}


def log_response(log: logging.Logger, status: int, body: bytes):
    # Aperçu des 300 premiers octets, uniquement en DEBUG
    if log.isEnabledFor(logging.DEBUG):
        log.debug("⬅️ Response %s: %s", status, (body or b"")[:300].decode("utf-8", errors="replace"))


class RequestExecutor:
    """
    Exécuteur HTTP synchrone basé sur requests.

    Ne garde aucun état entre deux appels : une même instance peut être partagée
    entre threads. Aucune relance automatique, la décision appartient à l'appelant.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        # Session injectable (tests, proxy, certificats...) ; sinon un appel requests.request par requête
        self._send = session.request if session is not None else requests.request

    def execute(self, request: WireRequest) -> RawResponse:
        logger.debug("➡️ %s %s | headers=%s", request.method, request.url, loggable_headers(request.headers))

        try:
            response = self._send(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=(request.connect_timeout / 1000.0, request.read_timeout / 1000.0),
                allow_redirects=False,
            )
        except requests.RequestException as e:
            logger.warning(f"Passport injoignable ({request.method} {request.url}): {e}")
            raise TransportError(f"Impossible de joindre Passport: {e}") from e

        log_response(logger, response.status_code, response.content)
        return RawResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content or b"",
        )
