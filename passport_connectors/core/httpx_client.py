# passport_connectors/core/httpx_client.py

from typing import Optional

import httpx

from .exceptions import TransportError
from .http_client import RawResponse, WireRequest, log_response, loggable_headers
from .logger import get_logger

logger = get_logger(__name__)


class AsyncRequestExecutor:
    """Exécuteur HTTP asynchrone basé sur httpx pour le client Passport."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        # Le client httpx est créé une fois et fermé par le context manager (ou aclose()).
        # 'transport' permet d'injecter un httpx.MockTransport dans les tests.
        self._client = client if client is not None else httpx.AsyncClient(transport=transport)

    async def execute(self, request: WireRequest) -> RawResponse:
        logger.debug("➡️ %s %s | headers=%s", request.method, request.url, loggable_headers(request.headers))

        # httpx exige une valeur par défaut : write / pool reprennent le read timeout
        timeout = httpx.Timeout(request.read_timeout / 1000.0, connect=request.connect_timeout / 1000.0)

        try:
            # Utilisation de 'await' pour un I/O non-bloquant
            response = await self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
                timeout=timeout,
                follow_redirects=False,
            )
        except httpx.HTTPError as e:
            # Erreurs de connexion / timeout / DNS de httpx
            logger.warning(f"HTTPX Error on {request.method} {request.url}: {e}")
            raise TransportError(f"Impossible de joindre Passport: {e}") from e

        log_response(logger, response.status_code, response.content)
        return RawResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content or b"",
        )

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        """Ouverture du client pour le context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Fermeture propre de la connexion."""
        await self.aclose()
