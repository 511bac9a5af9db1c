# passport_connectors/passport/api_client.py

import inspect
from typing import Any, Dict, Optional

from passport_connectors.core import config
from passport_connectors.core.handlers import JSONBodyHandler, JSONResponseHandler
from passport_connectors.core.http_client import RequestExecutor
from passport_connectors.core.httpx_client import AsyncRequestExecutor
from passport_connectors.core.logger import get_logger
from passport_connectors.core.rest_client import AsyncRESTClient, RESTClient
from passport_connectors.passport.endpoints import ENDPOINTS, Endpoint, Fixed

logger = get_logger(__name__)


class PassportClient:
    """
    Client pour l'API Passport.

    Chaque méthode d'API (login, create_user, retrieve_application, ...) est générée
    à partir de la table ENDPOINTS et retourne toujours un ClientResponse :
     - succès         -> response.success_response
     - erreur Passport -> response.error_response (+ response.status)
     - Passport injoignable ou réponse illisible -> response.exception

    La configuration (clé d'API, URL, timeouts) est fixée à la construction et
    partagée en lecture seule par tous les appels.
    """

    rest_client_class = RESTClient

    def __init__(self, api_key: str, base_url: str,
                 connect_timeout: int = config.DEFAULT_TIMEOUT_MS,
                 read_timeout: int = config.DEFAULT_TIMEOUT_MS,
                 executor: Optional[RequestExecutor] = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        # Exécuteur HTTP (testable / injectable)
        self.executor = executor if executor is not None else self._default_executor()

    @staticmethod
    def _default_executor():
        return RequestExecutor()

    @classmethod
    def from_env(cls, **kwargs) -> "PassportClient":
        """Construit le client à partir de PASSPORT_API_KEY / PASSPORT_BASE_URL / timeouts."""
        return cls(
            api_key=config.get_passport_api_key(),
            base_url=config.get_passport_base_url(),
            connect_timeout=config.get_connect_timeout(),
            read_timeout=config.get_read_timeout(),
            **kwargs,
        )

    def start(self) -> RESTClient:
        """Nouveau builder pré-configuré, un par requête."""
        return (self.rest_client_class(self.executor)
                .authorization(self.api_key)
                .url(self.base_url)
                .connect_timeout(self.connect_timeout)
                .read_timeout(self.read_timeout)
                .success_response_handler(JSONResponseHandler())
                .error_response_handler(JSONResponseHandler()))

    @staticmethod
    def _resolve(source: Any, arguments: Dict[str, Any]) -> Any:
        return source.value if isinstance(source, Fixed) else arguments[source]

    def _build(self, endpoint: Endpoint, arguments: Dict[str, Any]) -> RESTClient:
        rest = self.start().uri(endpoint.uri)

        if endpoint.auth:
            rest.authorization(endpoint.auth.format(**arguments))
        for segment in endpoint.segments:
            rest.url_segment(self._resolve(segment, arguments))
        for name, source in endpoint.params:
            rest.url_parameter(name, self._resolve(source, arguments))
        if endpoint.body:
            rest.body_handler(JSONBodyHandler(arguments[endpoint.body]))

        logger.debug("Passport %s -> %s %s", endpoint.name, endpoint.method, endpoint.uri)
        return rest.method(endpoint.method)


class AsyncPassportClient(PassportClient):
    """
    Variante asynchrone (httpx) : mêmes méthodes, à awaiter.

        async with AsyncPassportClient(api_key, base_url) as client:
            response = await client.retrieve_user(user_id)
    """

    rest_client_class = AsyncRESTClient

    def __init__(self, api_key: str, base_url: str,
                 connect_timeout: int = config.DEFAULT_TIMEOUT_MS,
                 read_timeout: int = config.DEFAULT_TIMEOUT_MS,
                 executor: Optional[AsyncRequestExecutor] = None):
        super().__init__(api_key, base_url, connect_timeout, read_timeout, executor)

    @staticmethod
    def _default_executor():
        return AsyncRequestExecutor()

    async def aclose(self):
        await self.executor.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


# ---------------- Génération des méthodes d'API ----------------

def _make_method(endpoint: Endpoint, owner: type, asynchronous: bool = False):
    parameters = [inspect.Parameter("self", inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    parameters += [inspect.Parameter(arg, inspect.Parameter.POSITIONAL_OR_KEYWORD) for arg in endpoint.args]
    signature = inspect.Signature(parameters)

    if asynchronous:
        async def method(self, *args, **kwargs):
            arguments = signature.bind(self, *args, **kwargs).arguments
            return await self._build(endpoint, arguments).go()
    else:
        def method(self, *args, **kwargs):
            arguments = signature.bind(self, *args, **kwargs).arguments
            return self._build(endpoint, arguments).go()

    method.__name__ = endpoint.name
    method.__qualname__ = f"{owner.__name__}.{endpoint.name}"
    method.__doc__ = f"{endpoint.doc}\n\n{endpoint.method} {endpoint.uri}"
    method.__signature__ = signature
    return method


for _endpoint in ENDPOINTS:
    setattr(PassportClient, _endpoint.name, _make_method(_endpoint, PassportClient))
    setattr(AsyncPassportClient, _endpoint.name, _make_method(_endpoint, AsyncPassportClient, asynchronous=True))
