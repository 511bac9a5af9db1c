# passport_connectors/core/rest_client.py

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from passport_connectors.core.config import DEFAULT_TIMEOUT_MS
from passport_connectors.core.exceptions import EncodingError, PreconditionViolation, TransportError
from passport_connectors.core.handlers import JSONBodyHandler, JSONResponseHandler
from passport_connectors.core.http_client import RequestExecutor, WireRequest
from passport_connectors.core.httpx_client import AsyncRequestExecutor
from passport_connectors.core.logger import get_logger
from passport_connectors.core.response import ClientResponse, classify
from passport_connectors.core.url_builder import build_url

logger = get_logger(__name__)

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")


@dataclass
class RequestDescriptor:
    """État accumulé d'une requête avant son dispatch."""
    base_url: Optional[str] = None
    uri: Optional[str] = None
    segments: List[Any] = field(default_factory=list)
    parameters: Dict[str, List[Any]] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    method: Optional[str] = None
    body_handler: Optional[JSONBodyHandler] = None
    connect_timeout: int = DEFAULT_TIMEOUT_MS
    read_timeout: int = DEFAULT_TIMEOUT_MS


class RESTClient:
    """
    Constructeur fluide d'une requête REST, à usage unique.

        RESTClient(executor).url(base).uri("/api/user").url_segment(user_id).get().go()

    go() retourne toujours un ClientResponse pour les erreurs réseau, d'encodage
    ou de décodage. Seules les erreurs de programmation (pas de méthode, double
    dispatch, ...) lèvent PreconditionViolation.
    """

    def __init__(self, executor: Optional[RequestExecutor] = None):
        self._executor = executor if executor is not None else RequestExecutor()
        self._descriptor = RequestDescriptor()
        self._success_handler = JSONResponseHandler()
        self._error_handler = JSONResponseHandler()
        self._dispatched = False

    # ---------------- URL ----------------
    def url(self, base_url: str) -> "RESTClient":
        self._descriptor.base_url = base_url
        return self

    def uri(self, uri: str) -> "RESTClient":
        self._descriptor.uri = uri
        return self

    def url_segment(self, value: Any) -> "RESTClient":
        # Les segments absents sont conservés ici et ignorés à l'assemblage
        self._descriptor.segments.append(value)
        return self

    def url_parameter(self, name: str, value: Any) -> "RESTClient":
        if value is None:
            return self
        values = self._descriptor.parameters.setdefault(name, [])
        if isinstance(value, (list, tuple, set, frozenset)):
            values.extend(value)
        else:
            values.append(value)
        return self

    # ---------------- En-têtes / corps ----------------
    def header(self, name: str, value: str) -> "RESTClient":
        self._descriptor.headers[name] = value
        return self

    def authorization(self, value: Optional[str]) -> "RESTClient":
        # Envoyé tel quel : clé d'API brute ou 'JWT <token>'
        if value is not None:
            self._descriptor.headers["Authorization"] = value
        return self

    def body_handler(self, handler: JSONBodyHandler) -> "RESTClient":
        if not (hasattr(handler, "encode") and hasattr(handler, "content_type")):
            raise PreconditionViolation(f"Body handler invalide: {type(handler).__name__}")
        self._descriptor.body_handler = handler
        return self

    def success_response_handler(self, handler) -> "RESTClient":
        self._success_handler = handler
        return self

    def error_response_handler(self, handler) -> "RESTClient":
        self._error_handler = handler
        return self

    # ---------------- Timeouts ----------------
    @staticmethod
    def _check_timeout(name: str, value: int) -> int:
        if value is None or value <= 0:
            raise PreconditionViolation(f"{name} doit être strictement positif (ms), reçu: {value}")
        return value

    def connect_timeout(self, millis: int) -> "RESTClient":
        self._descriptor.connect_timeout = self._check_timeout("connect_timeout", millis)
        return self

    def read_timeout(self, millis: int) -> "RESTClient":
        self._descriptor.read_timeout = self._check_timeout("read_timeout", millis)
        return self

    # ---------------- Méthodes HTTP ----------------
    def method(self, method: str) -> "RESTClient":
        method = method.upper()
        if method not in HTTP_METHODS:
            raise PreconditionViolation(f"Méthode HTTP non supportée: {method}")
        self._descriptor.method = method
        return self

    def get(self) -> "RESTClient":
        return self.method("GET")

    def post(self) -> "RESTClient":
        return self.method("POST")

    def put(self) -> "RESTClient":
        return self.method("PUT")

    def delete(self) -> "RESTClient":
        return self.method("DELETE")

    # ---------------- Dispatch ----------------
    def _start_dispatch(self):
        if self._dispatched:
            raise PreconditionViolation("Ce RESTClient a déjà été envoyé, créer un nouveau builder par requête.")
        if self._descriptor.method is None:
            raise PreconditionViolation("Aucune méthode HTTP définie avant go().")
        if not self._descriptor.base_url:
            raise PreconditionViolation("Aucune URL de base définie avant go().")
        self._dispatched = True

    def _prepare(self) -> WireRequest:
        """Assemble l'URL et encode le corps. Peut lever EncodingError."""
        d = self._descriptor
        url = build_url(d.base_url, d.uri, d.segments, d.parameters)
        headers = dict(d.headers)
        body = None
        if d.body_handler is not None:
            body = d.body_handler.encode()
            if not any(name.lower() == "content-type" for name in headers):
                headers["Content-Type"] = d.body_handler.content_type

        return WireRequest(method=d.method, url=url, headers=headers, body=body,
                           connect_timeout=d.connect_timeout, read_timeout=d.read_timeout)

    def _encoding_failed(self, error: EncodingError) -> ClientResponse:
        logger.warning(f"Encodage du corps impossible ({self._descriptor.method} {self._descriptor.uri}): {error}")
        return ClientResponse.from_exception(error)

    def _transport_failed(self, error: TransportError) -> ClientResponse:
        return ClientResponse.from_exception(error)

    def go(self) -> ClientResponse:
        self._start_dispatch()
        try:
            request = self._prepare()
        except EncodingError as e:
            return self._encoding_failed(e)

        try:
            raw = self._executor.execute(request)
        except TransportError as e:
            return self._transport_failed(e)

        return classify(raw, self._success_handler, self._error_handler)


class AsyncRESTClient(RESTClient):
    """Même pipeline que RESTClient, dispatch asynchrone via httpx."""

    def __init__(self, executor: Optional[AsyncRequestExecutor] = None):
        # Un exécuteur créé ici appartient au builder : il est fermé à la fin de go()
        self._owns_executor = executor is None
        super().__init__(executor if executor is not None else AsyncRequestExecutor())

    async def go(self) -> ClientResponse:
        try:
            return await self._dispatch()
        finally:
            if self._owns_executor:
                self._owns_executor = False
                await self._executor.aclose()

    async def _dispatch(self) -> ClientResponse:
        self._start_dispatch()
        try:
            request = self._prepare()
        except EncodingError as e:
            return self._encoding_failed(e)

        try:
            raw = await self._executor.execute(request)
        except TransportError as e:
            return self._transport_failed(e)

        return classify(raw, self._success_handler, self._error_handler)
