# Fichier : tests/core/test_rest_client.py
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import BaseModel, ConfigDict

from conftest import API_KEY, BASE_URL, json_response
from passport_connectors.core.exceptions import (
    DecodingError, EncodingError, PreconditionViolation, TransportError,
)
from passport_connectors.core.handlers import JSONBodyHandler
from passport_connectors.core.http_client import RawResponse, RequestExecutor
from passport_connectors.core.httpx_client import AsyncRequestExecutor
from passport_connectors.core.response import ResponseOutcome
from passport_connectors.core.rest_client import AsyncRESTClient, RESTClient


class Opaque:
    pass


class UserRequest(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    thing: Opaque


class TestRESTClientRequest:
    """Construction de la requête envoyée à l'exécuteur"""

    def setup_method(self):
        self.executor = MagicMock(spec=RequestExecutor)
        self.executor.execute.return_value = json_response(200, {})

    def sent(self):
        return self.executor.execute.call_args.args[0]

    def test_url_from_segments(self):
        RESTClient(self.executor).url(BASE_URL).url_segment("api").url_segment("user") \
            .url_segment("abc-123").get().go()

        request = self.sent()
        assert request.method == "GET"
        assert request.url == "https://idp.example.com/api/user/abc-123"
        assert request.body is None

    def test_parameters_are_merged_per_name(self):
        RESTClient(self.executor).url(BASE_URL).uri("/api/user/bulk") \
            .url_parameter("userId", ["u1", "u2"]) \
            .url_parameter("hardDelete", None) \
            .url_parameter("userId", "u3") \
            .delete().go()

        assert self.sent().url == "https://idp.example.com/api/user/bulk?userId=u1&userId=u2&userId=u3"

    def test_body_and_headers(self):
        RESTClient(self.executor).url(BASE_URL).uri("/api/login").authorization(API_KEY) \
            .header("X-Forwarded-For", "10.0.0.1") \
            .body_handler(JSONBodyHandler({"email": "a@b.c"})).post().go()

        request = self.sent()
        assert request.headers == {
            "Authorization": API_KEY,
            "X-Forwarded-For": "10.0.0.1",
            "Content-Type": "application/json; charset=UTF-8",
        }
        assert request.body == b'{"email":"a@b.c"}'

    def test_caller_content_type_is_not_duplicated(self):
        RESTClient(self.executor).url(BASE_URL).uri("/api/login") \
            .header("content-type", "application/vnd.passport+json") \
            .body_handler(JSONBodyHandler({"email": "a@b.c"})).post().go()

        headers = self.sent().headers
        assert [name for name in headers if name.lower() == "content-type"] == ["content-type"]
        assert headers["content-type"] == "application/vnd.passport+json"

    def test_authorization_is_sent_verbatim_and_last_wins(self):
        RESTClient(self.executor).url(BASE_URL).uri("/api/jwt/validate") \
            .authorization(API_KEY).authorization("JWT abc.def.ghi").get().go()

        assert self.sent().headers["Authorization"] == "JWT abc.def.ghi"

    def test_default_and_custom_timeouts(self):
        RESTClient(self.executor).url(BASE_URL).get().go()
        assert (self.sent().connect_timeout, self.sent().read_timeout) == (2000, 2000)

        RESTClient(self.executor).url(BASE_URL).connect_timeout(500).read_timeout(9000).get().go()
        assert (self.sent().connect_timeout, self.sent().read_timeout) == (500, 9000)

    def test_put_method(self):
        RESTClient(self.executor).url(BASE_URL).uri("/api/user").url_segment("u1") \
            .url_parameter("reactivate", True).put().go()

        assert self.sent().method == "PUT"
        assert self.sent().url == "https://idp.example.com/api/user/u1?reactivate=true"


class TestRESTClientPreconditions:

    def setup_method(self):
        self.executor = MagicMock(spec=RequestExecutor)
        self.executor.execute.return_value = json_response(200, {})

    def test_go_without_method_fails_fast(self):
        with pytest.raises(PreconditionViolation):
            RESTClient(self.executor).url(BASE_URL).uri("/api/user").go()
        self.executor.execute.assert_not_called()

    def test_go_without_base_url_fails_fast(self):
        with pytest.raises(PreconditionViolation):
            RESTClient(self.executor).uri("/api/user").get().go()

    def test_single_use(self):
        rest = RESTClient(self.executor).url(BASE_URL).get()
        rest.go()
        with pytest.raises(PreconditionViolation):
            rest.go()
        self.executor.execute.assert_called_once()

    def test_invalid_body_handler(self):
        with pytest.raises(PreconditionViolation):
            RESTClient(self.executor).body_handler({"email": "a@b.c"})

    @pytest.mark.parametrize("value", [0, -1, None])
    def test_invalid_timeout(self, value):
        with pytest.raises(PreconditionViolation):
            RESTClient(self.executor).connect_timeout(value)

    def test_unknown_method(self):
        with pytest.raises(PreconditionViolation):
            RESTClient(self.executor).method("PATCH")


class TestRESTClientClassification:
    """Classification de la réponse dans l'enveloppe ClientResponse"""

    def setup_method(self):
        self.executor = MagicMock(spec=RequestExecutor)

    def go(self):
        return RESTClient(self.executor).url(BASE_URL).uri("/api/user").url_segment("u1").get().go()

    @pytest.mark.parametrize("status", [200, 201, 202, 299])
    def test_success(self, status):
        self.executor.execute.return_value = json_response(status, {"user": {"id": "u1"}})

        response = self.go()

        assert response.outcome == ResponseOutcome.SUCCESS
        assert response.was_successful()
        assert response.status == status
        assert response.success_response == {"user": {"id": "u1"}}
        assert response.error_response is None
        assert response.exception is None

    def test_success_without_content(self):
        self.executor.execute.return_value = RawResponse(status=204)

        response = self.go()

        assert response.outcome == ResponseOutcome.SUCCESS
        assert response.status == 204
        assert response.success_response is None

    def test_not_found(self, not_found_errors):
        """Scénario : 404 avec generalErrors"""
        self.executor.execute.return_value = json_response(404, not_found_errors)

        response = self.go()

        assert response.outcome == ResponseOutcome.APPLICATION_ERROR
        assert response.status == 404
        assert response.error_response == {"generalErrors": [{"code": "[NotFound]"}]}
        assert response.success_response is None
        assert response.exception is None
        assert not response.was_successful()

    @pytest.mark.parametrize("status", [301, 400, 401, 500, 503])
    def test_non_2xx_is_application_error(self, status, validation_errors):
        self.executor.execute.return_value = json_response(status, validation_errors)

        response = self.go()

        assert response.outcome == ResponseOutcome.APPLICATION_ERROR
        assert response.status == status
        assert response.error_response == validation_errors

    def test_error_without_body(self):
        self.executor.execute.return_value = RawResponse(status=401)

        response = self.go()

        assert response.outcome == ResponseOutcome.APPLICATION_ERROR
        assert response.status == 401
        assert response.error_response is None

    def test_malformed_success_body_keeps_status(self):
        self.executor.execute.return_value = RawResponse(
            status=200, headers={"Content-Type": "application/json"}, body=b"{oops")

        response = self.go()

        assert response.outcome == ResponseOutcome.DECODING_EXCEPTION
        assert response.status == 200
        assert isinstance(response.exception, DecodingError)
        assert response.success_response is None

    def test_html_error_page_keeps_status(self):
        self.executor.execute.return_value = RawResponse(
            status=502, headers={"Content-Type": "text/html"}, body=b"<h1>Bad Gateway</h1>")

        response = self.go()

        assert response.outcome == ResponseOutcome.DECODING_EXCEPTION
        assert response.status == 502
        assert response.error_response is None

    def test_transport_failure(self):
        """Scénario : timeout de connexion"""
        self.executor.execute.side_effect = TransportError("connect timed out")

        response = self.go()

        assert response.outcome == ResponseOutcome.TRANSPORT_EXCEPTION
        assert isinstance(response.exception, TransportError)
        assert response.status is None
        assert response.success_response is None
        assert response.error_response is None

    def test_encoding_failure_is_captured(self):
        cyclic = {}
        cyclic["self"] = cyclic

        response = RESTClient(self.executor).url(BASE_URL).uri("/api/user") \
            .body_handler(JSONBodyHandler(cyclic)).post().go()

        assert response.outcome == ResponseOutcome.DECODING_EXCEPTION
        assert isinstance(response.exception, EncodingError)
        assert response.status is None
        self.executor.execute.assert_not_called()

    def test_unserializable_pydantic_body_is_captured(self):
        response = RESTClient(self.executor).url(BASE_URL).uri("/api/user") \
            .body_handler(JSONBodyHandler(UserRequest(thing=Opaque()))).post().go()

        assert response.outcome == ResponseOutcome.DECODING_EXCEPTION
        assert isinstance(response.exception, EncodingError)
        assert response.status is None
        self.executor.execute.assert_not_called()

    def test_too_deep_body_is_captured(self):
        deep = []
        for _ in range(100000):
            deep = [deep]

        response = RESTClient(self.executor).url(BASE_URL).uri("/api/user/import") \
            .body_handler(JSONBodyHandler(deep)).post().go()

        assert response.outcome == ResponseOutcome.DECODING_EXCEPTION
        assert isinstance(response.exception, EncodingError)
        self.executor.execute.assert_not_called()

    def test_envelope_is_immutable(self):
        self.executor.execute.return_value = json_response(200, {})
        response = self.go()
        with pytest.raises(Exception):
            response.status = 500


@pytest.mark.asyncio
class TestAsyncRESTClient:

    def setup_method(self):
        self.executor = MagicMock(spec=AsyncRequestExecutor)
        self.executor.execute = AsyncMock()

    async def test_success(self, login_payload):
        self.executor.execute.return_value = json_response(200, login_payload)

        response = await AsyncRESTClient(self.executor).url(BASE_URL).uri("/api/login") \
            .body_handler(JSONBodyHandler({"email": "a@b.c"})).post().go()

        assert response.outcome == ResponseOutcome.SUCCESS
        assert response.success_response["user"]["firstName"] == "Marie"
        assert self.executor.execute.await_args.args[0].url == "https://idp.example.com/api/login"

    async def test_transport_failure(self):
        self.executor.execute.side_effect = TransportError("Connection refused")

        response = await AsyncRESTClient(self.executor).url(BASE_URL).get().go()

        assert response.outcome == ResponseOutcome.TRANSPORT_EXCEPTION
        assert response.status is None

    async def test_precondition_still_raises(self):
        with pytest.raises(PreconditionViolation):
            await AsyncRESTClient(self.executor).url(BASE_URL).go()


@pytest.mark.asyncio
class TestAsyncRESTClientExecutorLifecycle:

    def mock_executor(self):
        executor = MagicMock(spec=AsyncRequestExecutor)
        executor.execute = AsyncMock(return_value=json_response(200, {}))
        executor.aclose = AsyncMock()
        return executor

    async def test_own_executor_is_closed_after_go(self):
        """Sans exécuteur injecté, le client httpx créé par le builder est fermé"""
        executor = self.mock_executor()
        with patch("passport_connectors.core.rest_client.AsyncRequestExecutor", return_value=executor):
            response = await AsyncRESTClient().url(BASE_URL).uri("/api/application").get().go()

        assert response.was_successful()
        executor.aclose.assert_awaited_once()

    async def test_own_executor_is_closed_on_transport_failure(self):
        executor = self.mock_executor()
        executor.execute.side_effect = TransportError("Connection refused")
        with patch("passport_connectors.core.rest_client.AsyncRequestExecutor", return_value=executor):
            response = await AsyncRESTClient().url(BASE_URL).get().go()

        assert response.outcome == ResponseOutcome.TRANSPORT_EXCEPTION
        executor.aclose.assert_awaited_once()

    async def test_own_executor_is_closed_on_precondition(self):
        executor = self.mock_executor()
        with patch("passport_connectors.core.rest_client.AsyncRequestExecutor", return_value=executor):
            with pytest.raises(PreconditionViolation):
                await AsyncRESTClient().url(BASE_URL).go()

        executor.aclose.assert_awaited_once()

    async def test_injected_executor_is_left_open(self):
        executor = self.mock_executor()

        await AsyncRESTClient(executor).url(BASE_URL).get().go()

        executor.aclose.assert_not_awaited()
