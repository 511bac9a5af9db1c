import json
import os

import pytest
import requests

from passport_connectors.core.http_client import RawResponse

TEST_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "passport", "test_data")

BASE_URL = "https://idp.example.com"
API_KEY = "FAKE_API_KEY"


def load_json(filename):
    """Charge un fichier JSON depuis tests/passport/test_data/"""
    with open(os.path.join(TEST_DATA_DIR, filename), "r", encoding="utf-8") as f:
        return json.load(f)


def json_response(status: int, payload=None, content_type: str = "application/json;charset=UTF-8") -> RawResponse:
    """Réponse brute telle que retournée par un exécuteur."""
    body = b"" if payload is None else json.dumps(payload).encode("utf-8")
    return RawResponse(status=status, headers={"Content-Type": content_type}, body=body)


def make_requests_response(status: int, body: bytes = b"", content_type: str = "application/json") -> requests.Response:
    """Construit un vrai requests.Response sans réseau."""
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.headers["Content-Type"] = content_type
    response.encoding = "utf-8"
    return response


@pytest.fixture
def login_payload():
    return load_json("login_response.json")


@pytest.fixture
def validation_errors():
    return load_json("errors_validation.json")


@pytest.fixture
def not_found_errors():
    return load_json("errors_not_found.json")
