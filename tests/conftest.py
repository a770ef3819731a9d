"""Shared fixtures: credentials and canned ``requests`` responses."""

import json
import sys
from pathlib import Path
from typing import Any, Callable
from unittest import mock

import pytest
import requests

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mailgun_v3.credentials import Credentials

DOMAIN = "sandbox0123456789abcdef.mailgun.org"
KEY = "0123456789abcdef0123456789abcdef-01234567-89abcdef"

_REASONS = {200: "OK", 400: "Bad Request", 401: "Unauthorized",
            404: "Not Found", 500: "Internal Server Error", 502: "Bad Gateway"}


def make_response(status: int, body: Any, url: str = "") -> requests.Response:
    """Build a real ``requests.Response`` without touching the network."""
    response = requests.Response()
    response.status_code = status
    response.reason = _REASONS.get(status, "")
    response.url = url
    response.encoding = "utf-8"
    if isinstance(body, (dict, list)):
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = str(body).encode("utf-8")
        response.headers["Content-Type"] = "text/html"
    return response


@pytest.fixture
def creds() -> Credentials:
    return Credentials(KEY, DOMAIN)


@pytest.fixture
def session() -> mock.MagicMock:
    return mock.create_autospec(requests.Session, instance=True)


@pytest.fixture
def respond(session: mock.MagicMock) -> Callable[[int, Any], None]:
    """Make the mocked session answer every request with ``(status, body)``."""

    def _respond(status: int, body: Any) -> None:
        session.request.return_value = make_response(status, body)

    return _respond
