"""Request helpers shared by the endpoint modules.

Every call goes through :func:`request`, which attaches Basic auth and turns
``requests`` failures into :class:`~mailgun_v3.errors.TransportError`.  The
remaining helpers classify and decode the response.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from mailgun_v3.credentials import Credentials
from mailgun_v3.errors import ApiError, ResponseParseError, TransportError

LOGGER = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def request(
    session: requests.Session,
    method: str,
    url: str,
    credentials: Credentials,
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> requests.Response:
    """Issue a single authenticated request; no retries."""
    LOGGER.debug("%s %s", method, url)
    try:
        response = session.request(
            method, url, auth=credentials.auth, timeout=timeout, **kwargs
        )
    except requests.RequestException as exc:
        LOGGER.error("%s %s failed: %s", method, url, exc)
        raise TransportError(f"{method} {url} failed: {exc}") from exc
    LOGGER.debug("%s %s -> %s", method, url, response.status_code)
    return response


def is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def decode_json(response: requests.Response) -> Dict[str, Any]:
    """Return the JSON object in ``response`` or raise ResponseParseError."""
    try:
        data = response.json()
    except ValueError as exc:
        LOGGER.error("Response from %s is not JSON: %s", response.url, exc)
        raise ResponseParseError(
            f"Response is not valid JSON: {exc}", response.text
        ) from exc
    if not isinstance(data, dict):
        LOGGER.error(
            "Response from %s is not a JSON object: %s",
            response.url,
            type(data).__name__,
        )
        raise ResponseParseError(
            f"Expected a JSON object, got {type(data).__name__}",
            response.text,
        )
    return data


def error_message(response: requests.Response) -> str:
    """Best-effort provider error text for a failed response.

    Prefers the ``message`` field of a JSON body, then the raw body, then
    the HTTP reason phrase.
    """
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    text = response.text.strip()
    return text or response.reason or f"HTTP {response.status_code}"


def raise_for_status(response: requests.Response) -> None:
    if is_success(response):
        return
    message = error_message(response)
    LOGGER.warning(
        "Mailgun rejected %s: %s %s", response.url, response.status_code, message
    )
    raise ApiError(response.status_code, message)


def parse_model(model: Type[ModelT], response: requests.Response) -> ModelT:
    """Decode ``response`` and validate it into ``model``."""
    data = decode_json(response)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        LOGGER.error("Unexpected response shape from %s: %s", response.url, exc)
        raise ResponseParseError(
            f"Unexpected {model.__name__} payload: {exc}", response.text
        ) from exc
