"""Validate email addresses through Mailgun, to reduce bounce rate, find typos, etc.

::

    curl -G --user 'api:YOUR_API_KEY' \\
        https://api.mailgun.net/v3/YOUR_DOMAIN_NAME/address/validate \\
        --data-urlencode address='foo@mailgun.net'

The JSON object returned by Mailgun is passed through as a
:class:`ValidationResult`.  Fields this module does not know about are kept
as extra attributes.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests
from pydantic import BaseModel, ConfigDict

from mailgun_v3 import _http
from mailgun_v3.credentials import Credentials

LOGGER = logging.getLogger(__name__)

VALIDATION_ENDPOINT = "address/validate"


class EmailParts(BaseModel):
    """Returned for successfully parsed email addresses."""

    model_config = ConfigDict(frozen=True, extra="allow")

    domain: Optional[str] = None
    local_part: Optional[str] = None
    display_name: Optional[str] = None


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    address: str
    is_valid: bool
    did_you_mean: Optional[str] = None
    is_disposable_address: Optional[bool] = None
    is_role_address: Optional[bool] = None
    reason: Optional[str] = None
    risk: Optional[str] = None
    mailbox_verification: Optional[str] = None
    parts: Optional[EmailParts] = None


def validate_with_session(
    session: requests.Session,
    credentials: Credentials,
    address: str,
    timeout: Optional[float] = None,
) -> ValidationResult:
    """Same as :func:`validate_address` but with an externally managed session."""
    if not address:
        raise ValueError("address must not be empty")

    response = _http.request(
        session,
        "GET",
        credentials.url(VALIDATION_ENDPOINT),
        credentials,
        timeout=timeout,
        params={"address": address},
    )
    _http.raise_for_status(response)
    result = _http.parse_model(ValidationResult, response)
    LOGGER.info("Validated %s: is_valid=%s", result.address, result.is_valid)
    return result


def validate_address(credentials: Credentials, address: str) -> ValidationResult:
    """Validate ``address`` using Mailgun's validation service.

    Raises:
        ValueError: If ``address`` is empty.
        TransportError: If the request could not be completed.
        ApiError: If Mailgun answers with a non-2xx status.
        ResponseParseError: If the body is not a validation JSON object.
    """
    with requests.Session() as session:
        return validate_with_session(session, credentials, address)


__all__ = [
    "VALIDATION_ENDPOINT",
    "EmailParts",
    "ValidationResult",
    "validate_address",
    "validate_with_session",
]
