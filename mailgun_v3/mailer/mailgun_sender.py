"""Mailgun-based email sender implementation.

This module defines ``MailgunSender``, which sends email via the Mailgun
HTTP API, and the functional entry points ``send_email`` and
``send_with_session``.  See the Mailgun API documentation for details on the
parameters accepted::

    curl -s --user 'api:YOUR_API_KEY' \\
        https://api.mailgun.net/v3/YOUR_DOMAIN_NAME/messages \\
        -F from='Excited User <mailgun@YOUR_DOMAIN_NAME>' \\
        -F to=YOU@YOUR_DOMAIN_NAME \\
        -F subject='Hello' \\
        -F text='Testing some Mailgun awesomeness!'

The request is always encoded as ``multipart/form-data`` so attachments and
plain fields travel in the same body.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple, Union

import requests
from pydantic import BaseModel, ConfigDict

from mailgun_v3 import _http
from mailgun_v3.credentials import Credentials, EmailAddress
from mailgun_v3.mailer import EmailSender
from mailgun_v3.mailer.message import Message

LOGGER = logging.getLogger(__name__)

MESSAGES_ENDPOINT = "messages"

Field = Tuple[str, Tuple[Any, ...]]


class SendSuccess(BaseModel):
    """Mailgun accepted the message and queued it for delivery."""

    model_config = ConfigDict(frozen=True)

    id: str
    message: str

    @property
    def ok(self) -> bool:
        return True


class SendFailure(BaseModel):
    """Mailgun refused the message; ``message`` is the provider's text."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    message: str

    @property
    def ok(self) -> bool:
        return False


SendResult = Union[SendSuccess, SendFailure]


def build_message_fields(sender: EmailAddress, message: Message) -> List[Field]:
    """Return the multipart fields for ``message`` in the order they are sent.

    Plain fields have no filename; attachments are file parts named
    ``attachment`` carrying the attachment's filename.
    """
    fields: List[Field] = [("from", (None, str(sender)))]
    fields.extend((key, (None, value)) for key, value in message.to_params())
    for attachment in message.attachments:
        if attachment.content_type:
            part: Tuple[Any, ...] = (
                attachment.filename,
                attachment.content,
                attachment.content_type,
            )
        else:
            part = (attachment.filename, attachment.content)
        fields.append(("attachment", part))
    return fields


def send_with_session(
    session: requests.Session,
    credentials: Credentials,
    sender: EmailAddress,
    message: Message,
    timeout: Optional[float] = None,
) -> SendResult:
    """Same as :func:`send_email` but with an externally managed session.

    Raises:
        TransportError: If the request could not be completed.
        ResponseParseError: If a 2xx body is not ``{"id", "message"}``.
    """
    if not message.has_recipients:
        LOGGER.warning("Sending message %r without recipients", message.subject)

    url = credentials.url(MESSAGES_ENDPOINT)
    response = _http.request(
        session,
        "POST",
        url,
        credentials,
        timeout=timeout,
        files=build_message_fields(sender, message),
    )

    if not _http.is_success(response):
        failure = SendFailure(
            status_code=response.status_code,
            message=_http.error_message(response),
        )
        LOGGER.warning(
            "Mailgun refused message %r: %s %s",
            message.subject,
            failure.status_code,
            failure.message,
        )
        return failure

    result = _http.parse_model(SendSuccess, response)
    LOGGER.info("Mailgun queued message %s: %s", result.id, result.message)
    return result


def send_email(
    credentials: Credentials, sender: EmailAddress, message: Message
) -> SendResult:
    """Send a single email from ``sender`` using a throwaway session."""
    with requests.Session() as session:
        return send_with_session(session, credentials, sender, message)


class MailgunSender(EmailSender):
    """Mailgun implementation of the ``EmailSender`` interface.

    A caller-supplied ``session`` is reused and never closed; without one,
    every ``send`` opens and closes its own session.
    """

    def __init__(
        self,
        credentials: Credentials,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._credentials = credentials
        self._session = session
        self._timeout = timeout

    @classmethod
    def from_env(cls, **kwargs: Any) -> "MailgunSender":
        return cls(Credentials.from_env(), **kwargs)

    @property
    def domain(self) -> str:
        return self._credentials.domain

    def send(self, sender: EmailAddress, message: Message) -> SendResult:
        if self._session is not None:
            return send_with_session(
                self._session, self._credentials, sender, message, self._timeout
            )
        with requests.Session() as session:
            return send_with_session(
                session, self._credentials, sender, message, self._timeout
            )


__all__ = [
    "MESSAGES_ENDPOINT",
    "SendSuccess",
    "SendFailure",
    "SendResult",
    "MailgunSender",
    "build_message_fields",
    "send_email",
    "send_with_session",
]
