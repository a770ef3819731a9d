"""Exceptions raised by the Mailgun bindings.

Send failures reported by the provider are returned as
:class:`~mailgun_v3.mailer.mailgun_sender.SendFailure` values.  Every other
failure surfaces as one of the exceptions below.
"""

from __future__ import annotations


class MailgunError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(MailgunError, ValueError):
    """Raised when credentials or environment configuration are invalid."""


class TransportError(MailgunError):
    """Raised when the HTTP request could not be completed.

    Connection failures, TLS errors and timeouts end up here.  The original
    ``requests`` exception is available as ``__cause__``.
    """


class ApiError(MailgunError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"Mailgun API returned {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ResponseParseError(MailgunError):
    """Raised when a successful response body is not the expected JSON."""

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(message)
        self.body = body


__all__ = [
    "MailgunError",
    "ConfigurationError",
    "TransportError",
    "ApiError",
    "ResponseParseError",
]
