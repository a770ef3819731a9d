"""Top‑level package for the Mailgun v3 bindings.

This package wraps a few of Mailgun's HTTP APIs: sending email, validating
addresses and managing stored templates.  It builds the request from typed
values, sends it with ``requests`` and returns typed results, but doesn't
attempt to do much else in terms of retries or argument sanitization.

The most common names are re-exported here for convenience when using
``from mailgun_v3 import ...``.
"""

from __future__ import annotations

from mailgun_v3.credentials import MAILGUN_DEFAULT_API, Credentials, EmailAddress
from mailgun_v3.errors import (
    ApiError,
    ConfigurationError,
    MailgunError,
    ResponseParseError,
    TransportError,
)
from mailgun_v3.mailer import (
    EmailSender,
    MailgunSender,
    SendFailure,
    SendResult,
    SendSuccess,
    send_email,
)
from mailgun_v3.mailer.message import (
    Attachment,
    DeliveryTime,
    Header,
    HtmlAndTextBody,
    HtmlBody,
    Message,
    Tag,
    TestMode,
    TextBody,
)
from mailgun_v3.validation import ValidationResult, validate_address

__all__ = [
    "MAILGUN_DEFAULT_API",
    "Credentials",
    "EmailAddress",
    "MailgunError",
    "ConfigurationError",
    "TransportError",
    "ApiError",
    "ResponseParseError",
    "EmailSender",
    "MailgunSender",
    "SendSuccess",
    "SendFailure",
    "SendResult",
    "send_email",
    "Message",
    "TextBody",
    "HtmlBody",
    "HtmlAndTextBody",
    "Attachment",
    "TestMode",
    "DeliveryTime",
    "Header",
    "Tag",
    "ValidationResult",
    "validate_address",
]

# SemVer version of the package
__version__: str = "0.1.0"
