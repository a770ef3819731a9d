"""Typed description of an email to send through Mailgun.

A :class:`Message` carries recipients, subject, exactly one body variant,
optional file attachments and optional send options.  Each part knows the
form fields it contributes to the ``messages`` endpoint.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from email.utils import format_datetime
from typing import List, Optional, Sequence, Tuple, Union

from mailgun_v3.credentials import EmailAddress

Param = Tuple[str, str]


# ---------------------- Body variants ----------------------
@dataclass(frozen=True)
class TextBody:
    text: str

    def params(self) -> List[Param]:
        return [("text", self.text)]


@dataclass(frozen=True)
class HtmlBody:
    html: str

    def params(self) -> List[Param]:
        return [("html", self.html)]


@dataclass(frozen=True)
class HtmlAndTextBody:
    """HTML body with a plain-text alternative."""

    html: str
    text: str

    def params(self) -> List[Param]:
        return [("html", self.html), ("text", self.text)]


MessageBody = Union[TextBody, HtmlBody, HtmlAndTextBody]


# ---------------------- Send options ----------------------
@dataclass(frozen=True)
class TestMode:
    """Ask Mailgun to accept the message without delivering it."""

    def param(self) -> Param:
        return ("o:testmode", "yes")


@dataclass(frozen=True)
class DeliveryTime:
    """Schedule delivery; naive datetimes are taken as UTC."""

    when: dt.datetime

    def param(self) -> Param:
        when = self.when
        if when.tzinfo is None:
            when = when.replace(tzinfo=dt.timezone.utc)
        return ("o:deliverytime", format_datetime(when))


@dataclass(frozen=True)
class Header:
    name: str
    value: str

    def param(self) -> Param:
        return (f"h:{self.name}", self.value)


@dataclass(frozen=True)
class Tag:
    tag: str

    def param(self) -> Param:
        return ("o:tag", self.tag)


SendOption = Union[TestMode, DeliveryTime, Header, Tag]


# ---------------------- Message ----------------------
@dataclass(frozen=True)
class Attachment:
    """A named file sent along with the message."""

    filename: str
    content: bytes
    content_type: Optional[str] = None


def _join(addresses: Sequence[EmailAddress]) -> str:
    return ",".join(str(a) for a in addresses)


@dataclass(frozen=True)
class Message:
    """An email to send through Mailgun.

    At least one of ``to``, ``cc`` or ``bcc`` should be non-empty; Mailgun
    rejects the request otherwise.
    """

    to: Sequence[EmailAddress] = ()
    cc: Sequence[EmailAddress] = ()
    bcc: Sequence[EmailAddress] = ()
    subject: str = ""
    body: MessageBody = field(default_factory=lambda: TextBody(""))
    attachments: Sequence[Attachment] = ()
    options: Sequence[SendOption] = ()

    def __post_init__(self) -> None:
        for name in ("to", "cc", "bcc", "attachments", "options"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @property
    def has_recipients(self) -> bool:
        return bool(self.to or self.cc or self.bcc)

    def to_params(self) -> List[Param]:
        """Return the non-file form fields in the order they are sent."""
        params: List[Param] = []
        for key in ("to", "cc", "bcc"):
            addresses = getattr(self, key)
            if addresses:
                params.append((key, _join(addresses)))
        params.append(("subject", self.subject))
        params.extend(self.body.params())
        params.extend(opt.param() for opt in self.options)
        return params


__all__ = [
    "TextBody",
    "HtmlBody",
    "HtmlAndTextBody",
    "MessageBody",
    "TestMode",
    "DeliveryTime",
    "Header",
    "Tag",
    "SendOption",
    "Attachment",
    "Message",
]
