"""Abstract interface and Mailgun implementation for sending email messages.

This subpackage defines a common ``send`` interface along with the concrete
implementation targeting the Mailgun HTTP API.  Client code can depend on
:class:`EmailSender` and swap in a fake for tests without changing the calling
semantics.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from mailgun_v3.credentials import EmailAddress

if TYPE_CHECKING:
    from mailgun_v3.mailer.mailgun_sender import SendResult
    from mailgun_v3.mailer.message import Message


class EmailSender(ABC):
    """Abstract base class for email senders.

    Implementations must provide a ``send`` method taking the sender address
    and a :class:`~mailgun_v3.mailer.message.Message`, and returning a
    ``SendResult``.
    """

    @abstractmethod
    def send(self, sender: EmailAddress, message: "Message") -> "SendResult":
        """Send a single email message.

        Args:
            sender: The ``from`` address.
            message: Recipients, subject, body and attachments.

        Returns:
            ``SendSuccess`` when the provider accepted the message, or
            ``SendFailure`` with the HTTP status and provider error text.

        Raises:
            Any implementation specific transport exceptions.
        """
        raise NotImplementedError


from mailgun_v3.mailer.mailgun_sender import (  # noqa: E402
    MailgunSender,
    SendFailure,
    SendResult,
    SendSuccess,
    build_message_fields,
    send_email,
    send_with_session,
)

__all__ = [
    "EmailSender",
    "MailgunSender",
    "SendFailure",
    "SendResult",
    "SendSuccess",
    "build_message_fields",
    "send_email",
    "send_with_session",
]
