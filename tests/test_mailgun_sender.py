import sys
from pathlib import Path
from typing import Any, Callable
from unittest import mock

import pytest
import requests

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mailgun_v3.credentials import Credentials, EmailAddress
from mailgun_v3.errors import ResponseParseError, TransportError
from mailgun_v3.mailer import EmailSender
from mailgun_v3.mailer.mailgun_sender import (
    MailgunSender,
    SendFailure,
    SendSuccess,
    build_message_fields,
    send_email,
    send_with_session,
)
from mailgun_v3.mailer.message import Attachment, HtmlBody, Message, TextBody

MSG_ID = "<0123456789abcdef.0123456789abcdef@sandbox0123456789abcdef.mailgun.org>"
SENDER = EmailAddress.with_name("Nick Testla", "nick@sandbox0123456789abcdef.mailgun.org")


def _message(**kwargs: Any) -> Message:
    kwargs.setdefault("to", [EmailAddress.from_address("user@example.com")])
    kwargs.setdefault("subject", "Test email")
    kwargs.setdefault("body", TextBody("This email is from an automated test"))
    return Message(**kwargs)


def _prepared_body(session: mock.MagicMock) -> bytes:
    """Encode the captured request exactly as requests would send it."""
    args, kwargs = session.request.call_args
    prepared = requests.Request(
        args[0], args[1], files=kwargs["files"], auth=kwargs["auth"]
    ).prepare()
    assert prepared.headers["Content-Type"].startswith("multipart/form-data")
    return prepared.body


def test_fields_join_recipients_and_omit_empty() -> None:
    msg = _message(
        to=[EmailAddress.from_address("a@x.org"), EmailAddress.from_address("b@x.org")]
    )
    fields = build_message_fields(SENDER, msg)
    names = [name for name, _ in fields]
    assert names == ["from", "to", "subject", "text"]
    assert dict(fields)["to"] == (None, "a@x.org,b@x.org")
    assert dict(fields)["from"] == (None, "Nick Testla <nick@sandbox0123456789abcdef.mailgun.org>")


def test_attachment_becomes_file_part() -> None:
    msg = _message(attachments=[Attachment("a.txt", b"hi")])
    fields = build_message_fields(SENDER, msg)
    assert fields[-1] == ("attachment", ("a.txt", b"hi"))

    typed = _message(attachments=[Attachment("r.pdf", b"%PDF", "application/pdf")])
    assert build_message_fields(SENDER, typed)[-1] == (
        "attachment",
        ("r.pdf", b"%PDF", "application/pdf"),
    )


def test_send_posts_multipart_with_basic_auth(
    creds: Credentials, session: mock.MagicMock, respond: Callable[[int, Any], None]
) -> None:
    respond(200, {"id": MSG_ID, "message": "Queued. Thank you."})
    msg = _message(attachments=[Attachment("a.txt", b"hi")])

    result = send_with_session(session, creds, SENDER, msg)

    assert isinstance(result, SendSuccess)
    args, kwargs = session.request.call_args
    assert args == ("POST", f"https://api.mailgun.net/v3/{creds.domain}/messages")
    assert kwargs["auth"] == ("api", creds.api_key)
    assert kwargs["timeout"] is None

    body = _prepared_body(session)
    assert b'name="to"\r\n\r\nuser@example.com\r\n' in body
    assert b'name="subject"\r\n\r\nTest email\r\n' in body
    assert b'name="attachment"; filename="a.txt"' in body
    assert b"\r\n\r\nhi\r\n" in body
    assert b'name="cc"' not in body
    assert b'name="bcc"' not in body


def test_html_body_is_sent_as_html(
    creds: Credentials, session: mock.MagicMock, respond: Callable[[int, Any], None]
) -> None:
    respond(200, {"id": MSG_ID, "message": "Queued. Thank you."})
    send_with_session(session, creds, SENDER, _message(body=HtmlBody("<b>hi</b>")))
    body = _prepared_body(session)
    assert b'name="html"\r\n\r\n<b>hi</b>\r\n' in body
    assert b'name="text"' not in body


def test_success_response_maps_to_success(
    creds: Credentials, session: mock.MagicMock, respond: Callable[[int, Any], None]
) -> None:
    respond(200, {"id": "<msg-id>", "message": "Queued"})
    result = send_with_session(session, creds, SENDER, _message())
    assert result == SendSuccess(id="<msg-id>", message="Queued")
    assert result.ok


def test_error_response_maps_to_failure(
    creds: Credentials, session: mock.MagicMock, respond: Callable[[int, Any], None]
) -> None:
    respond(400, {"message": "Invalid domain"})
    result = send_with_session(session, creds, SENDER, _message())
    assert isinstance(result, SendFailure)
    assert result.status_code == 400
    assert result.message == "Invalid domain"
    assert not result.ok


def test_non_json_error_falls_back_to_body(
    creds: Credentials, session: mock.MagicMock, respond: Callable[[int, Any], None]
) -> None:
    respond(500, "upstream exploded")
    result = send_with_session(session, creds, SENDER, _message())
    assert result == SendFailure(status_code=500, message="upstream exploded")


def test_empty_error_body_falls_back_to_reason(
    creds: Credentials, session: mock.MagicMock, respond: Callable[[int, Any], None]
) -> None:
    respond(401, "")
    result = send_with_session(session, creds, SENDER, _message())
    assert result == SendFailure(status_code=401, message="Unauthorized")


def test_missing_recipients_are_left_to_the_provider(
    creds: Credentials, session: mock.MagicMock, respond: Callable[[int, Any], None]
) -> None:
    respond(400, {"message": "'to' parameter is missing"})
    result = send_with_session(session, creds, SENDER, _message(to=[]))
    assert session.request.called
    assert result == SendFailure(status_code=400, message="'to' parameter is missing")


def test_connection_error_raises_transport_error(
    creds: Credentials, session: mock.MagicMock
) -> None:
    session.request.side_effect = requests.ConnectionError("connection refused")
    with pytest.raises(TransportError) as excinfo:
        send_with_session(session, creds, SENDER, _message())
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_malformed_success_body_raises_parse_error(
    creds: Credentials, session: mock.MagicMock, respond: Callable[[int, Any], None]
) -> None:
    respond(200, "<html>not json</html>")
    with pytest.raises(ResponseParseError) as excinfo:
        send_with_session(session, creds, SENDER, _message())
    assert excinfo.value.body == "<html>not json</html>"


def test_success_body_missing_id_raises_parse_error(
    creds: Credentials, session: mock.MagicMock, respond: Callable[[int, Any], None]
) -> None:
    respond(200, {"message": "Queued"})
    with pytest.raises(ResponseParseError):
        send_with_session(session, creds, SENDER, _message())


def test_send_email_uses_and_closes_its_own_session(
    creds: Credentials, session: mock.MagicMock, respond: Callable[[int, Any], None]
) -> None:
    respond(200, {"id": MSG_ID, "message": "Queued. Thank you."})
    with mock.patch("mailgun_v3.mailer.mailgun_sender.requests.Session") as session_cls:
        session_cls.return_value.__enter__.return_value = session
        session_cls.return_value.__exit__.return_value = False
        result = send_email(creds, SENDER, _message())
    assert result.ok
    session_cls.return_value.__exit__.assert_called_once()


def test_mailgun_sender_reuses_session_and_timeout(
    creds: Credentials, session: mock.MagicMock, respond: Callable[[int, Any], None]
) -> None:
    respond(200, {"id": MSG_ID, "message": "Queued. Thank you."})
    sender = MailgunSender(creds, session=session, timeout=10)
    assert isinstance(sender, EmailSender)
    assert sender.domain == creds.domain

    sender.send(SENDER, _message())
    sender.send(SENDER, _message())

    assert session.request.call_count == 2
    assert session.request.call_args.kwargs["timeout"] == 10
    session.close.assert_not_called()


def test_mailgun_sender_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAILGUN_API_KEY", "key-from-env")
    monkeypatch.setenv("MAILGUN_DOMAIN", "mg.example.org")
    monkeypatch.delenv("MAILGUN_BASE_URL", raising=False)
    assert MailgunSender.from_env().domain == "mg.example.org"
