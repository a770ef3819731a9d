"""Send a sample message through Mailgun's EU region.

Domains created in the EU region must use the ``api.eu.mailgun.net`` base.
The key and domain come from ``MAILGUN_API_KEY`` and ``MAILGUN_DOMAIN``;
``MAILGUN_BASE_URL`` is ignored here.  Run it with::

    python scripts/send_email_eu_region.py target@example.org
"""

from __future__ import annotations

import logging
import os
import sys

from mailgun_v3 import Credentials, EmailAddress, Message, TextBody, send_email

EU_API = "https://api.eu.mailgun.net/v3"


def main(argv: list[str]) -> int:
    if len(argv) != 2:
        print(f"usage: {argv[0]} RECIPIENT", file=sys.stderr)
        return 2

    api_key = os.environ.get("MAILGUN_API_KEY", "").strip()
    domain = os.environ.get("MAILGUN_DOMAIN", "").strip()
    if not api_key or not domain:
        print(
            f"{argv[0]}: MAILGUN_API_KEY and MAILGUN_DOMAIN must be set",
            file=sys.stderr,
        )
        return 2

    logging.basicConfig(level=logging.INFO)
    creds = Credentials(api_key, domain, EU_API)
    message = Message(
        to=[EmailAddress.from_address(argv[1])],
        subject="sample subject",
        body=TextBody("hello world"),
    )
    sender = EmailAddress.from_address(f"sender@{creds.domain}")

    result = send_email(creds, sender, message)
    print(result)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv))
