"""Credentials and mailbox values shared by every Mailgun endpoint.

Environment variables used by :meth:`Credentials.from_env`:

* ``MAILGUN_API_KEY`` – private API key for Mailgun
* ``MAILGUN_DOMAIN`` – sending domain configured in Mailgun
* ``MAILGUN_BASE_URL`` – Optional API base; defaults to the official US API.
  Use ``https://api.eu.mailgun.net/v3`` for domains hosted in the EU region.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from mailgun_v3.errors import ConfigurationError

MAILGUN_DEFAULT_API = "https://api.mailgun.net/v3"

# Hosts allowed without a dot in the API base (mock servers, local testing)
_LOCAL_HOSTS = ("localhost", "127.0.0.1", "[::1]")


@dataclass(frozen=True)
class Credentials:
    """Mailgun private API key, sending domain and API base URL."""

    api_key: str = field(repr=False)
    domain: str
    api_base: str = MAILGUN_DEFAULT_API

    def __post_init__(self) -> None:
        base = self.api_base.rstrip("/")
        if not base.startswith("http"):
            raise ConfigurationError(
                f"api_base must start with http, got {self.api_base!r}"
            )
        if "." not in base and not any(h in base for h in _LOCAL_HOSTS):
            raise ConfigurationError(
                f"api_base does not contain any dots: {self.api_base!r}"
            )
        if not self.api_key:
            raise ConfigurationError("api_key must not be empty")
        if "." not in self.domain:
            raise ConfigurationError(
                f"domain does not contain any dots: {self.domain!r}"
            )
        object.__setattr__(self, "api_base", base)

    @classmethod
    def from_env(cls) -> "Credentials":
        """Build credentials from ``MAILGUN_*`` environment variables.

        Raises:
            ConfigurationError: If the key or the domain is not set.
        """
        api_key = os.environ.get("MAILGUN_API_KEY", "").strip()
        domain = os.environ.get("MAILGUN_DOMAIN", "").strip()
        if not api_key or not domain:
            raise ConfigurationError(
                "MAILGUN_API_KEY and MAILGUN_DOMAIN must be set"
            )
        api_base = os.environ.get("MAILGUN_BASE_URL", "").strip()
        return cls(api_key, domain, api_base or MAILGUN_DEFAULT_API)

    @property
    def auth(self) -> tuple[str, str]:
        """Basic auth pair; Mailgun always uses the ``api`` username."""
        return ("api", self.api_key)

    def url(self, *parts: str) -> str:
        """Return ``{api_base}/{domain}/{parts...}``."""
        return "/".join((self.api_base, self.domain) + parts)


@dataclass(frozen=True)
class EmailAddress:
    """An email address, with or without a display name."""

    address: str
    name: Optional[str] = None

    @classmethod
    def from_address(cls, address: str) -> "EmailAddress":
        return cls(address)

    @classmethod
    def with_name(cls, name: str, address: str) -> "EmailAddress":
        return cls(address, name)

    def __str__(self) -> str:
        if self.name is not None:
            return f"{self.name} <{self.address}>"
        return self.address


__all__ = ["MAILGUN_DEFAULT_API", "Credentials", "EmailAddress"]
