"""Manage stored templates on a Mailgun sending domain.

Templates are created with a form POST to ``/{domain}/templates`` and listed
or fetched with GET requests below the same path.  Mailgun answers with
camelCase keys (``createdAt``); the models accept either spelling.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import requests
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from mailgun_v3 import _http
from mailgun_v3.credentials import Credentials

LOGGER = logging.getLogger(__name__)

TEMPLATES_ENDPOINT = "templates"
TEMPLATE_VERSIONS_ENDPOINT = "versions"


class _ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class TemplateVersion(_ApiModel):
    created_at: str = ""
    engine: str = ""
    tag: str = ""
    comment: str = ""
    mjml: str = ""
    template: Optional[str] = None
    id: Optional[str] = None
    active: bool = False


class TemplateInfo(_ApiModel):
    name: str
    id: str = ""
    description: str = ""
    created_at: str = ""
    created_by: str = ""
    version: Optional[TemplateVersion] = None
    versions: Optional[List[TemplateVersion]] = None


class CreateTemplateResponse(_ApiModel):
    message: str
    template: TemplateInfo


class _TemplateList(_ApiModel):
    items: List[TemplateInfo]


class _SingleTemplate(_ApiModel):
    template: TemplateInfo


@dataclass(frozen=True)
class Template:
    """A template to store; unset optional fields are not sent."""

    name: str
    description: str = ""
    template: Optional[str] = None
    tag: Optional[str] = None
    engine: Optional[str] = None
    comment: Optional[str] = None

    def to_params(self) -> Dict[str, str]:
        params = {"name": self.name, "description": self.description}
        for key in ("template", "tag", "engine", "comment"):
            value = getattr(self, key)
            if value is not None:
                params[key] = value
        return params


def create_template_with_session(
    session: requests.Session,
    credentials: Credentials,
    template: Template,
    timeout: Optional[float] = None,
) -> CreateTemplateResponse:
    response = _http.request(
        session,
        "POST",
        credentials.url(TEMPLATES_ENDPOINT),
        credentials,
        timeout=timeout,
        data=template.to_params(),
    )
    _http.raise_for_status(response)
    created = _http.parse_model(CreateTemplateResponse, response)
    LOGGER.info("Created template %s: %s", created.template.name, created.message)
    return created


def create_template(
    credentials: Credentials, template: Template
) -> CreateTemplateResponse:
    """Store ``template`` on the credentials' domain.

    Raises:
        ApiError: If Mailgun answers with a non-2xx status.
    """
    with requests.Session() as session:
        return create_template_with_session(session, credentials, template)


def get_templates_with_session(
    session: requests.Session,
    credentials: Credentials,
    name: Optional[str] = None,
    fetch_versions: bool = False,
    timeout: Optional[float] = None,
) -> List[TemplateInfo]:
    if name is None:
        url = credentials.url(TEMPLATES_ENDPOINT)
    elif not name:
        raise ValueError("template name must not be empty")
    else:
        # The name is a single path segment
        segment = requests.utils.quote(name, safe="")
        if fetch_versions:
            url = credentials.url(
                TEMPLATES_ENDPOINT, segment, TEMPLATE_VERSIONS_ENDPOINT
            )
        else:
            url = credentials.url(TEMPLATES_ENDPOINT, segment)

    response = _http.request(session, "GET", url, credentials, timeout=timeout)
    _http.raise_for_status(response)

    if name is None:
        return list(_http.parse_model(_TemplateList, response).items)
    return [_http.parse_model(_SingleTemplate, response).template]


def get_templates(
    credentials: Credentials,
    name: Optional[str] = None,
    fetch_versions: bool = False,
) -> List[TemplateInfo]:
    """List all templates, or fetch the one called ``name``.

    With ``fetch_versions`` the returned template has its ``versions``
    populated.  A single template is still returned as a one-item list.
    """
    with requests.Session() as session:
        return get_templates_with_session(session, credentials, name, fetch_versions)


__all__ = [
    "TEMPLATES_ENDPOINT",
    "TEMPLATE_VERSIONS_ENDPOINT",
    "Template",
    "TemplateInfo",
    "TemplateVersion",
    "CreateTemplateResponse",
    "create_template",
    "create_template_with_session",
    "get_templates",
    "get_templates_with_session",
]
