"""Login endpoint.

Endpoint:
  - POST /auth/login
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyiottu._constants import LOGIN_PATH
from pyiottu._redact import redact_for_log
from pyiottu._transport import Transport
from pyiottu.exceptions import IottuMalformedLoginError
from pyiottu.i18n import DEFAULT_TRANSLATOR, Translator
from pyiottu.models.requests import LoginRequest
from pyiottu.models.user import User

_logger = logging.getLogger(__name__)

_REQUIRED_IDENTITY_FIELDS = ("id_usuario", "nome_usuario", "email_usuario")


def build_login_request(email: str, password: str, *, translator: Translator = DEFAULT_TRANSLATOR) -> dict[str, Any]:
    """Validate credentials and build the JSON body."""
    return LoginRequest.parse({"email": email, "password": password}, translator=translator).to_wire()


def parse_login_response(body: Any, *, translator: Translator = DEFAULT_TRANSLATOR) -> User:
    """Extract the authenticated user.

    Raises
    ------
    IottuMalformedLoginError
        If the body is not an object or misses any identity field, even
        though the HTTP status was a success.
    """
    if not isinstance(body, dict) or any(not body.get(key) for key in _REQUIRED_IDENTITY_FIELDS):
        _logger.debug("Login response missing identity fields: %s", redact_for_log(body))
        raise IottuMalformedLoginError(translator.t("auth.serverResponseError"))
    try:
        return User.model_validate(
            {
                "id_usuario": body["id_usuario"],
                "nome_usuario": body["nome_usuario"],
                "email_usuario": body["email_usuario"],
                "role": body.get("role"),
            }
        )
    except ValidationError as exc:
        raise IottuMalformedLoginError(translator.t("auth.serverResponseError")) from exc


async def login(
    transport: Transport,
    email: str,
    password: str,
    *,
    translator: Translator = DEFAULT_TRANSLATOR,
) -> User:
    """Authenticate and return the signed-in user."""
    body = build_login_request(email, password, translator=translator)
    response = await transport.request("POST", LOGIN_PATH, json_body=body)
    return parse_login_response(response, translator=translator)
