"""Failure classification and user-facing error messages.

Two independent paths over the same failures:

* :func:`parse_api_error` returns a structured :class:`ApiErrorInfo` whose
  ``constraint`` callers branch on (e.g. "this yard still has motorcycles").
* :func:`extract_error_message` returns one localized string for display.

Both accept the exceptions raised by :mod:`pyiottu._transport`
(:class:`IottuHttpError`, :class:`IottuNetworkError`), malformed 2xx
bodies (:class:`IottuResponseError`), client-side
:class:`IottuValidationError`, or any object exposing ``status_code`` and
``payload`` attributes.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from pyiottu._constants import NETWORK_ERROR_SIGNAL
from pyiottu.exceptions import (
    IottuAuthenticationError,
    IottuHttpError,
    IottuMalformedLoginError,
    IottuNetworkError,
    IottuResponseError,
    IottuValidationError,
)
from pyiottu.i18n import DEFAULT_TRANSLATOR, Translator

_FOREIGN_KEY_MARKERS = ("foreign key", "integrity", "constraint")


class ApiConstraint(StrEnum):
    """Structural failure kind."""

    FOREIGN_KEY = "FOREIGN_KEY"
    UNIQUE = "UNIQUE"
    NOT_FOUND = "NOT_FOUND"
    UNKNOWN = "UNKNOWN"


class ApiErrorInfo(BaseModel):
    """Structured view of a failed request."""

    model_config = ConfigDict(frozen=True)

    status: int | None = None
    message: str
    constraint: ApiConstraint | None = None


def _response_parts(error: Any) -> tuple[int | None, Any, bool]:
    """Return ``(status, payload, has_response)`` for a failure."""
    if isinstance(error, IottuHttpError):
        return error.status_code, error.payload, True
    if isinstance(error, (IottuNetworkError, IottuResponseError, IottuValidationError)):
        return None, None, False
    status = getattr(error, "status_code", None)
    if not isinstance(status, int) or isinstance(status, bool):
        return None, None, False
    return status, getattr(error, "payload", None), True


def _raw_message(error: Any) -> str:
    if isinstance(error, BaseException):
        return str(error)
    message = getattr(error, "message", None)
    return message if isinstance(message, str) else ""


def _server_message(payload: Any) -> str:
    """Server text for classification: a string body, else ``detail`` then ``message``."""
    if isinstance(payload, str):
        return payload
    if isinstance(payload, Mapping):
        value = payload.get("detail") or payload.get("message")
        if value:
            return value if isinstance(value, str) else str(value)
    return ""


def _payload_string(payload: Any, *keys: str) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    for key in keys:
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def classify(status: int | None, server_message: str) -> ApiConstraint | None:
    """Map a status and server message to a constraint; first match wins."""
    text = server_message.lower()
    if status == 409 or any(marker in text for marker in _FOREIGN_KEY_MARKERS):
        return ApiConstraint.FOREIGN_KEY
    if status == 404 or "not found" in text:
        return ApiConstraint.NOT_FOUND
    if "unique" in text:
        return ApiConstraint.UNIQUE
    if status is not None and status >= 400:
        return ApiConstraint.UNKNOWN
    return None


def parse_api_error(error: Any, *, translator: Translator = DEFAULT_TRANSLATOR) -> ApiErrorInfo:
    """Classify a failure for programmatic branching."""
    status, payload, _ = _response_parts(error)
    server_message = _server_message(payload)
    return ApiErrorInfo(
        status=status,
        message=server_message or _raw_message(error) or translator.t("validation.unknownError"),
        constraint=classify(status, server_message),
    )


def extract_error_message(error: Any, *, translator: Translator = DEFAULT_TRANSLATOR) -> str:
    """Return the single localized message to show for a failure."""
    if isinstance(error, IottuValidationError):
        first = next(iter(error.field_errors.values()), "")
        return first or str(error) or translator.t("validation.unknownError")
    if isinstance(error, IottuAuthenticationError):
        # Already localized by the session store.
        return str(error) or translator.t("auth.loginError")
    if isinstance(error, IottuResponseError):
        return translator.t("validation.unexpectedResponse")

    status, payload, has_response = _response_parts(error)
    if has_response and status is not None:
        if status == 400:
            return _payload_string(payload, "message") or translator.t("validation.invalidData")
        if status in (401, 403):
            return translator.t("validation.noPermission")
        if status == 404:
            return translator.t("validation.notFound")
        if status == 409:
            return _payload_string(payload, "message") or translator.t("validation.duplicate")
        if status >= 500:
            return translator.t("validation.serverError")
        server_message = _payload_string(payload, "detail", "message", "error")
        if server_message:
            return server_message

    raw = _raw_message(error)
    if not has_response or raw == NETWORK_ERROR_SIGNAL:
        return translator.t("validation.networkError")
    return raw or translator.t("validation.unknownError")


def login_error_message(error: Any, *, translator: Translator = DEFAULT_TRANSLATOR) -> str:
    """Localized message for a failed sign-in.

    Credentials problems (401/403) and a malformed success response are
    reported the same way a rejected login would be.
    """
    if isinstance(error, (IottuMalformedLoginError, IottuResponseError)):
        return translator.t("auth.serverResponseError")
    if isinstance(error, IottuValidationError):
        return extract_error_message(error, translator=translator)

    status, payload, has_response = _response_parts(error)
    if has_response and status is not None:
        if status in (401, 403):
            return translator.t("auth.invalidCredentials")
        if status == 400:
            return translator.t("auth.validateEmailError")
        return _payload_string(payload, "detail", "message", "error") or translator.t("auth.loginError")

    if isinstance(error, IottuNetworkError):
        return translator.t("validation.networkError")
    return _raw_message(error) or translator.t("auth.loginError")
