"""Custom exception hierarchy for pyiottu."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pyiottu._constants import NETWORK_ERROR_SIGNAL


class IottuError(Exception):
    """Base exception for all pyiottu errors."""


class IottuConfigError(IottuError):
    """Invalid or missing configuration."""


class IottuValidationError(IottuError):
    """Client-side validation failed before any request was sent.

    ``field_errors`` maps wire field names to localized messages, in the
    order the fields were checked.
    """

    def __init__(self, message: str, *, field_errors: Mapping[str, str] | None = None) -> None:
        self.field_errors: dict[str, str] = dict(field_errors or {})
        super().__init__(message)


class IottuTransportError(IottuError):
    """Request failure (no response, or a non-2xx response)."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)


class IottuNetworkError(IottuTransportError):
    """No response was received (connection refused, DNS, reset...)."""

    def __init__(self, message: str = NETWORK_ERROR_SIGNAL, *, endpoint: str = "") -> None:
        super().__init__(message, endpoint=endpoint)


class IottuHttpError(IottuTransportError):
    """Server answered with a status outside ``[200, 300)``.

    ``payload`` is the decoded JSON body when it parses, the raw text
    otherwise, and ``None`` for an empty body.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        payload: Any = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.payload = payload
        super().__init__(message, endpoint=endpoint)


class IottuAuthenticationError(IottuError):
    """Login failed or the login response was malformed.

    ``message`` is already localized and ready for display.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class IottuMalformedLoginError(IottuAuthenticationError):
    """Login answered 2xx but the identity fields were missing."""


class IottuResponseError(IottuTransportError):
    """Server answered 2xx but the body does not have the expected shape."""

    def __init__(self, message: str, *, payload: Any = None, endpoint: str = "") -> None:
        self.payload = payload
        super().__init__(message, endpoint=endpoint)
