"""JSON-over-HTTP transport for the Iottu REST API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyiottu._constants import NETWORK_ERROR_SIGNAL
from pyiottu._redact import redact_for_log
from pyiottu.config import IottuConfig
from pyiottu.exceptions import IottuHttpError, IottuNetworkError

_logger = logging.getLogger(__name__)

_HEADERS: dict[str, str] = {
    "accept": "application/json",
    "content-type": "application/json",
}


class Transport(Protocol):
    """Structural transport interface used by the resource modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (:class:`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Any = None,
    ) -> Any:
        ...


def _decode_body(text: str) -> Any:
    """Decode a response body: JSON when it parses, raw text otherwise."""
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def is_success(status: int) -> bool:
    """Only ``[200, 300)`` counts as success; redirects are failures too."""
    return 200 <= status < 300


class HttpTransport:
    """aiohttp transport rooted at ``config.base_url``.

    Every request sends and expects JSON. Redirects are not followed so
    a 3xx surfaces as :class:`IottuHttpError` like any other non-2xx.
    """

    def __init__(self, config: IottuConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    def _trace(self, label: str, endpoint: str, body: Any) -> None:
        if self._config.api_trace_enabled:
            _logger.debug("%s %s body=%s", label, endpoint, redact_for_log(body))

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Any = None,
    ) -> Any:
        url = f"{self._config.base_url}{path}"
        query = {k: str(v) for k, v in params.items() if v is not None} if params else None

        _logger.debug("%s %s params=%s", method, url, query)
        self._trace("request", path, json_body)

        try:
            async with self._http.request(
                method,
                url,
                params=query,
                data=None if json_body is None else json.dumps(json_body),
                headers=_HEADERS,
                allow_redirects=False,
            ) as resp:
                status = resp.status
                # Error pages are not always UTF-8; a bad byte must not hide the status.
                text = await resp.text(errors="replace")
        except (aiohttp.ClientError, TimeoutError) as exc:
            _logger.debug("%s %s failed: %s", method, url, exc)
            raise IottuNetworkError(NETWORK_ERROR_SIGNAL, endpoint=path) from exc

        payload = _decode_body(text)
        self._trace(f"response[{status}]", path, payload)

        if not is_success(status):
            raise IottuHttpError(
                f"Request failed with status code {status}",
                status_code=status,
                payload=payload,
                endpoint=path,
            )
        return payload
