"""Helpers for safe debug logging.

Login and registration payloads carry passwords, and the persisted session
holds the signed-in identity. Request and response bodies go through
:func:`redact_for_log` before they reach a DEBUG log line.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "senha",
        "senha_usuario",
        "token",
        "authorization",
        "cookie",
    }
)

_MAX_DEPTH = 20


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return lowered in _SENSITIVE_KEYS or lowered.startswith("senha")


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Return a redacted copy of *value* suitable for debug logs.

    Pydantic models are dumped with their wire aliases first, so a
    ``UserPayload`` hides ``senha_usuario`` just like a raw dict would.
    """

    def _walk(item: Any, depth: int) -> Any:
        if depth > _MAX_DEPTH:
            return "<max-depth>"
        if item is None or isinstance(item, (bool, int, float)):
            return item
        if isinstance(item, str):
            return item if len(item) <= max_string else f"{item[:max_string]}…<truncated>"
        if isinstance(item, bytes):
            return f"<bytes:{len(item)}b>"
        if isinstance(item, BaseModel):
            return _walk(item.model_dump(by_alias=True, mode="json"), depth + 1)
        if isinstance(item, Mapping):
            return {
                str(k): "<redacted>" if _is_sensitive(str(k)) else _walk(v, depth + 1) for k, v in item.items()
            }
        if isinstance(item, Sequence) and not isinstance(item, bytearray):
            return [_walk(v, depth + 1) for v in item]
        return repr(item)

    return _walk(value, 0)
