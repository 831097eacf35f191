"""Client configuration for pyiottu."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyiottu._constants import BASE_URL
from pyiottu.exceptions import IottuConfigError
from pyiottu.i18n import SUPPORTED_LANGUAGES
from pyiottu.query.options import QueryOptions, RefetchOnMount


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class IottuConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        API base URL including the ``/api/v1`` prefix.
    language : str
        Language used for user-facing messages (``"en"`` or ``"pt-BR"``).
    storage_path : str or None
        JSON file holding the persisted session and theme. ``None`` keeps
        them in memory for the lifetime of the process.
    refetch_on_mount : RefetchOnMount
        Default mount policy for collection queries.
    refetch_on_window_focus : bool
        Default focus policy for collection queries.
    stale_time : float
        Default freshness window, in seconds, for collection queries.
    api_trace_enabled : bool
        Log redacted request and response bodies at DEBUG level.
    """

    base_url: str = BASE_URL
    language: str = "en"
    storage_path: str | None = None
    refetch_on_mount: RefetchOnMount = RefetchOnMount.ALWAYS
    refetch_on_window_focus: bool = True
    stale_time: float = 0.0
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.base_url.strip():
            raise IottuConfigError("base_url must be non-empty")
        if self.language not in SUPPORTED_LANGUAGES:
            raise IottuConfigError(f"language must be one of {SUPPORTED_LANGUAGES}, got {self.language!r}")
        if self.stale_time < 0:
            raise IottuConfigError("stale_time must be >= 0")
        try:
            refetch_on_mount = RefetchOnMount(self.refetch_on_mount)
        except ValueError as exc:
            raise IottuConfigError(f"Unsupported refetch_on_mount: {self.refetch_on_mount!r}") from exc
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "refetch_on_mount", refetch_on_mount)

    @property
    def query_options(self) -> QueryOptions:
        """Default :class:`QueryOptions` for collection queries."""
        return QueryOptions(
            refetch_on_mount=self.refetch_on_mount,
            refetch_on_window_focus=self.refetch_on_window_focus,
            stale_time=self.stale_time,
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> IottuConfig:
        """Create configuration from ``IOTTU_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "IOTTU_BASE_URL": "base_url",
            "IOTTU_LANGUAGE": "language",
            "IOTTU_STORAGE_PATH": "storage_path",
            "IOTTU_REFETCH_ON_MOUNT": "refetch_on_mount",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        stale_env = env.get("IOTTU_STALE_TIME")
        if stale_env is not None and "stale_time" not in overrides:
            try:
                config_kwargs["stale_time"] = float(stale_env)
            except ValueError as exc:
                raise IottuConfigError(f"IOTTU_STALE_TIME is not a number: {stale_env!r}") from exc

        if "refetch_on_window_focus" not in overrides:
            config_kwargs["refetch_on_window_focus"] = _env_bool(env.get("IOTTU_REFETCH_ON_WINDOW_FOCUS"), True)

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(env.get("IOTTU_API_TRACE_ENABLED"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
