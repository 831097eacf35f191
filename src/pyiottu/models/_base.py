"""Base model for Iottu API entities.

Every entity model inherits from :class:`IottuBaseModel` which provides:

* ``alias=`` per field so the server's Portuguese snake_case keys
  (``placa_moto``, ``id_patio``...) map to English attribute names, with
  ``populate_by_name`` so either spelling validates.
* A ``model_validator(mode="before")`` that drops ``null`` values so the
  field default is used, then lets each model reshape nested references
  through :meth:`IottuBaseModel._normalize`.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


def reference_id(value: Any, key: str) -> Any:
    """Return the id behind a reference that may be nested or flat.

    The API sends references either as the bare id (``"id_patio": 3``) or as
    the embedded object (``"id_patio": {"id_patio": 3, ...}``).
    """
    if isinstance(value, dict):
        return value.get(key)
    return value


class IottuBaseModel(BaseModel):
    """Base for Iottu API entity models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original API response dict."""

    @classmethod
    def _normalize(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Reshape nested references; subclasses override."""
        return values

    @model_validator(mode="before")
    @classmethod
    def _clean_api_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        original = dict(values)
        cleaned = {k: v for k, v in original.items() if v is not None}
        cleaned = cls._normalize(cleaned)

        # Keep an explicit raw= (kwargs construction) untouched.
        if "raw" not in values:
            cleaned["raw"] = original
        return cleaned
