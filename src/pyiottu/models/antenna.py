"""Antenna model."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pyiottu.models._base import IottuBaseModel, reference_id
from pyiottu.models.yard import Yard


class Antenna(IottuBaseModel):
    """A yard antenna (``/antennas``), owned through its yard."""

    id: int = Field(alias="id_antena")
    code: str = Field(default="", alias="codigo_antena")
    latitude: float | None = Field(default=None, alias="latitude_antena")
    longitude: float | None = Field(default=None, alias="longitude_antena")
    yard_id: int | None = Field(default=None, alias="id_patio")
    yard: Yard | None = None

    @classmethod
    def _normalize(cls, values: dict[str, Any]) -> dict[str, Any]:
        nested = values.get("id_patio")
        if isinstance(nested, dict):
            values.setdefault("yard", nested)
            values["id_patio"] = reference_id(nested, "id_patio")
        return values
