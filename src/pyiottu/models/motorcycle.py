"""Motorcycle and motorcycle status models."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pyiottu.models._base import IottuBaseModel, reference_id
from pyiottu.models.tag import Tag
from pyiottu.models.yard import Yard


class MotorcycleStatus(IottuBaseModel):
    """Operational status (``/motorcycle-statuses``)."""

    id: int = Field(alias="id_status")
    description: str = Field(default="", alias="descricao_status")


class Motorcycle(IottuBaseModel):
    """A tracked motorcycle (``/motorcycles``), owned through its yard.

    ``id_status`` and ``id_patio`` arrive either as bare ids or as the
    embedded objects; both shapes are accepted. Older payloads use
    ``status``/``yard`` keys instead.
    """

    id: int = Field(alias="id_moto")
    plate: str = Field(default="", alias="placa_moto")
    chassis: str = Field(default="", alias="chassi_moto")
    engine_number: str = Field(default="", alias="nr_motor_moto")
    model: str = Field(default="", alias="modelo_moto")
    status: MotorcycleStatus | None = Field(default=None, alias="id_status")
    yard_id: int | None = Field(default=None, alias="id_patio")
    yard: Yard | None = None
    tags: list[Tag] = Field(default_factory=list)

    @classmethod
    def _normalize(cls, values: dict[str, Any]) -> dict[str, Any]:
        status = values.pop("id_status", None)
        if status is None:
            status = values.pop("status", None)
        if isinstance(status, (int, str)):
            status = {"id_status": status}
        if status is not None:
            values["id_status"] = status

        yard = values.get("id_patio", values.get("yard"))
        if isinstance(yard, dict):
            values["yard"] = yard
            values["id_patio"] = reference_id(yard, "id_patio")
        elif yard is not None:
            values.pop("yard", None)
            values["id_patio"] = yard
        return values

    @property
    def tag_ids(self) -> frozenset[int]:
        return frozenset(tag.id for tag in self.tags)
