"""Yard model."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pyiottu.models._base import IottuBaseModel, reference_id


class Yard(IottuBaseModel):
    """A parking yard (``/yards``), owned directly by a user."""

    id: int = Field(alias="id_patio")
    user_id: int | None = Field(default=None, alias="id_usuario")
    cep: str = Field(default="", alias="cep_patio")
    number: str = Field(default="", alias="numero_patio")
    city: str = Field(default="", alias="cidade_patio")
    state: str = Field(default="", alias="estado_patio")
    capacity: int | None = Field(default=None, alias="capacidade_patio")

    @classmethod
    def _normalize(cls, values: dict[str, Any]) -> dict[str, Any]:
        if "id_usuario" in values:
            values["id_usuario"] = reference_id(values["id_usuario"], "id_usuario")
        return values

    @property
    def location(self) -> str:
        """``City/ST`` label, ``N/A`` when the yard has no city."""
        if not self.city:
            return "N/A"
        return f"{self.city}/{self.state}" if self.state else self.city
