"""RFID tag model."""

from __future__ import annotations

from pydantic import Field

from pyiottu.models._base import IottuBaseModel


class Tag(IottuBaseModel):
    """An RFID tag (``/tags``).

    ``in_use`` is derived server-side from the motorcycle/tag association,
    which is why motorcycle writes also invalidate the tag collections.
    """

    id: int = Field(alias="id_tag")
    rfid_code: str = Field(default="", alias="codigo_rfid_tag")
    ssid: str = Field(default="", alias="ssid_wifi_tag")
    latitude: float | None = Field(default=None, alias="latitude_tag")
    longitude: float | None = Field(default=None, alias="longitude_tag")
    in_use: bool = Field(default=False, alias="em_uso")
