"""Data models for Iottu API entities and request payloads."""

from pyiottu.models._base import IottuBaseModel, reference_id
from pyiottu.models.antenna import Antenna
from pyiottu.models.motorcycle import Motorcycle, MotorcycleStatus
from pyiottu.models.requests import (
    AntennaPayload,
    IottuPayload,
    LoginRequest,
    MotorcyclePayload,
    TagPayload,
    UserPayload,
    YardPayload,
)
from pyiottu.models.tag import Tag
from pyiottu.models.user import Role, User
from pyiottu.models.yard import Yard

__all__ = [
    "Antenna",
    "AntennaPayload",
    "IottuBaseModel",
    "IottuPayload",
    "LoginRequest",
    "Motorcycle",
    "MotorcyclePayload",
    "MotorcycleStatus",
    "Role",
    "Tag",
    "TagPayload",
    "User",
    "UserPayload",
    "Yard",
    "YardPayload",
    "reference_id",
]
