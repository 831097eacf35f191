"""User model and roles."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from pyiottu.models._base import IottuBaseModel


class Role(StrEnum):
    """Account role.

    Matching is case-insensitive. Any unrecognised role resolves to
    ``USER`` so an unknown account never gets unscoped access.
    """

    ADMIN = "ADMIN"
    USER = "USER"

    @classmethod
    def _missing_(cls, value: object) -> Role:
        if isinstance(value, str):
            upper = value.strip().upper()
            for member in cls:
                if member.value == upper:
                    return member
        return cls.USER

    @property
    def is_privileged(self) -> bool:
        return self is Role.ADMIN


class User(IottuBaseModel):
    """A user account (``/users``)."""

    id: int = Field(alias="id_usuario")
    name: str = Field(default="", alias="nome_usuario")
    email: str = Field(default="", alias="email_usuario")
    role: Role = Role.USER
