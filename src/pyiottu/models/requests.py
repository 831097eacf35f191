"""Pydantic request models for create/update entrypoints.

These models provide a consistent "validate → normalize → execute" flow:
every write payload is checked client-side and a failure raises
:class:`~pyiottu.exceptions.IottuValidationError` with one localized
message per field, before anything reaches the network.
"""

from __future__ import annotations

import math
import re
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from pyiottu.exceptions import IottuValidationError
from pyiottu.i18n import DEFAULT_TRANSLATOR, Translator
from pyiottu.models.user import Role

_FIELD_ERROR_TYPE = "iottu_field"
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _field_error(key: str) -> PydanticCustomError:
    """Build a validation error whose message is the catalog key."""
    return PydanticCustomError(_FIELD_ERROR_TYPE, key)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _text(value: Any, required: str, *, min_length: int = 0, too_short: str = "") -> str:
    if _is_blank(value):
        raise _field_error(required)
    text = str(value).strip()
    if len(text) < min_length:
        raise _field_error(too_short or required)
    return text


def _number(value: Any, required: str, invalid: str) -> float:
    if _is_blank(value):
        raise _field_error(required)
    if isinstance(value, bool):
        raise _field_error(invalid)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise _field_error(invalid) from None
    if not math.isfinite(number):
        raise _field_error(invalid)
    return number


def _coordinate(value: Any, axis: str, limit: float) -> float:
    number = _number(value, f"validation.{axis}Required", f"validation.{axis}Invalid")
    if not -limit <= number <= limit:
        raise _field_error(f"validation.{axis}Range")
    return number


def _reference(value: Any, required: str) -> int:
    """A selected id; ``None``, ``""`` and ``0`` all mean "nothing selected"."""
    if _is_blank(value) or isinstance(value, bool):
        raise _field_error(required)
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise _field_error(required) from None
    if ident <= 0:
        raise _field_error(required)
    return ident


class IottuPayload(BaseModel):
    """Base for write payloads."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        validate_default=True,
    )

    @classmethod
    def parse(cls, data: Any, *, translator: Translator = DEFAULT_TRANSLATOR) -> Self:
        """Validate *data* (a mapping or an instance) or raise ``IottuValidationError``."""
        if isinstance(data, cls):
            return data
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise IottuValidationError(
                translator.t("validation.failed"),
                field_errors=cls._field_errors(exc, translator),
            ) from exc

    @classmethod
    def _field_errors(cls, exc: ValidationError, translator: Translator) -> dict[str, str]:
        aliases = {name: info.alias or name for name, info in cls.model_fields.items()}
        aliases.update({alias: alias for alias in list(aliases.values())})
        errors: dict[str, str] = {}
        for error in exc.errors():
            loc = error.get("loc") or ("__root__",)
            field = aliases.get(str(loc[0]), str(loc[0]))
            if error.get("type") == _FIELD_ERROR_TYPE:
                message = translator.t(error["msg"])
            else:
                message = error["msg"]
            errors.setdefault(field, message)
        return errors

    def to_wire(self) -> dict[str, Any]:
        """JSON body with the server's field names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class LoginRequest(IottuPayload):
    email: str = Field(default=None, alias="email_usuario")
    password: str = Field(default=None, alias="senha_usuario")

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, value: Any) -> str:
        email = _text(value, "auth.emailRequired")
        if not _EMAIL_RE.match(email):
            raise _field_error("auth.invalidEmail")
        return email

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, value: Any) -> str:
        if _is_blank(value):
            raise _field_error("auth.emailRequired")
        # Sent exactly as typed.
        return str(value)


class UserPayload(IottuPayload):
    name: str = Field(default=None, alias="nome_usuario")
    email: str = Field(default=None, alias="email_usuario")
    password: str = Field(default=None, alias="senha_usuario")
    role: Role | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        return _text(value, "user.nameRequired", min_length=3, too_short="user.nameMinLength")

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, value: Any) -> str:
        email = _text(value, "user.emailRequired")
        if not _EMAIL_RE.match(email):
            raise _field_error("user.emailInvalid")
        return email

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, value: Any) -> str:
        if _is_blank(value):
            raise _field_error("user.passwordRequired")
        password = str(value)
        if len(password) < 6:
            raise _field_error("user.passwordMinLength")
        return password


class YardPayload(IottuPayload):
    user_id: int = Field(default=None, alias="id_usuario")
    cep: str = Field(default=None, alias="cep_patio")
    number: str = Field(default=None, alias="numero_patio")
    city: str = Field(default=None, alias="cidade_patio")
    state: str = Field(default=None, alias="estado_patio")
    capacity: int = Field(default=None, alias="capacidade_patio")

    @field_validator("user_id", mode="before")
    @classmethod
    def _user(cls, value: Any) -> int:
        return _reference(value, "yard.userRequired")

    @field_validator("cep", mode="before")
    @classmethod
    def _cep(cls, value: Any) -> str:
        digits = re.sub(r"\D", "", _text(value, "yard.cepRequired"))
        if len(digits) != 8:
            raise _field_error("yard.cepInvalid")
        return digits

    @field_validator("number", mode="before")
    @classmethod
    def _street_number(cls, value: Any) -> str:
        return _text(value, "yard.numberRequired")

    @field_validator("city", mode="before")
    @classmethod
    def _city(cls, value: Any) -> str:
        return _text(value, "yard.cityRequired", min_length=2, too_short="yard.cityMinLength")

    @field_validator("state", mode="before")
    @classmethod
    def _state(cls, value: Any) -> str:
        state = _text(value, "yard.stateRequired")
        if len(state) != 2:
            raise _field_error("yard.stateInvalid")
        return state.upper()

    @field_validator("capacity", mode="before")
    @classmethod
    def _capacity(cls, value: Any) -> int:
        capacity = _number(value, "yard.capacityRequired", "yard.capacityInvalid")
        if capacity < 0:
            raise _field_error("yard.capacityMinValue")
        if not capacity.is_integer():
            raise _field_error("yard.capacityInvalid")
        return int(capacity)


class MotorcyclePayload(IottuPayload):
    status_id: int = Field(default=None, alias="id_status")
    yard_id: int = Field(default=None, alias="id_patio")
    plate: str = Field(default=None, alias="placa_moto")
    chassis: str = Field(default=None, alias="chassi_moto")
    engine_number: str = Field(default=None, alias="nr_motor_moto")
    model: str = Field(default=None, alias="modelo_moto")
    tag_id: int = Field(default=None, alias="selected_tag_id")

    @field_validator("status_id", mode="before")
    @classmethod
    def _status(cls, value: Any) -> int:
        return _reference(value, "motorcycle.statusRequired")

    @field_validator("yard_id", mode="before")
    @classmethod
    def _yard(cls, value: Any) -> int:
        return _reference(value, "motorcycle.yardRequired")

    @field_validator("plate", mode="before")
    @classmethod
    def _plate(cls, value: Any) -> str:
        return _text(value, "motorcycle.plateRequired", min_length=7, too_short="motorcycle.plateMinLength")

    @field_validator("chassis", mode="before")
    @classmethod
    def _chassis(cls, value: Any) -> str:
        return _text(value, "motorcycle.chassisRequired", min_length=17, too_short="motorcycle.chassisMinLength")

    @field_validator("engine_number", mode="before")
    @classmethod
    def _engine_number(cls, value: Any) -> str:
        return _text(
            value,
            "motorcycle.engineNumberRequired",
            min_length=5,
            too_short="motorcycle.engineNumberMinLength",
        )

    @field_validator("model", mode="before")
    @classmethod
    def _model(cls, value: Any) -> str:
        return _text(value, "motorcycle.modelRequired", min_length=2, too_short="motorcycle.modelMinLength")

    @field_validator("tag_id", mode="before")
    @classmethod
    def _tag(cls, value: Any) -> int:
        return _reference(value, "motorcycle.tagRequired")


class AntennaPayload(IottuPayload):
    yard_id: int = Field(default=None, alias="id_patio")
    code: str = Field(default=None, alias="codigo_antena")
    latitude: float = Field(default=None, alias="latitude_antena")
    longitude: float = Field(default=None, alias="longitude_antena")

    @field_validator("yard_id", mode="before")
    @classmethod
    def _yard(cls, value: Any) -> int:
        return _reference(value, "antenna.yardRequired")

    @field_validator("code", mode="before")
    @classmethod
    def _code(cls, value: Any) -> str:
        return _text(value, "antenna.codeRequired", min_length=3, too_short="antenna.codeMinLength")

    @field_validator("latitude", mode="before")
    @classmethod
    def _latitude(cls, value: Any) -> float:
        return _coordinate(value, "latitude", 90.0)

    @field_validator("longitude", mode="before")
    @classmethod
    def _longitude(cls, value: Any) -> float:
        return _coordinate(value, "longitude", 180.0)


class TagPayload(IottuPayload):
    rfid_code: str = Field(default=None, alias="codigo_rfid_tag")
    ssid: str = Field(default=None, alias="ssid_wifi_tag")
    latitude: float = Field(default=None, alias="latitude_tag")
    longitude: float = Field(default=None, alias="longitude_tag")

    @field_validator("rfid_code", mode="before")
    @classmethod
    def _rfid(cls, value: Any) -> str:
        return _text(value, "tag.rfidRequired", min_length=5, too_short="tag.rfidMinLength")

    @field_validator("ssid", mode="before")
    @classmethod
    def _ssid(cls, value: Any) -> str:
        return _text(value, "tag.ssidRequired", min_length=2, too_short="tag.ssidMinLength")

    @field_validator("latitude", mode="before")
    @classmethod
    def _latitude(cls, value: Any) -> float:
        return _coordinate(value, "latitude", 90.0)

    @field_validator("longitude", mode="before")
    @classmethod
    def _longitude(cls, value: Any) -> float:
        return _coordinate(value, "longitude", 180.0)
