from __future__ import annotations

from typing import Any

import pytest

from pyiottu.exceptions import IottuValidationError
from pyiottu.i18n import Translator
from pyiottu.models.requests import (
    AntennaPayload,
    LoginRequest,
    MotorcyclePayload,
    TagPayload,
    UserPayload,
    YardPayload,
)

EN = Translator("en")


def _motorcycle(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id_status": 1,
        "id_patio": 3,
        "placa_moto": "ABC1D23",
        "chassi_moto": "9BWZZZ377VT004251",
        "nr_motor_moto": "MTR12345",
        "modelo_moto": "Mottu Sport",
        "selected_tag_id": 11,
    }
    data.update(overrides)
    return data


def _field_errors(payload_cls: Any, data: Any, translator: Translator = EN) -> dict[str, str]:
    with pytest.raises(IottuValidationError) as excinfo:
        payload_cls.parse(data, translator=translator)
    return excinfo.value.field_errors


def test_motorcycle_payload_to_wire() -> None:
    wire = MotorcyclePayload.parse(_motorcycle(placa_moto="  ABC1D23  ", selected_tag_id="11")).to_wire()
    assert wire == {
        "id_status": 1,
        "id_patio": 3,
        "placa_moto": "ABC1D23",
        "chassi_moto": "9BWZZZ377VT004251",
        "nr_motor_moto": "MTR12345",
        "modelo_moto": "Mottu Sport",
        "selected_tag_id": 11,
    }


def test_motorcycle_payload_reports_every_field_in_order() -> None:
    errors = _field_errors(MotorcyclePayload, {})
    assert list(errors) == [
        "id_status",
        "id_patio",
        "placa_moto",
        "chassi_moto",
        "nr_motor_moto",
        "modelo_moto",
        "selected_tag_id",
    ]
    assert errors["placa_moto"] == "Plate is required."
    assert errors["selected_tag_id"] == "Tag is required."


def test_motorcycle_min_lengths_apply_to_stripped_text() -> None:
    errors = _field_errors(MotorcyclePayload, _motorcycle(placa_moto="  AB12  ", chassi_moto="SHORT"))
    assert errors == {
        "placa_moto": EN.t("motorcycle.plateMinLength"),
        "chassi_moto": EN.t("motorcycle.chassisMinLength"),
    }


def test_unselected_reference_is_required() -> None:
    errors = _field_errors(MotorcyclePayload, _motorcycle(id_patio="", selected_tag_id=0))
    assert errors["id_patio"] == EN.t("motorcycle.yardRequired")
    assert errors["selected_tag_id"] == EN.t("motorcycle.tagRequired")


def test_messages_follow_translator_language() -> None:
    pt = Translator("pt-BR")
    with pytest.raises(IottuValidationError) as excinfo:
        MotorcyclePayload.parse(_motorcycle(placa_moto=""), translator=pt)
    assert excinfo.value.field_errors["placa_moto"] == pt.t("motorcycle.plateRequired")
    assert str(excinfo.value) == pt.t("validation.failed")


def test_yard_payload_normalizes_cep_and_state() -> None:
    payload = YardPayload.parse(
        {
            "id_usuario": 7,
            "cep_patio": "01310-100",
            "numero_patio": "1578",
            "cidade_patio": "São Paulo",
            "estado_patio": "sp",
            "capacidade_patio": "120",
        }
    )
    assert payload.to_wire() == {
        "id_usuario": 7,
        "cep_patio": "01310100",
        "numero_patio": "1578",
        "cidade_patio": "São Paulo",
        "estado_patio": "SP",
        "capacidade_patio": 120,
    }


@pytest.mark.parametrize(
    ("overrides", "field", "key"),
    [
        ({"cep_patio": "0131010"}, "cep_patio", "yard.cepInvalid"),
        ({"estado_patio": "SPA"}, "estado_patio", "yard.stateInvalid"),
        ({"cidade_patio": "S"}, "cidade_patio", "yard.cityMinLength"),
        ({"capacidade_patio": "many"}, "capacidade_patio", "yard.capacityInvalid"),
        ({"capacidade_patio": -1}, "capacidade_patio", "yard.capacityMinValue"),
        ({"capacidade_patio": 10.5}, "capacidade_patio", "yard.capacityInvalid"),
        ({"id_usuario": None}, "id_usuario", "yard.userRequired"),
    ],
)
def test_yard_payload_rules(overrides: dict[str, Any], field: str, key: str) -> None:
    data = {
        "id_usuario": 7,
        "cep_patio": "01310100",
        "numero_patio": "10",
        "cidade_patio": "Osasco",
        "estado_patio": "SP",
        "capacidade_patio": 0,
    }
    data.update(overrides)
    assert _field_errors(YardPayload, data) == {field: EN.t(key)}


@pytest.mark.parametrize(
    ("latitude", "key"),
    [
        (None, "validation.latitudeRequired"),
        ("north", "validation.latitudeInvalid"),
        ("90.5", "validation.latitudeRange"),
        (float("nan"), "validation.latitudeInvalid"),
    ],
)
def test_antenna_latitude_rules(latitude: Any, key: str) -> None:
    data = {"id_patio": 3, "codigo_antena": "ANT-01", "latitude_antena": latitude, "longitude_antena": -46.6}
    assert _field_errors(AntennaPayload, data) == {"latitude_antena": EN.t(key)}


def test_coordinate_bounds_are_inclusive() -> None:
    payload = TagPayload.parse(
        {"codigo_rfid_tag": "RFID-0001", "ssid_wifi_tag": "yard-ap", "latitude_tag": "-90", "longitude_tag": 180}
    )
    assert payload.latitude == -90.0
    assert payload.longitude == 180.0


def test_tag_payload_rules() -> None:
    errors = _field_errors(TagPayload, {"codigo_rfid_tag": "RF1", "ssid_wifi_tag": "x", "longitude_tag": 181})
    assert errors == {
        "codigo_rfid_tag": EN.t("tag.rfidMinLength"),
        "ssid_wifi_tag": EN.t("tag.ssidMinLength"),
        "latitude_tag": EN.t("validation.latitudeRequired"),
        "longitude_tag": EN.t("validation.longitudeRange"),
    }


def test_user_payload_rules() -> None:
    errors = _field_errors(UserPayload, {"nome_usuario": "Al", "email_usuario": "al@", "senha_usuario": "12345"})
    assert errors == {
        "nome_usuario": EN.t("user.nameMinLength"),
        "email_usuario": EN.t("user.emailInvalid"),
        "senha_usuario": EN.t("user.passwordMinLength"),
    }


def test_user_payload_accepts_english_field_names() -> None:
    payload = UserPayload.parse({"name": "Ana Lima", "email": "ana@iottu.com", "password": "secret1"})
    assert payload.to_wire() == {
        "nome_usuario": "Ana Lima",
        "email_usuario": "ana@iottu.com",
        "senha_usuario": "secret1",
    }


def test_login_request_keeps_password_as_typed() -> None:
    wire = LoginRequest.parse({"email": " ana@iottu.com ", "password": " pw "}).to_wire()
    assert wire == {"email_usuario": "ana@iottu.com", "senha_usuario": " pw "}


def test_login_request_requires_both_fields() -> None:
    errors = _field_errors(LoginRequest, {"email": "", "password": ""})
    assert errors == {
        "email_usuario": EN.t("auth.emailRequired"),
        "senha_usuario": EN.t("auth.emailRequired"),
    }
