from __future__ import annotations

from pyiottu.fleet import available_tags
from pyiottu.models import Antenna, Motorcycle, Role, Tag, User, Yard


def _motorcycle(ident: int, *tag_ids: int) -> Motorcycle:
    return Motorcycle.model_validate(
        {
            "id_moto": ident,
            "placa_moto": f"ABC{ident:04d}",
            "tags": [{"id_tag": tag_id, "codigo_rfid_tag": f"RFID-{tag_id}"} for tag_id in tag_ids],
        }
    )


def _tags(*ids: int) -> list[Tag]:
    return [Tag.model_validate({"id_tag": ident, "codigo_rfid_tag": f"RFID-{ident}"}) for ident in ids]


def test_motorcycle_accepts_nested_status_and_yard() -> None:
    payload = {
        "id_moto": 5,
        "placa_moto": "ABC1D23",
        "chassi_moto": "9BWZZZ377VT004251",
        "nr_motor_moto": "MTR12345",
        "modelo_moto": "Mottu Sport",
        "id_status": {"id_status": 2, "descricao_status": "Em manutenção"},
        "id_patio": {"id_patio": 3, "cidade_patio": "Osasco", "estado_patio": "SP", "id_usuario": {"id_usuario": 7}},
        "tags": [{"id_tag": 11, "em_uso": True}],
    }

    moto = Motorcycle.model_validate(payload)

    assert moto.status is not None
    assert moto.status.id == 2
    assert moto.status.description == "Em manutenção"
    assert moto.yard_id == 3
    assert moto.yard is not None
    assert moto.yard.user_id == 7
    assert moto.yard.location == "Osasco/SP"
    assert moto.tag_ids == frozenset({11})
    assert moto.raw == payload


def test_motorcycle_accepts_flat_references_and_nulls() -> None:
    moto = Motorcycle.model_validate({"id_moto": "9", "id_status": 1, "id_patio": 4, "modelo_moto": None})

    assert moto.id == 9
    assert moto.status is not None and moto.status.id == 1
    assert moto.yard_id == 4
    assert moto.yard is None
    assert moto.model == ""
    assert moto.tags == []


def test_motorcycle_serializes_with_wire_names() -> None:
    moto = Motorcycle.model_validate({"id_moto": 1, "placa_moto": "ABC1D23"})
    dumped = moto.model_dump(by_alias=True)
    assert dumped["placa_moto"] == "ABC1D23"
    assert "raw" not in dumped


def test_antenna_nested_yard() -> None:
    antenna = Antenna.model_validate(
        {"id_antena": 1, "codigo_antena": "ANT-01", "latitude_antena": "-23.5", "id_patio": {"id_patio": 3}}
    )
    assert antenna.yard_id == 3
    assert antenna.yard is not None and antenna.yard.id == 3
    assert antenna.latitude == -23.5


def test_yard_location_without_city() -> None:
    assert Yard.model_validate({"id_patio": 1}).location == "N/A"


def test_role_matching() -> None:
    assert Role("admin") is Role.ADMIN
    assert Role("OPERATOR") is Role.USER
    assert User.model_validate({"id_usuario": 1}).role is Role.USER
    assert User.model_validate({"id_usuario": 1, "role": None}).role is Role.USER


def test_available_tags_excludes_tags_used_elsewhere() -> None:
    tags = _tags(1, 2, 3, 4)
    motorcycles = [_motorcycle(10, 1), _motorcycle(20, 2, 3)]

    assert [tag.id for tag in available_tags(tags, motorcycles)] == [4]


def test_available_tags_keeps_own_tags_when_editing() -> None:
    tags = _tags(1, 2, 3, 4)
    motorcycles = [_motorcycle(10, 1), _motorcycle(20, 2, 3)]

    assert [tag.id for tag in available_tags(tags, motorcycles, editing_motorcycle_id=20)] == [2, 3, 4]
