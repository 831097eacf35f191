from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from pyiottu._api.login import parse_login_response
from pyiottu.exceptions import (
    IottuAuthenticationError,
    IottuHttpError,
    IottuMalformedLoginError,
    IottuNetworkError,
)
from pyiottu.i18n import Translator
from pyiottu.models import Role
from pyiottu.session import SessionStore
from pyiottu.storage import MemoryStorage

EN = Translator("en")
_KEY = "@iottu:user"


@dataclass
class _LoginTransport:
    response: Any = None
    calls: list[tuple[str, str, Any]] = field(default_factory=list)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Any = None,
    ) -> Any:
        self.calls.append((method, path, json_body))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def _login_body(**overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"id_usuario": 7, "nome_usuario": "Ana", "email_usuario": "ana@iottu.com", "role": "USER"}
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_sign_in_persists_and_restores() -> None:
    storage = MemoryStorage()
    transport = _LoginTransport(response=_login_body())
    store = SessionStore(storage, transport)

    user = await store.sign_in("ana@iottu.com", "secret1")

    assert transport.calls == [
        ("POST", "/auth/login", {"email_usuario": "ana@iottu.com", "senha_usuario": "secret1"})
    ]
    assert store.is_signed_in
    assert json.loads(await storage.get_item(_KEY) or "") == {
        "id_usuario": 7,
        "nome_usuario": "Ana",
        "email_usuario": "ana@iottu.com",
        "role": "USER",
    }

    restored = SessionStore(storage, transport)
    assert await restored.load() == user
    assert restored.current is not None
    assert restored.current.id == 7
    assert restored.loaded


@pytest.mark.asyncio
async def test_corrupt_stored_session_means_signed_out() -> None:
    storage = MemoryStorage({_KEY: "{not json"})
    store = SessionStore(storage, _LoginTransport())

    assert await store.load() is None
    assert not store.is_signed_in
    assert store.loaded


@pytest.mark.asyncio
async def test_stored_session_missing_identity_is_ignored() -> None:
    storage = MemoryStorage({_KEY: json.dumps({"nome_usuario": "Ana"})})
    assert await SessionStore(storage, _LoginTransport()).load() is None


@pytest.mark.asyncio
async def test_scope_user_id_depends_on_role() -> None:
    storage = MemoryStorage()
    user_store = SessionStore(storage, _LoginTransport(response=_login_body()))
    await user_store.sign_in("ana@iottu.com", "secret1")
    assert user_store.scope_user_id == 7

    admin_store = SessionStore(storage, _LoginTransport(response=_login_body(id_usuario=1, role="ADMIN")))
    admin = await admin_store.sign_in("root@iottu.com", "secret1")
    assert admin.role is Role.ADMIN
    assert admin_store.scope_user_id is None

    assert SessionStore(MemoryStorage(), _LoginTransport()).scope_user_id is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("response", "key"),
    [
        (IottuHttpError("Request failed with status code 401", status_code=401), "auth.invalidCredentials"),
        (IottuHttpError("Request failed with status code 400", status_code=400), "auth.validateEmailError"),
        (IottuNetworkError(), "validation.networkError"),
        (_login_body(nome_usuario=""), "auth.serverResponseError"),
        ({"ok": True}, "auth.serverResponseError"),
    ],
)
async def test_failed_sign_in_clears_stored_session(response: Any, key: str) -> None:
    storage = MemoryStorage({_KEY: json.dumps(_login_body())})
    store = SessionStore(storage, _LoginTransport(response=response), translator=EN)
    await store.load()
    assert store.is_signed_in

    with pytest.raises(IottuAuthenticationError) as excinfo:
        await store.sign_in("ana@iottu.com", "wrong-pass")

    assert str(excinfo.value) == EN.t(key)
    assert await storage.get_item(_KEY) is None
    assert store.current is None


@pytest.mark.asyncio
async def test_sign_in_rejects_blank_credentials_before_request() -> None:
    transport = _LoginTransport(response=_login_body())
    store = SessionStore(MemoryStorage(), transport, translator=EN)

    with pytest.raises(IottuAuthenticationError) as excinfo:
        await store.sign_in("", "")

    assert str(excinfo.value) == EN.t("auth.emailRequired")
    assert transport.calls == []


@pytest.mark.asyncio
async def test_sign_in_uses_rebound_transport() -> None:
    old, new = _LoginTransport(response=_login_body()), _LoginTransport(response=_login_body())
    store = SessionStore(MemoryStorage(), old)

    store.bind(new)
    await store.sign_in("ana@iottu.com", "secret1")

    assert old.calls == []
    assert len(new.calls) == 1


@pytest.mark.asyncio
async def test_sign_out_removes_stored_session() -> None:
    storage = MemoryStorage()
    store = SessionStore(storage, _LoginTransport(response=_login_body()))
    await store.sign_in("ana@iottu.com", "secret1")

    await store.sign_out()

    assert store.current is None
    assert await storage.get_item(_KEY) is None


def test_parse_login_response_rejects_non_numeric_id() -> None:
    with pytest.raises(IottuMalformedLoginError):
        parse_login_response(_login_body(id_usuario="abc"))
