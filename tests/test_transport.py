from __future__ import annotations

from collections.abc import AsyncIterator

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from pyiottu._transport import HttpTransport, is_success
from pyiottu.client import IottuClient
from pyiottu.config import IottuConfig
from pyiottu.entities import Entity
from pyiottu.errors import extract_error_message
from pyiottu.exceptions import IottuHttpError, IottuNetworkError
from pyiottu.i18n import Translator
from pyiottu.query import QueryStatus
from pyiottu.storage import MemoryStorage

_USER = {"id_usuario": 7, "nome_usuario": "Ana", "email_usuario": "ana@iottu.com", "role": "USER"}
_MOTORCYCLE_FORM = {
    "id_status": 1,
    "id_patio": 3,
    "placa_moto": "XYZ9A87",
    "chassi_moto": "9BWZZZ377VT004251",
    "nr_motor_moto": "MTR12345",
    "modelo_moto": "Mottu Sport",
    "selected_tag_id": 11,
}


async def _list_motorcycles(request: web.Request) -> web.Response:
    return web.json_response([{"id_moto": 1, "userId": request.query.get("userId")}])


async def _create_motorcycle(request: web.Request) -> web.Response:
    body = await request.json()
    if body.get("placa_moto") == "ABC1D23":
        return web.json_response({"message": "Plate already exists"}, status=400)
    return web.json_response({"id_moto": 2, **body}, status=201)


async def _delete_motorcycle(_request: web.Request) -> web.Response:
    return web.Response(status=204)


async def _moved(_request: web.Request) -> web.Response:
    raise web.HTTPFound("/api/v1/motorcycles")


async def _crash(_request: web.Request) -> web.Response:
    return web.Response(status=500, text="Internal Server Error")


async def _bad_gateway(_request: web.Request) -> web.Response:
    body = b"\xff\xfe<html>gateway down</html>"
    return web.Response(status=502, body=body, content_type="text/html", charset="utf-8")


async def _login(request: web.Request) -> web.Response:
    body = await request.json()
    return web.json_response({**_USER, "email_usuario": body["email_usuario"]})


@pytest_asyncio.fixture
async def server() -> AsyncIterator[TestServer]:
    app = web.Application()
    app.router.add_get("/api/v1/motorcycles", _list_motorcycles)
    app.router.add_post("/api/v1/motorcycles", _create_motorcycle)
    app.router.add_delete("/api/v1/motorcycles/{id}", _delete_motorcycle)
    app.router.add_get("/api/v1/old-motorcycles", _moved)
    app.router.add_get("/api/v1/tags", _crash)
    app.router.add_get("/api/v1/yards", _bad_gateway)
    app.router.add_post("/api/v1/auth/login", _login)
    test_server = TestServer(app)
    await test_server.start_server()
    try:
        yield test_server
    finally:
        await test_server.close()


def _transport(server: TestServer, http: aiohttp.ClientSession) -> HttpTransport:
    config = IottuConfig(base_url=str(server.make_url("/api/v1")), api_trace_enabled=True)
    return HttpTransport(config, http)


def test_only_2xx_is_success() -> None:
    assert is_success(200)
    assert is_success(299)
    assert not is_success(199)
    assert not is_success(302)


@pytest.mark.asyncio
async def test_get_with_scope_param(server: TestServer) -> None:
    async with aiohttp.ClientSession() as http:
        body = await _transport(server, http).request("GET", "/motorcycles", params={"userId": 7})
    assert body == [{"id_moto": 1, "userId": "7"}]


@pytest.mark.asyncio
async def test_post_and_empty_body(server: TestServer) -> None:
    async with aiohttp.ClientSession() as http:
        transport = _transport(server, http)
        created = await transport.request("POST", "/motorcycles", json_body={"placa_moto": "XYZ9A87"})
        deleted = await transport.request("DELETE", "/motorcycles/2")
    assert created == {"id_moto": 2, "placa_moto": "XYZ9A87"}
    assert deleted is None


@pytest.mark.asyncio
async def test_error_status_carries_payload(server: TestServer) -> None:
    async with aiohttp.ClientSession() as http:
        transport = _transport(server, http)
        with pytest.raises(IottuHttpError) as excinfo:
            await transport.request("POST", "/motorcycles", json_body={"placa_moto": "ABC1D23"})
        with pytest.raises(IottuHttpError) as crash:
            await transport.request("GET", "/tags")

    assert excinfo.value.status_code == 400
    assert excinfo.value.payload == {"message": "Plate already exists"}
    assert excinfo.value.endpoint == "/motorcycles"
    assert crash.value.status_code == 500
    assert crash.value.payload == "Internal Server Error"


@pytest.mark.asyncio
async def test_redirect_is_a_failure(server: TestServer) -> None:
    async with aiohttp.ClientSession() as http:
        with pytest.raises(IottuHttpError) as excinfo:
            await _transport(server, http).request("GET", "/old-motorcycles")
    assert excinfo.value.status_code == 302


@pytest.mark.asyncio
async def test_connection_refused_is_network_error(server: TestServer) -> None:
    url = str(server.make_url("/api/v1"))
    await server.close()
    async with aiohttp.ClientSession() as http:
        transport = HttpTransport(IottuConfig(base_url=url), http)
        with pytest.raises(IottuNetworkError) as excinfo:
            await transport.request("GET", "/motorcycles")
    assert str(excinfo.value) == "Network Error"


@pytest.mark.asyncio
async def test_undecodable_error_page_keeps_status(server: TestServer) -> None:
    async with aiohttp.ClientSession() as http:
        with pytest.raises(IottuHttpError) as excinfo:
            await _transport(server, http).request("GET", "/yards")

    assert excinfo.value.status_code == 502
    assert "gateway down" in excinfo.value.payload
    translator = Translator("en")
    assert extract_error_message(excinfo.value, translator=translator) == translator.t("validation.serverError")


@pytest.mark.asyncio
async def test_client_can_be_entered_again(server: TestServer) -> None:
    client = IottuClient(IottuConfig(base_url=str(server.make_url("/api/v1"))), storage=MemoryStorage())

    async with client:
        await client.login("ana@iottu.com", "secret1")
        motorcycles = client.watch(Entity.MOTORCYCLES)
        await motorcycles.refetch()

    async with client:
        assert client.user is not None and client.user.id == 7
        await motorcycles.refetch()
        assert motorcycles.status is QueryStatus.FRESH
        created = await client.create(Entity.MOTORCYCLES, _MOTORCYCLE_FORM)
        assert created.id == 2

        user = await client.login("bia@iottu.com", "secret2")

    assert user.email == "bia@iottu.com"
