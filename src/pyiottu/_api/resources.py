"""CRUD endpoints, one :class:`ResourceApi` per entity collection.

Endpoints (relative to ``config.base_url``):
  - GET    /{collection}            (optional ``userId`` query parameter)
  - GET    /{collection}/{id}
  - POST   /{collection}
  - PUT    /{collection}/{id}
  - DELETE /{collection}/{id}
  - GET    /motorcycle-statuses

No retries here: any failure propagates straight to the caller.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from pyiottu._constants import MOTORCYCLE_STATUSES_PATH, SCOPE_PARAM
from pyiottu._transport import Transport
from pyiottu.entities import Entity
from pyiottu.exceptions import IottuResponseError
from pyiottu.i18n import DEFAULT_TRANSLATOR, Translator
from pyiottu.models._base import IottuBaseModel
from pyiottu.models.antenna import Antenna
from pyiottu.models.motorcycle import Motorcycle, MotorcycleStatus
from pyiottu.models.requests import (
    AntennaPayload,
    IottuPayload,
    MotorcyclePayload,
    TagPayload,
    UserPayload,
    YardPayload,
)
from pyiottu.models.tag import Tag
from pyiottu.models.user import User
from pyiottu.models.yard import Yard

_logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=IottuBaseModel)
PayloadT = TypeVar("PayloadT", bound=IottuPayload)


@dataclasses.dataclass(frozen=True)
class ResourceDef(Generic[ModelT, PayloadT]):
    """Static description of one collection."""

    entity: Entity
    model: type[ModelT]
    payload: type[PayloadT]

    @property
    def path(self) -> str:
        return f"/{self.entity.value}"

    @property
    def id_field(self) -> str:
        info = self.model.model_fields["id"]
        return info.alias or "id"


USERS = ResourceDef(Entity.USERS, User, UserPayload)
YARDS = ResourceDef(Entity.YARDS, Yard, YardPayload)
MOTORCYCLES = ResourceDef(Entity.MOTORCYCLES, Motorcycle, MotorcyclePayload)
ANTENNAS = ResourceDef(Entity.ANTENNAS, Antenna, AntennaPayload)
TAGS = ResourceDef(Entity.TAGS, Tag, TagPayload)

ALL_RESOURCES: tuple[ResourceDef[Any, Any], ...] = (USERS, YARDS, MOTORCYCLES, ANTENNAS, TAGS)


def scope_params(scope_user_id: int | None) -> dict[str, int]:
    """Query parameters for a list request; empty means unscoped."""
    if scope_user_id is None:
        return {}
    return {SCOPE_PARAM: int(scope_user_id)}


class ResourceApi(Generic[ModelT, PayloadT]):
    """Typed CRUD operations for one collection."""

    def __init__(
        self,
        transport: Transport,
        definition: ResourceDef[ModelT, PayloadT],
        *,
        translator: Translator = DEFAULT_TRANSLATOR,
    ) -> None:
        self._transport = transport
        self._definition = definition
        self._translator = translator

    @property
    def entity(self) -> Entity:
        return self._definition.entity

    def _item_path(self, ident: int) -> str:
        return f"{self._definition.path}/{int(ident)}"

    def _wire(self, payload: PayloadT | Mapping[str, Any]) -> dict[str, Any]:
        return self._definition.payload.parse(payload, translator=self._translator).to_wire()

    def _decode_item(self, body: Any, path: str) -> ModelT | Any:
        """Parse an entity body; anything else (ack message, empty) is returned as-is."""
        if isinstance(body, dict) and self._definition.id_field in body:
            return _validate(self._definition.model, body, path)
        return body

    async def list(self, scope_user_id: int | None = None) -> list[ModelT]:
        path = self._definition.path
        body = await self._transport.request("GET", path, params=scope_params(scope_user_id))
        return _validate_list(self._definition.model, body, path)

    async def get_by_id(self, ident: int) -> ModelT:
        path = self._item_path(ident)
        body = await self._transport.request("GET", path)
        return _validate(self._definition.model, body, path)

    async def create(self, payload: PayloadT | Mapping[str, Any]) -> ModelT | Any:
        path = self._definition.path
        body = await self._transport.request("POST", path, json_body=self._wire(payload))
        return self._decode_item(body, path)

    async def update(self, ident: int, payload: PayloadT | Mapping[str, Any]) -> ModelT | Any:
        path = self._item_path(ident)
        body = await self._transport.request("PUT", path, json_body=self._wire(payload))
        return self._decode_item(body, path)

    async def remove(self, ident: int) -> Any:
        return await self._transport.request("DELETE", self._item_path(ident))


async def fetch_motorcycle_statuses(transport: Transport) -> list[MotorcycleStatus]:
    """Fetch the status catalog used by motorcycle forms."""
    body = await transport.request("GET", MOTORCYCLE_STATUSES_PATH)
    return _validate_list(MotorcycleStatus, body, MOTORCYCLE_STATUSES_PATH)


def _validate(model: type[ModelT], body: Any, path: str) -> ModelT:
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        _logger.debug("%s body did not match %s: %s", path, model.__name__, exc)
        raise IottuResponseError(f"Unexpected {model.__name__} body", payload=body, endpoint=path) from exc


def _validate_list(model: type[ModelT], body: Any, path: str) -> list[ModelT]:
    if not isinstance(body, list):
        raise IottuResponseError(
            f"Expected a list, got {type(body).__name__}",
            payload=body,
            endpoint=path,
        )
    return [_validate(model, item, path) for item in body]
