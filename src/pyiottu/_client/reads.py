"""Internal read operations for :class:`pyiottu.client.IottuClient`.

These functions keep `client.py` small without changing the public API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pyiottu._api.resources import fetch_motorcycle_statuses
from pyiottu.entities import Entity
from pyiottu.fleet import available_tags
from pyiottu.models.motorcycle import Motorcycle, MotorcycleStatus
from pyiottu.models.tag import Tag
from pyiottu.query import QueryKey, QueryObserver, QueryOptions

if TYPE_CHECKING:
    from pyiottu.client import IottuClient


def list_key(client: IottuClient, entity: Entity | str) -> QueryKey:
    """Cache key for a collection as seen by the signed-in user."""
    return QueryKey(Entity(entity).value, client.session.scope_user_id)


def _list_fetcher(client: IottuClient, entity: Entity | str, scope: int | None) -> Any:
    client.resource(entity)

    # Resolved per call: an observer can outlive the transport it was mounted with.
    async def _fetch() -> list[Any]:
        return await client.resource(entity).list(scope)

    return _fetch


def watch_list(client: IottuClient, entity: Entity | str, options: QueryOptions | None = None) -> QueryObserver:
    key = list_key(client, entity)
    return client.cache.observe(key, _list_fetcher(client, entity, key.scope), options or client.query_options)


async def fetch_list(client: IottuClient, entity: Entity | str) -> list[Any]:
    key = list_key(client, entity)
    result: list[Any] = await client.cache.fetch(key, _list_fetcher(client, entity, key.scope))
    return result


async def get_motorcycle_statuses(client: IottuClient) -> list[MotorcycleStatus]:
    return await fetch_motorcycle_statuses(client._require_transport())


async def get_available_tags(client: IottuClient, editing_motorcycle_id: int | None = None) -> list[Tag]:
    tags: list[Tag] = await fetch_list(client, Entity.TAGS)
    motorcycles: list[Motorcycle] = await fetch_list(client, Entity.MOTORCYCLES)
    return available_tags(tags, motorcycles, editing_motorcycle_id)
