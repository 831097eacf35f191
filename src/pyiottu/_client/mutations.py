"""Internal write operations for :class:`pyiottu.client.IottuClient`.

Every write is a :class:`~pyiottu.query.Mutation` that, on success,
invalidates the written collection plus the collections derived from it.
The resource is looked up when the mutation runs, so a mutation built
before the client was re-entered writes through the current transport.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pyiottu.entities import Entity, invalidation_targets
from pyiottu.query import Mutation

if TYPE_CHECKING:
    from pyiottu.client import IottuClient

Payload = Mapping[str, Any]


def create_mutation(client: IottuClient, entity: Entity | str, **callbacks: Any) -> Mutation[Payload, Any]:
    client.resource(entity)

    async def _create(payload: Payload) -> Any:
        return await client.resource(entity).create(payload)

    return Mutation(_create, cache=client.cache, invalidates=invalidation_targets(entity), **callbacks)


def update_mutation(
    client: IottuClient, entity: Entity | str, **callbacks: Any
) -> Mutation[tuple[int, Payload], Any]:
    """Variables are ``(id, payload)``."""
    client.resource(entity)

    async def _update(variables: tuple[int, Payload]) -> Any:
        ident, payload = variables
        return await client.resource(entity).update(ident, payload)

    return Mutation(_update, cache=client.cache, invalidates=invalidation_targets(entity), **callbacks)


def delete_mutation(client: IottuClient, entity: Entity | str, **callbacks: Any) -> Mutation[int, Any]:
    client.resource(entity)

    async def _delete(ident: int) -> Any:
        return await client.resource(entity).remove(ident)

    return Mutation(_delete, cache=client.cache, invalidates=invalidation_targets(entity), **callbacks)
