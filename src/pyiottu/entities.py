"""Entity collections and their cache coupling."""

from __future__ import annotations

from enum import StrEnum


class Entity(StrEnum):
    """REST collection names; also the first part of every query key."""

    USERS = "users"
    YARDS = "yards"
    MOTORCYCLES = "motorcycles"
    ANTENNAS = "antennas"
    TAGS = "tags"


# Writes on the key collection change data derived into the value collections.
# Tag "in use" state comes from the motorcycle/tag association.
COUPLED_COLLECTIONS: dict[Entity, tuple[Entity, ...]] = {
    Entity.MOTORCYCLES: (Entity.TAGS,),
}


def invalidation_targets(entity: Entity | str) -> tuple[Entity, ...]:
    """Collections to invalidate after a successful write on *entity*."""
    primary = Entity(entity)
    return (primary, *COUPLED_COLLECTIONS.get(primary, ()))
