"""Derived views over fleet collections."""

from __future__ import annotations

from collections.abc import Iterable

from pyiottu.models.motorcycle import Motorcycle
from pyiottu.models.tag import Tag


def used_tag_ids(motorcycles: Iterable[Motorcycle], *, exclude_motorcycle_id: int | None = None) -> set[int]:
    """Ids of tags attached to a motorcycle, ignoring ``exclude_motorcycle_id``."""
    used: set[int] = set()
    for motorcycle in motorcycles:
        if exclude_motorcycle_id is not None and motorcycle.id == exclude_motorcycle_id:
            continue
        used.update(motorcycle.tag_ids)
    return used


def available_tags(
    tags: Iterable[Tag],
    motorcycles: Iterable[Motorcycle],
    editing_motorcycle_id: int | None = None,
) -> list[Tag]:
    """Tags that can be assigned to a motorcycle.

    When editing, the motorcycle's own tags stay selectable.
    """
    used = used_tag_ids(motorcycles, exclude_motorcycle_id=editing_motorcycle_id)
    return [tag for tag in tags if tag.id not in used]
