"""Per-query refetch options."""

from __future__ import annotations

import dataclasses
from enum import StrEnum


class RefetchOnMount(StrEnum):
    """What happens when an observer attaches to an entry that has data."""

    ALWAYS = "always"
    IF_STALE = "if_stale"
    NEVER = "never"

    @classmethod
    def _missing_(cls, value: object) -> RefetchOnMount | None:
        if isinstance(value, bool):
            return cls.IF_STALE if value else cls.NEVER
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "_")
            for member in cls:
                if member.value == normalized:
                    return member
        return None


@dataclasses.dataclass(frozen=True)
class QueryOptions:
    """Refetch policy for one query definition.

    Parameters
    ----------
    refetch_on_mount : RefetchOnMount
        ``ALWAYS`` triggers a background refetch on every mount even when
        cached data exists. ``IF_STALE`` only refetches data older than
        ``stale_time``. ``NEVER`` only fetches an empty entry.
    refetch_on_window_focus : bool
        Refetch when :meth:`pyiottu.query.QueryCache.focus` is called.
    stale_time : float
        Seconds after a successful fetch during which data counts as fresh.
    """

    refetch_on_mount: RefetchOnMount = RefetchOnMount.ALWAYS
    refetch_on_window_focus: bool = True
    stale_time: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "refetch_on_mount", RefetchOnMount(self.refetch_on_mount))
        if self.stale_time < 0:
            raise ValueError("stale_time must be >= 0")
