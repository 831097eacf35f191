"""Server-state cache and mutation runner."""

from pyiottu.query.cache import (
    CacheEntry,
    FetchOutcome,
    PendingRefetch,
    QueryCache,
    QueryKey,
    QueryObserver,
    QueryStatus,
)
from pyiottu.query.mutation import Mutation, MutationStatus
from pyiottu.query.options import QueryOptions, RefetchOnMount

__all__ = [
    "CacheEntry",
    "FetchOutcome",
    "Mutation",
    "MutationStatus",
    "PendingRefetch",
    "QueryCache",
    "QueryKey",
    "QueryObserver",
    "QueryOptions",
    "QueryStatus",
    "RefetchOnMount",
]
