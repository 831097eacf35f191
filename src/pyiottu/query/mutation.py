"""Single write operation with lifecycle callbacks.

A failed mutation leaves the cache untouched. On success the collections
listed in ``invalidates`` are invalidated (and their observed entries
refetched) before ``on_success`` runs.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pyiottu.query.cache import QueryCache

_logger = logging.getLogger(__name__)

VarsT = TypeVar("VarsT")
ResultT = TypeVar("ResultT")


class MutationStatus(StrEnum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


async def _call(callback: Callable[..., Any] | None, *args: Any) -> None:
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class Mutation(Generic[VarsT, ResultT]):
    """Runs ``fn(variables)`` and tracks its status.

    Parameters
    ----------
    fn
        Coroutine function performing the write.
    cache
        Cache to invalidate on success.
    invalidates
        Collection names invalidated on success.
    on_success, on_error, on_settled
        Optional callbacks, sync or async. ``on_success(result, variables)``,
        ``on_error(error, variables)``, ``on_settled(result, error, variables)``.
    """

    def __init__(
        self,
        fn: Callable[[VarsT], Awaitable[ResultT]],
        *,
        cache: QueryCache | None = None,
        invalidates: Iterable[str] = (),
        on_success: Callable[[ResultT, VarsT], Any] | None = None,
        on_error: Callable[[BaseException, VarsT], Any] | None = None,
        on_settled: Callable[[ResultT | None, BaseException | None, VarsT], Any] | None = None,
    ) -> None:
        self._fn = fn
        self._cache = cache
        self.invalidates: tuple[str, ...] = tuple(invalidates)
        self._on_success = on_success
        self._on_error = on_error
        self._on_settled = on_settled
        self.status = MutationStatus.IDLE
        self.data: ResultT | None = None
        self.error: BaseException | None = None

    @property
    def is_pending(self) -> bool:
        return self.status is MutationStatus.PENDING

    @property
    def is_error(self) -> bool:
        return self.status is MutationStatus.ERROR

    @property
    def is_success(self) -> bool:
        return self.status is MutationStatus.SUCCESS

    def reset(self) -> None:
        self.status = MutationStatus.IDLE
        self.data = None
        self.error = None

    async def mutate_async(self, variables: VarsT) -> ResultT:
        """Run the write, re-raising its failure after ``on_error``."""
        self.status = MutationStatus.PENDING
        self.error = None
        try:
            result = await self._fn(variables)
        except Exception as exc:
            self.status = MutationStatus.ERROR
            self.error = exc
            await _call(self._on_error, exc, variables)
            await _call(self._on_settled, None, exc, variables)
            raise

        self.status = MutationStatus.SUCCESS
        self.data = result
        if self._cache is not None and self.invalidates:
            await self._cache.invalidate_many(self.invalidates)
        await _call(self._on_success, result, variables)
        await _call(self._on_settled, result, None, variables)
        return result

    async def mutate(self, variables: VarsT) -> ResultT | None:
        """Run the write; a failure is delivered to ``on_error`` and ``error``, not raised."""
        try:
            return await self.mutate_async(variables)
        except Exception as exc:
            _logger.debug("Mutation failed: %s", exc)
            return None
