"""Keyed cache of server state with stale-while-revalidate refetching.

Each :class:`CacheEntry` moves through ``EMPTY → LOADING → {FRESH, ERROR}``
and back to ``LOADING`` on every refetch, keeping its last good value for
display while the request is in flight.

Ordering: every fetch for a key gets a monotonic sequence number and only
the response of the most recently initiated fetch is applied. An older
response settling late (or early) is discarded, so two racing refetches can
never leave the entry holding the older value. Requests are never
cancelled.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from collections.abc import Awaitable, Callable, Generator, Iterable
from enum import StrEnum
from typing import Any

from pyiottu.query.options import QueryOptions, RefetchOnMount

_logger = logging.getLogger(__name__)

FetchFn = Callable[[], Awaitable[Any]]
Listener = Callable[["CacheEntry"], None]


@dataclasses.dataclass(frozen=True, slots=True)
class QueryKey:
    """``(entity collection, scoping user id)``; ``scope=None`` is unscoped."""

    entity: str
    scope: int | None = None

    def matches(self, entity: str, scope: int | None = None) -> bool:
        """Match a collection, optionally narrowed to one scope."""
        if self.entity != entity:
            return False
        return scope is None or self.scope == scope

    def __str__(self) -> str:
        return self.entity if self.scope is None else f"{self.entity}[{self.scope}]"


class QueryStatus(StrEnum):
    EMPTY = "empty"
    LOADING = "loading"
    FRESH = "fresh"
    ERROR = "error"


@dataclasses.dataclass(frozen=True, slots=True)
class FetchOutcome:
    """Result of one fetch; fetch tasks never raise."""

    seq: int
    data: Any = None
    error: BaseException | None = None
    applied: bool = False


@dataclasses.dataclass
class CacheEntry:
    """Snapshot of one query plus its status."""

    key: QueryKey
    fetch_fn: FetchFn | None = None
    status: QueryStatus = QueryStatus.EMPTY
    data: Any = None
    has_data: bool = False
    error: BaseException | None = None
    data_updated_at: float | None = None
    is_invalidated: bool = False
    observers: list[QueryObserver] = dataclasses.field(default_factory=list)
    _seq: int = 0
    _inflight: asyncio.Task[FetchOutcome] | None = None
    _inflight_seq: int = 0
    _inflight_revalidates: bool = False
    _invalidated_at_seq: int = 0

    @property
    def is_fetching(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    @property
    def last_seq(self) -> int:
        """Sequence number of the most recently initiated fetch."""
        return self._seq

    def is_stale(self, now: float, stale_time: float) -> bool:
        if self.is_invalidated or not self.has_data or self.data_updated_at is None:
            return True
        return (now - self.data_updated_at) >= stale_time


class PendingRefetch:
    """Awaitable handle over the refetches started by one call.

    Awaiting it waits for every refetch to settle; not awaiting it leaves
    them running in the background. Failures are recorded on the entries.
    """

    def __init__(self, tasks: Iterable[asyncio.Task[FetchOutcome]] = ()) -> None:
        self.tasks: tuple[asyncio.Task[FetchOutcome], ...] = tuple(dict.fromkeys(tasks))

    def __len__(self) -> int:
        return len(self.tasks)

    def __await__(self) -> Generator[Any, None, list[FetchOutcome]]:
        return self._wait().__await__()

    async def _wait(self) -> list[FetchOutcome]:
        if not self.tasks:
            return []
        return list(await asyncio.gather(*self.tasks))


class QueryObserver:
    """A mounted consumer of one cache entry.

    Exposes the entry state the way a screen renders it: ``data`` (possibly
    stale), ``is_loading`` (first load, nothing to show yet), ``is_fetching``
    (any request in flight), ``is_error`` and ``refetch()``. After
    :meth:`close` the observer is detached and its listeners are no longer
    called.
    """

    def __init__(self, cache: QueryCache, entry: CacheEntry, options: QueryOptions) -> None:
        self._cache = cache
        self._entry = entry
        self.options = options
        self._listeners: list[Listener] = []
        self.closed = False

    def __enter__(self) -> QueryObserver:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    @property
    def key(self) -> QueryKey:
        return self._entry.key

    @property
    def status(self) -> QueryStatus:
        return self._entry.status

    @property
    def data(self) -> Any:
        return self._entry.data

    @property
    def error(self) -> BaseException | None:
        return self._entry.error

    @property
    def is_loading(self) -> bool:
        return self._entry.status is QueryStatus.LOADING and not self._entry.has_data

    @property
    def is_fetching(self) -> bool:
        return self._entry.is_fetching

    @property
    def is_error(self) -> bool:
        return self._entry.status is QueryStatus.ERROR

    @property
    def is_success(self) -> bool:
        return self._entry.status is QueryStatus.FRESH

    @property
    def is_stale(self) -> bool:
        return self._entry.is_stale(self._cache.now(), self.options.stale_time)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* on every entry change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self) -> None:
        if self.closed:
            return
        for listener in list(self._listeners):
            try:
                listener(self._entry)
            except Exception:
                _logger.debug("Query listener for %s failed", self._entry.key, exc_info=True)

    async def refetch(self) -> Any:
        """Manual refetch (pull-to-refresh, "try again").

        Joins a fetch already in flight. Failures are not raised; they show
        up in ``error``/``is_error`` like any other fetch failure.
        """
        await PendingRefetch([self._cache._ensure_fetch(self._entry)])
        return self._entry.data

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._listeners.clear()
        self._cache._detach(self)


class QueryCache:
    """In-memory store of query entries.

    Entries are created lazily by :meth:`observe` or :meth:`fetch` and are
    only dropped by :meth:`clear`.
    """

    def __init__(
        self,
        *,
        default_options: QueryOptions | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_options = default_options or QueryOptions()
        self._clock = clock
        self._entries: dict[QueryKey, CacheEntry] = {}

    def now(self) -> float:
        return self._clock()

    # ------------------------------------------------------------------
    # Entry access
    # ------------------------------------------------------------------

    def _entry(self, key: QueryKey, fetch_fn: FetchFn | None = None) -> CacheEntry:
        entry = self._entries.get(key)
        if entry is None:
            entry = CacheEntry(key=key)
            self._entries[key] = entry
        if fetch_fn is not None:
            entry.fetch_fn = fetch_fn
        return entry

    def get_entry(self, key: QueryKey) -> CacheEntry | None:
        return self._entries.get(key)

    def get_data(self, key: QueryKey) -> Any:
        entry = self._entries.get(key)
        return entry.data if entry is not None else None

    def entries(self, entity: str | None = None, scope: int | None = None) -> list[CacheEntry]:
        if entity is None:
            return list(self._entries.values())
        return [entry for key, entry in self._entries.items() if key.matches(entity, scope)]

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _notify(self, entry: CacheEntry) -> None:
        for observer in list(entry.observers):
            observer._emit()

    def _ensure_fetch(self, entry: CacheEntry, *, revalidate: bool = False) -> asyncio.Task[FetchOutcome]:
        """Return the in-flight fetch to join, or start a new one.

        Plain refetches (mount, focus, manual) join whatever is in flight.
        An invalidation only joins a fetch that was itself started by an
        invalidation; an older fetch may predate the write that invalidated
        the key, so a fresh request is issued instead.
        """
        inflight = entry._inflight
        if inflight is not None and not inflight.done():
            if not revalidate or entry._inflight_revalidates:
                return inflight
        return self._start_fetch(entry, revalidate=revalidate)

    def _start_fetch(self, entry: CacheEntry, *, revalidate: bool) -> asyncio.Task[FetchOutcome]:
        fetch_fn = entry.fetch_fn
        if fetch_fn is None:
            raise ValueError(f"No fetch function registered for query {entry.key}")

        entry._seq += 1
        seq = entry._seq
        entry.status = QueryStatus.LOADING

        task = asyncio.get_running_loop().create_task(self._run_fetch(entry, seq, fetch_fn))
        entry._inflight = task
        entry._inflight_seq = seq
        entry._inflight_revalidates = revalidate
        _logger.debug("Fetching %s seq=%d revalidate=%s", entry.key, seq, revalidate)
        self._notify(entry)
        return task

    async def _run_fetch(self, entry: CacheEntry, seq: int, fetch_fn: FetchFn) -> FetchOutcome:
        try:
            data = await fetch_fn()
        except Exception as exc:
            outcome = FetchOutcome(seq=seq, error=exc, applied=seq == entry._seq)
        else:
            outcome = FetchOutcome(seq=seq, data=data, applied=seq == entry._seq)

        if entry._inflight_seq == seq:
            entry._inflight = None

        if not outcome.applied:
            _logger.debug("Discarding %s seq=%d, superseded by seq=%d", entry.key, seq, entry._seq)
            return outcome

        if outcome.error is not None:
            _logger.debug("Fetch %s seq=%d failed: %s", entry.key, seq, outcome.error)
            entry.error = outcome.error
            entry.status = QueryStatus.ERROR
        else:
            entry.data = outcome.data
            entry.has_data = True
            entry.error = None
            entry.status = QueryStatus.FRESH
            entry.data_updated_at = self._clock()
            if seq > entry._invalidated_at_seq:
                entry.is_invalidated = False
        self._notify(entry)
        return outcome

    async def fetch(self, key: QueryKey, fetch_fn: FetchFn | None = None) -> Any:
        """Fetch *key* now (joining any request in flight) and return the data.

        Unlike observer refetches this raises the fetch failure.
        """
        entry = self._entry(key, fetch_fn)
        outcome = await self._ensure_fetch(entry)
        if outcome.error is not None:
            raise outcome.error
        return outcome.data

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def observe(
        self,
        key: QueryKey,
        fetch_fn: FetchFn,
        options: QueryOptions | None = None,
    ) -> QueryObserver:
        """Mount a consumer on *key*, fetching according to ``refetch_on_mount``.

        An entry without data, or invalidated while nobody observed it, is
        always fetched. Otherwise ``ALWAYS``
        refetches in the background, ``IF_STALE`` only when the data is
        stale, ``NEVER`` not at all.
        """
        options = options or self.default_options
        entry = self._entry(key, fetch_fn)
        observer = QueryObserver(self, entry, options)
        entry.observers.append(observer)

        policy = options.refetch_on_mount
        if not entry.has_data or entry.is_invalidated:
            should_fetch = True
        elif policy is RefetchOnMount.ALWAYS:
            should_fetch = True
        elif policy is RefetchOnMount.IF_STALE:
            should_fetch = entry.is_stale(self.now(), options.stale_time)
        else:
            should_fetch = False

        if should_fetch:
            self._ensure_fetch(entry)
        return observer

    def _detach(self, observer: QueryObserver) -> None:
        entry = self._entries.get(observer.key)
        if entry is not None and observer in entry.observers:
            entry.observers.remove(observer)

    def focus(self) -> PendingRefetch:
        """The app regained focus: refetch stale entries whose observers opted in."""
        now = self.now()
        tasks: list[asyncio.Task[FetchOutcome]] = []
        for entry in self._entries.values():
            if entry.fetch_fn is None:
                continue
            if any(
                obs.options.refetch_on_window_focus and entry.is_stale(now, obs.options.stale_time)
                for obs in entry.observers
            ):
                tasks.append(self._ensure_fetch(entry))
        return PendingRefetch(tasks)

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    def invalidate(
        self,
        entity: str,
        *,
        scope: int | None = None,
        refetch_inactive: bool = False,
    ) -> PendingRefetch:
        """Mark every matching entry stale and refetch the observed ones.

        ``scope=None`` matches every scope of the collection. Unobserved
        entries are refetched on their next mount unless
        ``refetch_inactive`` is set. Consecutive invalidations of the same
        key join one refetch.
        """
        tasks: list[asyncio.Task[FetchOutcome]] = []
        for entry in self.entries(entity, scope):
            coalesce = entry.is_invalidated and entry.is_fetching and entry._inflight_revalidates
            if not coalesce:
                entry._invalidated_at_seq = entry._seq
            entry.is_invalidated = True
            if entry.fetch_fn is not None and (entry.observers or refetch_inactive):
                tasks.append(self._ensure_fetch(entry, revalidate=True))
            else:
                self._notify(entry)
        _logger.debug("Invalidated %s scope=%s, refetching %d", entity, scope, len(tasks))
        return PendingRefetch(tasks)

    def invalidate_many(self, entities: Iterable[str], *, refetch_inactive: bool = False) -> PendingRefetch:
        tasks: list[asyncio.Task[FetchOutcome]] = []
        for entity in entities:
            tasks.extend(self.invalidate(entity, refetch_inactive=refetch_inactive).tasks)
        return PendingRefetch(tasks)

    def clear(self) -> None:
        """Drop every entry and detach its observers (e.g. on sign-out)."""
        for entry in self._entries.values():
            for observer in list(entry.observers):
                observer.close()
        self._entries.clear()
