"""High-level async client for the Iottu fleet API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from pyiottu._api.resources import ALL_RESOURCES, ResourceApi
from pyiottu._client import mutations as _mutations
from pyiottu._client import reads as _reads
from pyiottu._transport import HttpTransport, Transport
from pyiottu.config import IottuConfig
from pyiottu.entities import Entity
from pyiottu.errors import ApiErrorInfo, extract_error_message, parse_api_error
from pyiottu.exceptions import IottuError
from pyiottu.i18n import Translator
from pyiottu.models.motorcycle import MotorcycleStatus
from pyiottu.models.tag import Tag
from pyiottu.models.user import User
from pyiottu.preferences import ThemeStore
from pyiottu.query import Mutation, PendingRefetch, QueryCache, QueryObserver, QueryOptions
from pyiottu.session import SessionStore
from pyiottu.storage import Storage, storage_for_path

_logger = logging.getLogger(__name__)


class IottuClient:
    """Async client for the Iottu fleet API.

    Usage::

        async with IottuClient(config) as client:
            await client.login("ana@example.com", "secret1")
            bikes = client.watch(Entity.MOTORCYCLES)
            await bikes.refetch()
            await client.update(Entity.MOTORCYCLES, 3, {...})

    Entering the context restores the stored session and theme. List
    queries are scoped to the signed-in user unless they are an admin.
    """

    def __init__(
        self,
        config: IottuConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        storage: Storage | None = None,
        cache: QueryCache | None = None,
    ) -> None:
        self._config = config or IottuConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self.translator = Translator(self._config.language)
        self.storage: Storage = storage if storage is not None else storage_for_path(self._config.storage_path)
        self.cache = cache or QueryCache(default_options=self._config.query_options)
        self.theme = ThemeStore(self.storage)
        self._session_store: SessionStore | None = None
        self._resources: dict[Entity, ResourceApi[Any, Any]] = {}

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> IottuClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        self._bind(self._transport)
        await self.session.load()
        await self.theme.load()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None
        self._resources = {}

    def _bind(self, transport: Transport) -> None:
        self._resources = {
            definition.entity: ResourceApi(transport, definition, translator=self.translator)
            for definition in ALL_RESOURCES
        }
        if self._session_store is None:
            self._session_store = SessionStore(self.storage, transport, translator=self.translator)
        else:
            self._session_store.bind(transport)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None or not self._resources:
            raise IottuError("Client not initialized. Use 'async with IottuClient(...) as client:'")
        return self._transport

    @property
    def config(self) -> IottuConfig:
        return self._config

    @property
    def query_options(self) -> QueryOptions:
        return self.cache.default_options

    @property
    def session(self) -> SessionStore:
        if self._session_store is None:
            raise IottuError("Client not initialized. Use 'async with IottuClient(...) as client:'")
        return self._session_store

    def resource(self, entity: Entity | str) -> ResourceApi[Any, Any]:
        self._require_transport()
        return self._resources[Entity(entity)]

    @property
    def users(self) -> ResourceApi[Any, Any]:
        return self.resource(Entity.USERS)

    @property
    def yards(self) -> ResourceApi[Any, Any]:
        return self.resource(Entity.YARDS)

    @property
    def motorcycles(self) -> ResourceApi[Any, Any]:
        return self.resource(Entity.MOTORCYCLES)

    @property
    def antennas(self) -> ResourceApi[Any, Any]:
        return self.resource(Entity.ANTENNAS)

    @property
    def tags(self) -> ResourceApi[Any, Any]:
        return self.resource(Entity.TAGS)

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    @property
    def user(self) -> User | None:
        return self.session.current

    async def login(self, email: str, password: str) -> User:
        """Sign in; cached data from a previous user is dropped."""
        self._require_transport()
        user = await self.session.sign_in(email, password)
        self.cache.clear()
        _logger.debug("Query cache cleared after sign-in of user id=%s", user.id)
        return user

    async def logout(self) -> None:
        await self.session.sign_out()
        self.cache.clear()

    async def register(self, payload: Mapping[str, Any]) -> Any:
        """Create an account without signing in."""
        return await self.users.create(payload)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def watch(self, entity: Entity | str, options: QueryOptions | None = None) -> QueryObserver:
        """Mount an observer on a collection list."""
        return _reads.watch_list(self, entity, options)

    async def fetch(self, entity: Entity | str) -> list[Any]:
        """Fetch a collection list through the cache, raising on failure."""
        return await _reads.fetch_list(self, entity)

    async def get(self, entity: Entity | str, ident: int) -> Any:
        return await self.resource(entity).get_by_id(ident)

    async def get_motorcycle_statuses(self) -> list[MotorcycleStatus]:
        return await _reads.get_motorcycle_statuses(self)

    async def get_available_tags(self, editing_motorcycle_id: int | None = None) -> list[Tag]:
        return await _reads.get_available_tags(self, editing_motorcycle_id)

    def focus(self) -> PendingRefetch:
        """Notify that the app regained focus."""
        return self.cache.focus()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_mutation(self, entity: Entity | str, **callbacks: Any) -> Mutation[Any, Any]:
        return _mutations.create_mutation(self, entity, **callbacks)

    def update_mutation(self, entity: Entity | str, **callbacks: Any) -> Mutation[Any, Any]:
        return _mutations.update_mutation(self, entity, **callbacks)

    def delete_mutation(self, entity: Entity | str, **callbacks: Any) -> Mutation[Any, Any]:
        return _mutations.delete_mutation(self, entity, **callbacks)

    async def create(self, entity: Entity | str, payload: Mapping[str, Any]) -> Any:
        return await self.create_mutation(entity).mutate_async(payload)

    async def update(self, entity: Entity | str, ident: int, payload: Mapping[str, Any]) -> Any:
        return await self.update_mutation(entity).mutate_async((ident, payload))

    async def delete(self, entity: Entity | str, ident: int) -> Any:
        return await self.delete_mutation(entity).mutate_async(ident)

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def error_message(self, error: BaseException) -> str:
        """Localized display message for a failure."""
        return extract_error_message(error, translator=self.translator)

    def describe_error(self, error: BaseException) -> ApiErrorInfo:
        return parse_api_error(error, translator=self.translator)
