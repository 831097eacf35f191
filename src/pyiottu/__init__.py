"""pyiottu - Async Python client for the Iottu motorcycle fleet API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyiottu")
except PackageNotFoundError:
    __version__ = "0+local"
from pyiottu.client import IottuClient
from pyiottu.config import IottuConfig
from pyiottu.entities import Entity, invalidation_targets
from pyiottu.errors import ApiConstraint, ApiErrorInfo, extract_error_message, login_error_message, parse_api_error
from pyiottu.exceptions import (
    IottuAuthenticationError,
    IottuConfigError,
    IottuError,
    IottuHttpError,
    IottuMalformedLoginError,
    IottuNetworkError,
    IottuResponseError,
    IottuTransportError,
    IottuValidationError,
)
from pyiottu.fleet import available_tags
from pyiottu.i18n import Translator
from pyiottu.models import (
    Antenna,
    Motorcycle,
    MotorcycleStatus,
    Role,
    Tag,
    User,
    Yard,
)
from pyiottu.preferences import ThemeMode, ThemeStore
from pyiottu.query import (
    Mutation,
    MutationStatus,
    QueryCache,
    QueryKey,
    QueryObserver,
    QueryOptions,
    QueryStatus,
    RefetchOnMount,
)
from pyiottu.session import SessionStore
from pyiottu.storage import JsonFileStorage, MemoryStorage, Storage

__all__ = [
    "__version__",
    "Antenna",
    "ApiConstraint",
    "ApiErrorInfo",
    "Entity",
    "IottuAuthenticationError",
    "IottuClient",
    "IottuConfig",
    "IottuConfigError",
    "IottuError",
    "IottuHttpError",
    "IottuMalformedLoginError",
    "IottuNetworkError",
    "IottuResponseError",
    "IottuTransportError",
    "IottuValidationError",
    "JsonFileStorage",
    "MemoryStorage",
    "Motorcycle",
    "MotorcycleStatus",
    "Mutation",
    "MutationStatus",
    "QueryCache",
    "QueryKey",
    "QueryObserver",
    "QueryOptions",
    "QueryStatus",
    "RefetchOnMount",
    "Role",
    "SessionStore",
    "Storage",
    "Tag",
    "ThemeMode",
    "ThemeStore",
    "Translator",
    "User",
    "Yard",
    "available_tags",
    "extract_error_message",
    "invalidation_targets",
    "login_error_message",
    "parse_api_error",
]
