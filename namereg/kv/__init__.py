# Key/Value Layer
# Optional Redis pass-through for get/set/incr/ping

from .ports import (
    KeyValueStore,
    KeyValueError,
    BackendUnavailable,
    BackendError,
)
from .redis import RedisKeyValueStore
from .factory import (
    KeyValueSettings,
    create_key_value_store,
    settings_from_env,
)

__all__ = [
    "KeyValueStore",
    "KeyValueError",
    "BackendUnavailable",
    "BackendError",
    "RedisKeyValueStore",
    "KeyValueSettings",
    "create_key_value_store",
    "settings_from_env",
]
