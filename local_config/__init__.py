"""Load a configuration file into Settings, or share one process-wide via global_config()."""

from .config import DEFAULT_CONFIG_ENV, Settings, resolve_config_path
from .errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    EmptyValueError,
    MissingEnvironmentError,
    MissingKeyError,
    TypeMismatchError,
)
from .global_settings import GlobalConfig, get_global_settings, global_config

__all__ = [
    "DEFAULT_CONFIG_ENV",
    "Settings",
    "resolve_config_path",
    "GlobalConfig",
    "global_config",
    "get_global_settings",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "EmptyValueError",
    "MissingEnvironmentError",
    "MissingKeyError",
    "TypeMismatchError",
]
