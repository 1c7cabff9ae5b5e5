import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from local_config.errors import ConfigNotFoundError, EmptyValueError, MissingEnvironmentError
from local_config.logging import logger
from local_config.utils import ConfigStore, load_source

DEFAULT_CONFIG_ENV = "DEFAULT_GLOBAL_CONFIG"


def resolve_config_path(file_path: Optional[str] = None) -> Path:
    """
    Returns the config file to load: ``file_path`` as given, or the value of
    DEFAULT_GLOBAL_CONFIG when no path is passed.
    """
    if file_path is None:
        file_path = os.environ.get(DEFAULT_CONFIG_ENV)
        if not file_path:
            raise MissingEnvironmentError(DEFAULT_CONFIG_ENV)
        logger.debug(f"Using {DEFAULT_CONFIG_ENV}={file_path}")
    return Path(file_path)


class Settings:
    """
    Configuration loaded from a single file.

    Relative paths stored in the file are resolved against the directory the
    file lives in, see get_path().

        settings = Settings("./examples/test_global_settings.toml")
        name = settings.get_string("delist.name")
        db_file = settings.get_path("delist.delist_db_file")
    """

    def __init__(self, file_path: Optional[str] = None):
        path = resolve_config_path(file_path)
        if not path.exists():
            raise ConfigNotFoundError(path)

        self._store = ConfigStore(load_source(path))
        self._config_dir = path.resolve(strict=True).parent
        self._config_filename = path.name
        logger.debug(f"Loaded config {self._config_filename} from {self._config_dir}")

    @property
    def config_dir(self) -> Path:
        """Absolute directory containing the config file."""
        return self._config_dir

    @property
    def config_filename(self) -> str:
        return self._config_filename

    def __repr__(self):
        return (
            f"Settings(config_dir={str(self._config_dir)!r}, "
            f"config_filename={self._config_filename!r}, keys={self._store.keys()!r})"
        )

    def __contains__(self, key: str) -> bool:
        return self._store.contains(key)

    # Accessors forwarded to the underlying store

    def contains(self, key: str) -> bool:
        return self._store.contains(key)

    def keys(self) -> List[str]:
        return self._store.keys()

    def to_dict(self) -> Dict[str, Any]:
        return self._store.to_dict()

    def get(self, key: str) -> Any:
        return self._store.get(key)

    def get_string(self, key: str) -> str:
        return self._store.get_string(key)

    def get_int(self, key: str) -> int:
        return self._store.get_int(key)

    def get_float(self, key: str) -> float:
        return self._store.get_float(key)

    def get_bool(self, key: str) -> bool:
        return self._store.get_bool(key)

    def get_table(self, key: str) -> Dict[str, Any]:
        return self._store.get_table(key)

    def get_array(self, key: str) -> List[Any]:
        return self._store.get_array(key)

    def get_path(self, key: str) -> Path:
        """
        Retrieves a path value.

        - Missing keys and non-string values raise the same errors as get_string().
        - An empty string raises EmptyValueError.
        - Absolute paths (e.g. "/path/to/file") are returned unchanged.
        - Relative paths (e.g. "./path/file") are joined onto config_dir, not the
          current working directory.
        """
        value = self.get_string(key)
        if value == "":
            raise EmptyValueError(key)
        path = Path(value)
        if path.is_absolute():
            return path
        return self._config_dir / value
