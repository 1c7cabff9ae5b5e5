"""
Process-wide Settings loaded from the file named by DEFAULT_GLOBAL_CONFIG.

    settings = global_config().get()
    name = settings.get_string("delist.name")

Failing to load the global config is fatal: the first caller gets SystemExit,
and so does every caller after it.
"""
import threading
from typing import Callable, Optional

from dotenv import find_dotenv, load_dotenv

from local_config.config import Settings
from local_config.logging import logger


class GlobalConfig:
    """Write-once cell holding a single Settings instance."""

    def __init__(self, factory: Optional[Callable[[], Settings]] = None):
        self._factory = factory or (lambda: Settings(None))
        self._lock = threading.Lock()
        self._value: Optional[Settings] = None
        self._failure: Optional[str] = None

    @property
    def initialized(self) -> bool:
        return self._value is not None

    def get(self) -> Optional[Settings]:
        """Returns the cached Settings, or None before initialization."""
        return self._value

    def get_or_init(self) -> Settings:
        """
        Builds the Settings on first call; every other caller blocks on the lock
        until it exists and then receives the same instance.
        """
        if self._value is not None:
            return self._value
        with self._lock:
            if self._value is None:
                if self._failure is None:
                    try:
                        self._value = self._factory()
                    except Exception as e:
                        self._failure = f"load global config fail: {e}"
                        logger.critical(self._failure)
                if self._failure is not None:
                    raise SystemExit(self._failure)
                logger.info(f"Global config loaded from {self._value.config_dir / self._value.config_filename}")
        return self._value


_CELL = GlobalConfig()

_ENV_LOCK = threading.Lock()
_env_loaded = False


def load_env_file():
    """
    Loads a .env file found from the current working directory upwards, once per
    process. Variables already set in the environment win.
    """
    global _env_loaded

    with _ENV_LOCK:
        if not _env_loaded:
            # usecwd: search from the application, not from site-packages
            dotenv_path = find_dotenv(usecwd=True)
            if dotenv_path:
                logger.debug(f"Loading environment from {dotenv_path}")
                load_dotenv(dotenv_path)
            _env_loaded = True


def global_config() -> GlobalConfig:
    """Initializes the process-wide config if needed and returns its cell."""
    if not _CELL.initialized:
        load_env_file()
    _CELL.get_or_init()
    return _CELL


def get_global_settings() -> Settings:
    return global_config().get()
