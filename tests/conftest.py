import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure project root is on sys.path when pytest runs without an install
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import local_config.global_settings as global_settings
from local_config import GlobalConfig

SAMPLE_TOML = """\
[section]
name = "hello"

[delist]
delist_db_file = "./db/delist.db"
"""


@pytest.fixture
def write_config(tmp_path):
    """Write a config file under tmp_path and return its path."""

    def _write(name: str, content: str, subdir: str = "") -> Path:
        directory = tmp_path / subdir if subdir else tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_config(write_config) -> Path:
    return write_config("test.toml", SAMPLE_TOML, subdir="repo/examples")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so teardown also removes a value loaded from a .env file
    monkeypatch.setenv("DEFAULT_GLOBAL_CONFIG", "")
    monkeypatch.delenv("DEFAULT_GLOBAL_CONFIG")


@pytest.fixture
def fresh_global(monkeypatch, tmp_path):
    """Swap the process-wide cell for an empty one and run from an isolated cwd."""
    cell = GlobalConfig()
    monkeypatch.setattr(global_settings, "_CELL", cell)
    monkeypatch.setattr(global_settings, "_env_loaded", False)
    app_dir = tmp_path / "app"
    app_dir.mkdir()
    monkeypatch.chdir(app_dir)
    return cell


@pytest.fixture
def dotenv_spy(monkeypatch):
    spy = MagicMock(wraps=global_settings.load_dotenv)
    monkeypatch.setattr(global_settings, "load_dotenv", spy)
    return spy
