import os

import pytest

from local_config import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    MissingEnvironmentError,
    Settings,
)


def test_explicit_path_loads_values(sample_config):
    settings = Settings(str(sample_config))

    assert settings.config_dir == sample_config.parent.resolve()
    assert settings.config_dir.is_absolute()
    assert settings.config_filename == "test.toml"
    assert settings.get_string("section.name") == "hello"


def test_end_to_end_example(sample_config):
    settings = Settings(str(sample_config))
    examples_dir = sample_config.parent.resolve()

    assert settings.config_dir == examples_dir
    assert settings.get_string("section.name") == "hello"
    assert settings.get_path("delist.delist_db_file") == examples_dir / "db" / "delist.db"


def test_accepts_pathlike(sample_config):
    settings = Settings(sample_config)
    assert settings.config_filename == "test.toml"


def test_relative_path_is_canonicalized(sample_config, monkeypatch):
    monkeypatch.chdir(sample_config.parent.parent)
    settings = Settings(os.path.join("examples", "..", "examples", "test.toml"))

    assert settings.config_dir == sample_config.parent.resolve()
    assert settings.config_filename == "test.toml"


def test_symlink_resolves_to_real_directory(tmp_path, write_config):
    real = write_config("config.toml", 'key = "value"\n', subdir="real")
    link_dir = tmp_path / "link"
    link_dir.mkdir()
    link = link_dir / "linked.toml"
    try:
        link.symlink_to(real)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    settings = Settings(str(link))

    assert settings.config_dir == real.parent.resolve()
    # file name comes from the path as given
    assert settings.config_filename == "linked.toml"


def test_missing_file_reports_path(tmp_path):
    missing = tmp_path / "nope" / "config.toml"

    with pytest.raises(ConfigNotFoundError) as exc_info:
        Settings(str(missing))

    assert str(missing) in str(exc_info.value)
    assert isinstance(exc_info.value, FileNotFoundError)
    assert isinstance(exc_info.value, ConfigError)


def test_env_unset_raises():
    with pytest.raises(MissingEnvironmentError) as exc_info:
        Settings(None)

    assert "DEFAULT_GLOBAL_CONFIG" in str(exc_info.value)


def test_env_empty_raises(monkeypatch):
    monkeypatch.setenv("DEFAULT_GLOBAL_CONFIG", "")

    with pytest.raises(MissingEnvironmentError):
        Settings()


def test_env_default_path(sample_config, monkeypatch):
    monkeypatch.setenv("DEFAULT_GLOBAL_CONFIG", str(sample_config))

    settings = Settings()

    assert settings.config_dir == sample_config.parent.resolve()
    assert settings.get_string("section.name") == "hello"


def test_env_pointing_at_missing_file(tmp_path, monkeypatch):
    missing = tmp_path / "missing.toml"
    monkeypatch.setenv("DEFAULT_GLOBAL_CONFIG", str(missing))

    with pytest.raises(ConfigNotFoundError, match="missing.toml"):
        Settings()


def test_malformed_file_keeps_cause(write_config):
    path = write_config("broken.toml", "[section\nname = \n")

    with pytest.raises(ConfigParseError) as exc_info:
        Settings(str(path))

    assert exc_info.value.__cause__ is not None
    assert "broken.toml" in str(exc_info.value)


def test_directory_is_not_a_config(tmp_path):
    with pytest.raises(ConfigParseError):
        Settings(str(tmp_path))


def test_settings_are_read_only(sample_config):
    settings = Settings(str(sample_config))

    with pytest.raises(AttributeError):
        settings.config_dir = "/tmp"
    with pytest.raises(AttributeError):
        settings.config_filename = "other.toml"


def test_returned_tables_do_not_leak_mutations(sample_config):
    settings = Settings(str(sample_config))

    table = settings.get_table("section")
    table["name"] = "changed"
    settings.to_dict()["section"]["name"] = "changed"

    assert settings.get_string("section.name") == "hello"


def test_membership_and_keys(sample_config):
    settings = Settings(str(sample_config))

    assert "section.name" in settings
    assert settings.contains("delist.delist_db_file")
    assert "section.missing" not in settings
    assert sorted(settings.keys()) == ["delist", "section"]


def test_repr_mentions_file(sample_config):
    settings = Settings(str(sample_config))
    assert "test.toml" in repr(settings)
