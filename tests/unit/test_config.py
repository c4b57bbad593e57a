import tomllib
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from ringdeque import config
from ringdeque.config import (
    BenchmarkSettings,
    GeneralSettings,
    Settings,
    default_config_path,
    load_config,
)


def test_missing_file_creates_commented_default(tmp_path: Path) -> None:
    """Tests that a missing config file is created and defaults are returned."""
    path = tmp_path / "nested" / "config.toml"

    settings = load_config(path)

    assert settings == Settings()
    assert path.exists()
    # Every default is commented out, so the file parses to nothing.
    assert tomllib.loads(path.read_text(encoding="utf-8")) == {}


def test_user_values_override_defaults(tmp_path: Path) -> None:
    """Tests merging TOML values over the dataclass defaults."""
    path = tmp_path / "config.toml"
    path.write_text(
        '[general]\nlog_level_console = "DEBUG"\n\n'
        '[benchmark]\noperations = 500\nsubjects = ["ringdeque"]\n',
        encoding="utf-8",
    )

    settings = load_config(path)

    assert settings.general.log_level_console == "DEBUG"
    assert settings.general.log_level_file == GeneralSettings().log_level_file
    assert settings.benchmark.operations == 500
    assert settings.benchmark.rounds == BenchmarkSettings().rounds
    assert settings.benchmark.subjects == ["ringdeque"]


def test_invalid_toml_falls_back_to_defaults(tmp_path: Path) -> None:
    """Tests that a malformed file yields default settings."""
    path = tmp_path / "config.toml"
    path.write_text("[benchmark\noperations = ", encoding="utf-8")

    assert load_config(path) == Settings()


def test_env_var_selects_config_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Tests that RINGDEQUE_CONFIG points load_config at another file."""
    path = tmp_path / "bench.toml"
    path.write_text("[benchmark]\nrounds = 9\n", encoding="utf-8")
    monkeypatch.setenv(config.CONFIG_ENV_VAR, str(path))

    assert default_config_path() == path
    assert load_config().benchmark.rounds == 9


def test_default_path_without_env_var(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests the per-user default location."""
    monkeypatch.delenv(config.CONFIG_ENV_VAR, raising=False)
    assert default_config_path() == config.CONFIG_FILE


def test_get_instance_loads_once(
    mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Tests that the process-wide settings are loaded lazily and cached."""
    monkeypatch.setattr(Settings, "_instance", None)
    loaded = Settings(benchmark=BenchmarkSettings(rounds=2))
    mock_load = mocker.patch("ringdeque.config.load_config", return_value=loaded)

    assert Settings.get_instance() is loaded
    assert Settings.get_instance() is loaded
    mock_load.assert_called_once_with()


@pytest.mark.parametrize(
    "content",
    ["general = 5\n", 'benchmark = "fast"\n', "general = [1, 2]\n"],
)
def test_non_table_section_falls_back_to_defaults(
    tmp_path: Path, content: str
) -> None:
    """Tests that a section given as a scalar or array yields default settings."""
    path = tmp_path / "config.toml"
    path.write_text(content, encoding="utf-8")

    assert load_config(path) == Settings()
