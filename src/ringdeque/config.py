import os
import sys
import tomllib
from dataclasses import dataclass, field, is_dataclass
from pathlib import Path
from typing import Any, ClassVar, TypeVar

from loguru import logger

# --- Constants ---
APP_NAME = "ringdeque"
# Use a platform-agnostic user config directory
if sys.platform == "win32":
    CONFIG_DIR = Path.home() / "AppData" / "Roaming" / APP_NAME
else:
    CONFIG_DIR = Path.home() / ".config" / APP_NAME

CONFIG_FILE = CONFIG_DIR / "config.toml"

# Overrides CONFIG_FILE when set.
CONFIG_ENV_VAR = "RINGDEQUE_CONFIG"

DEFAULT_CONFIG_TEXT = """\
# RingDeque benchmark configuration.
# Uncomment and edit any value to override the default.

# [general]
# log_level_console = "INFO"
# log_level_file = "DEBUG"
# log_directory = "~/.config/ringdeque/logs"

# [benchmark]
# operations = 100000
# rounds = 5
# workloads = ["fifo", "lifo", "mixed"]
# subjects = ["ringdeque", "collections.deque", "list"]
"""

# --- Dataclass Models for Settings ---
T = TypeVar("T")


@dataclass
class GeneralSettings:
    """Logging settings shared by every entry point."""

    log_level_console: str = "INFO"
    log_level_file: str = "DEBUG"
    log_directory: str = str(CONFIG_DIR / "logs")


@dataclass
class BenchmarkSettings:
    """Parameters of a benchmark run."""

    operations: int = 100_000
    rounds: int = 5
    workloads: list[str] = field(default_factory=lambda: ["fifo", "lifo", "mixed"])
    subjects: list[str] = field(
        default_factory=lambda: ["ringdeque", "collections.deque", "list"]
    )


@dataclass
class Settings:
    """Root container for all settings."""

    general: GeneralSettings = field(default_factory=GeneralSettings)
    benchmark: BenchmarkSettings = field(default_factory=BenchmarkSettings)

    _instance: ClassVar["Settings | None"] = None

    @classmethod
    def get_instance(cls) -> "Settings":
        """Returns the process-wide Settings, loading them on first use."""
        if cls._instance is None:
            cls._instance = load_config()
        return cls._instance


def _update_dataclass(dc_instance: T, data: dict[str, Any]) -> T:
    """Recursively updates a dataclass instance from a dictionary."""
    for f in field_names(dc_instance):
        if f in data:
            field_value = getattr(dc_instance, f)
            if is_dataclass(field_value):
                if not isinstance(data[f], dict):
                    err_msg = f"Expected a table for '{f}', got {data[f]!r}."
                    raise TypeError(err_msg)
                _update_dataclass(field_value, data[f])
            else:
                setattr(dc_instance, f, data[f])
    return dc_instance


def field_names(dc_instance: Any) -> list[str]:
    """Helper to get field names from a dataclass instance."""
    return [f.name for f in dc_instance.__dataclass_fields__.values()]


def default_config_path() -> Path:
    """Returns the config file named by RINGDEQUE_CONFIG, or CONFIG_FILE."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_FILE


def load_config(path: Path | None = None) -> Settings:
    """Loads settings from a TOML file, merging them with defaults.

    If the config file does not exist, it creates one with every default
    commented out.

    Args:
        path: The path to the configuration file. Defaults to
            `default_config_path()`.

    Returns:
        A populated Settings object.
    """
    if path is None:
        path = default_config_path()
    settings_obj = Settings()
    logger.info(f"Loading configuration from '{path}'...")

    if not path.exists():
        logger.warning(f"Configuration file not found. Creating default at '{path}'.")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(DEFAULT_CONFIG_TEXT, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to create default config file: {e}")
        return settings_obj

    try:
        with path.open("rb") as f:
            user_config = tomllib.load(f)
        _update_dataclass(settings_obj, user_config)
        logger.success("Successfully loaded user configuration.")
    except tomllib.TOMLDecodeError as e:
        logger.error(f"Error decoding TOML from '{path}': {e}")
        logger.warning("Using default settings due to configuration error.")
        return Settings()
    except TypeError as e:
        logger.error(f"Invalid configuration in '{path}': {e}")
        logger.warning("Using default settings due to configuration error.")
        return Settings()

    return settings_obj
