"""Configuration loading and logging setup."""

from __future__ import annotations

import logging
import os
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic import ValidationError

from wmclient.errors import ConfigError
from wmclient.models.config import Config

CONFIG_ENV_VAR = "WMCLIENT_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/wmclient/config.toml")


def resolve_config_path(config_path: Path | None = None) -> Path:
    """Config file location: explicit path, then WMCLIENT_CONFIG, then the default."""
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
    return Path(config_path).expanduser()


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration; a missing file yields the defaults.

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid settings
    """
    path = resolve_config_path(config_path)
    if not path.exists():
        return Config()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def configure_logging(config: Config) -> None:
    """Set up root logging for command line use."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if config.logging.file is not None:
        log_file = config.logging.file.expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )
