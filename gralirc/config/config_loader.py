"""Configuration loading utilities."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..constants import CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE
from ..errors.internal import ConfigError
from .model import ClientConfig

# Environment variable -> config field
ENV_OVERRIDES = {
    "GRAL_IRC_HOST": "host",
    "GRAL_IRC_PORT": "port",
    "GRAL_IRC_NICK": "nick",
    "GRAL_IRC_PASSWORD": "password",
}


class ConfigLoader:
    """Builds a validated ClientConfig from an optional JSON file and the environment."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ

    def config_path(self) -> str:
        return self.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)

    def load_raw(self, path: str | os.PathLike[str]) -> dict[str, Any]:
        """Read the JSON config file; a missing file yields an empty mapping.

        Raises:
            ConfigError: the file is unreadable or not a JSON object.
        """
        try:
            with Path(path).open(encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logging.debug(f"No config file at {path}, using defaults")
            return {}
        except (OSError, ValueError) as e:
            raise ConfigError(
                f"Failed to read config file {path}: {e}", data={"path": str(path)}
            ) from e
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a JSON object",
                data={"path": str(path)},
            )
        return data

    def apply_env_overrides(self, raw: dict[str, Any]) -> dict[str, Any]:
        merged = dict(raw)
        for env_name, field_name in ENV_OVERRIDES.items():
            value = self.environ.get(env_name)
            if value:
                merged[field_name] = value
        return merged

    def load(self, path: str | os.PathLike[str] | None = None) -> ClientConfig:
        """Load, merge and validate the configuration.

        Raises:
            ConfigError: unreadable file or failed validation.
        """
        config_path = path if path is not None else self.config_path()
        raw = self.apply_env_overrides(self.load_raw(config_path))
        try:
            config = ClientConfig.from_dict(raw)
        except ValidationError as e:
            raise ConfigError(
                f"Invalid configuration: {e.error_count()} error(s)",
                data={"path": str(config_path), "errors": e.errors()},
            ) from e
        logging.info(
            f"✅ Configuration loaded host={config.host} port={config.port} nick={config.nick}"
        )
        return config
