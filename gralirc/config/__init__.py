"""Configuration package exports."""

from .config_loader import ConfigLoader
from .model import ClientConfig


def get_configuration(path: str | None = None) -> ClientConfig:
    """Load and validate the client configuration.

    Raises:
        ConfigError: If the file cannot be read or validation fails.
    """
    return ConfigLoader().load(path)


__all__ = ["ClientConfig", "ConfigLoader", "get_configuration"]
