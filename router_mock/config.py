"""Server configuration loader.

Loads a YAML file describing how the mock router listens and which
extra canned pages it serves:

    host: "127.0.0.1"
    port: 8000
    response_delay: 0.0
    strict_routes: false
    pages:
      overview:
        data:
          fritzos:
            nspver: "7.57"

Functions:
    load_server_config: Load and validate a config file
    build_registry: Default pages plus the pages declared in a config
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from .exceptions import ConfigError
from .pages import PageRegistry, create_default_registry
from .schema import ServerConfig

_LOGGER = logging.getLogger(__name__)


def load_server_config(config_path: Path | str) -> ServerConfig:
    """Load a server configuration from a YAML file.

    An empty file yields the default configuration.

    Args:
        config_path: Path to the YAML file.

    Returns:
        Validated ServerConfig.

    Raises:
        ConfigError: If the file is missing, not YAML, or fails validation.
    """
    path = Path(config_path)
    if not path.is_file():
        raise ConfigError(f"Config file not found at {path}")

    _LOGGER.debug("Loading server config from %s", path)

    try:
        with open(path, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if raw_config is None:
        return ServerConfig()
    if not isinstance(raw_config, dict):
        raise ConfigError(f"Config at {path} must be a mapping, got {type(raw_config).__name__}")

    try:
        return ServerConfig.model_validate(raw_config)
    except ValidationError as e:
        raise ConfigError(f"Invalid config at {path}: {e}") from e


def build_registry(config: ServerConfig) -> PageRegistry:
    """Create the page registry for a config.

    Config pages are registered on top of the built-in ones and replace
    a built-in page of the same name.
    """
    registry = create_default_registry()
    for name, page in config.pages.items():
        registry.register_canned(name, page.data)
    if config.pages:
        _LOGGER.info("Registered %d configured page(s): %s", len(config.pages), ", ".join(config.pages))
    return registry
