"""Mock home router management API for client integration tests.

Serves the device's session handshake (/login_sid.lua, XML) and its
generic page action endpoint (/data.lua, JSON) with canned payloads.
"""

from .client import RouterClient
from .config import build_registry, load_server_config
from .const import AUTHENTICATED_SESSION, DEFAULT_SESSION, VERSION
from .exceptions import (
    CannotConnectError,
    ConfigError,
    InvalidAuthError,
    ParsingError,
    RouterMockError,
    SerializationError,
)
from .pages import PageRegistry, create_default_registry
from .schema import PageResponse, ServerConfig, SessionInfo
from .server import MockRouterServer

__version__ = VERSION

__all__ = [
    "AUTHENTICATED_SESSION",
    "DEFAULT_SESSION",
    "CannotConnectError",
    "ConfigError",
    "InvalidAuthError",
    "MockRouterServer",
    "PageRegistry",
    "PageResponse",
    "ParsingError",
    "RouterClient",
    "RouterMockError",
    "SerializationError",
    "ServerConfig",
    "SessionInfo",
    "build_registry",
    "create_default_registry",
    "load_server_config",
]
