"""Pydantic models for the router mock.

Schema Structure:
    SessionInfo   - handshake descriptor served by /login_sid.lua (XML)
    PageResponse  - page action result served by /data.lua (JSON)
    ServerConfig  - YAML server configuration
    └── PageConfig - canned payload for an extra page

SessionInfo field aliases are the device's XML tag names, so
``model_dump(by_alias=True)`` yields the wire layout directly.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# WIRE MODELS
# =============================================================================


class SessionInfo(BaseModel):
    """Session descriptor returned by the authentication handshake."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sid: str = Field(alias="SID", pattern=r"^[0-9a-f]{16}$")
    challenge: str = Field(alias="Challenge", pattern=r"^[0-9a-f]{8}$")
    block_time: int = Field(default=0, alias="BlockTime", ge=0)

    @property
    def is_authenticated(self) -> bool:
        """True unless the SID is the all-zero placeholder."""
        return self.sid.strip("0") != ""


class PageResponse(BaseModel):
    """Result of a page action on the generic data endpoint.

    ``data`` is page specific and may hold nested objects (e.g. a redirect).
    """

    pid: str
    data: dict[str, Any] = Field(default_factory=dict)
    sid: str


# =============================================================================
# CONFIGURATION
# =============================================================================


class PageConfig(BaseModel):
    """Canned payload for a page declared in the server config."""

    model_config = ConfigDict(extra="forbid")

    data: dict[str, Any] = Field(default_factory=dict)


class ServerConfig(BaseModel):
    """Mock server configuration.

    Every field has a default, so an empty YAML file is a valid config.
    """

    model_config = ConfigDict(extra="forbid")

    host: str = ""
    port: int = Field(default=8000, ge=0, le=65535)
    response_delay: float = Field(default=0.0, ge=0.0)
    strict_routes: bool = False
    pages: dict[str, PageConfig] = Field(default_factory=dict)
