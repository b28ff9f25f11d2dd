"""Constants for the router mock server."""

from __future__ import annotations

from .schema import SessionInfo

VERSION = "0.1.0"

DEFAULT_HOST = ""
DEFAULT_PORT = 8000

# Endpoint paths (exact match, query string ignored)
LOGIN_PATH = "/login_sid.lua"
DATA_PATH = "/data.lua"

CONTENT_TYPE_XML = "application/xml"
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"
CONTENT_TYPE_TEXT = "text/plain"

# Handshake descriptors. Frozen: no request may change them.
DEFAULT_SESSION = SessionInfo(sid="0000000000000000", challenge="00000000", block_time=0)
AUTHENTICATED_SESSION = SessionInfo(sid="4827051936271849", challenge="59372618", block_time=0)

PAGE_PARAM = "page"
REBOOT_PAGE = "reboot"
