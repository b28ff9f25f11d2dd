"""Handshake handler for MockRouterServer.

Emulates /login_sid.lua. The real device runs a two phase
challenge-response login; the mock trusts every POST:

1. GET  → unauthenticated SessionInfo (all-zero SID and challenge)
2. POST → authenticated SessionInfo (fixed success SID and challenge)

The POSTed response hash is never verified.
"""

from __future__ import annotations

import logging

from ..const import AUTHENTICATED_SESSION, DEFAULT_SESSION
from ..encoder import Response, xml_response
from ..schema import SessionInfo
from .base import BaseEndpointHandler

_LOGGER = logging.getLogger(__name__)

# Method -> descriptor. Anything else is unhandled.
SESSION_BY_METHOD: dict[str, SessionInfo] = {
    "GET": DEFAULT_SESSION,
    "POST": AUTHENTICATED_SESSION,
}


class LoginSidHandler(BaseEndpointHandler):
    """Handler for the session/authentication handshake endpoint."""

    def handle_request(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> Response:
        """Serve the session descriptor selected by the request method."""
        session = SESSION_BY_METHOD.get(method.upper())
        if session is None:
            return self.unhandled(f"{method} {path}")

        if method.upper() == "POST":
            form = self.request_params(path, headers, body)
            _LOGGER.debug("Accepting login for user %r without verification", form.get("username", ""))

        self.apply_delay()
        return xml_response(session)
