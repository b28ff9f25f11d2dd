"""Data page handler for MockRouterServer.

Emulates /data.lua, the device's generic action endpoint. The ``page``
parameter selects the action; the answer comes from a PageRegistry.
"""

from __future__ import annotations

import logging

from ..const import AUTHENTICATED_SESSION, PAGE_PARAM
from ..encoder import Response, json_response
from ..pages import PageRegistry, create_default_registry
from .base import BaseEndpointHandler

_LOGGER = logging.getLogger(__name__)


class DataPageHandler(BaseEndpointHandler):
    """Handler for the generic page action endpoint.

    Accepts any method. The session id sent by the client is not checked;
    responses always carry the authenticated SID.
    """

    def __init__(
        self,
        registry: PageRegistry | None = None,
        response_delay: float = 0.0,
        strict_routes: bool = False,
    ):
        """Initialize handler.

        Args:
            registry: Pages to serve. Defaults to the built-in pages.
            response_delay: Delay in seconds before sending responses.
            strict_routes: Answer unknown pages with 404 instead of an empty 200.
        """
        super().__init__(response_delay=response_delay, strict_routes=strict_routes)
        self.registry = registry if registry is not None else create_default_registry()

    def handle_request(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> Response:
        """Serve the requested page, or an unhandled response."""
        params = self.request_params(path, headers, body)
        page = params.get(PAGE_PARAM)

        response = self.registry.build(page, params, AUTHENTICATED_SESSION.sid)
        if response is None:
            return self.unhandled(f"{method} {path} page={page!r}")

        _LOGGER.debug("Serving page %s", page)
        self.apply_delay()
        return json_response(response)
