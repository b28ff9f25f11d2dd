"""Base handler for MockRouterServer endpoints.

Provides common functionality for the endpoint handlers.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from urllib.parse import parse_qs, urlparse

from ..const import CONTENT_TYPE_FORM
from ..encoder import Response, empty_response, text_response

_LOGGER = logging.getLogger(__name__)


class BaseEndpointHandler(ABC):
    """Base class for endpoint handlers.

    Subclasses implement one device endpoint each (handshake, data pages).
    Handlers hold no per-request state; one instance serves all threads.
    """

    def __init__(self, response_delay: float = 0.0, strict_routes: bool = False):
        """Initialize handler.

        Args:
            response_delay: Delay in seconds before sending responses (simulates slow routers).
            strict_routes: Answer unhandled methods/pages with 404 instead of an empty 200.
        """
        self.response_delay = response_delay
        self.strict_routes = strict_routes

    @abstractmethod
    def handle_request(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> Response:
        """Handle an HTTP request.

        Args:
            method: HTTP method (GET, POST, ...).
            path: Request path (may include query string).
            headers: Request headers.
            body: Request body, if any.

        Returns:
            Tuple of (status_code, response_headers, response_body).
        """

    def apply_delay(self) -> None:
        """Apply response delay if configured.

        Simulates slow router responses for timeout testing.
        """
        if self.response_delay > 0:
            _LOGGER.debug("Applying response delay: %.1fs", self.response_delay)
            time.sleep(self.response_delay)

    def unhandled(self, reason: str) -> Response:
        """Response for a request the mock has no canned answer for."""
        if self.strict_routes:
            _LOGGER.warning("Unhandled mock route: %s", reason)
            return text_response(404, f"Unhandled mock route: {reason}")
        _LOGGER.debug("Unhandled mock route, answering empty 200: %s", reason)
        return empty_response()

    def parse_form_data(self, body: bytes | None) -> dict[str, str]:
        """Parse URL-encoded form data.

        Args:
            body: Request body.

        Returns:
            Dict of field name to first value.
        """
        if not body:
            return {}

        try:
            decoded = body.decode("utf-8")
        except UnicodeDecodeError:
            _LOGGER.debug("Ignoring non UTF-8 form body")
            return {}
        # parse_qs returns lists, we want single values
        return {k: v[0] for k, v in parse_qs(decoded, keep_blank_values=True).items()}

    def request_params(
        self,
        path: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> dict[str, str]:
        """Merge query string and form body parameters.

        Form body values take precedence over query values of the same name.
        """
        query = urlparse(path).query
        params = {k: v[0] for k, v in parse_qs(query, keep_blank_values=True).items()}

        content_type = next((v for k, v in headers.items() if k.lower() == "content-type"), "")
        if body and content_type.split(";", 1)[0].strip().lower() == CONTENT_TYPE_FORM:
            params.update(self.parse_form_data(body))

        return params
