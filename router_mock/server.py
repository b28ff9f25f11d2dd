"""MockRouterServer - canned HTTP server emulating a home router's management API.

Routes requests by exact path to the endpoint handlers:

    /login_sid.lua → LoginSidHandler  (session handshake, XML)
    /data.lua      → DataPageHandler  (page actions, JSON)

Anything else is answered with 404.
"""

from __future__ import annotations

import logging
import socket
import threading
from collections.abc import Generator
from contextlib import contextmanager
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlparse

from .config import build_registry
from .const import DATA_PATH, LOGIN_PATH
from .encoder import Response, text_response
from .exceptions import SerializationError
from .handlers import BaseEndpointHandler, DataPageHandler, LoginSidHandler
from .pages import PageRegistry
from .schema import ServerConfig

_LOGGER = logging.getLogger(__name__)


def _find_free_port() -> int:
    """Find an available port for the server."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return int(s.getsockname()[1])


class MockRouterServer:
    """HTTP server that mocks the router's handshake and data endpoints.

    Every response is canned and deterministic; no state is kept between
    requests, so concurrent requests need no locking.
    """

    def __init__(
        self,
        port: int | None = None,
        host: str = "127.0.0.1",
        registry: PageRegistry | None = None,
        response_delay: float = 0.0,
        strict_routes: bool = False,
    ):
        """Initialize MockRouterServer.

        Args:
            port: Port to listen on. If None (or 0), finds a free port.
            host: Host to bind to. Use "" or 0.0.0.0 for external access.
            registry: Pages served by /data.lua. Defaults to the built-in pages.
            response_delay: Delay in seconds before sending responses (simulates slow routers).
            strict_routes: Answer unhandled methods/pages with 404 instead of an empty 200.
        """
        self.port = port or _find_free_port()
        self.host = host
        self.response_delay = response_delay
        self.strict_routes = strict_routes

        self.routes: dict[str, BaseEndpointHandler] = {
            LOGIN_PATH: LoginSidHandler(response_delay=response_delay, strict_routes=strict_routes),
            DATA_PATH: DataPageHandler(registry, response_delay=response_delay, strict_routes=strict_routes),
        }

        # Server state
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    @classmethod
    def from_config(cls, config: ServerConfig) -> MockRouterServer:
        """Create a server from a loaded configuration."""
        return cls(
            port=config.port,
            host=config.host,
            registry=build_registry(config),
            response_delay=config.response_delay,
            strict_routes=config.strict_routes,
        )

    @property
    def url(self) -> str:
        """Get the server URL."""
        display_host = self.host if self.host not in ("", "0.0.0.0") else "127.0.0.1"
        return f"http://{display_host}:{self.port}"

    @property
    def address(self) -> str:
        """Listening address as host:port."""
        return f"{self.host}:{self.port}"

    @property
    def is_running(self) -> bool:
        """True while the listener thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def dispatch(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> Response:
        """Route a request to its endpoint handler.

        Encoding failures and errors raised by page builders are logged
        and turned into a 500 so a broken page never takes the listener down.
        """
        handler = self.routes.get(urlparse(path).path)
        if handler is None:
            _LOGGER.debug("No route for %s %s", method, path)
            return text_response(404, "Not Found")

        try:
            return handler.handle_request(method, path, headers, body)
        except SerializationError:
            _LOGGER.exception("Failed to encode response for %s %s", method, path)
            return text_response(500, "Internal Server Error")
        except Exception:
            _LOGGER.exception("Handler failed for %s %s", method, path)
            return text_response(500, "Internal Server Error")

    def start(self) -> None:
        """Bind the listener and serve in a background thread.

        Raises:
            OSError: If the address cannot be bound (e.g. port in use).
        """
        mock_router = self

        class RequestHandler(BaseHTTPRequestHandler):
            """HTTP request handler that delegates to MockRouterServer.dispatch."""

            def log_message(self, format: str, *args) -> None:
                """Route access logs to the module logger."""
                _LOGGER.debug("%s - %s", self.address_string(), format % args)

            def _handle(self) -> None:
                headers = {k: v for k, v in self.headers.items()}
                raw_length = self.headers.get("Content-Length") or "0"
                try:
                    content_length = int(raw_length)
                except ValueError:
                    content_length = -1
                if content_length < 0:
                    _LOGGER.warning("Invalid Content-Length %r for %s %s", raw_length, self.command, self.path)
                    self.send_error(400, "Invalid Content-Length")
                    return
                body = self.rfile.read(content_length) if content_length else None

                status, resp_headers, resp_body = mock_router.dispatch(self.command, self.path, headers, body)
                self._send_response(status, resp_headers, resp_body)

            do_GET = _handle  # noqa: N815
            do_POST = _handle  # noqa: N815
            do_PUT = _handle  # noqa: N815
            do_PATCH = _handle  # noqa: N815
            do_DELETE = _handle  # noqa: N815
            do_OPTIONS = _handle  # noqa: N815

            def do_HEAD(self) -> None:  # noqa: N802
                """Handle HEAD requests (status and headers only)."""
                headers = {k: v for k, v in self.headers.items()}
                status, resp_headers, _ = mock_router.dispatch("HEAD", self.path, headers)
                self._send_response(status, resp_headers, b"")

            def _send_response(
                self,
                status: int,
                headers: dict[str, str],
                body: bytes,
            ) -> None:
                """Send status line and headers, then the body."""
                self.send_response(status)
                for name, value in headers.items():
                    self.send_header(name, value)
                self.end_headers()
                if body:
                    self.wfile.write(body)

        self._server = ThreadingHTTPServer((self.host, self.port), RequestHandler)
        self._server.daemon_threads = True

        self._thread = threading.Thread(target=self._server.serve_forever, name="mock-router")
        self._thread.daemon = True
        self._thread.start()

        _LOGGER.info("MockRouterServer listening on %s (%s)", self.address, self.url)

    def stop(self) -> None:
        """Stop the server."""
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None

        _LOGGER.info("MockRouterServer stopped")

    @classmethod
    @contextmanager
    def running(
        cls,
        port: int | None = None,
        host: str = "127.0.0.1",
        registry: PageRegistry | None = None,
        response_delay: float = 0.0,
        strict_routes: bool = False,
    ) -> Generator[MockRouterServer, None, None]:
        """Context manager to start and stop a server.

        Yields:
            Started MockRouterServer instance.
        """
        server = cls(
            port,
            host,
            registry=registry,
            response_delay=response_delay,
            strict_routes=strict_routes,
        )
        server.start()
        try:
            yield server
        finally:
            server.stop()
