"""Command line entry point for the mock router.

Usage:
    router-mock
    router-mock --port 8081 -v
    router-mock --config mock_router.yaml --strict
    python -m router_mock --delay 5

Serves /login_sid.lua and /data.lua until interrupted with Ctrl+C.
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys

from .config import load_server_config
from .const import DEFAULT_HOST, DEFAULT_PORT, VERSION
from .exceptions import ConfigError
from .schema import ServerConfig
from .server import MockRouterServer

_LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="router-mock",
        description="Run a mock home router management API for client testing.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                              Listen on :8000
  %(prog)s --port 8081                  Listen on a specific port
  %(prog)s --config mock_router.yaml    Load host/port/pages from YAML
  %(prog)s --delay 15                   Simulate slow router (15s delay)
  %(prog)s --strict                     404 for unhandled methods/pages
""",
    )
    parser.add_argument("--config", type=str, help="YAML server config file")
    parser.add_argument("--host", type=str, help=f"Host to bind to (default: {DEFAULT_HOST!r}, all interfaces)")
    parser.add_argument("--port", type=int, help=f"Port to listen on (default: {DEFAULT_PORT})")
    parser.add_argument("--delay", type=float, help="Response delay in seconds (simulates slow routers)")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Answer unhandled methods/pages with 404 instead of an empty 200",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def resolve_config(args: argparse.Namespace) -> ServerConfig:
    """Load the config file (if any) and apply command line overrides.

    Raises:
        ConfigError: If the config file is invalid.
    """
    config = load_server_config(args.config) if args.config else ServerConfig()

    overrides: dict[str, object] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.delay is not None:
        overrides["response_delay"] = args.delay
    if args.strict:
        overrides["strict_routes"] = True

    if not overrides:
        return config
    return ServerConfig.model_validate({**config.model_dump(), **overrides})


def _wait_for_interrupt(server: MockRouterServer) -> None:
    """Block until SIGINT, then stop the server."""

    def signal_handler(sig, frame):
        _LOGGER.info("Shutting down...")
        server.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)

    try:
        signal.pause()
    except AttributeError:
        # signal.pause() not available on Windows
        import time

        while True:
            time.sleep(1)


def main(argv: list[str] | None = None) -> int:
    """Run the mock router server."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt="%H:%M:%S")

    if args.delay is not None and args.delay < 0:
        parser.error("--delay must be non-negative")

    try:
        config = resolve_config(args)
    except (ConfigError, ValueError) as e:
        _LOGGER.error("Invalid configuration: %s", e)
        return 2

    server = MockRouterServer.from_config(config)
    try:
        server.start()
    except OSError as e:
        # Useless without its listener
        _LOGGER.error("Cannot listen on %s: %s", server.address, e)
        return 1

    _LOGGER.info("Starting at: %s", server.address)
    _wait_for_interrupt(server)
    return 0


if __name__ == "__main__":
    sys.exit(main())
