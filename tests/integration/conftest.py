"""Pytest fixtures for integration tests with a live mock router."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from router_mock.pages import create_default_registry
from router_mock.server import MockRouterServer


@pytest.fixture
def mock_router() -> Generator[MockRouterServer, None, None]:
    """Mock router with default pages on a free loopback port."""
    with MockRouterServer.running() as server:
        yield server


@pytest.fixture
def strict_router() -> Generator[MockRouterServer, None, None]:
    """Mock router answering unhandled routes with 404."""
    with MockRouterServer.running(strict_routes=True) as server:
        yield server


@pytest.fixture
def fritz_router() -> Generator[MockRouterServer, None, None]:
    """Mock router with the overview and device list pages the client uses."""
    registry = create_default_registry()
    registry.register_canned("overview", {"fritzos": {"Productname": "FRITZ!Box 7590", "nspver": "7.57"}})
    registry.register_canned(
        "netDev",
        {"active": [{"name": "nas", "ipv4": {"ip": "192.168.178.20"}}], "passive": []},
    )
    with MockRouterServer.running(registry=registry) as server:
        yield server
