"""Integration tests for router_mock.

Tests using a real MockRouterServer listener and HTTP clients.
"""
