"""Endpoint handlers for MockRouterServer.

Each handler implements one device endpoint.
"""

from .base import BaseEndpointHandler
from .data import DataPageHandler
from .login import LoginSidHandler

__all__ = [
    "BaseEndpointHandler",
    "DataPageHandler",
    "LoginSidHandler",
]
