"""Page registry for the generic data endpoint.

Maps a page name (the ``page`` parameter of /data.lua) to a builder that
returns the page's ``data`` payload. Adding a device action is one
registration:

    registry = create_default_registry()

    @registry.register("overview")
    def overview(params):
        return {"fritzos": {"nspver": "7.57"}}

    registry.register_canned("netDev", {"active": [], "passive": []})

The registry is filled before the server starts and only read afterwards.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping
from typing import Any

from .const import REBOOT_PAGE
from .schema import PageResponse

_LOGGER = logging.getLogger(__name__)

PageBuilder = Callable[[Mapping[str, str]], dict[str, Any]]


class PageRegistry:
    """Lookup from page name to response builder."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._builders: dict[str, PageBuilder] = {}

    def register(self, name: str, builder: PageBuilder | None = None) -> Any:
        """Register a page builder.

        Works as a direct call ``register("x", fn)`` or as a decorator
        ``@register("x")``. Registering an existing name replaces it.

        Args:
            name: Page name as sent by the client.
            builder: Callable receiving the request parameters.

        Returns:
            The builder (direct call) or a decorator.
        """
        if not name:
            raise ValueError("Page name must not be empty")

        def decorator(func: PageBuilder) -> PageBuilder:
            if name in self._builders:
                _LOGGER.debug("Replacing page builder for %s", name)
            self._builders[name] = func
            return func

        if builder is not None:
            return decorator(builder)
        return decorator

    def register_canned(self, name: str, data: Mapping[str, Any]) -> None:
        """Register a page that always returns a copy of data."""
        template = copy.deepcopy(dict(data))
        self.register(name, lambda _params: copy.deepcopy(template))

    def __contains__(self, name: object) -> bool:
        return name in self._builders

    def __len__(self) -> int:
        return len(self._builders)

    @property
    def names(self) -> list[str]:
        """Registered page names, sorted."""
        return sorted(self._builders)

    def build(self, name: str | None, params: Mapping[str, str], sid: str) -> PageResponse | None:
        """Build the response for a page.

        Args:
            name: Requested page name (None if the parameter was absent).
            params: All request parameters.
            sid: Session id to stamp on the response.

        Returns:
            PageResponse, or None if the page is not registered.
        """
        if not name or name not in self._builders:
            return None
        return PageResponse(pid=name, data=self._builders[name](params), sid=sid)


def reboot_page(params: Mapping[str, str]) -> dict[str, Any]:
    """Reboot accepted; the device UI is redirected to the reboot progress page."""
    return {"reboot": "ok", "redirect": {"page": "rootReboot"}}


def create_default_registry() -> PageRegistry:
    """Create a registry holding the built-in pages."""
    registry = PageRegistry()
    registry.register(REBOOT_PAGE, reboot_page)
    return registry
