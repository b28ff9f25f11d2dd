"""Reference client for the router's management API.

Performs the same calls a real client makes against the device, so tests
can drive MockRouterServer (or a real router) end to end:

    client = RouterClient("http://127.0.0.1:8000", "admin", "secret")
    client.login()
    client.reboot()

Login is the device's challenge-response handshake:
1. GET /login_sid.lua → SessionInfo with Challenge
2. response = "<challenge>-" + md5(utf16le("<challenge>-<password>"))
3. POST /login_sid.lua username + response → SessionInfo with SID
4. Data pages are POSTed to /data.lua with that SID
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any

import requests
from defusedxml import ElementTree  # type: ignore[import-untyped]
from pydantic import ValidationError

from .const import CONTENT_TYPE_FORM, DATA_PATH, LOGIN_PATH, REBOOT_PAGE
from .exceptions import CannotConnectError, InvalidAuthError, ParsingError
from .schema import SessionInfo

_LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


def compute_challenge_response(challenge: str, password: str) -> str:
    """Compute the login response for a challenge.

    Characters above U+00FF are replaced by "." before hashing, as the
    device does.

    Args:
        challenge: Challenge from the handshake.
        password: User password.

    Returns:
        "<challenge>-<md5 hex digest>"
    """
    text = f"{challenge}-{password}"
    safe_text = "".join(ch if ord(ch) <= 0xFF else "." for ch in text)
    digest = hashlib.md5(safe_text.encode("utf-16-le")).hexdigest()  # noqa: S324
    return f"{challenge}-{digest}"


def parse_session_info(xml_text: str) -> SessionInfo:
    """Parse a handshake XML document.

    Raises:
        ParsingError: If the XML is malformed or a field is missing/invalid.
    """
    try:
        root = ElementTree.fromstring(xml_text)
    except ElementTree.ParseError as e:
        raise ParsingError(f"Malformed SessionInfo XML: {e}", raw_value=xml_text) from e

    fields: dict[str, str] = {}
    for tag in ("SID", "Challenge", "BlockTime"):
        value = root.findtext(tag)
        if value is None:
            raise ParsingError("SessionInfo field missing", field=tag, raw_value=xml_text)
        fields[tag] = value.strip()

    try:
        return SessionInfo.model_validate(fields)
    except ValidationError as e:
        raise ParsingError(f"Invalid SessionInfo: {e}", raw_value=xml_text) from e


class RouterClient:
    """Client for the router's handshake and data endpoints."""

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize client.

        Args:
            base_url: Router base URL (e.g., "http://192.168.178.1").
            username: Login user name.
            password: Login password.
            session: Optional requests session to reuse.
            timeout: Per request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.password = password
        self.session = session or requests.Session()
        self.timeout = timeout
        self.session_info: SessionInfo | None = None

    @property
    def sid(self) -> str | None:
        """Current session id, None before a successful login."""
        if self.session_info is None or not self.session_info.is_authenticated:
            return None
        return self.session_info.sid

    def _request(self, method: str, path: str, data: dict[str, str] | None = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": CONTENT_TYPE_FORM} if data is not None else None
        try:
            response = self.session.request(method, url, data=data, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise CannotConnectError(f"{method} {url} failed: {e}") from e
        return response

    def fetch_session_info(self) -> SessionInfo:
        """Fetch the unauthenticated session descriptor (holds the challenge)."""
        response = self._request("GET", LOGIN_PATH)
        return parse_session_info(response.text)

    def login(self) -> SessionInfo:
        """Run the challenge-response login.

        Returns:
            The authenticated SessionInfo.

        Raises:
            InvalidAuthError: If the router answers with the all-zero SID.
            CannotConnectError: On transport errors.
            ParsingError: If the handshake XML is invalid.
        """
        challenge_info = self.fetch_session_info()
        if challenge_info.block_time > 0:
            _LOGGER.warning("Router reports login block time of %ds", challenge_info.block_time)

        form = {
            "username": self.username,
            "response": compute_challenge_response(challenge_info.challenge, self.password),
        }
        response = self._request("POST", LOGIN_PATH, data=form)
        session_info = parse_session_info(response.text)

        if not session_info.is_authenticated:
            raise InvalidAuthError(f"Login rejected for user {self.username!r}")

        self.session_info = session_info
        _LOGGER.debug("Logged in to %s", self.base_url)
        return session_info

    def data_page(self, page: str, **params: str) -> dict[str, Any]:
        """Request a page action.

        Args:
            page: Page name.
            **params: Extra form fields.

        Returns:
            Decoded JSON result, or {} if the router sent an empty body.

        Raises:
            InvalidAuthError: If called before login.
            ParsingError: If the body is not a JSON object.
        """
        if self.sid is None:
            raise InvalidAuthError("Not logged in")

        form = {"sid": self.sid, "page": page, **params}
        response = self._request("POST", DATA_PATH, data=form)
        if not response.content:
            return {}

        try:
            result = json.loads(response.text)
        except json.JSONDecodeError as e:
            raise ParsingError(f"Invalid JSON for page {page}: {e}", field=page, raw_value=response.text) from e
        if not isinstance(result, dict):
            raise ParsingError(f"Expected JSON object for page {page}", field=page, raw_value=response.text)
        return result

    def reboot(self) -> dict[str, Any]:
        """Request a device reboot."""
        return self.data_page(REBOOT_PAGE, reboot="0")

    def overview(self) -> dict[str, Any]:
        """Request the overview page (device summary)."""
        return self.data_page("overview")

    def devices(self) -> dict[str, Any]:
        """Request the network device list."""
        return self.data_page("netDev", xhrId="all")
