"""Tests for the reference router client against mocked HTTP."""

from __future__ import annotations

import hashlib
import re
from urllib.parse import parse_qs

import pytest
import requests

from router_mock.client import RouterClient, compute_challenge_response, parse_session_info
from router_mock.exceptions import CannotConnectError, InvalidAuthError, ParsingError

BASE_URL = "http://fritz.test"

CHALLENGE_XML = (
    "<SessionInfo><SID>0000000000000000</SID><Challenge>1234abcd</Challenge><BlockTime>0</BlockTime></SessionInfo>"
)
SUCCESS_XML = (
    "<SessionInfo><SID>4827051936271849</SID><Challenge>59372618</Challenge><BlockTime>0</BlockTime></SessionInfo>"
)


@pytest.fixture
def client() -> RouterClient:
    """Client for the mocked base URL."""
    return RouterClient(BASE_URL, "admin", "secret")


class TestComputeChallengeResponse:
    """Tests for the challenge-response hash."""

    def test_format(self):
        """Response is the challenge, a dash and an md5 hex digest."""
        assert re.fullmatch(r"1234abcd-[0-9a-f]{32}", compute_challenge_response("1234abcd", "secret"))

    def test_hash_is_md5_of_utf16le(self):
        """Digest covers '<challenge>-<password>' as UTF-16LE."""
        expected = hashlib.md5("1234abcd-secret".encode("utf-16-le")).hexdigest()

        assert compute_challenge_response("1234abcd", "secret") == f"1234abcd-{expected}"

    def test_wide_characters_become_dots(self):
        """Characters above U+00FF hash like '.'; Latin-1 characters are kept."""
        assert compute_challenge_response("1234abcd", "ä€") == compute_challenge_response("1234abcd", "ä.")
        assert compute_challenge_response("1234abcd", "ä") != compute_challenge_response("1234abcd", ".")


class TestParseSessionInfo:
    """Tests for handshake XML parsing."""

    def test_parse(self):
        """Fields are read from their tags."""
        info = parse_session_info(SUCCESS_XML)

        assert info.sid == "4827051936271849"
        assert info.challenge == "59372618"
        assert info.block_time == 0

    def test_malformed_xml(self):
        """Broken XML raises ParsingError."""
        with pytest.raises(ParsingError, match="Malformed"):
            parse_session_info("<SessionInfo><SID>")

    def test_missing_field(self):
        """A missing tag is reported by name."""
        with pytest.raises(ParsingError) as exc_info:
            parse_session_info("<SessionInfo><SID>0000000000000000</SID></SessionInfo>")

        assert exc_info.value.field == "Challenge"

    def test_invalid_field(self):
        """Values failing validation raise ParsingError."""
        with pytest.raises(ParsingError, match="Invalid SessionInfo"):
            parse_session_info("<SessionInfo><SID>x</SID><Challenge>y</Challenge><BlockTime>z</BlockTime></SessionInfo>")


class TestLogin:
    """Tests for RouterClient.login."""

    def test_login_success(self, client, requests_mock):
        """GET challenge, POST response, keep the returned SID."""
        requests_mock.get(f"{BASE_URL}/login_sid.lua", text=CHALLENGE_XML)
        post = requests_mock.post(f"{BASE_URL}/login_sid.lua", text=SUCCESS_XML)

        info = client.login()

        assert info.sid == "4827051936271849"
        assert client.sid == "4827051936271849"
        form = parse_qs(post.last_request.text)
        assert form["username"] == ["admin"]
        assert form["response"] == [compute_challenge_response("1234abcd", "secret")]
        assert post.last_request.headers["Content-Type"] == "application/x-www-form-urlencoded"

    def test_login_rejected(self, client, requests_mock):
        """An all-zero SID after POST means wrong credentials."""
        requests_mock.get(f"{BASE_URL}/login_sid.lua", text=CHALLENGE_XML)
        requests_mock.post(f"{BASE_URL}/login_sid.lua", text=CHALLENGE_XML)

        with pytest.raises(InvalidAuthError):
            client.login()
        assert client.sid is None

    def test_connection_error(self, client, requests_mock):
        """Transport errors become CannotConnectError."""
        requests_mock.get(f"{BASE_URL}/login_sid.lua", exc=requests.ConnectionError("refused"))

        with pytest.raises(CannotConnectError):
            client.login()

    def test_http_error(self, client, requests_mock):
        """Non-2xx answers become CannotConnectError."""
        requests_mock.get(f"{BASE_URL}/login_sid.lua", status_code=404)

        with pytest.raises(CannotConnectError):
            client.login()


class TestDataPages:
    """Tests for RouterClient data page calls."""

    @pytest.fixture
    def logged_in(self, client, requests_mock) -> RouterClient:
        """Client after a successful login."""
        requests_mock.get(f"{BASE_URL}/login_sid.lua", text=CHALLENGE_XML)
        requests_mock.post(f"{BASE_URL}/login_sid.lua", text=SUCCESS_XML)
        client.login()
        return client

    def test_requires_login(self, client):
        """Data pages need a session."""
        with pytest.raises(InvalidAuthError):
            client.reboot()

    def test_reboot(self, logged_in, requests_mock):
        """Reboot posts sid, page and reboot flag."""
        payload = {"pid": "reboot", "data": {"reboot": "ok"}, "sid": "4827051936271849"}
        post = requests_mock.post(f"{BASE_URL}/data.lua", json=payload)

        assert logged_in.reboot() == payload
        assert parse_qs(post.last_request.text) == {
            "sid": ["4827051936271849"],
            "page": ["reboot"],
            "reboot": ["0"],
        }

    def test_devices_sends_xhr_id(self, logged_in, requests_mock):
        """Device list asks for all devices."""
        post = requests_mock.post(f"{BASE_URL}/data.lua", json={"pid": "netDev"})

        logged_in.devices()

        assert parse_qs(post.last_request.text)["xhrId"] == ["all"]

    def test_empty_body_is_empty_dict(self, logged_in, requests_mock):
        """Unknown pages answer with no body."""
        requests_mock.post(f"{BASE_URL}/data.lua", text="")

        assert logged_in.overview() == {}

    def test_invalid_json(self, logged_in, requests_mock):
        """Non-JSON bodies raise ParsingError."""
        requests_mock.post(f"{BASE_URL}/data.lua", text="<html>")

        with pytest.raises(ParsingError):
            logged_in.overview()

    def test_non_object_json(self, logged_in, requests_mock):
        """JSON that is not an object raises ParsingError."""
        requests_mock.post(f"{BASE_URL}/data.lua", json=[1, 2])

        with pytest.raises(ParsingError):
            logged_in.overview()
