"""Response encoder for the router mock.

Turns a payload into a complete ``(status, headers, body)`` response tuple.
The body is serialized first, so an encoding failure surfaces as
SerializationError before any status or header exists.

Usage:
    status, headers, body = xml_response(DEFAULT_SESSION)
    status, headers, body = json_response(page_response)
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any
from xml.etree.ElementTree import Element, SubElement, tostring

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from .const import CONTENT_TYPE_JSON, CONTENT_TYPE_TEXT, CONTENT_TYPE_XML
from .exceptions import SerializationError

_LOGGER = logging.getLogger(__name__)

Response = tuple[int, dict[str, str], bytes]

# Element names: letter or underscore first, then word characters, "-" or "."
XML_NAME_RE = re.compile(r"^[A-Za-z_][\w.-]*$", re.ASCII)


def _xml_name(name: Any) -> str:
    """Return name as an element tag, rejecting names XML cannot hold."""
    tag = str(name)
    if not XML_NAME_RE.match(tag):
        raise SerializationError(f"Invalid XML element name: {tag!r}")
    return tag


def _as_mapping(value: Any) -> Mapping[str, Any] | None:
    """Return the field mapping of a model or mapping, None for scalars."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)  # type: ignore[no-any-return]
    if isinstance(value, Mapping):
        return value
    return None


def _xml_text(value: Any) -> str:
    """Render a scalar as element text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise SerializationError(f"Cannot encode {type(value).__name__} as XML text")


def _fill_element(element: Element, value: Any) -> None:
    """Populate element with children (structs) or text (scalars)."""
    fields = _as_mapping(value)
    if fields is None:
        element.text = _xml_text(value)
        return

    for name, child in fields.items():
        if child is None:
            continue
        tag = _xml_name(name)
        if isinstance(child, (list, tuple)):
            # Sequences repeat the field tag once per item
            for item in child:
                _fill_element(SubElement(element, tag), item)
        else:
            _fill_element(SubElement(element, tag), child)


def encode_xml(value: Any, root_tag: str | None = None) -> bytes:
    """Serialize value as an XML document without declaration.

    Args:
        value: Pydantic model or mapping.
        root_tag: Root element name. Defaults to the model class name.

    Returns:
        UTF-8 encoded XML.

    Raises:
        SerializationError: If value (or a nested value) has no XML form.
    """
    tag = root_tag or type(value).__name__
    if _as_mapping(value) is None:
        raise SerializationError(f"XML root must be a model or mapping, got {type(value).__name__}")

    root = Element(_xml_name(tag))
    _fill_element(root, value)
    return tostring(root, encoding="unicode").encode("utf-8")


def encode_json(value: Any) -> bytes:
    """Serialize value as compact JSON, preserving field order.

    Raises:
        SerializationError: If value is not JSON serializable.
    """
    try:
        payload = value.model_dump(by_alias=True, mode="json") if isinstance(value, BaseModel) else value
        return json.dumps(payload, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError, PydanticSerializationError) as e:
        raise SerializationError(f"Cannot encode {type(value).__name__} as JSON: {e}") from e


def _ok(content_type: str, body: bytes) -> Response:
    return (
        200,
        {"Content-Type": content_type, "Content-Length": str(len(body))},
        body,
    )


def xml_response(value: Any) -> Response:
    """Build a 200 application/xml response for value."""
    body = encode_xml(value)
    _LOGGER.debug("Encoded %s as XML (%d bytes)", type(value).__name__, len(body))
    return _ok(CONTENT_TYPE_XML, body)


def json_response(value: Any) -> Response:
    """Build a 200 application/json response for value."""
    body = encode_json(value)
    _LOGGER.debug("Encoded %s as JSON (%d bytes)", type(value).__name__, len(body))
    return _ok(CONTENT_TYPE_JSON, body)


def empty_response(status: int = 200) -> Response:
    """Build a response with no body."""
    return status, {"Content-Length": "0"}, b""


def text_response(status: int, message: str) -> Response:
    """Build a plain text response (errors, 404s)."""
    body = message.encode("utf-8")
    return status, {"Content-Type": CONTENT_TYPE_TEXT, "Content-Length": str(len(body))}, body
