"""Attribute decoding and element writing helpers shared by every fitlog/TCX entity.

The decoders turn fitlog attribute text into typed values, defaulting optional
attributes to zero. The writers append child elements to a TCX tree using the
fixed formatting rules of the target format (UTC ``yyyy-MM-ddTHH:mm:ssZ``
timestamps, plain decimal numbers, empty elements for empty text).
"""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET
from datetime import UTC, datetime

import dateparser

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


# ---- typed exception ---------------------------------------------------------


class ParseError(ValueError):
    """Raised when the fitlog source cannot be mapped onto the activity model.

    ``attribute`` names the offending attribute when the failure is tied to one.
    """

    def __init__(self, message: str, attribute: str | None = None) -> None:
        super().__init__(message)
        self.attribute = attribute


# ---- attribute decoding ------------------------------------------------------


def local_name(tag: str) -> str:
    """Return *tag* without an ElementTree ``{namespace}`` prefix."""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


def require_attribute(element: ET.Element, name: str) -> str:
    """Return the text of a required attribute, raising ParseError when absent."""
    value = element.get(name)
    if value is None:
        raise ParseError(f"<{local_name(element.tag)}> is missing required attribute '{name}'", name)
    return value


def parse_float(element: ET.Element, name: str) -> float:
    """Parse an optional decimal attribute; absent means 0.0."""
    text = element.get(name)
    if text is None:
        return 0.0
    # float() accepts "1_000"; the invariant fitlog format has no grouping
    if "_" in text:
        raise ParseError(f"Attribute '{name}' is not a number: {text!r}", name)
    try:
        value = float(text)
    except ValueError as e:
        raise ParseError(f"Attribute '{name}' is not a number: {text!r}", name) from e
    if not math.isfinite(value):
        raise ParseError(f"Attribute '{name}' is not a finite number: {text!r}", name)
    return value


def parse_int(element: ET.Element, name: str) -> int:
    """Parse an optional base-10 integer attribute; absent means 0."""
    text = element.get(name)
    if text is None:
        return 0
    if "_" in text:
        raise ParseError(f"Attribute '{name}' is not an integer: {text!r}", name)
    try:
        return int(text, 10)
    except ValueError as e:
        raise ParseError(f"Attribute '{name}' is not an integer: {text!r}", name) from e


def parse_datetime(element: ET.Element, name: str) -> datetime:
    """Parse a required date-time attribute.

    ISO-8601 text (the form fitlog exports use) is handled directly; anything
    else goes through dateparser. Text without an offset yields a naive
    datetime, which is taken as local time when converted to UTC.
    """
    text = require_attribute(element, name).strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    parsed = dateparser.parse(text) if text else None
    if parsed is None:
        raise ParseError(f"Attribute '{name}' is not a date-time: {text!r}", name)
    return parsed


# ---- element writing ---------------------------------------------------------


def format_timestamp(value: datetime) -> str:
    return value.astimezone(UTC).strftime(TIMESTAMP_FORMAT)


def format_number(value: int | float) -> str:
    """Default decimal text for a number: ``12`` for 12.0, ``12.5`` for 12.5."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def write_string(parent: ET.Element, tag: str, value: str) -> ET.Element:
    """Append ``<tag>`` to *parent*; text is only set when *value* is non-empty."""
    child = ET.SubElement(parent, tag)
    if value:
        child.text = value
    return child


def write_int(parent: ET.Element, tag: str, value: int) -> ET.Element:
    return write_string(parent, tag, format_number(value))


def write_float(parent: ET.Element, tag: str, value: float) -> ET.Element:
    return write_string(parent, tag, format_number(value))


def write_datetime(parent: ET.Element, tag: str, value: datetime) -> ET.Element:
    return write_string(parent, tag, format_timestamp(value))


def write_date_attribute(element: ET.Element, name: str, value: datetime) -> None:
    element.set(name, format_timestamp(value))
