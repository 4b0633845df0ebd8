"""
Generic XML → JSON Mapper
=========================
Recursively maps an ElementTree element into a JSON value.

Shape rules:
  - an element holding only text (and no recorded attributes) maps to the
    trimmed text itself
  - attributes go under "@attributes", text next to them under "#text"
  - repeated child tags become a list on their second occurrence
"""

import logging
import xml.etree.ElementTree as ET
from typing import Iterator, Union

from .models import (
    ATTRIBUTES_KEY,
    TEXT_KEY,
    JsonMapping,
    JsonScalar,
    JsonSequence,
    JsonValue,
)

logger = logging.getLogger(__name__)


def _content(element: ET.Element) -> Iterator[Union[str, ET.Element]]:
    """Yield an element's content in document order: text chunks and children."""
    if element.text:
        yield element.text
    for child in element:
        yield child
        if child.tail:
            yield child.tail


def _add_child(obj: JsonMapping, tag: str, value: JsonValue) -> None:
    existing = obj.items.get(tag)
    if existing is None:
        obj.items[tag] = value
    elif isinstance(existing, JsonSequence):
        existing.items.append(value)
    else:
        obj.items[tag] = JsonSequence([existing, value])


def map_element(element: ET.Element, preserve_attributes: bool = True) -> JsonValue:
    """Map a single element (and its subtree) to a JsonValue."""
    obj = JsonMapping()

    if preserve_attributes and element.attrib:
        obj.items[ATTRIBUTES_KEY] = JsonMapping(
            {name: JsonScalar(value) for name, value in element.attrib.items()}
        )

    # ── Text-only element ────────────────────────────────────────────
    if len(element) == 0:
        text = (element.text or "").strip()
        if text:
            if not obj.items:
                return JsonScalar(text)
            obj.items[TEXT_KEY] = JsonScalar(text)
        return obj

    # ── Element with child elements ──────────────────────────────────
    for item in _content(element):
        if isinstance(item, str):
            # Text before anything else was recorded wins over the
            # structural children; any other inline text is dropped.
            text = item.strip()
            if text and not obj.items:
                return JsonScalar(text)
            continue
        _add_child(obj, item.tag, map_element(item, preserve_attributes))

    return obj


def xml_to_json(source: Union[ET.Element, ET.ElementTree], preserve_attributes: bool = True):
    """Map an element or a whole document to plain dicts, lists and strings."""
    if isinstance(source, ET.ElementTree):
        source = source.getroot()
    value = map_element(source, preserve_attributes)
    logger.debug(f"Mapped <{source.tag}> to {type(value).__name__}")
    return value.to_python()
