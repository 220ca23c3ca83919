"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0

Conversion of query API XML responses into the formats a client can return.
"""

from enum import Enum
import json
from typing import Any
from xml.etree import ElementTree as ET

from .exceptions import ConfigurationError, ResponseParseError, UnknownFormatError


class ReturnFormat(Enum):
    XML = "xml"
    JSON = "json"
    STRUCTURED = "structured"
    RAW = "raw"

    @classmethod
    def parse(cls, value: "str | ReturnFormat") -> "ReturnFormat":
        """Decode a return format name, case-insensitively.

        ``perl`` is accepted as an alias of ``structured``.
        """
        if isinstance(value, ReturnFormat):
            return value
        if isinstance(value, str):
            name = value.strip().lower()
            name = _FORMAT_ALIASES.get(name, name)
            for member in cls:
                if member.value == name:
                    return member
        raise ConfigurationError(f"unknown return type: {value}")


_FORMAT_ALIASES: dict[str, str] = {"perl": "structured"}


def convert_response(*, body: str, return_format: ReturnFormat) -> Any:
    if return_format is ReturnFormat.STRUCTURED:
        return xml_to_structure(body)
    elif return_format is ReturnFormat.JSON:
        return json.dumps(
            xml_to_structure(body), separators=(",", ":"), ensure_ascii=False
        )
    elif return_format in (ReturnFormat.RAW, ReturnFormat.XML):
        return body
    else:
        raise UnknownFormatError(f"unknown return type: {return_format}")


def xml_to_structure(body: str | bytes) -> dict[str, Any] | str:
    """Parse an XML document into nested dicts, lists and strings.

    The root element itself is dropped and its children become the top-level
    keys. A default namespace on the root is kept under ``xmlns``. Repeated
    sibling elements collapse into a list, attributes become keys, and a leaf
    element without attributes becomes its text (or ``{}`` when empty).
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise ResponseParseError(f"Response body is not well-formed XML: {e}") from e

    structure = _element_to_structure(root)
    namespace = _namespace(root.tag)
    if namespace:
        if not isinstance(structure, dict):
            structure = {"content": structure} if structure else {}
        structure = {"xmlns": namespace, **structure}
    return structure


def _element_to_structure(element: ET.Element) -> dict[str, Any] | str:
    result: dict[str, Any] = {
        _local_name(name): value for name, value in element.attrib.items()
    }
    has_children = False
    for child in element:
        has_children = True
        key = _local_name(child.tag)
        value = _element_to_structure(child)
        if key not in result:
            result[key] = value
        elif isinstance(result[key], list):
            result[key].append(value)
        else:
            result[key] = [result[key], value]

    text = (element.text or "").strip()
    if not has_children and not element.attrib:
        return text if text else {}
    if text:
        result["content"] = text
    return result


def _local_name(tag: str) -> str:
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _namespace(tag: str) -> str | None:
    if tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return None
