"""JSON and XML serialization of Abiquo DTOs, selected by media type."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from typing import Any, TypeVar

from pydantic import ValidationError

from .models.base import CollectionDto, ResourceDto

T = TypeVar("T", bound=ResourceDto)


class CodecError(ValueError):
    """Raised when a payload does not match the requested shape."""


def base_media_type(media_type: str) -> str:
    return media_type.split(";", 1)[0].strip().lower()


def is_xml(media_type: str | None) -> bool:
    if not media_type:
        return False
    base = base_media_type(media_type)
    return base.endswith("+xml") or base.endswith("/xml")


def is_known(media_type: str | None) -> bool:
    """Return whether the media type names a format this module can decode."""
    if not media_type:
        return False
    base = base_media_type(media_type)
    return is_xml(base) or base.endswith("+json") or base.endswith("/json")


def serialize(dto: ResourceDto, media_type: str) -> bytes:
    if is_xml(media_type):
        return ET.tostring(_to_element(dto), encoding="utf-8")
    return json.dumps(dto.to_wire()).encode("utf-8")


def deserialize(payload: bytes | str, shape: type[T], media_type: str | None) -> T:
    """Decode `payload` into an instance of `shape`.

    Raises:
        CodecError: the payload is malformed or does not fit `shape`.
    """
    if is_xml(media_type):
        try:
            root = ET.fromstring(payload)
        except ET.ParseError as exc:
            raise CodecError(f"Malformed XML payload: {exc}") from exc
        if root.tag != shape.XML_ROOT:
            raise CodecError(f"Expected <{shape.XML_ROOT}> but found <{root.tag}>")
        data: Any = _element_to_dict(shape, root)
    else:
        try:
            data = json.loads(payload)
        except ValueError as exc:
            raise CodecError(f"Malformed JSON payload: {exc}") from exc
        if not isinstance(data, dict):
            raise CodecError(f"Expected a JSON object for {shape.__name__}")
    try:
        return shape.model_validate(data)
    except ValidationError as exc:
        raise CodecError(f"Invalid {shape.__name__} payload: {exc}") from exc


def _to_element(dto: ResourceDto) -> ET.Element:
    root = ET.Element(type(dto).XML_ROOT)
    for link in dto.links or ():
        ET.SubElement(root, "link", link.model_dump(exclude_none=True))
    if isinstance(dto, CollectionDto):
        if dto.total_size is not None:
            root.set("totalSize", str(dto.total_size))
        for item in dto.collection:
            root.append(_to_element(item))
        return root
    for name, wire in dto.scalar_fields():
        value = getattr(dto, name)
        if value is None:
            continue
        ET.SubElement(root, wire).text = _to_text(value)
    return root


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _element_to_dict(shape: type[ResourceDto], element: ET.Element) -> dict[str, Any]:
    """Flatten an XML element into the mapping pydantic validates for `shape`."""
    data: dict[str, Any] = {}
    links = [dict(child.attrib) for child in element.findall("link")]
    if links:
        data["links"] = links
    if issubclass(shape, CollectionDto):
        item_type = shape.ITEM_TYPE
        data["collection"] = [
            _element_to_dict(item_type, child) for child in element.findall(item_type.XML_ROOT)
        ]
        if element.get("totalSize") is not None:
            data["totalSize"] = element.get("totalSize")
        return data
    for _, wire in shape.scalar_fields():
        child = element.find(wire)
        if child is not None:
            data[wire] = child.text or ""
    return data
