"""Physical infrastructure records: datacenters and racks."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from .base import CollectionDto, Identifier, ResourceDto


class Datacenter(ResourceDto):
    MEDIA_TYPE: ClassVar[str] = "application/vnd.abiquo.datacenter+json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/vnd.abiquo.datacenter+xml"
    XML_ROOT: ClassVar[str] = "datacenter"

    id: Identifier | None = None
    name: str | None = None
    location: str | None = None


class Datacenters(CollectionDto[Datacenter]):
    MEDIA_TYPE: ClassVar[str] = "application/vnd.abiquo.datacenters+json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/vnd.abiquo.datacenters+xml"
    XML_ROOT: ClassVar[str] = "datacenters"
    ITEM_TYPE: ClassVar[type[ResourceDto]] = Datacenter


class Rack(ResourceDto):
    MEDIA_TYPE: ClassVar[str] = "application/vnd.abiquo.rack+json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/vnd.abiquo.rack+xml"
    XML_ROOT: ClassVar[str] = "rack"

    id: Identifier | None = None
    name: str | None = None
    short_description: str | None = Field(default=None, alias="shortDescription")


class Racks(CollectionDto[Rack]):
    MEDIA_TYPE: ClassVar[str] = "application/vnd.abiquo.racks+json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/vnd.abiquo.racks+xml"
    XML_ROOT: ClassVar[str] = "racks"
    ITEM_TYPE: ClassVar[type[ResourceDto]] = Rack
