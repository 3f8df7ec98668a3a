"""Platform configuration records: licenses and hypervisor types."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from .base import CollectionDto, Identifier, ResourceDto


class License(ResourceDto):
    MEDIA_TYPE: ClassVar[str] = "application/vnd.abiquo.license+json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/vnd.abiquo.license+xml"
    XML_ROOT: ClassVar[str] = "license"

    id: Identifier | None = None
    code: str | None = None
    expiration: str | None = None
    num_cores: int | None = Field(default=None, alias="numcores")


class Licenses(CollectionDto[License]):
    MEDIA_TYPE: ClassVar[str] = "application/vnd.abiquo.licenses+json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/vnd.abiquo.licenses+xml"
    XML_ROOT: ClassVar[str] = "licenses"
    ITEM_TYPE: ClassVar[type[ResourceDto]] = License


class HypervisorType(ResourceDto):
    MEDIA_TYPE: ClassVar[str] = "application/vnd.abiquo.hypervisortype+json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/vnd.abiquo.hypervisortype+xml"
    XML_ROOT: ClassVar[str] = "hypervisortype"

    id: Identifier | None = None
    name: str | None = None
    friendly_name: str | None = Field(default=None, alias="friendlyName")


class HypervisorTypes(CollectionDto[HypervisorType]):
    MEDIA_TYPE: ClassVar[str] = "application/vnd.abiquo.hypervisortypes+json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/vnd.abiquo.hypervisortypes+xml"
    XML_ROOT: ClassVar[str] = "hypervisortypes"
    ITEM_TYPE: ClassVar[type[ResourceDto]] = HypervisorType
