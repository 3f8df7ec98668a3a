"""Enterprise and user records."""

from __future__ import annotations

from typing import ClassVar

from .base import CollectionDto, Identifier, ResourceDto


class Enterprise(ResourceDto):
    MEDIA_TYPE: ClassVar[str] = "application/vnd.abiquo.enterprise+json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/vnd.abiquo.enterprise+xml"
    XML_ROOT: ClassVar[str] = "enterprise"

    id: Identifier | None = None
    name: str | None = None


class Enterprises(CollectionDto[Enterprise]):
    MEDIA_TYPE: ClassVar[str] = "application/vnd.abiquo.enterprises+json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/vnd.abiquo.enterprises+xml"
    XML_ROOT: ClassVar[str] = "enterprises"
    ITEM_TYPE: ClassVar[type[ResourceDto]] = Enterprise


class User(ResourceDto):
    MEDIA_TYPE: ClassVar[str] = "application/vnd.abiquo.user+json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/vnd.abiquo.user+xml"
    XML_ROOT: ClassVar[str] = "user"

    id: Identifier | None = None
    nick: str | None = None
    name: str | None = None
    surname: str | None = None
    email: str | None = None
    active: bool | None = None
    locale: str | None = None
    description: str | None = None


class Users(CollectionDto[User]):
    MEDIA_TYPE: ClassVar[str] = "application/vnd.abiquo.users+json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/vnd.abiquo.users+xml"
    XML_ROOT: ClassVar[str] = "users"
    ITEM_TYPE: ClassVar[type[ResourceDto]] = User
