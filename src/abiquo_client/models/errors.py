"""Error entries returned by the API on failed requests."""

from __future__ import annotations

from typing import ClassVar

from .base import CollectionDto, ResourceDto


class ErrorEntry(ResourceDto):
    XML_ROOT: ClassVar[str] = "error"

    code: str | None = None
    message: str | None = None


class ErrorList(CollectionDto[ErrorEntry]):
    """Ordered error entries, as listed by the server."""

    MEDIA_TYPE: ClassVar[str] = "application/vnd.abiquo.errors+json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/vnd.abiquo.errors+xml"
    XML_ROOT: ClassVar[str] = "errors"
    ITEM_TYPE: ClassVar[type[ResourceDto]] = ErrorEntry
