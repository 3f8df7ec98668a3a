"""Base data-transfer records shared by every Abiquo resource."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ResolutionError

# Identifiers are opaque: numeric ids from the wire are kept as strings so the
# value is the same whether it arrived as JSON or XML.
Identifier = str


class Link(BaseModel):
    """A named reference to a related resource."""

    model_config = ConfigDict(extra="ignore")

    rel: str = ""
    href: str = ""
    type: str | None = None
    title: str | None = None


class ResourceDto(BaseModel):
    """A single resource as exchanged with the API."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    MEDIA_TYPE: ClassVar[str] = "application/json"
    MEDIA_TYPE_XML: ClassVar[str] = "application/xml"
    XML_ROOT: ClassVar[str] = "resource"

    links: list[Link] | None = None

    def search_link(self, rel: str) -> Link | None:
        return next((link for link in self.links or () if link.rel == rel), None)

    def require_link(self, rel: str) -> Link:
        link = self.search_link(rel)
        if link is None:
            raise ResolutionError(
                f"{type(self).__name__} does not have a '{rel}' link", details=rel
            )
        return link

    @property
    def edit_link(self) -> Link | None:
        return self.search_link("edit")

    @classmethod
    def scalar_fields(cls) -> Iterator[tuple[str, str]]:
        """Yield (attribute, wire name) for every field but links and collection items."""
        for name, info in cls.model_fields.items():
            if name in ("links", "collection"):
                continue
            yield name, info.alias or name

    def to_wire(self) -> dict[str, Any]:
        # Null attributes are left out; the API treats them as absent.
        return self.model_dump(by_alias=True, exclude_none=True)


ItemT = TypeVar("ItemT", bound=ResourceDto)


class CollectionDto(ResourceDto, Generic[ItemT]):
    """A page of resources of a single type."""

    ITEM_TYPE: ClassVar[type[ResourceDto]] = ResourceDto

    collection: list[ItemT] = Field(default_factory=list)
    total_size: int | None = Field(default=None, alias="totalSize")

    def __iter__(self) -> Iterator[ItemT]:  # type: ignore[override]
        return iter(self.collection)

    def __len__(self) -> int:
        return len(self.collection)


def find_by_name(items: Any, name: str) -> Any | None:
    """Return the first item whose name equals `name`, else None."""
    return next((item for item in items if item.name == name), None)
