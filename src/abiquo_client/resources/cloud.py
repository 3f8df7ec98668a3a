"""Cloud-facing operations."""

from __future__ import annotations

from ..models import Datacenter, Datacenters, find_by_name
from ..paths import LOCATIONS_URL
from .base import ResourceBase


class CloudResource(ResourceBase):
    """Browse the locations where tenants can deploy."""

    def list_locations(self) -> list[Datacenter]:
        return self._list(LOCATIONS_URL, Datacenters)

    def find_location(self, name: str) -> Datacenter | None:
        return find_by_name(self.list_locations(), name)
