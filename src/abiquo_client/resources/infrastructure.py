"""Datacenter and rack operations."""

from __future__ import annotations

from ..models import Datacenter, Datacenters, Rack, Racks, find_by_name
from ..options import ListOptions
from ..paths import DATACENTERS_URL
from .base import ResourceBase


class InfrastructureResource(ResourceBase):
    """Work with the physical infrastructure: datacenters and their racks."""

    def list_datacenters(self, options: ListOptions | None = None) -> list[Datacenter]:
        return self._list(DATACENTERS_URL, Datacenters, options)

    def find_datacenter(self, name: str) -> Datacenter | None:
        """Find a datacenter by its name.

        Args:
            name: The exact datacenter name.

        Returns:
            The first datacenter with that name, in server order, else None.
        """
        return find_by_name(self.list_datacenters(), name)

    def create_datacenter(self, name: str, location: str) -> Datacenter:
        return self._post(DATACENTERS_URL, Datacenter(name=name, location=location), Datacenter)

    def list_racks(self, datacenter: Datacenter) -> list[Rack]:
        link = datacenter.require_link("racks")
        page = self._require(self._client.follow(link, Racks), link.href)
        return list(page.collection)

    def find_rack(self, datacenter: Datacenter, name: str) -> Rack | None:
        """Find a rack of `datacenter` by its name, else None.

        Raises:
            ResolutionError: the datacenter carries no `racks` link.
        """
        return find_by_name(self.list_racks(datacenter), name)

    def create_rack(self, datacenter: Datacenter, name: str) -> Rack:
        link = datacenter.require_link("racks")
        return self._post(link.href, Rack(name=name), Rack)
