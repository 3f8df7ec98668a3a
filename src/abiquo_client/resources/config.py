"""Platform configuration: licenses and hypervisor types."""

from __future__ import annotations

from ..models import HypervisorType, HypervisorTypes, License, Licenses
from ..paths import HYPERVISORTYPES_URL, LICENSES_URL, item_path
from .base import ResourceBase


class ConfigResource(ResourceBase):
    """Read and update platform-wide configuration."""

    def add_license(self, key: str) -> License:
        return self._post(LICENSES_URL, License(code=key), License)

    def list_licenses(self) -> list[License]:
        return self._list(LICENSES_URL, Licenses)

    def get_hypervisor_type(self, name: str) -> HypervisorType:
        return self._get(item_path(HYPERVISORTYPES_URL, name), HypervisorType)

    def list_hypervisor_types(self) -> list[HypervisorType]:
        return self._list(HYPERVISORTYPES_URL, HypervisorTypes)
