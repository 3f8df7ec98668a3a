"""Configuration helpers for the Abiquo client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_API_VERSION = "4.0"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Typed configuration for `AbiquoClient`."""

    base_url: str
    api_version: str = DEFAULT_API_VERSION
    verify_ssl: bool | str = True
    timeout: float = 30.0
    default_headers: Mapping[str, str] | None = None

    def resolved_headers(self) -> dict[str, str]:
        return dict(self.default_headers or {})

    def with_version(self, media_type: str) -> str:
        """Append the API version to a media type unless it already has one."""
        if "version=" in media_type:
            return media_type
        return f"{media_type}; version={self.api_version}"
