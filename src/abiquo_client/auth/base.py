"""Base abstractions for auth strategies."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import MutableMapping

from requests import PreparedRequest


class AuthStrategy(ABC):
    """Interface each authentication mechanism must implement."""

    @abstractmethod
    def apply(self, headers: MutableMapping[str, str]) -> None:
        """Mutate headers in-place with the necessary credentials."""

    def sign(self, request: PreparedRequest) -> PreparedRequest:
        """Hook run on the fully prepared request, right before it is sent.

        Header-based strategies have nothing left to do here. Schemes that sign
        the method and URL override it.
        """
        return request
