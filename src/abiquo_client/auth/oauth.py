"""OAuth 1.0a request signing."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass, field

from requests import PreparedRequest
from requests_oauthlib import OAuth1

from .base import AuthStrategy


@dataclass(slots=True)
class OAuth1Auth(AuthStrategy):
    """Sign every request with an application key and an access token (HMAC-SHA1)."""

    consumer_key: str
    consumer_secret: str
    access_token: str
    access_token_secret: str
    _signer: OAuth1 = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._signer = OAuth1(
            self.consumer_key,
            client_secret=self.consumer_secret,
            resource_owner_key=self.access_token,
            resource_owner_secret=self.access_token_secret,
        )

    def apply(self, headers: MutableMapping[str, str]) -> None:
        # The Authorization header depends on the final URL, so it is added in sign().
        return None

    def sign(self, request: PreparedRequest) -> PreparedRequest:
        return self._signer(request)
