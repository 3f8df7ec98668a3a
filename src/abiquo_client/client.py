"""High-level Abiquo REST client."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import TypeVar
from urllib.parse import urljoin, urlparse

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from . import codec
from .auth.base import AuthStrategy
from .config import DEFAULT_API_VERSION, ClientConfig
from .exceptions import ResolutionError
from .http import parse_payload
from .http import request as http_request
from .models.base import Link, ResourceDto
from .resources import (
    CloudResource,
    ConfigResource,
    EnterprisesResource,
    InfrastructureResource,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ResourceDto)


class AbiquoClient:
    """Wrap Abiquo REST endpoints with helper methods."""

    def __init__(
        self,
        *,
        base_url: str,
        auth_strategy: AuthStrategy,
        api_version: str = DEFAULT_API_VERSION,
        verify_ssl: bool | str = True,
        timeout: float = 30.0,
        default_headers: Mapping[str, str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = ClientConfig(
            base_url=base_url.rstrip("/"),
            api_version=api_version,
            verify_ssl=verify_ssl,
            timeout=timeout,
            default_headers=default_headers,
        )
        self._suppress_insecure_warning_if_needed()
        self._session = session or requests.Session()
        self._auth = auth_strategy
        self.enterprises = EnterprisesResource(self)
        self.infrastructure = InfrastructureResource(self)
        self.cloud = CloudResource(self)
        self.configuration = ConfigResource(self)

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> AbiquoClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - passthrough
        self.close()

    # Public API --------------------------------------------------------------
    def request(
        self,
        method: str,
        path: str,
        *,
        accept: str | None = None,
        content_type: str | None = None,
        body: ResourceDto | None = None,
        response_type: type[T] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> T | None:
        """Perform one API call and decode the response into `response_type`.

        Args:
            method: HTTP verb.
            path: Path relative to the base URL, or an absolute URL taken from a link.
            accept: Media type to request. Defaults to `response_type.MEDIA_TYPE`.
            content_type: Media type of `body`. Defaults to the body's own media type.
            body: DTO serialized as the request payload.
            response_type: DTO class the response is decoded into. When omitted the
                response payload is discarded.
            params: Query string parameters.

        Raises:
            ApiError: the API rejected the call with a list of errors.
            AuthorizationError: the credentials were rejected.
            HttpError: the API failed without a parseable error list.
            UnexpectedResponseError: a successful response could not be decoded.
        """
        url = self._resolve_url(path)
        if accept is None and response_type is not None:
            accept = response_type.MEDIA_TYPE
        data_payload: bytes | None = None
        if body is not None:
            content_type = content_type or type(body).MEDIA_TYPE
            data_payload = codec.serialize(body, content_type)
        headers = self._prepare_headers(accept, content_type if body is not None else None)
        self._log_request(method, url)
        response = http_request(
            self._session,
            method,
            url,
            params=params,
            headers=headers,
            data_payload=data_payload,
            timeout=self.config.timeout,
            verify=self.config.verify_ssl,
            auth=self._auth.sign,
        )
        if response_type is None:
            return None
        return parse_payload(response, response_type, accept)

    def get(
        self,
        path: str,
        response_type: type[T],
        *,
        accept: str | None = None,
        params: Mapping[str, str] | None = None,
    ) -> T | None:
        return self.request(
            "GET", path, accept=accept, response_type=response_type, params=params
        )

    def post(
        self,
        path: str,
        body: ResourceDto | None,
        response_type: type[T] | None = None,
        *,
        accept: str | None = None,
        content_type: str | None = None,
    ) -> T | None:
        return self.request(
            "POST",
            path,
            accept=accept,
            content_type=content_type,
            body=body,
            response_type=response_type,
        )

    def put(
        self,
        path: str,
        body: ResourceDto,
        response_type: type[T] | None = None,
        *,
        accept: str | None = None,
        content_type: str | None = None,
    ) -> T | None:
        return self.request(
            "PUT",
            path,
            accept=accept,
            content_type=content_type,
            body=body,
            response_type=response_type,
        )

    def delete(self, path: str) -> None:
        self.request("DELETE", path)

    def follow(
        self,
        link: Link,
        response_type: type[T],
        *,
        params: Mapping[str, str] | None = None,
    ) -> T | None:
        """GET the resource a link points to, honouring the link's media type."""
        return self.get(link.href, response_type, accept=link.type, params=params)

    def refresh(self, dto: T) -> T | None:
        """Fetch the current server-side state of `dto`."""
        link = dto.edit_link or dto.search_link("self")
        if link is None:
            raise ResolutionError(f"{type(dto).__name__} does not have an edit or self link")
        return self.get(link.href, type(dto), accept=link.type)

    def edit(self, dto: T) -> T | None:
        """Send the local state of `dto` to its edit link and return the stored result."""
        link = dto.edit_link
        if link is None:
            raise ResolutionError(f"{type(dto).__name__} does not have an edit link")
        return self.put(link.href, dto, type(dto), accept=link.type, content_type=link.type)

    def delete_resource(self, dto: ResourceDto) -> None:
        link = dto.edit_link
        if link is None:
            raise ResolutionError(f"{type(dto).__name__} does not have an edit link")
        self.delete(link.href)

    def close(self) -> None:
        self._session.close()

    # Internal helpers -------------------------------------------------------
    def _resolve_url(self, path: str) -> str:
        parsed = urlparse(path)
        if parsed.scheme and parsed.netloc:
            return path
        relative_path = path.lstrip("/")
        return urljoin(f"{self.config.base_url}/", relative_path)

    def _prepare_headers(
        self, accept: str | None, content_type: str | None
    ) -> MutableMapping[str, str]:
        headers = self.config.resolved_headers()
        if accept:
            headers["Accept"] = self.config.with_version(accept)
        if content_type:
            headers["Content-Type"] = self.config.with_version(content_type)
        self._auth.apply(headers)
        return headers

    def _log_request(self, method: str, url: str) -> None:
        logger.info("Abiquo request %s %s", method.upper(), url)

    def _suppress_insecure_warning_if_needed(self) -> None:
        if isinstance(self.config.verify_ssl, bool) and not self.config.verify_ssl:
            urllib3.disable_warnings(InsecureRequestWarning)
