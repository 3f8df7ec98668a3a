"""HTTP utilities for Abiquo API access."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from requests import PreparedRequest, Response, Session

from . import codec
from .exceptions import ApiError, AuthorizationError, HttpError, UnexpectedResponseError
from .models.errors import ErrorList

logger = logging.getLogger(__name__)

_MASKED_HEADERS = frozenset({"authorization", "cookie"})


@dataclass(slots=True)
class HttpResponse:
    """Typed response wrapper with helper accessors."""

    status_code: int
    content: bytes
    headers: Mapping[str, str]

    @property
    def content_type(self) -> str | None:
        return self.headers.get("Content-Type")


def ensure_success(response: Response) -> None:
    """Raise the matching `HttpError` subclass if the response signals a failure."""

    status = response.status_code
    if 200 <= status < 300:
        return
    body = response.text
    if status in (401, 403):
        raise AuthorizationError(status, body)
    errors = parse_errors(response.content, response.headers.get("Content-Type"))
    if errors is not None:
        raise ApiError(status, errors.collection, body)
    raise HttpError(status, body)


def parse_errors(content: bytes, content_type: str | None) -> ErrorList | None:
    """Return the error list carried by a failed response, if it has one."""

    if not content:
        return None
    media_type = content_type if codec.is_known(content_type) else ErrorList.MEDIA_TYPE
    try:
        errors = codec.deserialize(content, ErrorList, media_type)
    except codec.CodecError:
        return None
    # An empty list still counts; a body without a collection is not an error list.
    if "collection" not in errors.model_fields_set:
        return None
    if any(entry.code is None for entry in errors.collection):
        return None
    return errors


def parse_payload(response: HttpResponse, shape: type[codec.T], accept: str | None) -> codec.T | None:
    """Decode a successful response body into `shape`."""

    if not response.content:
        return None
    media_type = response.content_type if codec.is_known(response.content_type) else accept
    try:
        return codec.deserialize(response.content, shape, media_type)
    except codec.CodecError as exc:
        raise UnexpectedResponseError(
            f"Response did not contain a valid {shape.__name__}",
            status_code=response.status_code,
            details=str(exc),
        ) from exc


def request(
    session: Session,
    method: str,
    url: str,
    *,
    params: Mapping[str, str] | None = None,
    headers: MutableMapping[str, str] | None = None,
    data_payload: bytes | None = None,
    timeout: float | tuple[float, float] | None = None,
    verify: bool | str = True,
    auth: Callable[[PreparedRequest], PreparedRequest] | None = None,
) -> HttpResponse:
    """Make a request and return the raw response envelope."""

    _log_request(method, url, headers, data_payload)
    response = session.request(
        method=method,
        url=url,
        params=params,
        headers=headers,
        data=data_payload,
        timeout=timeout,
        verify=verify,
        auth=auth,
    )
    _log_response(response)
    ensure_success(response)
    return HttpResponse(
        status_code=response.status_code, content=response.content, headers=response.headers
    )


def _log_request(
    method: str, url: str, headers: Mapping[str, str] | None, body: bytes | None
) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(">> %s %s", method.upper(), url)
    for name, value in (headers or {}).items():
        shown = "***" if name.lower() in _MASKED_HEADERS else value
        logger.debug(">> %s: %s", name, shown)
    if body:
        logger.debug(">> Body: %s", body.decode("utf-8", errors="replace"))


def _log_response(response: Any) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug("<< %s %s", response.status_code, response.reason)
    if response.content:
        logger.debug("<< Body: %s", response.text)
