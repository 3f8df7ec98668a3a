"""Common helpers for resource wrappers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from ..exceptions import UnexpectedResponseError
from ..models.base import CollectionDto, ResourceDto
from ..options import ListOptions

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from ..client import AbiquoClient

T = TypeVar("T", bound=ResourceDto)


class ResourceBase:
    """Provide shared helpers for resource modules."""

    def __init__(self, client: AbiquoClient) -> None:
        self._client = client

    def _get(
        self,
        path: str,
        response_type: type[T],
        *,
        params: Mapping[str, str] | None = None,
    ) -> T:
        return self._require(self._client.get(path, response_type, params=params), path)

    def _post(self, path: str, body: ResourceDto, response_type: type[T]) -> T:
        return self._require(self._client.post(path, body, response_type), path)

    def _list(
        self,
        path: str,
        collection_type: type[CollectionDto],
        options: ListOptions | None = None,
    ) -> list[Any]:
        params = options.query_params() if options else None
        page = self._get(path, collection_type, params=params)
        return list(page.collection)

    @staticmethod
    def _require(result: T | None, path: str) -> T:
        if result is None:
            raise UnexpectedResponseError(f"Empty response body from {path}")
        return result
