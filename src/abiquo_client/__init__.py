"""High-level Abiquo client entrypoints."""
from .client import AbiquoClient
from .config import ClientConfig
from .exceptions import AbiquoError, ApiError, HttpError
from .options import EnterpriseListOptions, ListOptions
from .pagination import iterate_pages

__all__ = [
    "AbiquoClient",
    "ClientConfig",
    "AbiquoError",
    "ApiError",
    "HttpError",
    "ListOptions",
    "EnterpriseListOptions",
    "iterate_pages",
]
