"""Custom exception hierarchy for the Abiquo client."""
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from .models.errors import ErrorEntry


class AbiquoError(RuntimeError):
    """Base error for Abiquo failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class HttpError(AbiquoError):
    """Raised when the API answers with a non-2xx status and no error list."""

    def __init__(self, status_code: int, body: str | None = None, *, message: str | None = None):
        body = body or ""
        super().__init__(
            message or f"Abiquo API error {status_code}: {body[:200]}",
            status_code=status_code,
            details=body,
        )
        self.body = body


class AuthorizationError(HttpError):
    """Raised when credentials are rejected (401) or lack permissions (403)."""


class EmptyErrorListError(AbiquoError):
    """Raised when asking for the first entry of an empty error list."""


class ApiError(HttpError):
    """Raised when the API answers with a structured list of errors."""

    def __init__(self, status_code: int, errors: Sequence[ErrorEntry], body: str | None = None):
        self.errors: list[ErrorEntry] = list(errors)
        summary = "; ".join(f"{entry.code}: {entry.message}" for entry in self.errors)
        super().__init__(
            status_code,
            body,
            message=f"Abiquo API error {status_code}: {summary or 'no error details'}",
        )

    def has_error(self, code: str) -> bool:
        return self.get_error(code) is not None

    def get_error(self, code: str) -> ErrorEntry | None:
        """Return the first entry with the given code, in server order."""
        return next((entry for entry in self.errors if entry.code == code), None)

    def first_error(self) -> ErrorEntry:
        if not self.errors:
            raise EmptyErrorListError(
                "The API error carries no entries", status_code=self.status_code
            )
        return self.errors[0]


class UnexpectedResponseError(AbiquoError):
    """Raised when the API returns a payload that cannot be parsed."""


class ResolutionError(AbiquoError):
    """Raised when a resource lacks the link needed to reach a related resource."""
