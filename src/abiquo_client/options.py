"""Query options accepted by collection endpoints."""

from __future__ import annotations

from dataclasses import dataclass


def _render(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True, slots=True)
class ListOptions:
    """Filtering, ordering and paging parameters common to every collection."""

    has: str | None = None
    order_by: str | None = None
    limit: int | None = None
    start: int | None = None
    asc: bool | None = None

    def _pairs(self) -> list[tuple[str, object | None]]:
        return [
            ("has", self.has),
            ("by", self.order_by),
            ("limit", self.limit),
            ("startwith", self.start),
            ("asc", self.asc),
        ]

    def query_params(self) -> dict[str, str]:
        """Return the present options keyed and sorted by query parameter name."""
        present = {key: _render(value) for key, value in self._pairs() if value is not None}
        return dict(sorted(present.items()))


@dataclass(frozen=True, slots=True)
class EnterpriseListOptions(ListOptions):
    id_pricing_template: int | None = None
    id_scope: int | None = None
    included: bool | None = None

    def _pairs(self) -> list[tuple[str, object | None]]:
        return ListOptions._pairs(self) + [
            ("idPricingTemplate", self.id_pricing_template),
            ("idScope", self.id_scope),
            ("included", self.included),
        ]
